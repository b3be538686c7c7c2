"""Privilege catalog endpoint."""

import falcon.asgi

from dacguard.domain.value_objects import PrivilegeCatalog


class PrivilegesResource:
    """GET /v1/privileges - ranks lowest first, with display labels."""

    def __init__(self, catalog: PrivilegeCatalog) -> None:
        self._catalog = catalog

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        labels = self._catalog.labels()
        resp.media = {
            "items": [{"id": rank, "label": labels[rank]} for rank in self._catalog.ranks],
            "manage": self._catalog.manage_rank,
        }
        resp.status = falcon.HTTP_200
