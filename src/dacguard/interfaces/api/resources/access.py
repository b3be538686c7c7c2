"""Access API resources."""

import logging

import falcon
import falcon.asgi

from dacguard.application.dto.access_dto import AccessEntry
from dacguard.application.use_cases.access.describe_access import DescribeAccessUseCase
from dacguard.application.use_cases.access.save_privileges import SavePrivilegesUseCase
from dacguard.domain.exceptions import (
    DirectoryUnavailable,
    PartialSaveError,
    StoreConflict,
    StoreError,
    ValidationError,
)
from dacguard.domain.services.assignment_validator import Rejected
from dacguard.domain.value_objects import PrivilegeCatalog
from dacguard.interfaces.api.payloads import (
    parse_proposed,
    parse_resource_id,
    parse_version,
)
from dacguard.interfaces.forms.permission_form import PermissionForm

logger = logging.getLogger(__name__)


def _entry_media(entry: AccessEntry) -> dict:
    return {
        "id": entry.principal_id,
        "label": entry.label,
        "is_role": entry.is_role,
        "privileges": entry.privileges,
    }


class AccessResource:
    """GET/POST /v1/access - view and replace privileges on a resource."""

    def __init__(
        self,
        describe_access: DescribeAccessUseCase,
        save_privileges: SavePrivilegesUseCase,
        catalog: PrivilegeCatalog,
        rejection_status: int = 422,
        keep_last_manager: bool = False,
    ) -> None:
        self._describe = describe_access
        self._save = save_privileges
        self._catalog = catalog
        self._rejection_status = falcon.code_to_http_status(rejection_status)
        self._keep_last_manager = keep_last_manager

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """Decorated assignments of ``?uri=`` plus the editable form state."""
        resource_id = (req.get_param("uri") or req.get_param("classUri") or "").strip()
        if not resource_id:
            resp.status = falcon.HTTP_400
            resp.media = {"error": "Missing required parameter: uri"}
            return

        try:
            view = await self._describe.execute(resource_id)
        except StoreConflict as e:
            resp.status = falcon.HTTP_409
            resp.media = {"error": str(e)}
            return
        except (StoreError, DirectoryUnavailable) as e:
            logger.error("Cannot describe access to %s: %s", resource_id, e)
            resp.status = falcon.HTTP_503
            resp.media = {"error": "Service unavailable"}
            return

        form = PermissionForm.from_view(
            self._catalog, view, keep_last_manager=self._keep_last_manager
        )
        resp.media = {
            "uri": view.resource_id,
            "version": view.version,
            "privileges": self._catalog.labels(),
            "users": [_entry_media(e) for e in view.users],
            "roles": [_entry_media(e) for e in view.roles],
            "available_users": view.available_users,
            "available_roles": view.available_roles,
            "form": form.to_dict(),
        }
        resp.status = falcon.HTTP_200

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """Replace every assignment on the resource with the submitted set."""
        try:
            body = await req.get_media()
            if not isinstance(body, dict):
                raise ValidationError("Request body must be an object")
            resource_id = parse_resource_id(body)
            proposed = parse_proposed(body)
            version = parse_version(body)
            result = await self._save.execute(resource_id, proposed, expected_version=version)
        except ValidationError as e:
            resp.status = falcon.HTTP_400
            resp.media = {"success": False, "error": str(e)}
            return
        except StoreConflict as e:
            resp.status = falcon.HTTP_409
            resp.media = {"success": False, "error": str(e)}
            return
        except PartialSaveError as e:
            resp.status = falcon.HTTP_500
            resp.media = {"success": False, "partial": True, "error": str(e)}
            return
        except StoreError as e:
            logger.error("Cannot save privileges: %s", e)
            resp.status = falcon.HTTP_503
            resp.media = {"success": False, "error": "Service unavailable"}
            return

        if isinstance(result, Rejected):
            resp.status = self._rejection_status
            resp.media = {"success": False, "error": result.reason}
            return

        resp.media = {"success": True, "version": result.version}
        resp.status = falcon.HTTP_200
