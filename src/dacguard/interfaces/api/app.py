"""Falcon ASGI application."""

import logging

import falcon
import falcon.asgi
from falcon.asgi import App

from dacguard.interfaces.api.resources.access import AccessResource
from dacguard.interfaces.api.resources.health import HealthResource
from dacguard.interfaces.api.resources.privileges import PrivilegesResource

logger = logging.getLogger(__name__)


async def _log_exception(req, resp, ex, params):
    logger.exception("Unhandled error on %s %s", req.method, req.path)
    resp.status = falcon.HTTP_500
    resp.media = {"title": "500 Internal Server Error"}


def create_app(
    access_resource: AccessResource,
    privileges_resource: PrivilegesResource,
    health_resource: HealthResource,
    middleware: list | None = None,
) -> App:
    """Create Falcon ASGI app with routes."""
    app = falcon.asgi.App(middleware=middleware or [])
    app.add_error_handler(Exception, _log_exception)
    app.add_route("/v1/health", health_resource)
    app.add_route("/v1/health/ready", health_resource, suffix="ready")
    app.add_route("/v1/privileges", privileges_resource)
    app.add_route("/v1/access", access_resource)
    return app
