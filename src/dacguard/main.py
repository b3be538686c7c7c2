"""Application entry point and composition root."""

import logging

from dacguard import __version__
from dacguard.application.use_cases.access.describe_access import DescribeAccessUseCase
from dacguard.application.use_cases.access.load_view import LoadViewUseCase
from dacguard.application.use_cases.access.locks import ResourceLocks
from dacguard.application.use_cases.access.save_privileges import SavePrivilegesUseCase
from dacguard.config import Settings, get_settings
from dacguard.domain.services.assignment_validator import AssignmentValidator
from dacguard.domain.value_objects import PrivilegeCatalog
from dacguard.infrastructure.directory.keycloak_directory import KeycloakPrincipalDirectory
from dacguard.infrastructure.directory.static_directory import StaticPrincipalDirectory
from dacguard.infrastructure.persistence.memory.unit_of_work import (
    create_memory_uow_factory,
)
from dacguard.interfaces.api.app import create_app
from dacguard.interfaces.api.resources.access import AccessResource
from dacguard.interfaces.api.resources.health import HealthResource
from dacguard.interfaces.api.resources.privileges import PrivilegesResource

logger = logging.getLogger(__name__)


def build_directory(settings: Settings):
    if settings.directory_backend == "keycloak":
        return KeycloakPrincipalDirectory(
            server_url=settings.keycloak_url,
            realm=settings.keycloak_realm,
            client_id=settings.keycloak_client_id,
            client_secret=settings.keycloak_client_secret,
        )
    return StaticPrincipalDirectory(settings.static_users, settings.static_roles)


def create_dacguard_app(settings: Settings | None = None):
    """Composition root - build Falcon app with all dependencies."""
    settings = settings or get_settings()
    middleware = []

    if settings.store_backend == "postgres":
        from dacguard.infrastructure.persistence.postgres.connection import create_pool
        from dacguard.infrastructure.persistence.postgres.unit_of_work import (
            create_uow_factory,
        )
        from dacguard.interfaces.api.middleware.pool_lifespan import (
            PoolLifespanMiddleware,
        )

        pool = create_pool(settings.database_url)
        uow_factory = create_uow_factory(pool)
        middleware.append(PoolLifespanMiddleware(pool))
    else:
        logger.warning("Using in-memory assignment store; nothing is persisted")
        uow_factory = create_memory_uow_factory()

    catalog = PrivilegeCatalog(settings.privileges, settings.privilege_labels)
    validator = AssignmentValidator(catalog)
    directory = build_directory(settings)

    load_view = LoadViewUseCase(unit_of_work_factory=uow_factory)
    describe_access = DescribeAccessUseCase(
        load_view=load_view,
        directory=directory,
        catalog=catalog,
    )
    save_privileges = SavePrivilegesUseCase(
        unit_of_work_factory=uow_factory,
        validator=validator,
        locks=ResourceLocks() if settings.serialize_saves else None,
    )

    return create_app(
        access_resource=AccessResource(
            describe_access,
            save_privileges,
            catalog,
            rejection_status=settings.rejection_status,
            keep_last_manager=settings.keep_last_manager,
        ),
        privileges_resource=PrivilegesResource(catalog),
        health_resource=HealthResource(uow_factory),
        middleware=middleware,
    )


def main() -> None:
    """CLI entry point - serve the API with uvicorn."""
    import uvicorn

    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info("DacGuard v%s (%s)", __version__, settings.environment)
    uvicorn.run(create_dacguard_app(settings), host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
