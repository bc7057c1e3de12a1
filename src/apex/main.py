"""Application entry point and composition root."""

import logging
from pathlib import Path

from falcon.asgi import App

from apex import __version__
from apex.application.services import DocumentService, ReportService
from apex.config import Settings, get_settings
from apex.infrastructure.auth.keycloak_provider import KeycloakProvider
from apex.infrastructure.document_parsers import RegistryContentParser
from apex.infrastructure.persistence.memory import (
    InMemoryDocumentRepository,
    InMemoryReportRepository,
)
from apex.infrastructure.persistence.postgres.connection import create_pool
from apex.infrastructure.persistence.postgres.document_repository import (
    PostgresDocumentRepository,
)
from apex.infrastructure.persistence.postgres.report_repository import (
    PostgresReportRepository,
)
from apex.infrastructure.storage import LocalFileStorage
from apex.interfaces.api.app import create_app
from apex.interfaces.api.middleware.auth import AuthMiddleware
from apex.interfaces.api.middleware.cors import CORSMiddleware
from apex.interfaces.api.middleware.pool_lifespan import PoolLifespanMiddleware
from apex.logging_config import configure_logging

logger = logging.getLogger(__name__)


def create_apex_app(settings: Settings | None = None) -> App:
    """Composition root - build Falcon app with all dependencies."""
    settings = settings or get_settings()
    configure_logging("DEBUG" if settings.debug else settings.log_level)

    middleware: list = [CORSMiddleware(settings.cors_origin_list)]
    if settings.uses_memory_database:
        logger.warning("Using in-memory repositories; data is lost on restart")
        report_repository = InMemoryReportRepository()
        document_repository = InMemoryDocumentRepository()
    else:
        pool = create_pool(
            settings.database_url,
            min_size=settings.database_pool_min_size,
            max_size=settings.database_pool_max_size,
        )
        report_repository = PostgresReportRepository(pool)
        document_repository = PostgresDocumentRepository(pool)
        middleware.append(
            PoolLifespanMiddleware(pool, open_timeout=settings.database_connect_timeout)
        )

    keycloak = (
        KeycloakProvider(
            server_url=settings.keycloak_url,
            realm=settings.keycloak_realm,
            client_id=settings.keycloak_client_id,
            client_secret=settings.keycloak_client_secret,
        )
        if settings.keycloak_client_secret
        else None
    )
    if keycloak is None:
        logger.warning("KEYCLOAK_CLIENT_SECRET not set; every request is unauthenticated")
    middleware.append(AuthMiddleware(keycloak))

    Path(settings.storage_path).mkdir(parents=True, exist_ok=True)
    report_service = ReportService(
        report_repository,
        max_content_chars=settings.max_report_content_chars,
    )
    document_service = DocumentService(
        document_repository,
        LocalFileStorage(settings.storage_path),
        RegistryContentParser(),
        max_filename_chars=settings.max_filename_chars,
    )

    logger.info("Apex v%s starting (%s)", __version__, settings.environment)
    return create_app(
        report_service,
        document_service,
        max_upload_bytes=settings.max_upload_bytes,
        middleware=middleware,
        storage_path=settings.storage_path,
    )


def main() -> None:
    """CLI entry point - run the API under uvicorn."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "apex.main:create_apex_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )
