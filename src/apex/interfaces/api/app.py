"""Falcon ASGI application."""

import logging

import falcon
import falcon.asgi
import falcon.media
from falcon.asgi import App

from apex.application.services import DocumentService, ReportService
from apex.interfaces.api.resources.documents import (
    DocumentFileResource,
    DocumentResource,
    DocumentsResource,
)
from apex.interfaces.api.resources.health import HealthResource
from apex.interfaces.api.resources.reports import (
    ReportDocumentsResource,
    ReportResource,
    ReportRestoreResource,
    ReportsResource,
)

logger = logging.getLogger(__name__)


async def handle_unexpected_error(req, resp, ex, params) -> None:
    """Last-resort handler: log with traceback, answer 500 without details."""
    logger.exception("Unhandled error on %s %s", req.method, req.path, exc_info=ex)
    resp.status = falcon.HTTP_500
    resp.media = {"title": "500 Internal Server Error"}


def create_app(
    report_service: ReportService,
    document_service: DocumentService,
    *,
    max_upload_bytes: int,
    middleware: list | None = None,
    storage_path: str | None = None,
) -> App:
    """Create Falcon ASGI app with routes."""
    app = falcon.asgi.App(middleware=middleware or [])

    multipart = falcon.media.MultipartFormHandler()
    multipart.parse_options.max_body_part_buffer_size = max_upload_bytes
    app.req_options.media_handlers[falcon.MEDIA_MULTIPART] = multipart

    app.add_error_handler(Exception, handle_unexpected_error)

    health = HealthResource(storage_path)
    app.add_route("/v1/health", health)
    app.add_route("/v1/health/ready", health, suffix="ready")
    app.add_route("/v1/reports", ReportsResource(report_service))
    app.add_route("/v1/reports/{report_id}", ReportResource(report_service))
    app.add_route("/v1/reports/{report_id}/restore", ReportRestoreResource(report_service))
    app.add_route(
        "/v1/reports/{report_id}/documents",
        ReportDocumentsResource(report_service, document_service),
    )
    app.add_route(
        "/v1/documents",
        DocumentsResource(document_service, report_service, max_upload_bytes),
    )
    app.add_route("/v1/documents/{document_id}", DocumentResource(document_service, report_service))
    app.add_route(
        "/v1/documents/{document_id}/file",
        DocumentFileResource(document_service, report_service),
    )
    return app
