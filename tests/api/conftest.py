"""Fixtures for API tests."""

import pytest
from falcon.testing import TestClient

from apex.application.services import DocumentService, ReportService
from apex.infrastructure.document_parsers import RegistryContentParser
from apex.infrastructure.persistence.memory import (
    InMemoryDocumentRepository,
    InMemoryReportRepository,
)
from apex.infrastructure.storage import LocalFileStorage
from apex.interfaces.api.app import create_app
from apex.interfaces.api.middleware.auth import RequestUser

from tests.conftest import OWNER_ID

MAX_UPLOAD_BYTES = 1024
USER_HEADER = "X-Test-User"


class AuthBypassMiddleware:
    """Middleware that sets context.user for testing (X-Test-User overrides the owner)."""

    async def process_request(self, req, resp):
        user_id = req.get_header(USER_HEADER) or OWNER_ID
        req.context.user = RequestUser(user_id=user_id, email=None, username=None)


def multipart_body(
    fields: dict[str, str],
    file: tuple[str, bytes] | None = None,
    boundary: str = "----ApexBoundary",
    disposition_filename: str | None = None,
    part_content_type: str = "application/octet-stream",
) -> tuple[bytes, dict[str, str]]:
    """Build a multipart/form-data body with optional "file" part."""
    chunks: list[bytes] = []
    for name, value in fields.items():
        chunks.append(
            (
                f"--{boundary}\r\n"
                f'Content-Disposition: form-data; name="{name}"\r\n\r\n'
                f"{value}\r\n"
            ).encode("utf-8")
        )
    if file is not None:
        filename, data = file
        fn = disposition_filename or f'filename="{filename}"'
        chunks.append(
            (
                f"--{boundary}\r\n"
                f'Content-Disposition: form-data; name="file"; {fn}\r\n'
                f"Content-Type: {part_content_type}\r\n\r\n"
            ).encode("utf-8")
            + data
            + b"\r\n"
        )
    chunks.append(f"--{boundary}--\r\n".encode("utf-8"))
    headers = {"Content-Type": f"multipart/form-data; boundary={boundary}"}
    return b"".join(chunks), headers


@pytest.fixture
def storage_dir(tmp_path):
    path = tmp_path / "storage"
    path.mkdir()
    return path


@pytest.fixture
def services(storage_dir):
    """Report and document services over in-memory repositories and a temp upload dir."""
    report_service = ReportService(InMemoryReportRepository(), max_content_chars=10_000)
    document_service = DocumentService(
        InMemoryDocumentRepository(),
        LocalFileStorage(storage_dir),
        RegistryContentParser(),
        max_filename_chars=255,
    )
    return report_service, document_service


@pytest.fixture
def app(services, storage_dir):
    """Falcon ASGI app with API resources for testing."""
    report_service, document_service = services
    return create_app(
        report_service,
        document_service,
        max_upload_bytes=MAX_UPLOAD_BYTES,
        middleware=[AuthBypassMiddleware()],
        storage_path=str(storage_dir),
    )


@pytest.fixture
def client(app):
    """Falcon ASGI test client."""
    return TestClient(app)


@pytest.fixture
def anonymous_client(services, storage_dir):
    """Client for an app without any authenticated user."""
    report_service, document_service = services
    return TestClient(
        create_app(
            report_service,
            document_service,
            max_upload_bytes=MAX_UPLOAD_BYTES,
            storage_path=str(storage_dir),
        )
    )
