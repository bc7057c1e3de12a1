"""Pytest fixtures for Apex tests."""

from __future__ import annotations

from unittest.mock import AsyncMock
from uuid import uuid4

import pytest

from apex.application.services import DocumentService, ReportService
from apex.infrastructure.persistence.memory import (
    InMemoryDocumentRepository,
    InMemoryReportRepository,
)

OWNER_ID = "user-owner"
OTHER_USER_ID = "user-other"


def fake_storage() -> AsyncMock:
    """AsyncMock FileStorage - save_file returns <scope>/<hash><ext>."""

    async def _save(scope_id: str, content_hash: str, data: bytes, filename: str) -> str:
        ext = filename[filename.rfind("."):] if "." in filename else ""
        return f"storage/{scope_id}/{content_hash}{ext}"

    mock = AsyncMock()
    mock.save_file = AsyncMock(side_effect=_save)
    mock.get_file = AsyncMock(return_value=b"")
    mock.delete_file = AsyncMock(return_value=None)
    mock.file_exists = AsyncMock(return_value=True)
    return mock


def fake_parser(text: str = "extracted text") -> AsyncMock:
    """AsyncMock ContentParser returning fixed text."""
    mock = AsyncMock()
    mock.parse = AsyncMock(return_value=text)
    return mock


# --- Fixtures ---


@pytest.fixture
def report_repository() -> InMemoryReportRepository:
    """Fresh in-memory report repository for each test."""
    return InMemoryReportRepository()


@pytest.fixture
def document_repository() -> InMemoryDocumentRepository:
    """Fresh in-memory document repository for each test."""
    return InMemoryDocumentRepository()


@pytest.fixture
def mock_storage() -> AsyncMock:
    return fake_storage()


@pytest.fixture
def mock_parser() -> AsyncMock:
    return fake_parser()


@pytest.fixture
def report_service(report_repository) -> ReportService:
    return ReportService(report_repository, max_content_chars=1000)


@pytest.fixture
def document_service(document_repository, mock_storage, mock_parser) -> DocumentService:
    return DocumentService(
        document_repository,
        mock_storage,
        mock_parser,
        max_filename_chars=255,
    )


@pytest.fixture
def report_id():
    return uuid4()
