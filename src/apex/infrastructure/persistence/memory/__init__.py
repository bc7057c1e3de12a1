"""In-memory repositories for tests and local runs without a database."""

from apex.infrastructure.persistence.memory.document_repository import (
    InMemoryDocumentRepository,
)
from apex.infrastructure.persistence.memory.report_repository import (
    InMemoryReportRepository,
)

__all__ = ["InMemoryDocumentRepository", "InMemoryReportRepository"]
