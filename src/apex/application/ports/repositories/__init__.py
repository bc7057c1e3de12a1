"""Repository ports."""

from apex.application.ports.repositories.document_repository import (
    DocumentRepository,
)
from apex.application.ports.repositories.report_repository import ReportRepository

__all__ = [
    "DocumentRepository",
    "ReportRepository",
]
