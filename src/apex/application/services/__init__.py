"""Application services."""

from apex.application.services.document_service import DocumentService
from apex.application.services.report_service import ReportService

__all__ = [
    "DocumentService",
    "ReportService",
]
