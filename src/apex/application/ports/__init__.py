"""Application ports - interfaces for external adapters."""

from apex.application.ports.content_parser import ContentParser
from apex.application.ports.file_storage import FileStorage
from apex.application.ports.repositories import DocumentRepository, ReportRepository

__all__ = [
    "ContentParser",
    "DocumentRepository",
    "FileStorage",
    "ReportRepository",
]
