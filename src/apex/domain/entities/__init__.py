"""Domain entities."""

from apex.domain.entities.document import Document
from apex.domain.entities.report import Report

__all__ = [
    "Document",
    "Report",
]
