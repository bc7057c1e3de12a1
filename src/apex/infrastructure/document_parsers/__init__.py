"""Document parsers: extract text from uploaded files."""

from apex.infrastructure.document_parsers.content_parser import (
    IMAGE_PLACEHOLDER,
    RegistryContentParser,
)
from apex.infrastructure.document_parsers.registry import extract_text

__all__ = [
    "IMAGE_PLACEHOLDER",
    "RegistryContentParser",
    "extract_text",
]
