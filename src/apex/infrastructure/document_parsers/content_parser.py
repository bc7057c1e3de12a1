"""Best-effort text extraction gateway over the parser registry."""

import asyncio
import logging

from apex.infrastructure.document_parsers.base import UnsupportedFormat
from apex.infrastructure.document_parsers.registry import extract_text, is_image

logger = logging.getLogger(__name__)

IMAGE_PLACEHOLDER = "Image file - no text extraction"


class RegistryContentParser:
    """Extracts text from uploads; degrades to "" instead of raising.

    Images are recognized by extension and short-circuit to a fixed
    placeholder without running any extractor.
    """

    async def parse(self, data: bytes, filename: str, content_type: str | None = None) -> str:
        if is_image(filename):
            return IMAGE_PLACEHOLDER
        try:
            text = await asyncio.to_thread(extract_text, data, filename, content_type)
        except UnsupportedFormat:
            logger.info("No text extractor for %s", filename)
            return ""
        except Exception:
            logger.warning("Text extraction failed for %s", filename, exc_info=True)
            return ""
        return text if text.strip() else ""
