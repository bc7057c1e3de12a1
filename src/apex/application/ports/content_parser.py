"""Content parser port - best-effort text extraction."""

from typing import Protocol


class ContentParser(Protocol):
    """Port for extracting text from uploaded files."""

    async def parse(self, data: bytes, filename: str, content_type: str | None = None) -> str:
        """Return extracted text, or "" when nothing could be extracted. Never raises.

        content_type is the declared MIME type; it selects the extractor when the
        filename extension is unknown.
        """
        ...
