"""Parser for PDF."""

import io

from pypdf import PdfReader
from pypdf.errors import PdfReadError


def parse_pdf(data: bytes) -> str:
    """Extract text from all pages of a PDF."""
    try:
        reader = PdfReader(io.BytesIO(data))
    except (PdfReadError, ValueError) as e:
        raise ValueError(f"Invalid or corrupted PDF: {e}") from e
    parts: list[str] = []
    for page in reader.pages:
        t = page.extract_text()
        if t and t.strip():
            parts.append(t)
    return "\n\n".join(parts)
