"""Parser for .pptx (PowerPoint)."""

import io

from pptx import Presentation


def parse_pptx(data: bytes) -> str:
    """Extract text from every shape on every slide."""
    try:
        prs = Presentation(io.BytesIO(data))
    except Exception as e:
        raise ValueError(f"Invalid or corrupted pptx file: {e}") from e
    parts: list[str] = []
    for slide in prs.slides:
        for shape in slide.shapes:
            if getattr(shape, "has_text_frame", False) and shape.text_frame.text:
                parts.append(shape.text_frame.text)
    return "\n\n".join(parts)
