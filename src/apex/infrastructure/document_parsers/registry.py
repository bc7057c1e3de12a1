"""Registry: select a text extractor by file extension or MIME type."""

from apex.infrastructure.document_parsers.base import TextExtractor, UnsupportedFormat
from apex.infrastructure.document_parsers.docx_parser import parse_docx
from apex.infrastructure.document_parsers.pdf_parser import parse_pdf
from apex.infrastructure.document_parsers.pptx_parser import parse_pptx
from apex.infrastructure.document_parsers.text_parser import parse_csv, parse_tsv, parse_txt
from apex.infrastructure.document_parsers.xlsx_parser import parse_xlsx

# extension (lower, no dot) -> extractor
_PARSERS_BY_EXT: dict[str, TextExtractor] = {
    "txt": parse_txt,
    "md": parse_txt,
    "csv": parse_csv,
    "tsv": parse_tsv,
    "docx": parse_docx,
    "pdf": parse_pdf,
    "xlsx": parse_xlsx,
    "pptx": parse_pptx,
}

_MIME_TO_EXT: dict[str, str] = {
    "text/plain": "txt",
    "text/markdown": "md",
    "text/csv": "csv",
    "text/tab-separated-values": "tsv",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document": "docx",
    "application/pdf": "pdf",
    "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet": "xlsx",
    "application/vnd.openxmlformats-officedocument.presentationml.presentation": "pptx",
}

IMAGE_EXTENSIONS = frozenset({"jpg", "jpeg", "png", "gif", "webp"})


def file_extension(filename: str | None) -> str:
    """Lowercase text after the last dot, or "" when there is none.

    A bare ".png" counts as a png file.
    """
    if not filename or "." not in filename:
        return ""
    return filename.rsplit(".", 1)[1].lower()


def is_image(filename: str | None) -> bool:
    return file_extension(filename) in IMAGE_EXTENSIONS


def get_parser_for_filename(filename: str | None) -> TextExtractor | None:
    """Return extractor for given filename (by extension) or None."""
    return _PARSERS_BY_EXT.get(file_extension(filename))


def get_parser_for_content_type(content_type: str | None) -> TextExtractor | None:
    """Return extractor for MIME type or None."""
    if not content_type:
        return None
    mime = content_type.split(";")[0].strip().lower()
    ext = _MIME_TO_EXT.get(mime)
    if not ext:
        return None
    return _PARSERS_BY_EXT.get(ext)


def extract_text(
    data: bytes,
    filename: str | None = None,
    content_type: str | None = None,
) -> str:
    """
    Select extractor by filename (extension) or content_type and run it.
    Raises UnsupportedFormat if no extractor matches, ValueError if the file is unreadable.
    """
    parser = get_parser_for_filename(filename) or get_parser_for_content_type(content_type)
    if not parser:
        ext = file_extension(filename) or content_type or "unknown"
        raise UnsupportedFormat(f"No parser for file type: {ext}")
    return parser(data)
