"""Parser for .xlsx (Excel)."""

import io
from zipfile import BadZipFile

from openpyxl import load_workbook
from openpyxl.utils.exceptions import InvalidFileException


def parse_xlsx(data: bytes) -> str:
    """Extract text from all non-empty cells, one line per row."""
    try:
        wb = load_workbook(io.BytesIO(data), read_only=True, data_only=True)
    except (InvalidFileException, BadZipFile) as e:
        raise ValueError(f"Invalid or corrupted xlsx file: {e}") from e
    parts: list[str] = []
    try:
        for sheet in wb.worksheets:
            for row in sheet.iter_rows(values_only=True):
                cells = [str(c).strip() for c in row if c is not None and str(c).strip()]
                if cells:
                    parts.append(" ".join(cells))
    finally:
        wb.close()
    return "\n".join(parts)
