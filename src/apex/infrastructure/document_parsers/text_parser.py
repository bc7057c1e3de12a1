"""Parser for plain text, markdown, CSV, TSV."""

import csv
import io


def decode_text(data: bytes) -> str:
    """Decode as UTF-8, falling back to cp1251 and then lossy UTF-8."""
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError:
        pass
    try:
        return data.decode("cp1251")
    except UnicodeDecodeError:
        return data.decode("utf-8", errors="replace")


def parse_txt(data: bytes) -> str:
    """Plain text and markdown, stored as-is."""
    return decode_text(data)


def parse_delimited(data: bytes, delimiter: str = ",") -> str:
    """CSV or TSV: one line per row, non-empty cells joined with spaces."""
    reader = csv.reader(io.StringIO(decode_text(data)), delimiter=delimiter)
    lines = [" ".join(cell.strip() for cell in row if cell.strip()) for row in reader]
    return "\n".join(line for line in lines if line)


def parse_csv(data: bytes) -> str:
    return parse_delimited(data, delimiter=",")


def parse_tsv(data: bytes) -> str:
    return parse_delimited(data, delimiter="\t")
