"""Shared types for document parsers."""

from collections.abc import Callable

# Takes raw file bytes, returns extracted text ("" when the file has none).
# Raises UnsupportedFormat or ValueError when the bytes cannot be read.
TextExtractor = Callable[[bytes], str]


class UnsupportedFormat(ValueError):
    """No parser is registered for the file type."""

    pass
