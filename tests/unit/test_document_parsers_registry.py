"""Unit tests for document_parsers.registry and RegistryContentParser."""

from unittest.mock import patch

import pytest

from apex.infrastructure.document_parsers import (
    IMAGE_PLACEHOLDER,
    RegistryContentParser,
    extract_text,
)
from apex.infrastructure.document_parsers.base import UnsupportedFormat
from apex.infrastructure.document_parsers.registry import (
    file_extension,
    get_parser_for_content_type,
    get_parser_for_filename,
    is_image,
)


class TestFileExtension:
    """Tests for file_extension and is_image."""

    def test_lowercased_without_dot(self) -> None:
        assert file_extension("Report.PDF") == "pdf"

    def test_no_extension(self) -> None:
        assert file_extension("README") == ""
        assert file_extension(None) == ""

    def test_last_dot_wins(self) -> None:
        assert file_extension("backup.tar.GZ") == "gz"
        assert file_extension("trailing.") == ""

    def test_bare_extension_name_is_image(self) -> None:
        assert file_extension(".png") == "png"
        assert is_image(".png")

    def test_images_recognized_case_insensitively(self) -> None:
        for name in ("a.jpg", "b.JPEG", "c.png", "d.gif", "e.webp"):
            assert is_image(name)
        assert not is_image("f.svg")
        assert not is_image("g.txt")


class TestGetParserForFilename:
    """Tests for get_parser_for_filename."""

    def test_none_returns_none(self) -> None:
        assert get_parser_for_filename(None) is None

    def test_txt_returns_parser(self) -> None:
        assert get_parser_for_filename("a.txt") is not None
        assert get_parser_for_filename("a.TXT") is not None

    def test_known_extensions_return_parser(self) -> None:
        for ext in ("docx", "pdf", "xlsx", "pptx", "md", "csv", "tsv"):
            assert get_parser_for_filename(f"file.{ext}") is not None

    def test_unknown_extension_returns_none(self) -> None:
        assert get_parser_for_filename("file.xyz") is None
        assert get_parser_for_filename("photo.png") is None


class TestGetParserForContentType:
    """Tests for get_parser_for_content_type."""

    def test_none_returns_none(self) -> None:
        assert get_parser_for_content_type(None) is None

    def test_content_type_with_charset(self) -> None:
        assert get_parser_for_content_type("text/plain; charset=utf-8") is not None

    def test_unknown_mime_returns_none(self) -> None:
        assert get_parser_for_content_type("application/octet-stream") is None


class TestExtractText:
    """Tests for extract_text."""

    def test_txt_by_filename(self) -> None:
        assert extract_text(b"Hello world", filename="test.txt") == "Hello world"

    def test_by_content_type_when_no_filename(self) -> None:
        assert extract_text(b"a,b\n1,2", content_type="text/csv") == "a b\n1 2"

    def test_unknown_extension_uses_content_type(self) -> None:
        assert extract_text(b"hello", filename="x.bin", content_type="text/plain") == "hello"

    def test_no_parser_raises_unsupported_format(self) -> None:
        with pytest.raises(UnsupportedFormat, match="No parser for file type"):
            extract_text(b"data", filename="file.xyz")

    def test_unsupported_format_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            extract_text(b"data", content_type="application/unknown")


class TestRegistryContentParser:
    """Tests for the best-effort extraction gateway."""

    @pytest.mark.asyncio
    async def test_text_file(self) -> None:
        assert await RegistryContentParser().parse(b"notes", "notes.md") == "notes"

    @pytest.mark.asyncio
    async def test_content_type_used_when_extension_unknown(self) -> None:
        result = await RegistryContentParser().parse(b"a,b\n1,2", "export", "text/csv")
        assert result == "a b\n1 2"

    @pytest.mark.asyncio
    async def test_bare_image_name_gets_placeholder(self) -> None:
        assert await RegistryContentParser().parse(b"\x89PNG", ".png") == IMAGE_PLACEHOLDER

    @pytest.mark.asyncio
    async def test_image_returns_placeholder_without_extracting(self) -> None:
        with patch(
            "apex.infrastructure.document_parsers.content_parser.extract_text"
        ) as extract:
            result = await RegistryContentParser().parse(b"\x89PNG", "chart.PNG")
        assert result == IMAGE_PLACEHOLDER
        extract.assert_not_called()

    @pytest.mark.asyncio
    async def test_unsupported_format_returns_empty(self) -> None:
        assert await RegistryContentParser().parse(b"\x00\x01", "archive.zip") == ""

    @pytest.mark.asyncio
    async def test_corrupted_file_returns_empty(self) -> None:
        assert await RegistryContentParser().parse(b"not a docx", "broken.docx") == ""

    @pytest.mark.asyncio
    async def test_unexpected_parser_error_returns_empty(self) -> None:
        with patch(
            "apex.infrastructure.document_parsers.content_parser.extract_text",
            side_effect=RuntimeError("boom"),
        ):
            assert await RegistryContentParser().parse(b"x", "a.txt") == ""

    @pytest.mark.asyncio
    async def test_whitespace_only_returns_empty(self) -> None:
        assert await RegistryContentParser().parse(b"  \n\t ", "blank.txt") == ""
