"""Unit tests for FileHash value object."""

import hashlib

import pytest

from apex.domain.value_objects import FileHash


def test_of_is_sha256_hex() -> None:
    """FileHash.of gives the lowercase SHA-256 hex digest."""
    assert str(FileHash.of(b"abc")) == hashlib.sha256(b"abc").hexdigest()


def test_of_empty_bytes() -> None:
    assert FileHash.of(b"").value == (
        "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"
    )


def test_same_bytes_same_hash() -> None:
    assert FileHash.of(b"report") == FileHash.of(b"report")
    assert FileHash.of(b"report") != FileHash.of(b"report ")


@pytest.mark.parametrize("value", ["", "abc", "A" * 64, "g" * 64, "a" * 65])
def test_invalid_value_rejected(value: str) -> None:
    with pytest.raises(ValueError, match="64 lowercase hex"):
        FileHash(value)
