"""Unit tests for Postgres helper functions."""

from apex.infrastructure.persistence.postgres.connection import like_pattern


def test_like_pattern_wraps_query() -> None:
    assert like_pattern("budget") == "%budget%"


def test_like_pattern_escapes_wildcards() -> None:
    assert like_pattern("50%_off") == "%50\\%\\_off%"


def test_like_pattern_escapes_backslash_first() -> None:
    assert like_pattern("a\\b") == "%a\\\\b%"
