"""Content hash of an uploaded file, used as the deduplication key."""

import hashlib
import re
from dataclasses import dataclass

_HEX_SHA256 = re.compile(r"[0-9a-f]{64}")


@dataclass(frozen=True)
class FileHash:
    """SHA-256 hex digest of raw file bytes."""

    value: str

    def __post_init__(self) -> None:
        if not _HEX_SHA256.fullmatch(self.value):
            raise ValueError("SHA-256 hash must be 64 lowercase hex characters")

    @classmethod
    def of(cls, data: bytes) -> "FileHash":
        """Hash raw bytes. Same bytes always give the same hash, whatever the filename."""
        return cls(hashlib.sha256(data).hexdigest())

    def __str__(self) -> str:
        return self.value
