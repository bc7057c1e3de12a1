"""File storage port - content-addressed byte storage."""

from typing import Protocol


class FileStorage(Protocol):
    """Port for persisting uploaded file bytes."""

    async def save_file(
        self, scope_id: str, content_hash: str, data: bytes, filename: str
    ) -> str:
        """Store bytes under scope and hash, keeping the extension. Returns storage path."""
        ...

    async def get_file(self, storage_path: str) -> bytes: ...

    async def delete_file(self, storage_path: str) -> None:
        """Remove stored bytes. Missing files are not an error."""
        ...

    async def file_exists(self, storage_path: str) -> bool: ...
