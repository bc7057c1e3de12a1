"""Local filesystem storage for uploaded files."""

import asyncio
from pathlib import Path


class LocalFileStorage:
    """Stores files as ``<base>/<scope_id>/<content_hash><ext>``.

    Filesystem calls run in a worker thread so the event loop is not blocked.
    """

    def __init__(self, base_path: str | Path) -> None:
        self._base = Path(base_path)

    def build_path(self, scope_id: str, content_hash: str, filename: str) -> Path:
        """Deterministic location; the original extension is preserved."""
        return self._base / scope_id / f"{content_hash}{Path(filename).suffix}"

    async def save_file(
        self, scope_id: str, content_hash: str, data: bytes, filename: str
    ) -> str:
        path = self.build_path(scope_id, content_hash, filename)
        await asyncio.to_thread(_write_bytes, path, data)
        return str(path)

    async def get_file(self, storage_path: str) -> bytes:
        return await asyncio.to_thread(Path(storage_path).read_bytes)

    async def delete_file(self, storage_path: str) -> None:
        await asyncio.to_thread(Path(storage_path).unlink, missing_ok=True)

    async def file_exists(self, storage_path: str) -> bool:
        return await asyncio.to_thread(Path(storage_path).is_file)


def _write_bytes(path: Path, data: bytes) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(data)
