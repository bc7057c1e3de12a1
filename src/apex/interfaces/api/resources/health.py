"""Health check endpoints."""

import os
from pathlib import Path

import falcon.asgi


class HealthResource:
    """Health and readiness endpoints."""

    def __init__(self, storage_path: str | None = None) -> None:
        self._storage_path = Path(storage_path) if storage_path else None

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """GET /v1/health - liveness."""
        resp.media = {"status": "ok"}
        resp.status = falcon.HTTP_200

    async def on_get_ready(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """GET /v1/health/ready - ready once the upload directory is writable."""
        if self._storage_path is not None and not _is_writable_dir(self._storage_path):
            resp.media = {"status": "unavailable", "reason": "storage not writable"}
            resp.status = falcon.HTTP_503
            return
        resp.media = {"status": "ready"}
        resp.status = falcon.HTTP_200


def _is_writable_dir(path: Path) -> bool:
    return path.is_dir() and os.access(path, os.W_OK)
