"""File storage adapters."""

from apex.infrastructure.storage.local_storage import LocalFileStorage

__all__ = ["LocalFileStorage"]
