"""Domain value objects."""

from apex.domain.value_objects.file_hash import FileHash

__all__ = [
    "FileHash",
]
