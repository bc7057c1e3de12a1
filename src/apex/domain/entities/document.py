"""Document entity."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass
class Document:
    """Uploaded file attached to a report, deduplicated by file hash."""

    id: UUID
    report_id: UUID
    filename: str
    file_hash: str
    storage_path: str
    created_at: datetime
    updated_at: datetime
    parsed_content: str | None = None
    notes: str = ""
    deleted_at: datetime | None = None

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None

    @property
    def is_active(self) -> bool:
        return self.deleted_at is None

    @property
    def has_been_parsed(self) -> bool:
        """True when extraction produced non-empty text."""
        return bool(self.parsed_content)
