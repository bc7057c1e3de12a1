"""Report entity."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass
class Report:
    """Rich-text container owned by exactly one user."""

    id: UUID
    user_id: str
    name: str
    created_at: datetime
    updated_at: datetime
    content: str = ""
    deleted_at: datetime | None = None

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None

    @property
    def is_active(self) -> bool:
        return self.deleted_at is None
