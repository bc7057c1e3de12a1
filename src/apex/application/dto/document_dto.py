"""Document DTOs."""

from dataclasses import dataclass


@dataclass
class DocumentUpdate:
    """Partial document update. None means the field is left unchanged."""

    filename: str | None = None
    notes: str | None = None

    def is_empty(self) -> bool:
        return self.filename is None and self.notes is None
