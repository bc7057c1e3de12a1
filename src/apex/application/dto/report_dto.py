"""Report DTOs."""

from dataclasses import dataclass


@dataclass
class ReportUpdate:
    """Partial report update. None means the field is left unchanged."""

    name: str | None = None
    content: str | None = None

    def is_empty(self) -> bool:
        return self.name is None and self.content is None
