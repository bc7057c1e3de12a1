"""Report repository port."""

from typing import Protocol
from uuid import UUID

from apex.domain.entities import Report


class ReportRepository(Protocol):
    """Port for report persistence. Reads are scoped by owning user."""

    async def find_by_id(self, report_id: UUID) -> Report | None: ...

    async def find_by_user_id(
        self, user_id: str, include_deleted: bool = False
    ) -> list[Report]: ...

    async def save(self, report: Report) -> Report: ...

    async def delete(self, report_id: UUID) -> None: ...

    async def search(self, user_id: str, query: str) -> list[Report]: ...
