"""In-memory report repository."""

from dataclasses import replace
from datetime import UTC, datetime
from itertools import count
from uuid import UUID

from apex.domain.entities import Report


class InMemoryReportRepository:
    """Dict-backed report repository with the same contract as the Postgres one."""

    def __init__(self) -> None:
        self._by_id: dict[UUID, Report] = {}
        self._seq: dict[UUID, int] = {}
        self._counter = count()

    async def find_by_id(self, report_id: UUID) -> Report | None:
        report = self._by_id.get(report_id)
        return replace(report) if report else None

    async def find_by_user_id(self, user_id: str, include_deleted: bool = False) -> list[Report]:
        items = [
            r
            for r in self._by_id.values()
            if r.user_id == user_id and (include_deleted or r.is_active)
        ]
        return self._newest_first(items)

    async def save(self, report: Report) -> Report:
        existing = self._by_id.get(report.id)
        if existing is None:
            stored = replace(report)
            self._seq[report.id] = next(self._counter)
        else:
            stored = replace(
                existing,
                name=report.name,
                content=report.content,
                updated_at=report.updated_at,
                deleted_at=report.deleted_at,
            )
        self._by_id[report.id] = stored
        return replace(stored)

    async def delete(self, report_id: UUID) -> None:
        report = self._by_id.get(report_id)
        if report is None:
            return
        now = datetime.now(UTC)
        report.deleted_at = now
        report.updated_at = now

    async def search(self, user_id: str, query: str) -> list[Report]:
        needle = query.casefold()
        items = [
            r
            for r in self._by_id.values()
            if r.user_id == user_id
            and r.is_active
            and (needle in r.name.casefold() or needle in r.content.casefold())
        ]
        return self._newest_first(items)

    def _newest_first(self, items: list[Report]) -> list[Report]:
        items.sort(key=lambda r: (r.created_at, self._seq[r.id]), reverse=True)
        return [replace(r) for r in items]
