"""Report service: lifecycle, name validation and per-owner authorization."""

from datetime import UTC, datetime
from uuid import UUID, uuid4

from apex.application.dto.report_dto import ReportUpdate
from apex.application.ports import ReportRepository
from apex.domain.entities import Report
from apex.domain.exceptions import AuthorizationError, NotFoundError, ValidationError

MAX_NAME_LENGTH = 200


def normalize_report_name(name: str) -> str:
    """Trim and validate a report name. Length is checked after trimming."""
    trimmed = name.strip()
    if not trimmed:
        raise ValidationError("Report name cannot be empty")
    if len(trimmed) > MAX_NAME_LENGTH:
        raise ValidationError(f"Report name too long (max {MAX_NAME_LENGTH} characters)")
    return trimmed


class ReportService:
    """Report operations for an authenticated user."""

    def __init__(
        self,
        report_repository: ReportRepository,
        max_content_chars: int | None = None,
    ) -> None:
        self._reports = report_repository
        self._max_content_chars = max_content_chars

    async def create_report(self, user_id: str, name: str) -> Report:
        """Create an empty report owned by user_id."""
        name = normalize_report_name(name)
        now = datetime.now(UTC)
        report = Report(
            id=uuid4(),
            user_id=user_id,
            name=name,
            content="",
            created_at=now,
            updated_at=now,
            deleted_at=None,
        )
        return await self._reports.save(report)

    async def get_report(self, report_id: UUID, user_id: str) -> Report:
        """Fetch a report owned by user_id. Soft-deleted reports are still returned."""
        report = await self._reports.find_by_id(report_id)
        if report is None:
            raise NotFoundError("Report not found")
        if report.user_id != user_id:
            raise AuthorizationError("Unauthorized")
        return report

    async def list_reports(self, user_id: str) -> list[Report]:
        return await self._reports.find_by_user_id(user_id)

    async def update_report(
        self, report_id: UUID, user_id: str, update: ReportUpdate
    ) -> Report:
        """Apply name and/or content changes and refresh updated_at."""
        report = await self.get_report(report_id, user_id)
        if update.name is not None:
            report.name = normalize_report_name(update.name)
        if update.content is not None:
            self._check_content_size(update.content)
            report.content = update.content
        report.updated_at = datetime.now(UTC)
        return await self._reports.save(report)

    async def delete_report(self, report_id: UUID, user_id: str) -> None:
        """Soft delete."""
        report = await self.get_report(report_id, user_id)
        await self._reports.delete(report.id)

    async def restore_report(self, report_id: UUID, user_id: str) -> Report:
        """Clear deleted_at so the report shows up in listings again."""
        report = await self.get_report(report_id, user_id)
        report.deleted_at = None
        report.updated_at = datetime.now(UTC)
        return await self._reports.save(report)

    async def search_reports(self, user_id: str, query: str) -> list[Report]:
        return await self._reports.search(user_id, query)

    def _check_content_size(self, content: str) -> None:
        if self._max_content_chars is not None and len(content) > self._max_content_chars:
            raise ValidationError(
                f"Report content too long (max {self._max_content_chars} characters)"
            )
