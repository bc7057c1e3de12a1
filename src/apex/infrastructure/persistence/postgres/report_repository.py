"""PostgreSQL report repository implementation."""

from uuid import UUID

from psycopg_pool import AsyncConnectionPool

from apex.domain.entities import Report
from apex.infrastructure.persistence.postgres.connection import get_connection, like_pattern

_COLUMNS = "id, user_id, name, content, created_at, updated_at, deleted_at"


def _row_to_report(r: tuple) -> Report:
    return Report(
        id=r[0],
        user_id=r[1],
        name=r[2],
        content=r[3],
        created_at=r[4],
        updated_at=r[5],
        deleted_at=r[6],
    )


class PostgresReportRepository:
    """Report repository over the ``reports`` table."""

    def __init__(self, pool: AsyncConnectionPool) -> None:
        self._pool = pool

    async def find_by_id(self, report_id: UUID) -> Report | None:
        """Get report by id, including soft-deleted rows."""
        async with get_connection(self._pool) as conn:
            cur = await conn.execute(
                f"SELECT {_COLUMNS} FROM reports WHERE id = %s", (report_id,)
            )
            r = await cur.fetchone()
        return _row_to_report(r) if r else None

    async def find_by_user_id(self, user_id: str, include_deleted: bool = False) -> list[Report]:
        """List reports of a user, newest first."""
        q = f"SELECT {_COLUMNS} FROM reports WHERE user_id = %s"
        if not include_deleted:
            q += " AND deleted_at IS NULL"
        q += " ORDER BY created_at DESC"
        async with get_connection(self._pool) as conn:
            cur = await conn.execute(q, (user_id,))
            rows = await cur.fetchall()
        return [_row_to_report(r) for r in rows]

    async def save(self, report: Report) -> Report:
        """Upsert by id. user_id and created_at are only written on insert."""
        async with get_connection(self._pool) as conn:
            cur = await conn.execute(
                f"INSERT INTO reports ({_COLUMNS}) VALUES (%s, %s, %s, %s, %s, %s, %s) "
                "ON CONFLICT (id) DO UPDATE SET name = EXCLUDED.name, content = EXCLUDED.content, "
                "updated_at = EXCLUDED.updated_at, deleted_at = EXCLUDED.deleted_at "
                f"RETURNING {_COLUMNS}",
                (
                    report.id,
                    report.user_id,
                    report.name,
                    report.content,
                    report.created_at,
                    report.updated_at,
                    report.deleted_at,
                ),
            )
            r = await cur.fetchone()
        return _row_to_report(r)

    async def delete(self, report_id: UUID) -> None:
        """Soft delete. Unknown ids are a no-op."""
        async with get_connection(self._pool) as conn:
            await conn.execute(
                "UPDATE reports SET deleted_at = NOW(), updated_at = NOW() WHERE id = %s",
                (report_id,),
            )

    async def search(self, user_id: str, query: str) -> list[Report]:
        """Case-insensitive substring match on name or content."""
        pattern = like_pattern(query)
        async with get_connection(self._pool) as conn:
            cur = await conn.execute(
                f"SELECT {_COLUMNS} FROM reports "
                "WHERE user_id = %s AND deleted_at IS NULL "
                "AND (name ILIKE %s OR content ILIKE %s) "
                "ORDER BY created_at DESC",
                (user_id, pattern, pattern),
            )
            rows = await cur.fetchall()
        return [_row_to_report(r) for r in rows]
