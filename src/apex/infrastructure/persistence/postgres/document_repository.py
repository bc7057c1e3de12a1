"""PostgreSQL document repository implementation."""

from uuid import UUID

from psycopg import errors
from psycopg_pool import AsyncConnectionPool

from apex.domain.entities import Document
from apex.domain.exceptions import ConflictError
from apex.infrastructure.persistence.postgres.connection import get_connection, like_pattern

_COLUMNS = (
    "id, report_id, filename, file_hash, storage_path, parsed_content, notes, "
    "created_at, updated_at, deleted_at"
)


def _row_to_document(r: tuple) -> Document:
    return Document(
        id=r[0],
        report_id=r[1],
        filename=r[2],
        file_hash=r[3],
        storage_path=r[4],
        parsed_content=r[5],
        notes=r[6],
        created_at=r[7],
        updated_at=r[8],
        deleted_at=r[9],
    )


class PostgresDocumentRepository:
    """Document repository over the ``documents`` table.

    The partial unique index on (report_id, file_hash) among active rows is
    the source of truth for deduplication.
    """

    def __init__(self, pool: AsyncConnectionPool) -> None:
        self._pool = pool

    async def find_by_id(self, document_id: UUID) -> Document | None:
        """Get document by id, including soft-deleted rows."""
        async with get_connection(self._pool) as conn:
            cur = await conn.execute(
                f"SELECT {_COLUMNS} FROM documents WHERE id = %s", (document_id,)
            )
            r = await cur.fetchone()
        return _row_to_document(r) if r else None

    async def find_by_report_id(
        self, report_id: UUID, include_deleted: bool = False
    ) -> list[Document]:
        """List documents of a report, newest first."""
        q = f"SELECT {_COLUMNS} FROM documents WHERE report_id = %s"
        if not include_deleted:
            q += " AND deleted_at IS NULL"
        q += " ORDER BY created_at DESC"
        async with get_connection(self._pool) as conn:
            cur = await conn.execute(q, (report_id,))
            rows = await cur.fetchall()
        return [_row_to_document(r) for r in rows]

    async def find_by_hash(self, report_id: UUID, file_hash: str) -> Document | None:
        """Active document in the report with this file hash."""
        async with get_connection(self._pool) as conn:
            cur = await conn.execute(
                f"SELECT {_COLUMNS} FROM documents "
                "WHERE report_id = %s AND file_hash = %s AND deleted_at IS NULL",
                (report_id, file_hash),
            )
            r = await cur.fetchone()
        return _row_to_document(r) if r else None

    async def save(self, document: Document) -> Document:
        """Upsert by id. Identity, hash and storage path are only written on insert."""
        try:
            async with get_connection(self._pool) as conn:
                cur = await conn.execute(
                    f"INSERT INTO documents ({_COLUMNS}) "
                    "VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s, %s) "
                    "ON CONFLICT (id) DO UPDATE SET filename = EXCLUDED.filename, "
                    "parsed_content = EXCLUDED.parsed_content, notes = EXCLUDED.notes, "
                    "updated_at = EXCLUDED.updated_at, deleted_at = EXCLUDED.deleted_at "
                    f"RETURNING {_COLUMNS}",
                    (
                        document.id,
                        document.report_id,
                        document.filename,
                        document.file_hash,
                        document.storage_path,
                        document.parsed_content,
                        document.notes,
                        document.created_at,
                        document.updated_at,
                        document.deleted_at,
                    ),
                )
                r = await cur.fetchone()
        except errors.UniqueViolation as e:
            raise ConflictError("Document already exists in this report") from e
        return _row_to_document(r)

    async def delete(self, document_id: UUID) -> None:
        """Soft delete. Unknown ids are a no-op."""
        async with get_connection(self._pool) as conn:
            await conn.execute(
                "UPDATE documents SET deleted_at = NOW(), updated_at = NOW() WHERE id = %s",
                (document_id,),
            )

    async def search(self, report_id: UUID, query: str) -> list[Document]:
        """Case-insensitive substring match on filename, notes or parsed content."""
        pattern = like_pattern(query)
        async with get_connection(self._pool) as conn:
            cur = await conn.execute(
                f"SELECT {_COLUMNS} FROM documents "
                "WHERE report_id = %s AND deleted_at IS NULL "
                "AND (filename ILIKE %s OR notes ILIKE %s OR parsed_content ILIKE %s) "
                "ORDER BY created_at DESC",
                (report_id, pattern, pattern, pattern),
            )
            rows = await cur.fetchall()
        return [_row_to_document(r) for r in rows]
