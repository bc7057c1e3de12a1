"""In-memory document repository."""

from dataclasses import replace
from datetime import UTC, datetime
from itertools import count
from uuid import UUID

from apex.domain.entities import Document
from apex.domain.exceptions import ConflictError


class InMemoryDocumentRepository:
    """Dict-backed document repository.

    Enforces the same (report_id, file_hash) uniqueness among active rows as
    the database index.
    """

    def __init__(self) -> None:
        self._by_id: dict[UUID, Document] = {}
        self._seq: dict[UUID, int] = {}
        self._counter = count()

    async def find_by_id(self, document_id: UUID) -> Document | None:
        document = self._by_id.get(document_id)
        return replace(document) if document else None

    async def find_by_report_id(
        self, report_id: UUID, include_deleted: bool = False
    ) -> list[Document]:
        items = [
            d
            for d in self._by_id.values()
            if d.report_id == report_id and (include_deleted or d.is_active)
        ]
        return self._newest_first(items)

    async def find_by_hash(self, report_id: UUID, file_hash: str) -> Document | None:
        for d in self._by_id.values():
            if d.report_id == report_id and d.file_hash == file_hash and d.is_active:
                return replace(d)
        return None

    async def save(self, document: Document) -> Document:
        existing = self._by_id.get(document.id)
        if existing is None:
            candidate = replace(document)
        else:
            candidate = replace(
                existing,
                filename=document.filename,
                parsed_content=document.parsed_content,
                notes=document.notes,
                updated_at=document.updated_at,
                deleted_at=document.deleted_at,
            )
        if candidate.is_active and self._hash_taken(candidate):
            raise ConflictError("Document already exists in this report")
        if existing is None:
            self._seq[candidate.id] = next(self._counter)
        self._by_id[candidate.id] = candidate
        return replace(candidate)

    async def delete(self, document_id: UUID) -> None:
        document = self._by_id.get(document_id)
        if document is None:
            return
        now = datetime.now(UTC)
        document.deleted_at = now
        document.updated_at = now

    async def search(self, report_id: UUID, query: str) -> list[Document]:
        needle = query.casefold()
        items = [
            d
            for d in self._by_id.values()
            if d.report_id == report_id
            and d.is_active
            and any(
                needle in field.casefold()
                for field in (d.filename, d.notes, d.parsed_content or "")
            )
        ]
        return self._newest_first(items)

    def _hash_taken(self, document: Document) -> bool:
        return any(
            d.id != document.id
            and d.report_id == document.report_id
            and d.file_hash == document.file_hash
            and d.is_active
            for d in self._by_id.values()
        )

    def _newest_first(self, items: list[Document]) -> list[Document]:
        items.sort(key=lambda d: (d.created_at, self._seq[d.id]), reverse=True)
        return [replace(d) for d in items]
