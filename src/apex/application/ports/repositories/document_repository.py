"""Document repository port."""

from typing import Protocol
from uuid import UUID

from apex.domain.entities import Document


class DocumentRepository(Protocol):
    """Port for document persistence. Reads are scoped by owning report.

    ``save`` raises ConflictError when another active document in the same
    report already holds the file hash.
    """

    async def find_by_id(self, document_id: UUID) -> Document | None: ...

    async def find_by_report_id(
        self, report_id: UUID, include_deleted: bool = False
    ) -> list[Document]: ...

    async def find_by_hash(self, report_id: UUID, file_hash: str) -> Document | None: ...

    async def save(self, document: Document) -> Document: ...

    async def delete(self, document_id: UUID) -> None: ...

    async def search(self, report_id: UUID, query: str) -> list[Document]: ...
