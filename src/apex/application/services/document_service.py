"""Document service: hashing, deduplication, storage and extraction."""

import logging
from datetime import UTC, datetime
from uuid import UUID, uuid4

from apex.application.dto.document_dto import DocumentUpdate
from apex.application.ports import ContentParser, DocumentRepository, FileStorage
from apex.domain.entities import Document
from apex.domain.exceptions import ConflictError, NotFoundError, ValidationError
from apex.domain.value_objects import FileHash

logger = logging.getLogger(__name__)

DUPLICATE_MESSAGE = "Document already exists in this report"


class DocumentService:
    """Document operations within a report.

    Upload order matters: the duplicate check runs before anything is written,
    so a duplicate upload has no storage or extraction side effects. The check
    is advisory under concurrent uploads; the repository's uniqueness
    constraint is authoritative and surfaces as the same ConflictError.
    """

    def __init__(
        self,
        document_repository: DocumentRepository,
        file_storage: FileStorage,
        content_parser: ContentParser,
        max_filename_chars: int | None = None,
    ) -> None:
        self._documents = document_repository
        self._storage = file_storage
        self._parser = content_parser
        self._max_filename_chars = max_filename_chars

    async def upload_document(
        self,
        report_id: UUID,
        data: bytes,
        filename: str,
        content_type: str | None = None,
    ) -> Document:
        """Hash, dedup-check, store, extract and persist a new document."""
        self._check_filename(filename)
        file_hash = str(FileHash.of(data))

        existing = await self._documents.find_by_hash(report_id, file_hash)
        if existing is not None:
            logger.info(
                "Duplicate upload of %s into report %s (matches document %s)",
                filename,
                report_id,
                existing.id,
            )
            raise ConflictError(DUPLICATE_MESSAGE)

        storage_path = await self._storage.save_file(str(report_id), file_hash, data, filename)
        parsed_content = await self._extract(data, filename, content_type)

        now = datetime.now(UTC)
        document = Document(
            id=uuid4(),
            report_id=report_id,
            filename=filename,
            file_hash=file_hash,
            storage_path=storage_path,
            parsed_content=parsed_content,
            notes="",
            created_at=now,
            updated_at=now,
            deleted_at=None,
        )
        if not document.has_been_parsed:
            logger.info("Storing %s without extracted text", filename)
        try:
            return await self._documents.save(document)
        except ConflictError:
            # Lost a race with a concurrent upload; the winner owns the same storage path.
            logger.info("Concurrent duplicate upload of %s into report %s", filename, report_id)
            raise
        except Exception:
            await self._discard_stored_file(document)
            raise

    async def get_document(self, document_id: UUID) -> Document:
        document = await self._documents.find_by_id(document_id)
        if document is None:
            raise NotFoundError("Document not found")
        return document

    async def get_document_file(self, document_id: UUID) -> tuple[Document, bytes]:
        """Return the document together with its stored bytes."""
        document = await self.get_document(document_id)
        data = await self._storage.get_file(document.storage_path)
        return document, data

    async def list_documents(self, report_id: UUID) -> list[Document]:
        return await self._documents.find_by_report_id(report_id)

    async def update_document(self, document_id: UUID, update: DocumentUpdate) -> Document:
        """Merge filename and/or notes and refresh updated_at."""
        document = await self.get_document(document_id)
        if update.filename is not None:
            self._check_filename(update.filename)
            document.filename = update.filename
        if update.notes is not None:
            document.notes = update.notes
        document.updated_at = datetime.now(UTC)
        return await self._documents.save(document)

    async def delete_document(self, document_id: UUID) -> None:
        """Remove the stored file, then soft delete the record.

        Storage paths are derived from (report, hash), so a document deleted
        earlier may share its file with a live re-upload of the same bytes.
        Deleting such a stale record only refreshes its soft delete.
        """
        document = await self.get_document(document_id)
        if document.is_active and not await self._file_shared(document):
            await self._storage.delete_file(document.storage_path)
        await self._documents.delete(document.id)

    async def search_documents(self, report_id: UUID, query: str) -> list[Document]:
        return await self._documents.search(report_id, query)

    async def _extract(
        self, data: bytes, filename: str, content_type: str | None
    ) -> str | None:
        """Extraction is optional enrichment: failures and empty results become None."""
        try:
            text = await self._parser.parse(data, filename, content_type)
        except Exception:
            logger.warning("Content extraction failed for %s", filename, exc_info=True)
            return None
        return text or None

    async def _file_shared(self, document: Document) -> bool:
        """True when another active document of the report points at the same file."""
        other = await self._documents.find_by_hash(document.report_id, document.file_hash)
        return (
            other is not None
            and other.id != document.id
            and other.storage_path == document.storage_path
        )

    async def _discard_stored_file(self, document: Document) -> None:
        storage_path = document.storage_path
        try:
            shared = await self._file_shared(document)
        except Exception:
            logger.warning(
                "Could not check references to %s, keeping it", storage_path, exc_info=True
            )
            return
        if shared:
            logger.info("Stored file %s belongs to a concurrent upload, keeping it", storage_path)
            return
        logger.warning("Persisting document failed, removing stored file %s", storage_path)
        try:
            await self._storage.delete_file(storage_path)
        except OSError:
            logger.exception("Could not remove orphaned file %s", storage_path)

    def _check_filename(self, filename: str) -> None:
        if self._max_filename_chars is not None and len(filename) > self._max_filename_chars:
            raise ValidationError(
                f"Filename too long (max {self._max_filename_chars} characters)"
            )
