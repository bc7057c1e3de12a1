"""Document API resources."""

import re
from urllib.parse import unquote_to_bytes
from uuid import UUID

import falcon.asgi

from apex.application.dto.document_dto import DocumentUpdate
from apex.application.services import DocumentService, ReportService
from apex.domain.entities import Document
from apex.domain.exceptions import (
    AuthorizationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from apex.interfaces.api.resources.serializers import document_to_dict

# RFC 5987: filename*=charset''percent-encoded (two single quotes)
_FILENAME_STAR_RFC5987 = re.compile(r"([\w-]+)''(.+)")

_MISSING_FIELDS = "File and reportId are required"


def _decode_filename(raw: str | None) -> str:
    """Decode filename to UTF-8, fixing mojibake when UTF-8 bytes were read as Latin-1."""
    if not raw or not raw.strip():
        return ""
    raw = raw.strip()
    try:
        return raw.encode("latin-1").decode("utf-8")
    except (UnicodeEncodeError, UnicodeDecodeError):
        return raw


def _parse_filename_star_from_header(raw_header_value: bytes) -> str | None:
    """Parse Content-Disposition raw value for filename*=charset''percent-encoded (RFC 5987)."""
    if not raw_header_value:
        return None
    decoded = raw_header_value.decode("utf-8", errors="replace")
    idx = decoded.find("filename*=")
    if idx == -1:
        return None
    rest = decoded[idx + len("filename*=") :].split(";", 1)[0].strip()
    match = _FILENAME_STAR_RFC5987.match(rest)
    if not match:
        return None
    charset, encoded = match.groups()
    try:
        return unquote_to_bytes(encoded).decode(charset)
    except (ValueError, LookupError):
        return None


def _get_part_filename(part: object) -> str:
    """Filename of a multipart part: part.filename, else filename* from the raw header, else "file"."""
    raw = (getattr(part, "filename", None) or "").strip()
    if not raw:
        headers = getattr(part, "_headers", None)
        if isinstance(headers, dict):
            raw_star = _parse_filename_star_from_header(headers.get(b"content-disposition", b""))
            if raw_star:
                raw = raw_star.strip()
    decoded = _decode_filename(raw) if raw else ""
    return decoded or "file"


def _parse_id(raw: str) -> UUID | None:
    try:
        return UUID(raw)
    except ValueError:
        return None


def _unauthorized(resp: falcon.asgi.Response) -> None:
    resp.status = falcon.HTTP_401
    resp.media = {"error": "Unauthorized"}


def _too_large(resp: falcon.asgi.Response, limit: int) -> None:
    resp.status = falcon.HTTP_413
    resp.media = {"error": f"File too large (max {limit} bytes)"}


def _is_part_too_large(error: falcon.MediaMalformedError) -> bool:
    """Multipart parser error raised when a part exceeds max_body_part_buffer_size."""
    return "too large" in (error.description or "")


class DocumentsResource:
    """POST /v1/documents - upload one file into a report (multipart: file + reportId)."""

    def __init__(
        self,
        document_service: DocumentService,
        report_service: ReportService,
        max_upload_bytes: int,
    ) -> None:
        self._documents = document_service
        self._reports = report_service
        self._max_upload_bytes = max_upload_bytes

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """Upload document. 409 when the same bytes are already in the report."""
        user = getattr(req.context, "user", None)
        if not user:
            _unauthorized(resp)
            return

        if "multipart/form-data" not in (req.content_type or ""):
            resp.status = falcon.HTTP_400
            resp.media = {"error": _MISSING_FIELDS}
            return
        if req.content_length is not None and req.content_length > self._max_upload_bytes:
            _too_large(resp, self._max_upload_bytes)
            return

        report_id_str: str | None = None
        data: bytes | None = None
        filename = ""
        content_type: str | None = None
        try:
            form = await req.get_media()
            async for part in form:
                name = (part.name or "").strip()
                if name == "reportId":
                    report_id_str = (await part.get_data()).decode("utf-8").strip()
                elif name == "file" and data is None:
                    data = bytes(await part.get_data())
                    filename = _get_part_filename(part)
                    content_type = part.content_type
        except falcon.MediaMalformedError as e:
            if _is_part_too_large(e):
                _too_large(resp, self._max_upload_bytes)
                return
            resp.status = falcon.HTTP_400
            resp.media = {"error": f"Invalid multipart: {e.description}"}
            return

        if data is None or not report_id_str:
            resp.status = falcon.HTTP_400
            resp.media = {"error": _MISSING_FIELDS}
            return
        if len(data) > self._max_upload_bytes:
            _too_large(resp, self._max_upload_bytes)
            return
        report_id = _parse_id(report_id_str)
        if report_id is None:
            resp.status = falcon.HTTP_400
            resp.media = {"error": "Invalid reportId"}
            return

        try:
            await self._reports.get_report(report_id, user.user_id)
            document = await self._documents.upload_document(
                report_id, data, filename, content_type
            )
        except NotFoundError as e:
            resp.status = falcon.HTTP_404
            resp.media = {"error": str(e)}
            return
        except AuthorizationError:
            resp.status = falcon.HTTP_403
            resp.media = {"error": "Unauthorized"}
            return
        except ConflictError as e:
            resp.status = falcon.HTTP_409
            resp.media = {"error": str(e)}
            return
        except ValidationError as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": str(e)}
            return
        resp.media = document_to_dict(document)
        resp.status = falcon.HTTP_201


class _OwnedDocumentMixin:
    """Resolves a document and checks that the caller owns its report."""

    _documents: DocumentService
    _reports: ReportService

    async def _load_owned(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, document_id: str
    ) -> Document | None:
        """Return the document, or None after writing the error response."""
        user = getattr(req.context, "user", None)
        if not user:
            _unauthorized(resp)
            return None
        doc_id = _parse_id(document_id)
        try:
            if doc_id is None:
                raise NotFoundError("Document not found")
            document = await self._documents.get_document(doc_id)
            await self._reports.get_report(document.report_id, user.user_id)
        except NotFoundError:
            resp.status = falcon.HTTP_404
            resp.media = {"error": "Document not found"}
            return None
        except AuthorizationError:
            resp.status = falcon.HTTP_403
            resp.media = {"error": "Unauthorized"}
            return None
        return document


class DocumentResource(_OwnedDocumentMixin):
    """GET, PATCH, DELETE /v1/documents/{document_id}."""

    def __init__(self, document_service: DocumentService, report_service: ReportService) -> None:
        self._documents = document_service
        self._reports = report_service

    async def on_get(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, document_id: str
    ) -> None:
        """Get document by id."""
        document = await self._load_owned(req, resp, document_id)
        if document is None:
            return
        resp.media = document_to_dict(document)
        resp.status = falcon.HTTP_200

    async def on_patch(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, document_id: str
    ) -> None:
        """Update filename and/or notes."""
        document = await self._load_owned(req, resp, document_id)
        if document is None:
            return
        try:
            body = await req.get_media()
        except (falcon.MediaNotFoundError, falcon.MediaMalformedError):
            body = None
        if not isinstance(body, dict):
            resp.status = falcon.HTTP_400
            resp.media = {"error": "Invalid request body"}
            return
        update = DocumentUpdate(filename=body.get("filename"), notes=body.get("notes"))
        if update.is_empty():
            resp.status = falcon.HTTP_400
            resp.media = {"error": "At least one field (filename or notes) must be provided"}
            return
        if any(v is not None and not isinstance(v, str) for v in (update.filename, update.notes)):
            resp.status = falcon.HTTP_400
            resp.media = {"error": "filename and notes must be strings"}
            return
        try:
            updated = await self._documents.update_document(document.id, update)
        except ValidationError as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": str(e)}
            return
        except ConflictError as e:
            resp.status = falcon.HTTP_409
            resp.media = {"error": str(e)}
            return
        resp.media = document_to_dict(updated)
        resp.status = falcon.HTTP_200

    async def on_delete(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, document_id: str
    ) -> None:
        """Remove stored file and soft delete the document."""
        document = await self._load_owned(req, resp, document_id)
        if document is None:
            return
        try:
            await self._documents.delete_document(document.id)
        except NotFoundError:
            resp.status = falcon.HTTP_404
            resp.media = {"error": "Document not found"}
            return
        resp.status = falcon.HTTP_204


class DocumentFileResource(_OwnedDocumentMixin):
    """GET /v1/documents/{document_id}/file - download the stored bytes."""

    def __init__(self, document_service: DocumentService, report_service: ReportService) -> None:
        self._documents = document_service
        self._reports = report_service

    async def on_get(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, document_id: str
    ) -> None:
        document = await self._load_owned(req, resp, document_id)
        if document is None:
            return
        try:
            _, data = await self._documents.get_document_file(document.id)
        except FileNotFoundError:
            resp.status = falcon.HTTP_404
            resp.media = {"error": "File not found"}
            return
        resp.content_type = "application/octet-stream"
        resp.downloadable_as = document.filename
        resp.data = data
        resp.status = falcon.HTTP_200
