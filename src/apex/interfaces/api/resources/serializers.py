"""JSON shapes for API responses."""

from datetime import datetime

from apex.domain.entities import Document, Report


def _ts(value: datetime | None) -> str | None:
    return value.isoformat() if value else None


def report_to_dict(r: Report) -> dict:
    return {
        "id": str(r.id),
        "userId": r.user_id,
        "name": r.name,
        "content": r.content,
        "createdAt": _ts(r.created_at),
        "updatedAt": _ts(r.updated_at),
        "deletedAt": _ts(r.deleted_at),
    }


def document_to_dict(d: Document) -> dict:
    return {
        "id": str(d.id),
        "reportId": str(d.report_id),
        "filename": d.filename,
        "fileHash": d.file_hash,
        "storagePath": d.storage_path,
        "parsedContent": d.parsed_content,
        "notes": d.notes,
        "createdAt": _ts(d.created_at),
        "updatedAt": _ts(d.updated_at),
        "deletedAt": _ts(d.deleted_at),
    }
