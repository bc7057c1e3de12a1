"""Report API resources."""

from uuid import UUID

import falcon.asgi

from apex.application.dto.report_dto import ReportUpdate
from apex.application.services import DocumentService, ReportService
from apex.domain.exceptions import AuthorizationError, NotFoundError, ValidationError
from apex.interfaces.api.resources.serializers import document_to_dict, report_to_dict


def _parse_id(raw: str) -> UUID | None:
    try:
        return UUID(raw)
    except ValueError:
        return None


def _unauthorized(resp: falcon.asgi.Response) -> None:
    resp.status = falcon.HTTP_401
    resp.media = {"error": "Unauthorized"}


def _report_not_found(resp: falcon.asgi.Response) -> None:
    resp.status = falcon.HTTP_404
    resp.media = {"error": "Report not found"}


async def _read_json_object(req: falcon.asgi.Request) -> dict | None:
    try:
        body = await req.get_media()
    except (falcon.MediaNotFoundError, falcon.MediaMalformedError):
        return None
    return body if isinstance(body, dict) else None


class ReportsResource:
    """POST /v1/reports - create; GET /v1/reports - list or search (?q=)."""

    def __init__(self, report_service: ReportService) -> None:
        self._reports = report_service

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """List active reports of the caller, newest first."""
        user = getattr(req.context, "user", None)
        if not user:
            _unauthorized(resp)
            return
        query = req.get_param("q")
        if query:
            reports = await self._reports.search_reports(user.user_id, query)
        else:
            reports = await self._reports.list_reports(user.user_id)
        resp.media = [report_to_dict(r) for r in reports]
        resp.status = falcon.HTTP_200

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """Create report from {"name": ...}."""
        user = getattr(req.context, "user", None)
        if not user:
            _unauthorized(resp)
            return
        body = await _read_json_object(req)
        if body is None:
            resp.status = falcon.HTTP_400
            resp.media = {"error": "Invalid request body"}
            return
        name = body.get("name")
        if not name or not isinstance(name, str):
            resp.status = falcon.HTTP_400
            resp.media = {"error": "Name is required"}
            return
        try:
            report = await self._reports.create_report(user.user_id, name)
        except ValidationError as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": str(e)}
            return
        resp.media = report_to_dict(report)
        resp.status = falcon.HTTP_201


class ReportResource:
    """GET, PATCH, DELETE /v1/reports/{report_id}."""

    def __init__(self, report_service: ReportService) -> None:
        self._reports = report_service

    async def on_get(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, report_id: str
    ) -> None:
        """Get report; soft-deleted reports are still visible to their owner."""
        user = getattr(req.context, "user", None)
        if not user:
            _unauthorized(resp)
            return
        rid = _parse_id(report_id)
        if rid is None:
            _report_not_found(resp)
            return
        try:
            report = await self._reports.get_report(rid, user.user_id)
        except NotFoundError:
            _report_not_found(resp)
            return
        except AuthorizationError:
            resp.status = falcon.HTTP_403
            resp.media = {"error": "Unauthorized"}
            return
        resp.media = report_to_dict(report)
        resp.status = falcon.HTTP_200

    async def on_patch(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, report_id: str
    ) -> None:
        """Update name and/or content; at least one is required."""
        user = getattr(req.context, "user", None)
        if not user:
            _unauthorized(resp)
            return
        body = await _read_json_object(req)
        if body is None:
            resp.status = falcon.HTTP_400
            resp.media = {"error": "Invalid request body"}
            return
        update = ReportUpdate(name=body.get("name"), content=body.get("content"))
        if update.is_empty():
            resp.status = falcon.HTTP_400
            resp.media = {"error": "At least one field (name or content) must be provided"}
            return
        if any(v is not None and not isinstance(v, str) for v in (update.name, update.content)):
            resp.status = falcon.HTTP_400
            resp.media = {"error": "name and content must be strings"}
            return
        rid = _parse_id(report_id)
        if rid is None:
            _report_not_found(resp)
            return
        try:
            report = await self._reports.update_report(rid, user.user_id, update)
        except NotFoundError:
            _report_not_found(resp)
            return
        except AuthorizationError:
            resp.status = falcon.HTTP_403
            resp.media = {"error": "Unauthorized"}
            return
        except ValidationError as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": str(e)}
            return
        resp.media = report_to_dict(report)
        resp.status = falcon.HTTP_200

    async def on_delete(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, report_id: str
    ) -> None:
        """Soft delete report."""
        user = getattr(req.context, "user", None)
        if not user:
            _unauthorized(resp)
            return
        rid = _parse_id(report_id)
        if rid is None:
            _report_not_found(resp)
            return
        try:
            await self._reports.delete_report(rid, user.user_id)
        except NotFoundError:
            _report_not_found(resp)
            return
        except AuthorizationError:
            resp.status = falcon.HTTP_403
            resp.media = {"error": "Unauthorized"}
            return
        resp.status = falcon.HTTP_204


class ReportRestoreResource:
    """POST /v1/reports/{report_id}/restore - undo a soft delete."""

    def __init__(self, report_service: ReportService) -> None:
        self._reports = report_service

    async def on_post(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, report_id: str
    ) -> None:
        user = getattr(req.context, "user", None)
        if not user:
            _unauthorized(resp)
            return
        rid = _parse_id(report_id)
        if rid is None:
            _report_not_found(resp)
            return
        try:
            report = await self._reports.restore_report(rid, user.user_id)
        except NotFoundError:
            _report_not_found(resp)
            return
        except AuthorizationError:
            resp.status = falcon.HTTP_403
            resp.media = {"error": "Unauthorized"}
            return
        resp.media = report_to_dict(report)
        resp.status = falcon.HTTP_200


class ReportDocumentsResource:
    """GET /v1/reports/{report_id}/documents - list or search (?q=) active documents."""

    def __init__(self, report_service: ReportService, document_service: DocumentService) -> None:
        self._reports = report_service
        self._documents = document_service

    async def on_get(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, report_id: str
    ) -> None:
        user = getattr(req.context, "user", None)
        if not user:
            _unauthorized(resp)
            return
        rid = _parse_id(report_id)
        if rid is None:
            _report_not_found(resp)
            return
        try:
            await self._reports.get_report(rid, user.user_id)
        except NotFoundError:
            _report_not_found(resp)
            return
        except AuthorizationError:
            resp.status = falcon.HTTP_403
            resp.media = {"error": "Unauthorized"}
            return
        query = req.get_param("q")
        if query:
            documents = await self._documents.search_documents(rid, query)
        else:
            documents = await self._documents.list_documents(rid)
        resp.media = [document_to_dict(d) for d in documents]
        resp.status = falcon.HTTP_200
