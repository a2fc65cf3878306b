"""HTTP ingress routes for the Account Unlock service."""

from __future__ import annotations

from http import HTTPStatus

from fastapi import APIRouter, Request, Response
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse

from packages.warden_shared.envelope import EnvelopeKind, new_meta
from packages.warden_shared.errors import ErrorCategory
from packages.warden_shared.http import get_header, read_raw_body
from packages.warden_shared.logging import fields, get_logger, log_context
from services.action.account_unlock.domain import UNEXPECTED_FAILURE_MESSAGE
from services.action.account_unlock.service import AccountUnlockService

_LOGGER = get_logger(__name__)

CORS_HEADERS: dict[str, str] = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
}

UNLOCK_SUCCESS_MESSAGE = "Account unlocked successfully"
HEALTH_PATH = "/health"

_SOURCE = "account_unlock_http"
_HEADER_AUTHORIZATION = "Authorization"


def register_routes(
    *,
    router: APIRouter,
    service: AccountUnlockService,
    route_path: str = "/unlock-account",
) -> None:
    """Attach the unlock and health routes to one router.

    The unlock route answers every method: ``OPTIONS`` is a bare preflight
    reply and all other methods run the full unlock flow.
    """

    async def unlock_account(request: Request) -> Response:
        if request.method == "OPTIONS":
            return Response(status_code=HTTPStatus.OK, headers=CORS_HEADERS)

        meta = new_meta(kind=EnvelopeKind.COMMAND, source=_SOURCE)
        authorization = get_header(request, _HEADER_AUTHORIZATION, required=False)
        body = await read_raw_body(request)

        with log_context({fields.TRACE_ID: meta.trace_id}):
            result = await run_in_threadpool(
                service.unlock_account,
                meta=meta,
                authorization=authorization,
                body=body,
            )

        if result.ok:
            return _write_json(
                status=HTTPStatus.OK,
                payload={"success": True, "message": UNLOCK_SUCCESS_MESSAGE},
            )

        error = result.first_error
        if error is None:
            _LOGGER.error("unlock returned a failed result without errors")
            return _write_json(
                status=HTTPStatus.INTERNAL_SERVER_ERROR,
                payload={"error": UNEXPECTED_FAILURE_MESSAGE},
            )
        return _write_json(
            status=_error_status(error.category),
            payload={"error": error.message},
        )

    async def health() -> Response:
        meta = new_meta(kind=EnvelopeKind.QUERY, source=_SOURCE)
        with log_context({fields.TRACE_ID: meta.trace_id}):
            result = await run_in_threadpool(service.health, meta=meta)

        if not result.ok or result.payload is None:
            message = (
                result.first_error.message
                if result.first_error is not None
                else UNEXPECTED_FAILURE_MESSAGE
            )
            return _write_json(
                status=HTTPStatus.SERVICE_UNAVAILABLE,
                payload={
                    "ok": False,
                    "service_ready": False,
                    "platform_ready": False,
                    "detail": message,
                },
            )

        status = result.payload
        ready = status.service_ready and status.platform_ready
        return _write_json(
            status=HTTPStatus.OK if ready else HTTPStatus.SERVICE_UNAVAILABLE,
            payload={"ok": ready, **status.model_dump(mode="python")},
        )

    # Plain Starlette route without a method filter: every verb, HEAD and
    # TRACE included, reaches the handler.
    router.add_route(route_path, unlock_account, include_in_schema=False)
    router.add_api_route(
        HEALTH_PATH,
        health,
        methods=["GET"],
        include_in_schema=False,
    )


def _write_json(*, status: HTTPStatus, payload: dict[str, object]) -> JSONResponse:
    """Build one JSON response carrying the shared CORS headers."""
    return JSONResponse(status_code=int(status), content=payload, headers=CORS_HEADERS)


def _error_status(category: ErrorCategory) -> HTTPStatus:
    """Map structured envelope error category to HTTP status code."""
    if category == ErrorCategory.AUTHENTICATION:
        return HTTPStatus.UNAUTHORIZED
    if category == ErrorCategory.VALIDATION:
        return HTTPStatus.BAD_REQUEST
    if category == ErrorCategory.POLICY:
        return HTTPStatus.FORBIDDEN
    return HTTPStatus.INTERNAL_SERVER_ERROR
