"""In-process platform adapter implementation over HTTP.

Speaks the GoTrue (``/auth/v1``) and PostgREST (``/rest/v1``) dialects used by
the hosted platform. Identity lookups run with the public anon key plus the
caller's own token; everything else runs with the service-role key.
"""

from __future__ import annotations

import json
from typing import Any

import httpx

from packages.warden_shared.config import PlatformSettings
from packages.warden_shared.http import (
    HttpClient,
    HttpJsonDecodeError,
    HttpRequestError,
    HttpStatusError,
)
from packages.warden_shared.logging import get_logger, public_api_instrumented
from resources.adapters.platform.adapter import (
    AuditRecord,
    PlatformAdapter,
    PlatformAuthenticationError,
    PlatformDependencyError,
    PlatformHealthResult,
    PlatformInternalError,
    Principal,
)
from resources.adapters.platform.component import RESOURCE_COMPONENT_ID

_LOGGER = get_logger(__name__)

_USER_PATH = "/auth/v1/user"
_HEALTH_PATH = "/auth/v1/health"
_RPC_PATH = "/rest/v1/rpc/{name}"
_AUDIT_TABLE_PATH = "/rest/v1/admin_audit_logs"

# Argument names of the `unlock_account` procedure.
_UNLOCK_TARGET_PARAM = "p_user_id"
_UNLOCK_ADMIN_PARAM = "p_admin_id"

# Statuses with which the identity endpoint rejects a bad or expired token.
_CREDENTIAL_REJECTED_STATUSES = frozenset({400, 401, 403, 404})


class HttpPlatformAdapter(PlatformAdapter):
    """Platform adapter backed by the platform's REST endpoints."""

    def __init__(
        self,
        *,
        settings: PlatformSettings,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._settings = settings
        service_key = settings.service_role_key.get_secret_value()
        self._service_client = HttpClient(
            base_url=settings.url,
            timeout_seconds=settings.timeout_seconds,
            headers={
                "apikey": service_key,
                "Authorization": f"Bearer {service_key}",
            },
            transport=transport,
        )
        self._identity_client = HttpClient(
            base_url=settings.url,
            timeout_seconds=settings.timeout_seconds,
            headers={"apikey": settings.anon_key.get_secret_value()},
            transport=transport,
        )

    def close(self) -> None:
        """Close both owned HTTP clients."""
        self._service_client.close()
        self._identity_client.close()

    @public_api_instrumented(logger=_LOGGER, component_id=RESOURCE_COMPONENT_ID)
    def resolve_identity(self, *, authorization: str) -> Principal:
        """Resolve the user behind one presented ``Authorization`` header."""
        try:
            payload = self._identity_client.get_json(
                _USER_PATH, headers={"Authorization": authorization}
            )
        except HttpStatusError as exc:
            if exc.status_code in _CREDENTIAL_REJECTED_STATUSES:
                raise PlatformAuthenticationError(
                    _upstream_message(exc) or "credential rejected"
                ) from None
            raise _dependency_error(exc, fallback="identity lookup failed") from None
        except HttpRequestError as exc:
            raise PlatformDependencyError(
                str(exc) or "identity service unavailable"
            ) from None
        except HttpJsonDecodeError:
            raise PlatformInternalError("identity response is not valid JSON") from None

        if not isinstance(payload, dict):
            raise PlatformInternalError("identity response must be an object")
        user_id = str(payload.get("id") or "").strip()
        if user_id == "":
            raise PlatformAuthenticationError("credential did not resolve to a user")
        return Principal(id=user_id, email=str(payload.get("email") or ""))

    @public_api_instrumented(
        logger=_LOGGER, component_id=RESOURCE_COMPONENT_ID, id_fields=("user_id", "role")
    )
    def has_role(self, *, user_id: str, role: str) -> bool:
        """Call the ``has_role`` procedure; only a literal ``true`` grants."""
        result = self._rpc("has_role", {"_user_id": user_id, "_role": role})
        return result is True

    @public_api_instrumented(
        logger=_LOGGER,
        component_id=RESOURCE_COMPONENT_ID,
        id_fields=("user_id", "admin_id"),
    )
    def unlock_account(self, *, user_id: str, admin_id: str) -> bool:
        """Call the ``unlock_account`` procedure for one target user.

        The target is sent by user id under ``_UNLOCK_TARGET_PARAM``. Older
        platform migrations define the procedure as
        ``unlock_account(p_email TEXT, p_admin_id UUID)``; a deployment still
        on that signature needs the constant (and the value) switched to the
        email form.
        """
        result = self._rpc(
            "unlock_account",
            {_UNLOCK_TARGET_PARAM: user_id, _UNLOCK_ADMIN_PARAM: admin_id},
        )
        return result is True

    @public_api_instrumented(logger=_LOGGER, component_id=RESOURCE_COMPONENT_ID)
    def insert_audit_record(self, *, record: AuditRecord) -> None:
        """Insert one row into the admin audit log table."""
        try:
            self._service_client.post(
                _AUDIT_TABLE_PATH,
                json=record.model_dump(mode="json"),
                headers={"Prefer": "return=minimal"},
            )
        except HttpStatusError as exc:
            raise _dependency_error(exc, fallback="audit insert failed") from None
        except HttpRequestError as exc:
            raise PlatformDependencyError(
                str(exc) or "audit store unavailable"
            ) from None

    def health(self) -> PlatformHealthResult:
        """Probe the platform auth health endpoint."""
        try:
            self._identity_client.get(
                _HEALTH_PATH, timeout=self._settings.health_timeout_seconds
            )
        except (HttpRequestError, HttpStatusError) as exc:
            return PlatformHealthResult(
                platform_ready=False,
                detail=str(exc) or "platform unavailable",
            )
        return PlatformHealthResult(platform_ready=True, detail="ok")

    def _rpc(self, name: str, params: dict[str, str]) -> Any:
        """Invoke one stored procedure with service-role trust.

        Returns the decoded JSON result, or ``None`` for an empty body.
        """
        path = _RPC_PATH.format(name=name)
        try:
            response = self._service_client.post(path, json=params)
        except HttpStatusError as exc:
            raise _dependency_error(exc, fallback=f"{name} failed") from None
        except HttpRequestError as exc:
            raise PlatformDependencyError(str(exc) or f"{name} unavailable") from None

        if response.content.strip() == b"":
            return None
        try:
            return response.json()
        except ValueError:
            raise PlatformInternalError(f"{name} returned invalid JSON") from None


def _dependency_error(exc: HttpStatusError, *, fallback: str) -> PlatformDependencyError:
    """Build a dependency error carrying the platform's message when present."""
    return PlatformDependencyError(
        _upstream_message(exc) or f"{fallback} with status {exc.status_code}",
        status_code=exc.status_code,
    )


def _upstream_message(exc: HttpStatusError) -> str:
    """Extract a human-readable message from a GoTrue/PostgREST error body."""
    try:
        body = json.loads(exc.response_body)
    except ValueError:
        return ""
    if not isinstance(body, dict):
        return ""
    for key in ("message", "msg", "error_description", "error"):
        value = body.get(key)
        if isinstance(value, str) and value.strip() != "":
            return value.strip()
    return ""
