"""Concrete Account Unlock service implementation."""

from __future__ import annotations

from datetime import datetime
from typing import Callable

from packages.warden_shared.envelope import (
    Envelope,
    EnvelopeMeta,
    failure,
    success,
    utc_now,
    validate_meta,
)
from packages.warden_shared.errors import (
    ErrorDetail,
    authentication_error,
    codes,
    dependency_error,
    internal_error,
    policy_error,
)
from packages.warden_shared.logging import (
    fields,
    get_logger,
    log_context,
    public_api_instrumented,
)
from resources.adapters.platform.adapter import (
    AuditRecord,
    PlatformAdapter,
    PlatformAdapterError,
    Principal,
)
from services.action.account_unlock.component import SERVICE_COMPONENT_ID
from services.action.account_unlock.domain import (
    ACTION_ACCOUNT_UNLOCKED,
    ADMIN_REQUIRED_MESSAGE,
    ADMIN_ROLE,
    AUDIT_WRITE_FAILED_MESSAGE,
    MISSING_AUTHORIZATION_MESSAGE,
    ROLE_CHECK_FAILED_MESSAGE,
    STAGE_POST_MUTATION,
    STAGE_PRE_MUTATION,
    TABLE_ACCOUNT_LOCKOUTS,
    UNAUTHORIZED_MESSAGE,
    UNEXPECTED_FAILURE_MESSAGE,
    UNLOCK_FAILED_MESSAGE,
    HealthStatus,
    UnlockResult,
)
from services.action.account_unlock.service import AccountUnlockService
from services.action.account_unlock.validation import parse_unlock_request

_LOGGER = get_logger(__name__)


class DefaultAccountUnlockService(AccountUnlockService):
    """Unlock service that gates each request through the platform adapter.

    Gates run strictly in order: credential, identity, admin role, payload,
    unlock, audit. The first failing gate ends the request, so no mutation
    happens without an authorized admin and no audit record is written
    without a successful mutation.
    """

    def __init__(
        self,
        *,
        adapter: PlatformAdapter,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._adapter = adapter
        self._clock = clock

    def close(self) -> None:
        self._adapter.close()

    @public_api_instrumented(logger=_LOGGER, component_id=SERVICE_COMPONENT_ID)
    def unlock_account(
        self,
        *,
        meta: EnvelopeMeta,
        authorization: str | None,
        body: bytes,
    ) -> Envelope[UnlockResult]:
        """Authenticate, authorize, validate, unlock, and audit one request."""
        try:
            validate_meta(meta)
        except ValueError as exc:
            return failure(
                meta=meta,
                errors=[internal_error(str(exc), code=codes.INVALID_ARGUMENT)],
            )

        try:
            return self._unlock(meta=meta, authorization=authorization, body=body)
        except Exception as exc:
            _LOGGER.exception("unexpected failure while unlocking account")
            return failure(
                meta=meta,
                errors=[
                    internal_error(
                        str(exc) or UNEXPECTED_FAILURE_MESSAGE,
                        code=codes.UNEXPECTED_EXCEPTION,
                        metadata={"exception_type": type(exc).__name__},
                    )
                ],
            )

    @public_api_instrumented(logger=_LOGGER, component_id=SERVICE_COMPONENT_ID)
    def health(self, *, meta: EnvelopeMeta) -> Envelope[HealthStatus]:
        """Return service readiness plus platform reachability."""
        platform = self._adapter.health()
        return success(
            meta=meta,
            payload=HealthStatus(
                service_ready=True,
                platform_ready=platform.platform_ready,
                detail=f"platform={platform.detail}",
            ),
        )

    def _unlock(
        self,
        *,
        meta: EnvelopeMeta,
        authorization: str | None,
        body: bytes,
    ) -> Envelope[UnlockResult]:
        credential = (authorization or "").strip()
        if credential == "":
            _LOGGER.warning("unlock request rejected: no authorization header")
            return failure(
                meta=meta,
                errors=[
                    authentication_error(
                        MISSING_AUTHORIZATION_MESSAGE,
                        code=codes.MISSING_CREDENTIAL,
                    )
                ],
            )

        principal, error = self._resolve_caller(credential)
        if error is not None:
            return failure(meta=meta, errors=[error])
        assert principal is not None

        with log_context(
            {
                fields.ACTOR_ID: principal.id,
                fields.ACTOR_LABEL: principal.label,
                fields.ACTION_TYPE: ACTION_ACCOUNT_UNLOCKED,
            }
        ):
            return self._unlock_as(
                meta=meta.with_principal(principal.id),
                principal=principal,
                body=body,
            )

    def _unlock_as(
        self,
        *,
        meta: EnvelopeMeta,
        principal: Principal,
        body: bytes,
    ) -> Envelope[UnlockResult]:
        error = self._authorize_admin(principal)
        if error is not None:
            return failure(meta=meta, errors=[error])

        request, error = parse_unlock_request(body)
        if error is not None:
            return failure(meta=meta, errors=[error])
        assert request is not None

        with log_context({fields.TARGET_USER_ID: request.user_id}):
            return self._apply_unlock(
                meta=meta, principal=principal, target_user_id=request.user_id
            )

    def _apply_unlock(
        self,
        *,
        meta: EnvelopeMeta,
        principal: Principal,
        target_user_id: str,
    ) -> Envelope[UnlockResult]:
        """Run the mutation, then write its audit record."""
        _LOGGER.info(
            "Admin %s unlocking account for user %s", principal.label, target_user_id
        )
        try:
            lock_cleared = self._adapter.unlock_account(
                user_id=target_user_id, admin_id=principal.id
            )
        except PlatformAdapterError as exc:
            _LOGGER.error(
                "unlock failed for user %s: %s", target_user_id, str(exc) or "unknown"
            )
            return failure(
                meta=meta,
                errors=[
                    dependency_error(
                        str(exc) or UNLOCK_FAILED_MESSAGE,
                        code=codes.UNLOCK_FAILED,
                        metadata={fields.STAGE: STAGE_PRE_MUTATION},
                    )
                ],
            )

        unlocked_at = self._clock().isoformat()
        try:
            self._adapter.insert_audit_record(
                record=AuditRecord(
                    user_id=principal.id,
                    action_type=ACTION_ACCOUNT_UNLOCKED,
                    table_affected=TABLE_ACCOUNT_LOCKOUTS,
                    record_id=target_user_id,
                    new_value={"unlocked_at": unlocked_at},
                )
            )
        except PlatformAdapterError as exc:
            # The unlock already happened and stays in place.
            _LOGGER.error(
                "account for user %s unlocked by %s but audit write failed: %s",
                target_user_id,
                principal.id,
                str(exc) or "unknown",
            )
            return failure(
                meta=meta,
                errors=[
                    dependency_error(
                        AUDIT_WRITE_FAILED_MESSAGE,
                        code=codes.AUDIT_WRITE_FAILED,
                        retryable=False,
                        metadata={
                            fields.STAGE: STAGE_POST_MUTATION,
                            "upstream_message": str(exc),
                        },
                    )
                ],
            )

        _LOGGER.info(
            "Account for user %s unlocked by admin %s", target_user_id, principal.label
        )
        return success(
            meta=meta,
            payload=UnlockResult(
                target_user_id=target_user_id,
                unlocked_by=principal.id,
                lock_cleared=lock_cleared,
                unlocked_at=unlocked_at,
            ),
        )

    def _resolve_caller(
        self, credential: str
    ) -> tuple[Principal | None, ErrorDetail | None]:
        """Resolve the caller; any lookup failure is an authentication failure."""
        try:
            return self._adapter.resolve_identity(authorization=credential), None
        except PlatformAdapterError as exc:
            _LOGGER.warning("caller identity could not be resolved: %s", exc)
            return None, authentication_error(
                UNAUTHORIZED_MESSAGE,
                code=codes.INVALID_CREDENTIAL,
                metadata={"reason": type(exc).__name__},
            )

    def _authorize_admin(self, principal: Principal) -> ErrorDetail | None:
        """Require the admin role; a failed role query is not a denial."""
        try:
            is_admin = self._adapter.has_role(user_id=principal.id, role=ADMIN_ROLE)
        except PlatformAdapterError as exc:
            _LOGGER.error("role check failed for %s: %s", principal.id, exc)
            return dependency_error(
                ROLE_CHECK_FAILED_MESSAGE,
                code=codes.ROLE_CHECK_FAILED,
                metadata={
                    fields.STAGE: STAGE_PRE_MUTATION,
                    "upstream_message": str(exc),
                },
            )
        if not is_admin:
            _LOGGER.warning("caller %s is not an admin", principal.id)
            return policy_error(ADMIN_REQUIRED_MESSAGE, code=codes.PERMISSION_DENIED)
        return None
