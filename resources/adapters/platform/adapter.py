"""Transport-agnostic platform adapter protocol and DTOs.

The platform is the hosted backend that owns user identities, role grants,
account lockout state and the admin audit log. Warden never stores any of
these; it only calls the four operations below.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field


class PlatformAdapterError(Exception):
    """Base exception for platform adapter failures."""


class PlatformAuthenticationError(PlatformAdapterError):
    """Presented credential was rejected or resolved to no user."""


class PlatformDependencyError(PlatformAdapterError):
    """Platform call failed: network error or non-success response.

    ``str(exc)`` carries the platform's own error message when it sent one.
    """

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class PlatformInternalError(PlatformAdapterError):
    """Platform response did not match the expected contract."""


class Principal(BaseModel):
    """Authenticated caller identity."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    id: str = Field(min_length=1)
    email: str = ""

    @property
    def label(self) -> str:
        """Human-readable caller label for operational logs."""
        return self.email or self.id


class AuditRecord(BaseModel):
    """One immutable admin audit log row."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    user_id: str
    action_type: str
    table_affected: str
    record_id: str
    new_value: dict[str, Any]


class PlatformHealthResult(BaseModel):
    """Readiness payload for the platform dependency."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    platform_ready: bool
    detail: str


@runtime_checkable
class PlatformAdapter(Protocol):
    """Protocol for identity, role, unlock and audit platform operations."""

    def resolve_identity(self, *, authorization: str) -> Principal:
        """Exchange the caller's ``Authorization`` header for a principal."""

    def has_role(self, *, user_id: str, role: str) -> bool:
        """Return whether one user holds one role, using privileged trust."""

    def unlock_account(self, *, user_id: str, admin_id: str) -> bool:
        """Clear the lockout for one user; return whether a lock was cleared.

        Unlocking an account that is not locked must succeed and return
        ``False``.
        """

    def insert_audit_record(self, *, record: AuditRecord) -> None:
        """Persist one audit record."""

    def health(self) -> PlatformHealthResult:
        """Return platform reachability without raising."""

    def close(self) -> None:
        """Release transport resources."""
