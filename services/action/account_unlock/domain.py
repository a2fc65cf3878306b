"""Domain constants and payload contracts for the Account Unlock service."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

ADMIN_ROLE = "admin"
ACTION_ACCOUNT_UNLOCKED = "account_unlocked"
TABLE_ACCOUNT_LOCKOUTS = "account_lockouts"

# Public messages returned in the ``error`` field of failed responses.
MISSING_AUTHORIZATION_MESSAGE = "Missing authorization header"
UNAUTHORIZED_MESSAGE = "Unauthorized"
ADMIN_REQUIRED_MESSAGE = "Admin access required"
USER_ID_REQUIRED_MESSAGE = "user_id is required"
INVALID_JSON_MESSAGE = "Invalid JSON body"
ROLE_CHECK_FAILED_MESSAGE = "Failed to verify permissions"
UNLOCK_FAILED_MESSAGE = "Failed to unlock account"
AUDIT_WRITE_FAILED_MESSAGE = "Account unlocked but audit log write failed"
UNEXPECTED_FAILURE_MESSAGE = "Internal server error"

# Error metadata ``stage`` values.
STAGE_PRE_MUTATION = "pre_mutation"
STAGE_POST_MUTATION = "post_mutation"


class UnlockResult(BaseModel):
    """Outcome of one successful unlock, including its audit write."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    target_user_id: str
    unlocked_by: str
    lock_cleared: bool
    unlocked_at: str


class HealthStatus(BaseModel):
    """Service and platform readiness payload."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    service_ready: bool
    platform_ready: bool
    detail: str
