"""Factory helpers for creating consistent shared errors.

Only dependency failures may be retryable; every other category describes a
request that will fail the same way again.
"""

from __future__ import annotations

from typing import Mapping

from . import codes
from .types import ErrorCategory, ErrorDetail


def authentication_error(
    message: str,
    *,
    code: str = codes.INVALID_CREDENTIAL,
    metadata: Mapping[str, str] | None = None,
) -> ErrorDetail:
    """Caller credential is missing, invalid, or resolves to no user."""
    return _build(ErrorCategory.AUTHENTICATION, message, code, metadata)


def validation_error(
    message: str,
    *,
    code: str = codes.VALIDATION_ERROR,
    metadata: Mapping[str, str] | None = None,
) -> ErrorDetail:
    """Request input failed schema or decoding checks."""
    return _build(ErrorCategory.VALIDATION, message, code, metadata)


def policy_error(
    message: str,
    *,
    code: str = codes.POLICY_VIOLATION,
    metadata: Mapping[str, str] | None = None,
) -> ErrorDetail:
    """Authenticated caller lacks permission for the action."""
    return _build(ErrorCategory.POLICY, message, code, metadata)


def dependency_error(
    message: str,
    *,
    code: str = codes.DEPENDENCY_FAILURE,
    retryable: bool = True,
    metadata: Mapping[str, str] | None = None,
) -> ErrorDetail:
    """An external collaborator call failed."""
    return _build(
        ErrorCategory.DEPENDENCY, message, code, metadata, retryable=retryable
    )


def internal_error(
    message: str,
    *,
    code: str = codes.INTERNAL_ERROR,
    metadata: Mapping[str, str] | None = None,
) -> ErrorDetail:
    """Unexpected failure inside this process."""
    return _build(ErrorCategory.INTERNAL, message, code, metadata)


def _build(
    category: ErrorCategory,
    message: str,
    code: str,
    metadata: Mapping[str, str] | None,
    *,
    retryable: bool = False,
) -> ErrorDetail:
    return ErrorDetail(
        code=code,
        message=message,
        category=category,
        retryable=retryable,
        metadata={} if metadata is None else dict(metadata),
    )
