"""Tests for envelope model, metadata, and builder behavior."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from packages.warden_shared.envelope import (
    ANONYMOUS_PRINCIPAL,
    Envelope,
    EnvelopeKind,
    EnvelopeMeta,
    failure,
    new_meta,
    success,
    validate_meta,
)
from packages.warden_shared.errors import (
    ErrorCategory,
    ErrorDetail,
    authentication_error,
    codes,
    dependency_error,
    internal_error,
    policy_error,
    validation_error,
)


def _meta() -> EnvelopeMeta:
    """Return deterministic metadata for envelope tests."""
    return new_meta(
        kind=EnvelopeKind.COMMAND,
        source="account_unlock_http",
        timestamp=datetime(2026, 1, 1, 12, 0, 0, tzinfo=UTC),
        envelope_id="env-1",
        trace_id="trace-1",
    )


def test_new_meta_generates_ids_and_defaults_to_anonymous() -> None:
    """new_meta should fill IDs, timestamp, and anonymous principal."""
    meta = new_meta(kind=EnvelopeKind.QUERY, source="test")

    assert meta.envelope_id != ""
    assert meta.trace_id != ""
    assert meta.envelope_id != meta.trace_id
    assert meta.principal == ANONYMOUS_PRINCIPAL
    assert meta.timestamp.tzinfo is not None


def test_new_meta_normalizes_timestamps_to_utc() -> None:
    """Naive timestamps are treated as UTC and aware ones are converted."""
    naive = new_meta(
        kind=EnvelopeKind.QUERY,
        source="test",
        timestamp=datetime(2026, 1, 1, 12, 0, 0),
    )
    aware = new_meta(
        kind=EnvelopeKind.QUERY,
        source="test",
        timestamp=datetime(2026, 1, 1, 14, 0, 0, tzinfo=timezone(timedelta(hours=2))),
    )

    assert naive.timestamp == datetime(2026, 1, 1, 12, 0, 0, tzinfo=UTC)
    assert aware.timestamp == datetime(2026, 1, 1, 12, 0, 0, tzinfo=UTC)


def test_with_principal_returns_attributed_copy() -> None:
    """with_principal should not mutate the original metadata."""
    meta = _meta()

    attributed = meta.with_principal("admin-1")

    assert attributed.principal == "admin-1"
    assert attributed.trace_id == meta.trace_id
    assert meta.principal == ANONYMOUS_PRINCIPAL


def test_success_envelope_is_ok_with_payload() -> None:
    """success should build an ok envelope carrying its payload."""
    result = success(meta=_meta(), payload={"value": 1})

    assert result.ok is True
    assert result.payload == {"value": 1}
    assert result.errors == []
    assert result.first_error is None


def test_failure_envelope_exposes_first_error() -> None:
    """failure should build a non-ok envelope with no payload."""
    first = validation_error("user_id is required", code=codes.MISSING_REQUIRED_FIELD)
    second = internal_error("later")

    result: Envelope[dict] = failure(meta=_meta(), errors=[first, second])

    assert result.ok is False
    assert result.payload is None
    assert result.first_error == first


def test_envelope_is_frozen() -> None:
    """Envelope instances should reject mutation."""
    result = success(meta=_meta(), payload="x")

    with pytest.raises(ValidationError):
        result.payload = "y"  # type: ignore[misc]


def test_validate_meta_accepts_complete_metadata() -> None:
    """validate_meta should accept metadata built by new_meta."""
    validate_meta(_meta())


def test_validate_meta_rejects_unspecified_kind() -> None:
    """validate_meta should reject unspecified kinds."""
    meta = new_meta(kind=EnvelopeKind.UNSPECIFIED, source="test")

    with pytest.raises(ValueError, match="metadata.kind must be specified"):
        validate_meta(meta)


def test_validate_meta_rejects_blank_source() -> None:
    """validate_meta should name the first missing field."""
    meta = new_meta(kind=EnvelopeKind.COMMAND, source="")

    with pytest.raises(ValueError, match="metadata.source is required"):
        validate_meta(meta)


@pytest.mark.parametrize(
    ("error", "category", "retryable"),
    [
        (authentication_error("Unauthorized"), ErrorCategory.AUTHENTICATION, False),
        (validation_error("bad"), ErrorCategory.VALIDATION, False),
        (policy_error("Admin access required"), ErrorCategory.POLICY, False),
        (dependency_error("down"), ErrorCategory.DEPENDENCY, True),
        (dependency_error("down", retryable=False), ErrorCategory.DEPENDENCY, False),
        (internal_error("boom"), ErrorCategory.INTERNAL, False),
    ],
)
def test_error_factories_set_category_and_retryability(
    error: ErrorDetail,
    category: ErrorCategory,
    retryable: bool,
) -> None:
    """Factories should produce consistent categories and retry hints."""
    assert error.category == category
    assert error.retryable is retryable
    assert dict(error.metadata) == {}


def test_error_factories_copy_metadata() -> None:
    """Factories should copy metadata into a plain dict."""
    source = {"field": "user_id"}

    error = validation_error("user_id is required", metadata=source)
    source["field"] = "changed"

    assert error.metadata == {"field": "user_id"}


def test_validate_meta_rejects_naive_timestamp() -> None:
    """Hand-built metadata with a naive timestamp should be rejected."""
    meta = EnvelopeMeta(
        envelope_id="env-1",
        trace_id="trace-1",
        timestamp=datetime(2026, 1, 1, 12, 0, 0),
        kind=EnvelopeKind.COMMAND,
        source="test",
        principal="anonymous",
    )

    with pytest.raises(ValueError, match="metadata.timestamp must be timezone-aware"):
        validate_meta(meta)


def test_validate_meta_rejects_whitespace_principal() -> None:
    """Whitespace-only identifiers count as missing."""
    meta = new_meta(kind=EnvelopeKind.COMMAND, source="test", principal="   ")

    with pytest.raises(ValueError, match="metadata.principal is required"):
        validate_meta(meta)
