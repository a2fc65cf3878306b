"""Tests for structured logging context, formatters, and API instrumentation."""

from __future__ import annotations

import json
import logging
from typing import Iterator

import pytest

from packages.warden_shared.envelope import EnvelopeKind, failure, new_meta, success
from packages.warden_shared.errors import dependency_error, policy_error
from packages.warden_shared.logging import (
    bind_context,
    clear_context,
    configure_logging,
    get_context,
    log_context,
    public_api_instrumented,
)
from packages.warden_shared.logging.config import (
    ContextFilter,
    CredentialRedactionFilter,
    JsonFormatter,
    PlainFormatter,
)


@pytest.fixture(autouse=True)
def _reset_context() -> Iterator[None]:
    clear_context()
    yield
    clear_context()


def _record(message: str = "hello") -> logging.LogRecord:
    record = logging.LogRecord(
        name="tests.logging",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg=message,
        args=(),
        exc_info=None,
    )
    ContextFilter().filter(record)
    return record


class _RecordingLogger:
    """Logger fake that captures messages with the bound context."""

    def __init__(self) -> None:
        self.records: list[tuple[str, str, dict[str, str]]] = []

    def info(self, message: str) -> None:
        self.records.append(("info", message, get_context()))

    def warning(self, message: str) -> None:
        self.records.append(("warning", message, get_context()))


def test_bind_context_ignores_none_and_stringifies_values() -> None:
    """bind_context should skip None values and store strings."""
    bind_context(trace_id="t-1", attempt=2, actor_id=None)

    assert get_context() == {"trace_id": "t-1", "attempt": "2"}


def test_log_context_restores_previous_values() -> None:
    """log_context should only bind values for the duration of the block."""
    bind_context(service="warden")

    with log_context({"trace_id": "t-1"}):
        bind_context(actor_id="admin-1")
        assert get_context() == {
            "service": "warden",
            "trace_id": "t-1",
            "actor_id": "admin-1",
        }

    assert get_context() == {"service": "warden"}


def test_clear_context_removes_selected_keys() -> None:
    """clear_context should drop only the named keys when given."""
    bind_context(trace_id="t-1", actor_id="admin-1")

    clear_context("actor_id")

    assert get_context() == {"trace_id": "t-1"}


def test_json_formatter_includes_core_fields_and_context() -> None:
    """JsonFormatter should emit one JSON object with bound context."""
    bind_context(trace_id="t-1")

    payload = json.loads(JsonFormatter().format(_record("unlocking")))

    assert payload["level"] == "INFO"
    assert payload["logger"] == "tests.logging"
    assert payload["message"] == "unlocking"
    assert payload["trace_id"] == "t-1"
    assert "timestamp" in payload


def test_plain_formatter_appends_sorted_context() -> None:
    """PlainFormatter should append key=value pairs after the message."""
    bind_context(trace_id="t-1", actor_id="admin-1")

    line = PlainFormatter().format(_record("unlocking"))

    assert line.endswith("unlocking actor_id=admin-1 trace_id=t-1")


def test_credential_redaction_masks_bearer_tokens() -> None:
    """Bearer tokens should never reach formatted output."""
    record = logging.LogRecord(
        name="tests.logging",
        level=logging.WARNING,
        pathname=__file__,
        lineno=1,
        msg="rejected header %s for %s",
        args=("Bearer eyJhbGciOi.payload.sig", "admin-1"),
        exc_info=None,
    )

    CredentialRedactionFilter().filter(record)

    assert record.getMessage() == "rejected header Bearer [REDACTED] for admin-1"


def test_configure_logging_replaces_root_handlers_and_binds_service() -> None:
    """configure_logging should install exactly one stdout handler."""
    root = logging.getLogger()
    previous_handlers = list(root.handlers)
    previous_level = root.level
    try:
        configure_logging(level="debug", service="warden", environment="test")
        configure_logging(level="info", service="warden", environment="test")

        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, JsonFormatter)
        assert root.level == logging.INFO
        assert get_context()["service"] == "warden"
        assert get_context()["environment"] == "test"
    finally:
        root.handlers[:] = previous_handlers
        root.setLevel(previous_level)


def test_public_api_instrumented_logs_invocation_and_success() -> None:
    """Successful envelopes should log one invocation and one info completion."""
    logger = _RecordingLogger()
    meta = new_meta(kind=EnvelopeKind.COMMAND, source="test", trace_id="t-1")

    class _Service:
        @public_api_instrumented(
            logger=logger, component_id="service_test", id_fields=("user_id",)
        )
        def run(self, *, meta, user_id: str):
            return success(meta=meta, payload=user_id)

    result = _Service().run(meta=meta, user_id="u-1")

    assert result.ok is True
    assert [level for level, _, _ in logger.records] == ["info", "info"]
    invocation = logger.records[0][2]
    completion = logger.records[1][2]
    assert invocation["event"] == "public_api_invocation"
    assert invocation["component_id"] == "service_test"
    assert invocation["api_name"] == "run"
    assert invocation["trace_id"] == "t-1"
    assert invocation["user_id"] == "u-1"
    assert completion["event"] == "public_api_completion"
    assert completion["success"] == "True"
    # Context is scoped to each log line.
    assert get_context() == {}


def test_public_api_instrumented_logs_caller_faults_at_info() -> None:
    """Envelopes failing with caller errors should complete at INFO."""
    logger = _RecordingLogger()
    meta = new_meta(kind=EnvelopeKind.COMMAND, source="test")

    @public_api_instrumented(logger=logger, component_id="service_test")
    def run(*, meta):
        return failure(
            meta=meta,
            errors=[policy_error("Admin access required", code="PERMISSION_DENIED")],
        )

    run(meta=meta)

    level, _, completion = logger.records[-1]
    assert level == "info"
    assert completion["success"] == "False"
    assert "PERMISSION_DENIED: Admin access required" in completion["errors"]


def test_public_api_instrumented_logs_dependency_failures_as_warning() -> None:
    """Envelopes failing on a collaborator should complete at WARNING."""
    logger = _RecordingLogger()
    meta = new_meta(kind=EnvelopeKind.COMMAND, source="test")

    @public_api_instrumented(logger=logger, component_id="service_test")
    def run(*, meta):
        return failure(
            meta=meta,
            errors=[dependency_error("db down", code="UNLOCK_FAILED")],
        )

    run(meta=meta)

    level, _, completion = logger.records[-1]
    assert level == "warning"
    assert "UNLOCK_FAILED: db down" in completion["errors"]


def test_public_api_instrumented_treats_plain_results_as_success() -> None:
    """Adapter return values without errors should complete successfully."""
    logger = _RecordingLogger()

    @public_api_instrumented(logger=logger, component_id="adapter_test")
    def run() -> bool:
        return False

    assert run() is False
    level, _, completion = logger.records[-1]
    assert level == "info"
    assert completion["success"] == "True"
    assert "errors" not in completion


def test_public_api_instrumented_reraises_exceptions() -> None:
    """Raised exceptions should be logged at WARNING and propagated unchanged."""
    logger = _RecordingLogger()

    @public_api_instrumented(logger=logger, component_id="adapter_test")
    def run() -> None:
        raise RuntimeError("boom")

    with pytest.raises(RuntimeError, match="boom"):
        run()

    level, _, completion = logger.records[-1]
    assert level == "warning"
    assert "RuntimeError: boom" in completion["errors"]
