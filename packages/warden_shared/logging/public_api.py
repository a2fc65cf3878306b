"""Logging instrumentation for public service and adapter methods.

``public_api_instrumented`` wraps one method so every call emits a structured
invocation line and a completion line with duration and error summaries.

Completion level follows who is at fault. Envelopes failing only with caller
errors (authentication, validation, policy) complete at INFO, since rejected
requests are normal traffic for an admin endpoint. Dependency and internal
failures complete at WARNING, as do raised exceptions, which are re-raised
unchanged. Adapters signal expected failures by raising, so an exception here
is not by itself an error.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from functools import wraps
from time import perf_counter
from typing import Any, Callable

from packages.warden_shared.errors import ErrorCategory

from . import fields
from .context import log_context

_CALLER_FAULT_CATEGORIES = frozenset(
    {
        ErrorCategory.AUTHENTICATION,
        ErrorCategory.VALIDATION,
        ErrorCategory.POLICY,
    }
)


@dataclass(frozen=True)
class ApiCall:
    """Correlation fields for one public API call."""

    component_id: str
    api_name: str
    trace_id: str | None = None
    envelope_id: str | None = None
    principal: str | None = None
    references: dict[str, str] = field(default_factory=dict)

    def log_fields(self) -> dict[str, object]:
        return {
            fields.COMPONENT_ID: self.component_id,
            fields.API_NAME: self.api_name,
            fields.TRACE_ID: self.trace_id,
            fields.ENVELOPE_ID: self.envelope_id,
            fields.PRINCIPAL: self.principal,
            **self.references,
        }


@dataclass(frozen=True)
class ApiOutcome:
    """Result summary for one completed public API call."""

    success: bool
    level: int
    duration_ms: float
    errors: list[str]


def public_api_instrumented(
    *,
    logger: Any,
    component_id: str,
    api_name: str | None = None,
    id_fields: tuple[str, ...] = (),
) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """Decorate one public API method with invocation/completion logging.

    ``id_fields`` names keyword arguments copied into the log context as
    references, for example ``("user_id",)``. Never list credential arguments.
    """

    def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
        name = api_name or func.__name__

        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            call = _describe_call(
                component_id=component_id,
                api_name=name,
                kwargs=kwargs,
                id_fields=id_fields,
            )
            with log_context(
                {fields.EVENT: fields.PUBLIC_API_INVOCATION_EVENT, **call.log_fields()}
            ):
                logger.info("Public API invocation")

            started = perf_counter()
            try:
                result = func(*args, **kwargs)
            except Exception as exc:
                _log_completion(
                    logger,
                    call,
                    ApiOutcome(
                        success=False,
                        level=logging.WARNING,
                        duration_ms=_elapsed_ms(started),
                        errors=[f"{type(exc).__name__}: {exc}"],
                    ),
                )
                raise

            _log_completion(logger, call, _summarize(result, started))
            return result

        return wrapper

    return decorator


def _describe_call(
    *,
    component_id: str,
    api_name: str,
    kwargs: dict[str, Any],
    id_fields: tuple[str, ...],
) -> ApiCall:
    meta = kwargs.get("meta")
    return ApiCall(
        component_id=component_id,
        api_name=api_name,
        trace_id=_attr_or_none(meta, "trace_id"),
        envelope_id=_attr_or_none(meta, "envelope_id"),
        principal=_attr_or_none(meta, "principal"),
        references={
            name: str(kwargs[name])
            for name in id_fields
            if kwargs.get(name) not in (None, "")
        },
    )


def _log_completion(logger: Any, call: ApiCall, outcome: ApiOutcome) -> None:
    payload = {
        **call.log_fields(),
        fields.EVENT: fields.PUBLIC_API_COMPLETION_EVENT,
        fields.SUCCESS: outcome.success,
        fields.DURATION_MS: outcome.duration_ms,
        fields.ERRORS: outcome.errors or None,
    }
    with log_context(payload):
        if outcome.level >= logging.WARNING:
            logger.warning("Public API completion")
        else:
            logger.info("Public API completion")


def _summarize(result: object, started: float) -> ApiOutcome:
    """Derive success, level, and error summaries from a returned value.

    Non-envelope results (adapter return values) always count as success.
    """
    errors = getattr(result, "errors", None)
    if not isinstance(errors, list) or len(errors) == 0:
        return ApiOutcome(
            success=True,
            level=logging.INFO,
            duration_ms=_elapsed_ms(started),
            errors=[],
        )

    summaries = [
        f"{item.code}: {item.message}" if item.code else str(item.message)
        for item in errors
    ]
    caller_fault = all(
        getattr(item, "category", None) in _CALLER_FAULT_CATEGORIES for item in errors
    )
    return ApiOutcome(
        success=False,
        level=logging.INFO if caller_fault else logging.WARNING,
        duration_ms=_elapsed_ms(started),
        errors=summaries,
    )


def _elapsed_ms(started: float) -> float:
    return round((perf_counter() - started) * 1000.0, 3)


def _attr_or_none(obj: object | None, name: str) -> str | None:
    if obj is None:
        return None
    value = getattr(obj, name, None)
    if value in (None, ""):
        return None
    return str(value)
