"""Request-scoped logging context.

Correlation fields (trace id, acting admin, target user) live in one
``ContextVar`` and ride along on every log line through ``ContextFilter``.
Starlette copies the current context into each threadpool call, so two
requests in flight never see each other's fields.
"""

from __future__ import annotations

from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator, Mapping

_FIELDS: ContextVar[dict[str, str]] = ContextVar("warden_log_fields", default={})


def _merged(base: Mapping[str, str], values: Mapping[str, object]) -> dict[str, str]:
    merged = dict(base)
    merged.update(
        {str(key): str(value) for key, value in values.items() if value is not None}
    )
    return merged


def get_context() -> dict[str, str]:
    """Return a copy of the fields bound for the current request."""
    return dict(_FIELDS.get())


def bind_context(**values: object) -> None:
    """Bind fields until cleared; ``None`` values are skipped, others stringified."""
    if values:
        _FIELDS.set(_merged(_FIELDS.get(), values))


def clear_context(*keys: str) -> None:
    """Drop the named fields, or every field when no names are given."""
    if not keys:
        _FIELDS.set({})
        return
    _FIELDS.set({k: v for k, v in _FIELDS.get().items() if k not in keys})


@contextmanager
def log_context(values: Mapping[str, object]) -> Iterator[None]:
    """Bind fields for one block and restore the previous set afterwards."""
    token = _FIELDS.set(_merged(_FIELDS.get(), values))
    try:
        yield
    finally:
        _FIELDS.reset(token)
