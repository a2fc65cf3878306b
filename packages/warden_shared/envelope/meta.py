"""Correlation metadata carried by every Warden envelope."""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import UTC, datetime
from enum import Enum
from uuid import uuid4

ANONYMOUS_PRINCIPAL = "anonymous"


class EnvelopeKind(str, Enum):
    """Whether a call changes state, reads it, or reports an outcome."""

    UNSPECIFIED = "unspecified"
    COMMAND = "command"
    QUERY = "query"
    RESULT = "result"


@dataclass(frozen=True)
class EnvelopeMeta:
    """Who asked for what, when, and under which trace."""

    envelope_id: str
    trace_id: str
    timestamp: datetime
    kind: EnvelopeKind
    source: str
    principal: str = ANONYMOUS_PRINCIPAL

    def with_principal(self, principal: str) -> EnvelopeMeta:
        """Attribute a copy of this metadata to one resolved caller."""
        return replace(self, principal=principal)


def utc_now() -> datetime:
    return datetime.now(UTC)


def new_meta(
    *,
    kind: EnvelopeKind,
    source: str,
    principal: str = ANONYMOUS_PRINCIPAL,
    trace_id: str | None = None,
    envelope_id: str | None = None,
    timestamp: datetime | None = None,
) -> EnvelopeMeta:
    """Build metadata for one call; missing ids are generated.

    A naive ``timestamp`` is read as UTC and an aware one is converted to UTC.
    """
    when = timestamp or utc_now()
    when = when.replace(tzinfo=UTC) if when.tzinfo is None else when.astimezone(UTC)
    return EnvelopeMeta(
        envelope_id=envelope_id or uuid4().hex,
        trace_id=trace_id or uuid4().hex,
        timestamp=when,
        kind=kind,
        source=source,
        principal=principal,
    )
