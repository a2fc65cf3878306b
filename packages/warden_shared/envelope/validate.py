"""Validation helpers for envelope metadata."""

from __future__ import annotations

from dataclasses import asdict
from typing import Annotated

from pydantic import (
    AwareDatetime,
    BaseModel,
    ConfigDict,
    StringConstraints,
    ValidationError,
    field_validator,
)

from .meta import EnvelopeKind, EnvelopeMeta

_Required = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


class _MetaContract(BaseModel):
    """Fields every service call needs for correlation and attribution."""

    model_config = ConfigDict(extra="ignore")

    envelope_id: _Required
    trace_id: _Required
    timestamp: AwareDatetime
    kind: EnvelopeKind
    source: _Required
    principal: _Required

    @field_validator("kind")
    @classmethod
    def _require_kind(cls, value: EnvelopeKind) -> EnvelopeKind:
        if value == EnvelopeKind.UNSPECIFIED:
            raise ValueError("metadata.kind must be specified")
        return value


def validate_meta(meta: EnvelopeMeta) -> None:
    """Raise ``ValueError`` naming the first unusable metadata field."""
    try:
        _MetaContract.model_validate(asdict(meta))
    except ValidationError as exc:
        first = exc.errors()[0]
        location = first.get("loc", ())
        field_name = str(location[0]) if location else "metadata"
        if field_name == "kind":
            raise ValueError("metadata.kind must be specified") from None
        if field_name == "timestamp":
            raise ValueError("metadata.timestamp must be timezone-aware") from None
        raise ValueError(f"metadata.{field_name} is required") from None
