"""Typed envelope response model for service boundaries."""

from __future__ import annotations

from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from packages.warden_shared.errors import ErrorDetail

from .meta import EnvelopeMeta


T = TypeVar("T")


class Envelope(BaseModel, Generic[T]):
    """Canonical typed envelope with metadata, payload, and errors."""

    model_config = ConfigDict(frozen=True)

    metadata: EnvelopeMeta
    payload: T | None = None
    errors: list[ErrorDetail] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        """Return ``True`` when no errors are present."""
        return len(self.errors) == 0

    @property
    def first_error(self) -> ErrorDetail | None:
        """Return the error that stopped processing, if any."""
        if len(self.errors) == 0:
            return None
        return self.errors[0]
