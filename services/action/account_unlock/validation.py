"""Request validation models for the Account Unlock service."""

from __future__ import annotations

import json

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from packages.warden_shared.errors import ErrorDetail, codes, validation_error
from services.action.account_unlock.domain import (
    INVALID_JSON_MESSAGE,
    USER_ID_REQUIRED_MESSAGE,
)


class UnlockAccountRequest(BaseModel):
    """Validate one unlock request body.

    Unknown fields are ignored so clients may send extra context.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    user_id: str = Field(min_length=1)

    @field_validator("user_id", mode="before")
    @classmethod
    def _strip_user_id(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip()
        return value


def parse_unlock_request(
    body: bytes,
) -> tuple[UnlockAccountRequest | None, ErrorDetail | None]:
    """Decode and validate a raw request body.

    An empty body is treated as an empty object. Any schema mismatch,
    including a non-object body, maps to the single ``user_id`` error.
    """
    if body.strip() == b"":
        payload: object = {}
    else:
        try:
            payload = json.loads(body)
        except ValueError:
            return None, validation_error(
                INVALID_JSON_MESSAGE, code=codes.INVALID_JSON_BODY
            )

    try:
        return UnlockAccountRequest.model_validate(payload), None
    except ValidationError:
        return None, validation_error(
            USER_ID_REQUIRED_MESSAGE,
            code=codes.MISSING_REQUIRED_FIELD,
            metadata={"field": "user_id"},
        )
