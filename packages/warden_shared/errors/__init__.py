"""Public shared error API for Warden services."""

from . import codes
from .factories import (
    authentication_error,
    dependency_error,
    internal_error,
    policy_error,
    validation_error,
)
from .types import ErrorCategory, ErrorDetail

__all__ = [
    "ErrorCategory",
    "ErrorDetail",
    "authentication_error",
    "codes",
    "dependency_error",
    "internal_error",
    "policy_error",
    "validation_error",
]
