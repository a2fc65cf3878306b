"""Canonical shared error types for Warden services.

This module defines a transport-agnostic error taxonomy and shape used at
service and adapter boundaries. Transports map categories to their own status
vocabulary (HTTP status codes, log levels).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Mapping


class ErrorCategory(str, Enum):
    """High-level error categories shared across service boundaries."""

    UNSPECIFIED = "unspecified"
    AUTHENTICATION = "authentication"
    VALIDATION = "validation"
    POLICY = "policy"
    DEPENDENCY = "dependency"
    INTERNAL = "internal"


@dataclass(frozen=True)
class ErrorDetail:
    """Structured error object used in envelope responses."""

    code: str
    message: str
    category: ErrorCategory
    retryable: bool = False
    metadata: Mapping[str, str] = field(default_factory=dict)
