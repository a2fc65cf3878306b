"""Public shared envelope API for Warden services."""

from .builders import failure, success
from .envelope import Envelope
from .meta import ANONYMOUS_PRINCIPAL, EnvelopeKind, EnvelopeMeta, new_meta, utc_now
from .validate import validate_meta

__all__ = [
    "ANONYMOUS_PRINCIPAL",
    "Envelope",
    "EnvelopeKind",
    "EnvelopeMeta",
    "failure",
    "new_meta",
    "success",
    "utc_now",
    "validate_meta",
]
