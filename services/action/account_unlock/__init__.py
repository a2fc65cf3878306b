"""Account Unlock Service package exports."""

from packages.warden_shared.envelope import Envelope, EnvelopeKind, EnvelopeMeta
from packages.warden_shared.errors import ErrorCategory, ErrorDetail
from services.action.account_unlock.component import (
    SERVICE_COMPONENT_ID,
    build_component,
)
from services.action.account_unlock.domain import HealthStatus, UnlockResult
from services.action.account_unlock.http_ingress import (
    CORS_HEADERS,
    register_routes,
)
from services.action.account_unlock.implementation import (
    DefaultAccountUnlockService,
)
from services.action.account_unlock.service import (
    AccountUnlockService,
    build_account_unlock_service,
)
from services.action.account_unlock.validation import (
    UnlockAccountRequest,
    parse_unlock_request,
)

__all__ = [
    "AccountUnlockService",
    "CORS_HEADERS",
    "DefaultAccountUnlockService",
    "Envelope",
    "EnvelopeKind",
    "EnvelopeMeta",
    "ErrorCategory",
    "ErrorDetail",
    "HealthStatus",
    "SERVICE_COMPONENT_ID",
    "UnlockAccountRequest",
    "UnlockResult",
    "build_account_unlock_service",
    "build_component",
    "parse_unlock_request",
    "register_routes",
]
