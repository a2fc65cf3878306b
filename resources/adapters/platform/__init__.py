"""Platform adapter resource exports."""

from resources.adapters.platform.adapter import (
    AuditRecord,
    PlatformAdapter,
    PlatformAdapterError,
    PlatformAuthenticationError,
    PlatformDependencyError,
    PlatformHealthResult,
    PlatformInternalError,
    Principal,
)
from resources.adapters.platform.component import RESOURCE_COMPONENT_ID
from resources.adapters.platform.platform_adapter import HttpPlatformAdapter

__all__ = [
    "AuditRecord",
    "HttpPlatformAdapter",
    "PlatformAdapter",
    "PlatformAdapterError",
    "PlatformAuthenticationError",
    "PlatformDependencyError",
    "PlatformHealthResult",
    "PlatformInternalError",
    "Principal",
    "RESOURCE_COMPONENT_ID",
]
