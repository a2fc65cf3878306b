"""Component declaration for the platform adapter resource."""

from __future__ import annotations

from typing import TYPE_CHECKING

from packages.warden_shared.config import WardenSettings

if TYPE_CHECKING:
    from resources.adapters.platform.adapter import PlatformAdapter

RESOURCE_COMPONENT_ID = "adapter_platform"


def build_component(*, settings: WardenSettings) -> PlatformAdapter:
    """Build the concrete HTTP platform adapter from root settings."""
    from resources.adapters.platform.platform_adapter import HttpPlatformAdapter

    return HttpPlatformAdapter(settings=settings.platform)
