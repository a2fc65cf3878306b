"""Component declaration for the Account Unlock service."""

from __future__ import annotations

from typing import TYPE_CHECKING

from packages.warden_shared.config import WardenSettings

if TYPE_CHECKING:
    from services.action.account_unlock.service import AccountUnlockService

SERVICE_COMPONENT_ID = "service_account_unlock"


def build_component(*, settings: WardenSettings) -> AccountUnlockService:
    """Build the concrete service together with its owned platform adapter."""
    from services.action.account_unlock.service import build_account_unlock_service

    return build_account_unlock_service(settings=settings)
