"""Authoritative in-process Python API for the Account Unlock service."""

from __future__ import annotations

from abc import ABC, abstractmethod

from packages.warden_shared.config import WardenSettings
from packages.warden_shared.envelope import Envelope, EnvelopeMeta
from resources.adapters.platform.adapter import PlatformAdapter
from services.action.account_unlock.domain import HealthStatus, UnlockResult


class AccountUnlockService(ABC):
    """Public API for admin-initiated account unlocks."""

    @abstractmethod
    def unlock_account(
        self,
        *,
        meta: EnvelopeMeta,
        authorization: str | None,
        body: bytes,
    ) -> Envelope[UnlockResult]:
        """Authenticate, authorize, validate, unlock, and audit one request.

        Never raises: every failure is returned as an envelope error whose
        category identifies the gate that stopped the request.
        """

    @abstractmethod
    def health(self, *, meta: EnvelopeMeta) -> Envelope[HealthStatus]:
        """Return service and platform readiness."""

    def close(self) -> None:
        """Release resources owned by the service."""


def build_account_unlock_service(
    *,
    settings: WardenSettings,
    adapter: PlatformAdapter | None = None,
) -> AccountUnlockService:
    """Build the default implementation from typed settings."""
    from resources.adapters.platform.component import build_component
    from services.action.account_unlock.implementation import (
        DefaultAccountUnlockService,
    )

    return DefaultAccountUnlockService(
        adapter=adapter or build_component(settings=settings),
    )
