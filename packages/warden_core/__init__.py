"""Public API for the Warden process entrypoint."""

from packages.warden_core.main import build_app

__all__ = ["build_app"]
