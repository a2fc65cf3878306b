"""Settings entrypoint used once at process start.

Precedence is always:
1) explicit params (CLI or tests)
2) environment variables, ``WARDEN_`` prefix with ``__`` nesting,
   e.g. ``WARDEN_PLATFORM__URL``
3) the YAML config file (``~/.config/warden/warden.yaml`` by default)
4) model defaults
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping

from .models import _CONFIG_PATH, DEFAULT_CONFIG_PATH, WardenSettings


def load_settings(
    *,
    cli_params: Mapping[str, Any] | None = None,
    config_path: str | Path | None = None,
) -> WardenSettings:
    """Build validated settings from all configured sources.

    Raises ``pydantic.ValidationError`` when required platform settings are
    absent or malformed.
    """
    resolved = Path(config_path) if config_path is not None else DEFAULT_CONFIG_PATH
    token = _CONFIG_PATH.set(resolved)
    try:
        return WardenSettings(**dict(cli_params or {}))
    finally:
        _CONFIG_PATH.reset(token)
