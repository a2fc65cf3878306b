"""Process entrypoint for the Warden HTTP runtime."""

from __future__ import annotations

import os
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator

from fastapi import APIRouter, FastAPI

from packages.warden_shared.config import WardenSettings, load_settings
from packages.warden_shared.http import create_app, run_app
from packages.warden_shared.logging import configure_logging, get_logger
from services.action.account_unlock import (
    SERVICE_COMPONENT_ID,
    AccountUnlockService,
    build_component,
    register_routes,
)

_LOGGER = get_logger(__name__)

CONFIG_FILE_ENV = "WARDEN_CONFIG_FILE"


def build_app(
    *,
    settings: WardenSettings,
    service: AccountUnlockService | None = None,
) -> FastAPI:
    """Assemble the HTTP app around one Account Unlock service.

    The service is closed when the app shuts down, including one passed in.
    """
    unlock_service = service or build_component(settings=settings)

    @asynccontextmanager
    async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
        try:
            yield
        finally:
            unlock_service.close()
            _LOGGER.info(
                "service closed", extra={"component_id": SERVICE_COMPONENT_ID}
            )

    app = create_app(title="warden", lifespan=lifespan)
    router = APIRouter()
    register_routes(
        router=router,
        service=unlock_service,
        route_path=settings.http.route_path,
    )
    app.include_router(router)
    return app


def main() -> None:
    """Load settings, configure logging, and serve until interrupted."""
    config_path = os.getenv(CONFIG_FILE_ENV, "").strip()
    settings = load_settings(config_path=Path(config_path) if config_path else None)
    configure_logging(
        level=settings.logging.level,
        json_output=settings.logging.json_output,
        service=settings.logging.service,
        environment=settings.logging.environment,
    )

    app = build_app(settings=settings)
    _LOGGER.info(
        "warden HTTP runtime starting",
        extra={
            "host": settings.http.host,
            "port": settings.http.port,
            "route_path": settings.http.route_path,
        },
    )
    run_app(
        app,
        host=settings.http.host,
        port=settings.http.port,
        log_level=settings.http.log_level,
    )
    _LOGGER.info("warden HTTP runtime stopped")


if __name__ == "__main__":
    main()
