"""Minimal FastAPI and uvicorn helpers for raw HTTP handling."""

from __future__ import annotations

from contextlib import AbstractAsyncContextManager
from typing import Callable

import uvicorn
from fastapi import FastAPI, Request

from .errors import MissingHeaderError

Lifespan = Callable[[FastAPI], AbstractAsyncContextManager[None]]


def create_app(
    *,
    title: str = "warden",
    version: str = "0.1.0",
    lifespan: Lifespan | None = None,
) -> FastAPI:
    """Create a FastAPI app with project defaults.

    Interactive docs are disabled; the service exposes no browsable surface.
    """
    return FastAPI(
        title=title,
        version=version,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
        lifespan=lifespan,
    )


def run_app(
    app: FastAPI,
    *,
    host: str = "127.0.0.1",
    port: int = 8000,
    log_level: str = "info",
) -> None:
    """Run one FastAPI app through uvicorn until interrupted."""
    uvicorn.run(app, host=host, port=port, log_level=log_level, log_config=None)


def get_header(
    request: Request,
    name: str,
    *,
    required: bool = True,
    strip: bool = True,
) -> str | None:
    """Fetch one header value and optionally enforce presence.

    With ``required=False`` a missing or blank header returns ``None``.
    """
    value = request.headers.get(name)
    if value is not None and strip:
        value = value.strip()
    if value is None or value == "":
        if required:
            raise MissingHeaderError(
                message=f"Missing required header: {name}",
                header_name=name,
            )
        return None
    return value


async def read_raw_body(request: Request) -> bytes:
    """Read raw request body bytes without interpretation."""
    return await request.body()
