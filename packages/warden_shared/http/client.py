"""Synchronous httpx wrapper used by platform adapters."""

from __future__ import annotations

from collections.abc import Mapping
from time import perf_counter
from typing import Any

import httpx

from packages.warden_shared.logging import get_logger

from .errors import HttpJsonDecodeError, HttpRequestError, HttpStatusError

_LOGGER = get_logger(__name__)


class HttpClient:
    """Thin synchronous wrapper over ``httpx.Client``.

    Transport failures raise ``HttpRequestError``, non-2xx responses raise
    ``HttpStatusError`` and undecodable JSON raises ``HttpJsonDecodeError``, so
    adapters only ever handle the typed errors from ``errors.py``.

    Header values are never logged; default headers usually carry credentials.
    """

    def __init__(
        self,
        *,
        base_url: str = "",
        timeout_seconds: float = 10.0,
        headers: Mapping[str, str] | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._client = httpx.Client(
            base_url=base_url,
            timeout=timeout_seconds,
            headers=dict(headers or {}),
            transport=transport,
        )

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> HttpClient:
        return self

    def __exit__(self, *_: object) -> None:
        self.close()

    def request(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        headers: Mapping[str, str] | None = None,
        timeout: float | None = None,
        expect_success: bool = True,
    ) -> httpx.Response:
        """Send one request; map transport and status failures to typed errors.

        ``timeout`` overrides the client default for this call only.
        """
        options: dict[str, Any] = {}
        if json is not None:
            options["json"] = json
        if headers:
            options["headers"] = dict(headers)
        if timeout is not None:
            options["timeout"] = timeout

        started = perf_counter()
        try:
            response = self._client.request(method, path, **options)
        except httpx.RequestError as exc:
            url = str(exc.request.url) if _has_request(exc) else path
            _LOGGER.debug("outbound %s %s failed: %s", method, path, type(exc).__name__)
            raise HttpRequestError(
                message=f"HTTP request failed for {method.upper()} {url}",
                method=method.upper(),
                url=url,
                retryable=True,
                cause=exc,
            ) from exc

        _LOGGER.debug(
            "outbound %s %s -> %s in %.1fms",
            method,
            path,
            response.status_code,
            (perf_counter() - started) * 1000.0,
        )
        if expect_success and response.is_error:
            raise _status_error(response)
        return response

    def get(self, path: str, **kwargs: Any) -> httpx.Response:
        return self.request("GET", path, **kwargs)

    def post(self, path: str, **kwargs: Any) -> httpx.Response:
        return self.request("POST", path, **kwargs)

    def get_json(self, path: str, **kwargs: Any) -> Any:
        """Send one GET request and decode its JSON body."""
        return decode_json(self.get(path, **kwargs))

    def post_json(self, path: str, **kwargs: Any) -> Any:
        """Send one POST request and decode its JSON body."""
        return decode_json(self.post(path, **kwargs))


def decode_json(response: httpx.Response) -> Any:
    """Decode one successful response body, raising a typed error when invalid."""
    try:
        return response.json()
    except ValueError as exc:
        raise HttpJsonDecodeError(
            message=f"Invalid JSON response for {response.request.method} {response.request.url}",
            method=response.request.method,
            url=str(response.request.url),
            status_code=response.status_code,
            response_body=_safe_text(response),
            cause=exc,
        ) from exc


def _has_request(exc: httpx.RequestError) -> bool:
    try:
        exc.request
    except RuntimeError:
        return False
    return True


def _safe_text(response: httpx.Response) -> str:
    try:
        return response.text
    except UnicodeDecodeError:
        return ""


def _status_error(response: httpx.Response) -> HttpStatusError:
    status_code = response.status_code
    return HttpStatusError(
        message=f"HTTP {status_code} for {response.request.method} {response.request.url}",
        method=response.request.method,
        url=str(response.request.url),
        retryable=status_code >= 500 or status_code == 429,
        status_code=status_code,
        response_body=_safe_text(response),
    )
