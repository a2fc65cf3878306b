"""Unit tests for shared HTTP client wrappers."""

from __future__ import annotations

import json

import httpx
import pytest

from packages.warden_shared.http import (
    HttpClient,
    HttpJsonDecodeError,
    HttpRequestError,
    HttpStatusError,
)


def _client(handler, **kwargs) -> HttpClient:
    return HttpClient(
        base_url="https://example.test",
        transport=httpx.MockTransport(handler),
        **kwargs,
    )


def test_http_client_get_json_returns_decoded_payload() -> None:
    """HttpClient.get_json should decode and return JSON content."""

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"ok": True}, request=request)

    client = _client(handler)
    try:
        assert client.get_json("/health") == {"ok": True}
    finally:
        client.close()


def test_http_client_sends_default_and_per_request_headers() -> None:
    """Default headers should merge with per-request headers."""
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=[], request=request)

    client = _client(handler, headers={"apikey": "key-1"})
    try:
        client.post_json("/rpc", json={"a": 1}, headers={"Prefer": "return=minimal"})
    finally:
        client.close()

    assert seen[0].headers["apikey"] == "key-1"
    assert seen[0].headers["prefer"] == "return=minimal"
    assert json.loads(seen[0].content) == {"a": 1}


def test_http_client_maps_status_failure_to_typed_error() -> None:
    """HttpClient should raise HttpStatusError on non-2xx status codes."""

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(503, text="unavailable", request=request)

    client = _client(handler)
    try:
        with pytest.raises(HttpStatusError) as exc_info:
            client.get("/health")
    finally:
        client.close()

    error = exc_info.value
    assert error.method == "GET"
    assert error.status_code == 503
    assert error.retryable is True
    assert error.response_body == "unavailable"


def test_http_client_marks_client_errors_not_retryable() -> None:
    """4xx statuses other than 429 should not be retryable."""

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(401, json={"msg": "bad token"}, request=request)

    client = _client(handler)
    try:
        with pytest.raises(HttpStatusError) as exc_info:
            client.get("/auth/v1/user")
    finally:
        client.close()

    assert exc_info.value.status_code == 401
    assert exc_info.value.retryable is False


def test_http_client_can_skip_status_raising() -> None:
    """expect_success=False should return error responses unchanged."""

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(404, request=request)

    client = _client(handler)
    try:
        response = client.get("/missing", expect_success=False)
    finally:
        client.close()

    assert response.status_code == 404


def test_http_client_maps_transport_failure_to_typed_error() -> None:
    """HttpClient should raise HttpRequestError on transport failures."""

    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection failed", request=request)

    client = _client(handler)
    try:
        with pytest.raises(HttpRequestError) as exc_info:
            client.get("/health")
    finally:
        client.close()

    error = exc_info.value
    assert error.method == "GET"
    assert error.url == "https://example.test/health"
    assert error.retryable is True
    assert isinstance(error.cause, httpx.ConnectError)


def test_http_client_maps_invalid_json_to_decode_error() -> None:
    """HttpClient.get_json should raise HttpJsonDecodeError for bad JSON."""

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="not-json", request=request)

    client = _client(handler)
    try:
        with pytest.raises(HttpJsonDecodeError) as exc_info:
            client.get_json("/health")
    finally:
        client.close()

    assert exc_info.value.status_code == 200
    assert exc_info.value.response_body == "not-json"


def test_http_client_applies_per_call_timeout_override() -> None:
    """A per-call timeout should replace the client default for that call."""
    seen: list[dict[str, float]] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request.extensions["timeout"])
        return httpx.Response(200, request=request)

    client = _client(handler, timeout_seconds=10.0)
    try:
        client.get("/slow")
        client.get("/health", timeout=2.0)
    finally:
        client.close()

    assert seen[0]["read"] == 10.0
    assert seen[1]["read"] == 2.0
