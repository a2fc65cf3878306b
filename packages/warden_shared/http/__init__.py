"""Public shared HTTP API for internal Warden packages."""

from .client import HttpClient
from .errors import (
    HttpClientError,
    HttpError,
    HttpJsonDecodeError,
    HttpRequestError,
    HttpServerError,
    HttpStatusError,
    MissingHeaderError,
)
from .server import create_app, get_header, read_raw_body, run_app

__all__ = [
    "HttpClient",
    "HttpClientError",
    "HttpError",
    "HttpJsonDecodeError",
    "HttpRequestError",
    "HttpServerError",
    "HttpStatusError",
    "MissingHeaderError",
    "create_app",
    "get_header",
    "read_raw_body",
    "run_app",
]
