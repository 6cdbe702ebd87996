"""
=============================================================================
HTTP MESSAGES
=============================================================================

The request and response types that flow through the middleware chain.

    ┌─────────────────────────────────────────────────────────────────────┐
    │ REQUEST (request.py)                                                │
    │ ─────────────────────────────────────────────────────────────────── │
    │ HTTPRequest(method="GET", url="https://example.com/api?page=1")     │
    │   • path          → "/api"                                          │
    │ HTTPRequest.from_target("GET", "/api", {"Host": "example.com"})     │
    └─────────────────────────────────────────────────────────────────────┘

    ┌─────────────────────────────────────────────────────────────────────┐
    │ RESPONSE (response.py)                                              │
    │ ─────────────────────────────────────────────────────────────────── │
    │ HTTPResponse(status, headers, body) + text / ok / unauthorized      │
    └─────────────────────────────────────────────────────────────────────┘

=============================================================================
"""

from .request import HTTPRequest, HTTPParseError, url_path
from .response import (
    HTTPResponse,
    text,
    ok,             # 200 OK
    unauthorized,   # 401 Unauthorized
)

__all__ = [
    "HTTPRequest",
    "HTTPParseError",
    "url_path",
    "HTTPResponse",
    "text",
    "ok",
    "unauthorized",
]
