"""
=============================================================================
HTTP RESPONSE
=============================================================================

The response a middleware returns when it short-circuits a request.

Middleware handlers return either:
- an HTTPResponse  → dispatch stops, this response is sent
- None             → dispatch continues to the next middleware / route

=============================================================================
"""

from dataclasses import dataclass, field
from http import HTTPStatus
from typing import Dict, Union


@dataclass
class HTTPResponse:
    """
    Represents an HTTP response.

        HTTPResponse(
            status=HTTPStatus.OK,
            headers={"Content-Type": "text/plain; charset=utf-8"},
            body=b"Hello",
        )
    """

    status: HTTPStatus = HTTPStatus.OK       # HTTP status code (enum)
    headers: Dict[str, str] = field(default_factory=dict)  # Response headers
    body: bytes = b""                        # Response body

    def set_header(self, name: str, value: str) -> "HTTPResponse":
        """
        Set a response header.

        Returns self for method chaining:
            response.set_header("X-Custom", "value").set_header("X-Other", "val")
        """
        self.headers[name] = value
        return self

    def set_body(self, body: Union[str, bytes]) -> "HTTPResponse":
        """Set the body, encoding strings as UTF-8."""
        self.body = body.encode("utf-8") if isinstance(body, str) else body
        return self


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================

def text(body: str, status: HTTPStatus = HTTPStatus.OK) -> HTTPResponse:
    """Plain text response."""
    return HTTPResponse(
        status=status,
        headers={"Content-Type": "text/plain; charset=utf-8"},
    ).set_body(body)


def ok(body: str = "") -> HTTPResponse:
    """200 OK."""
    return text(body)


def unauthorized(message: str = "Unauthorized") -> HTTPResponse:
    """401 Unauthorized. Typical short-circuit for auth middleware."""
    return text(message, HTTPStatus.UNAUTHORIZED)
