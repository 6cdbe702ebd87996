"""
=============================================================================
HTTP REQUEST
=============================================================================

The request as seen by middleware: an HTTP method and an absolute URL.

=============================================================================
URL ANATOMY
=============================================================================

Only the path takes part in matching. Everything else is discarded:

    https://example.com:8443/api/users?page=1#top
    ─┬───   ──────┬─────────  ────┬────  ──┬───  ─┬─
     │            │               │        │      │
   Scheme       Host            Path     Query  Fragment
                                  │
                                  └── used by matchers

    "https://example.com"           → path "/"
    "https://example.com/api/"      → path "/api/"   (trailing slash kept)
    "https://example.com/api?x=1"   → path "/api"

=============================================================================
"""

from dataclasses import dataclass, field
from typing import Dict, Optional
from urllib.parse import urlsplit


def url_path(url: str) -> str:
    """Path component of a URL, "/" when empty."""
    return urlsplit(url).path or "/"


class HTTPParseError(Exception):
    """
    Raised when a request cannot be built from its raw parts.

    Carries the HTTP status code to send back (400 by default).
    """

    def __init__(self, message: str, status_code: int = 400):
        super().__init__(message)
        self.status_code = status_code  # HTTP status to return


@dataclass
class HTTPRequest:
    """
    Represents an incoming HTTP request.

    =========================================================================
    ATTRIBUTES
    =========================================================================

        method:         HTTP method token as received ("GET", "post", ...)
                        Matchers compare it case-insensitively

        url:            Absolute request URL
                        "https://example.com/api/users?page=1"

        headers:        Dictionary of headers with LOWERCASE keys

    =========================================================================
    """

    method: str                          # GET, POST, PUT, DELETE, etc.
    url: str                             # Absolute URL
    headers: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_target(
        cls,
        method: str,
        target: str,
        headers: Optional[Dict[str, str]] = None,
        scheme: str = "http",
    ) -> "HTTPRequest":
        """
        Build a request from a request-target, as found on the request line.

        Origin-form targets ("/api?x=1") are made absolute using the Host
        header. Absolute-form targets ("http://host/api") are kept.

        Args:
            method: HTTP method
            target: Request-target from the request line
            headers: Request headers (any case)
            scheme: Scheme for origin-form targets

        Raises:
            HTTPParseError: If the target is neither origin-form nor absolute
        """
        headers = {name.lower(): value for name, value in (headers or {}).items()}

        if target.startswith("/"):
            host = headers.get("host") or "localhost"
            url = f"{scheme}://{host}{target}"
        elif urlsplit(target).scheme:
            url = target
        else:
            raise HTTPParseError(f"Invalid request target: {target}")

        return cls(method=method, url=url, headers=headers)

    # =========================================================================
    # URL COMPONENTS
    # =========================================================================

    @property
    def path(self) -> str:
        """
        URL path without query string or fragment.

        An empty path is reported as "/". No other normalization happens:
        "/api" and "/api/" stay distinct.
        """
        return url_path(self.url)

    def get_header(self, name: str, default: str = "") -> str:
        """Get a header value (case-insensitive lookup)."""
        return self.headers.get(name.lower(), default)
