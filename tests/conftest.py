"""
pytest configuration and fixtures.
"""

from typing import Callable, Optional

import pytest

# Add src to path for imports
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from routegate.http import HTTPRequest, HTTPResponse, ok


BASE_URL = "https://example.com"


@pytest.fixture
def make_request() -> Callable[..., HTTPRequest]:
    """Factory for requests against BASE_URL."""
    def factory(path: str = "/", method: str = "GET", headers: Optional[dict] = None) -> HTTPRequest:
        return HTTPRequest(method=method, url=BASE_URL + path, headers=headers or {})
    return factory


@pytest.fixture
def final_handler() -> Callable[[HTTPRequest], HTTPResponse]:
    """Final handler that echoes the request path."""
    def handler(request: HTTPRequest) -> HTTPResponse:
        return ok(f"handled {request.path}")
    return handler
