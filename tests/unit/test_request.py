"""
Unit tests for the HTTP request model.
"""

import pytest

from routegate.http.request import HTTPParseError, HTTPRequest, url_path


class TestHTTPRequest:
    """Tests for HTTPRequest URL properties."""

    def test_path(self):
        """Test the path excludes scheme, host, query and fragment."""
        request = HTTPRequest("GET", "https://example.com:8443/api/users?page=1#top")
        assert request.path == "/api/users"

    def test_trailing_slash_kept(self):
        """Test no trailing slash normalization happens."""
        assert HTTPRequest("GET", "https://example.com/api/").path == "/api/"
        assert HTTPRequest("GET", "https://example.com/api").path == "/api"

    def test_empty_path_is_root(self):
        """Test a URL without a path reports '/'."""
        assert HTTPRequest("GET", "https://example.com").path == "/"
        assert url_path("https://example.com?x=1") == "/"

    def test_get_header(self):
        """Test header lookup is case-insensitive."""
        request = HTTPRequest("GET", "https://example.com/", headers={"authorization": "Bearer x"})
        assert request.get_header("Authorization") == "Bearer x"
        assert request.get_header("X-Missing") == ""


class TestFromTarget:
    """Tests for building requests from request-targets."""

    def test_origin_form_uses_host(self):
        """Test origin-form targets are made absolute with the Host header."""
        request = HTTPRequest.from_target("GET", "/api?x=1", {"Host": "example.com"})

        assert request.url == "http://example.com/api?x=1"
        assert request.path == "/api"
        assert request.headers == {"host": "example.com"}

    def test_origin_form_without_host(self):
        """Test a missing Host header falls back to localhost."""
        request = HTTPRequest.from_target("GET", "/health")
        assert request.url == "http://localhost/health"

    def test_absolute_form_kept(self):
        """Test absolute-form targets are used as is."""
        request = HTTPRequest.from_target("GET", "https://example.com/api")
        assert request.url == "https://example.com/api"

    def test_invalid_target(self):
        """Test targets that are neither origin-form nor absolute."""
        with pytest.raises(HTTPParseError) as exc_info:
            HTTPRequest.from_target("GET", "api/users")
        assert exc_info.value.status_code == 400
