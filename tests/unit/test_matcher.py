"""
Unit tests for the middleware matcher.
"""

import re

import pytest

from routegate.http.request import HTTPRequest
from routegate.matching.matcher import (
    MatcherConfig,
    matcher_from_options,
    request_path,
    should_run,
    to_matcher_config,
)
from routegate.matching.patterns import GlobPattern, LiteralPattern


class TestNoMatcher:
    """Tests for missing or empty matchers."""

    def test_none_runs_everywhere(self, make_request):
        """Test a missing matcher runs on all requests."""
        assert should_run(make_request("/"), None) is True
        assert should_run(make_request("/api/test"), None) is True

    def test_empty_matcher_runs_everywhere(self, make_request):
        """Test a matcher with neither clause runs on all requests."""
        assert should_run(make_request("/admin"), {}) is True
        assert should_run(make_request("/api", "DELETE"), MatcherConfig()) is True

    def test_explicit_none_clauses(self, make_request):
        """Test clauses set to None count as absent."""
        assert should_run(make_request("/x"), {"methods": None, "patterns": None}) is True


class TestMethodMatching:
    """Tests for the methods clause."""

    def test_exact_method(self, make_request):
        """Test the request method must be listed."""
        matcher = {"methods": ["GET"]}
        assert should_run(make_request("/", "GET"), matcher) is True
        assert should_run(make_request("/", "POST"), matcher) is False

    def test_multiple_methods(self, make_request):
        """Test any listed method is allowed."""
        matcher = {"methods": ["GET", "POST", "PUT"]}
        assert should_run(make_request("/", "GET"), matcher) is True
        assert should_run(make_request("/", "POST"), matcher) is True
        assert should_run(make_request("/", "PUT"), matcher) is True
        assert should_run(make_request("/", "DELETE"), matcher) is False

    def test_case_insensitive(self, make_request):
        """Test methods are compared case-insensitively on both sides."""
        assert should_run(make_request("/", "GET"), {"methods": ["get"]}) is True
        assert should_run(make_request("/", "post"), {"methods": ["POST"]}) is True

    def test_empty_methods_never_run(self, make_request):
        """Test an empty allow-list matches nothing."""
        assert should_run(make_request("/", "GET"), {"methods": []}) is False

    def test_empty_methods_ignore_patterns(self, make_request):
        """Test an empty allow-list rejects even when patterns match."""
        matcher = {"methods": [], "patterns": ["/**"]}
        assert should_run(make_request("/anything"), matcher) is False

    def test_only_methods_ignore_path(self, make_request):
        """Test a methods-only matcher runs on any path."""
        assert should_run(make_request("/any/path", "POST"), {"methods": ["POST"]}) is True


class TestPatternMatching:
    """Tests for the patterns clause."""

    def test_exact_paths(self, make_request):
        """Test literal patterns."""
        assert should_run(make_request("/"), {"patterns": ["/"]}) is True
        assert should_run(make_request("/api"), {"patterns": ["/api"]}) is True
        assert should_run(make_request("/admin"), {"patterns": ["/api"]}) is False
        assert should_run(make_request("/api/users"), {"patterns": ["/api"]}) is False

    def test_any_pattern_wins(self, make_request):
        """Test patterns are combined with OR."""
        matcher = {"patterns": ["/", "/api", "/admin"]}
        assert should_run(make_request("/"), matcher) is True
        assert should_run(make_request("/api"), matcher) is True
        assert should_run(make_request("/admin"), matcher) is True
        assert should_run(make_request("/settings"), matcher) is False

    def test_empty_patterns_never_run(self, make_request):
        """Test an empty pattern list matches nothing."""
        assert should_run(make_request("/"), {"patterns": []}) is False
        assert should_run(make_request("/", "GET"), {"methods": ["GET"], "patterns": []}) is False

    def test_deep_wildcard(self, make_request):
        """Test '/**' matches the root and nested paths."""
        matcher = {"patterns": ["/**"]}
        assert should_run(make_request("/"), matcher) is True
        assert should_run(make_request("/api/x/y"), matcher) is True

    def test_single_level_wildcard(self, make_request):
        """Test '/api/*' covers the base path and one level below."""
        matcher = {"patterns": ["/api/*"]}
        assert should_run(make_request("/api"), matcher) is True
        assert should_run(make_request("/api/users"), matcher) is True
        assert should_run(make_request("/api/users/1"), matcher) is False

    def test_regex(self, make_request):
        """Test regex patterns."""
        matcher = {"patterns": [re.compile(r"^/auth/(login|logout)$")]}
        assert should_run(make_request("/auth/login"), matcher) is True
        assert should_run(make_request("/auth/register"), matcher) is False

    def test_trailing_slash(self, make_request):
        """Test '/api/' and '/api' are distinct."""
        assert should_run(make_request("/api/"), {"patterns": ["/api/"]}) is True
        assert should_run(make_request("/api"), {"patterns": ["/api/"]}) is False
        assert should_run(make_request("/api/"), {"patterns": ["/api"]}) is False

    def test_query_and_fragment_ignored(self, make_request):
        """Test query strings and fragments are stripped before matching."""
        assert should_run(make_request("/api?param=value"), {"patterns": ["/api"]}) is True
        assert should_run(make_request("/api#section"), {"patterns": ["/api"]}) is True

    def test_root_without_path(self):
        """Test a URL without a path matches '/'."""
        request = HTTPRequest("GET", "https://example.com")
        assert should_run(request, {"patterns": ["/"]}) is True

    def test_single_pattern_value(self, make_request):
        """Test a lone pattern is treated as a list of one."""
        assert should_run(make_request("/api"), {"patterns": "/api"}) is True
        assert should_run(make_request("/api/x"), {"patterns": re.compile(r"^/api/")}) is True

    def test_unrecognized_patterns_never_match(self, make_request):
        """Test invalid pattern entries are skipped, not fatal."""
        assert should_run(make_request("/api"), {"patterns": [1, None, {}]}) is False
        assert should_run(make_request("/api"), {"patterns": [1, "/api"]}) is True
        assert should_run(make_request("/api"), {"patterns": 42}) is False


class TestCombinedMatching:
    """Tests for methods and patterns together."""

    def test_both_match(self, make_request):
        """Test both clauses passing."""
        matcher = {"methods": ["POST"], "patterns": ["/api"]}
        assert should_run(make_request("/api", "POST"), matcher) is True

    def test_method_matches_pattern_does_not(self, make_request):
        """Test the pattern clause can reject."""
        matcher = {"methods": ["POST"], "patterns": ["/api"]}
        assert should_run(make_request("/", "POST"), matcher) is False

    def test_pattern_matches_method_does_not(self, make_request):
        """Test the method clause can reject."""
        matcher = {"methods": ["POST"], "patterns": ["/api"]}
        assert should_run(make_request("/api", "GET"), matcher) is False

    def test_multiple_methods_and_patterns(self, make_request):
        """Test several methods with several patterns."""
        matcher = {
            "methods": ["POST", "PUT", "DELETE"],
            "patterns": ["/api", "/admin", "/settings"],
        }
        assert should_run(make_request("/admin", "PUT"), matcher) is True

    def test_wildcards_with_methods(self, make_request):
        """Test globs combined with a method list."""
        matcher = {"methods": ["POST", "PUT", "DELETE"], "patterns": ["/api/*"]}
        assert should_run(make_request("/api/users", "DELETE"), matcher) is True

    def test_method_checked_before_patterns(self, make_request):
        """Test a rejected method never touches the patterns."""
        class ExplodingPattern(LiteralPattern):
            def matches(self, path):
                raise AssertionError("patterns should not be evaluated")

        config = MatcherConfig(methods=("POST",), patterns=(ExplodingPattern("/api"),))
        assert isinstance(config.patterns[0], ExplodingPattern)
        assert should_run(make_request("/api", "GET"), config) is False

    def test_idempotent(self, make_request):
        """Test repeated evaluation gives the same result."""
        request = make_request("/api/users", "POST")
        matcher = {"methods": ["POST"], "patterns": ["/api/*"]}
        assert [should_run(request, matcher) for _ in range(3)] == [True, True, True]


class TestMatcherConfig:
    """Tests for parsing raw matchers."""

    def test_from_dict(self):
        """Test methods are uppercased and patterns classified."""
        config = MatcherConfig.from_dict({"methods": ["get", "Post"], "patterns": ["/a", "/b/*"]})
        assert config.methods == ("GET", "POST")
        assert config.patterns == (LiteralPattern("/a"), GlobPattern("/b/*"))

    def test_empty_clauses_are_present(self):
        """Test empty lists stay distinct from absent clauses."""
        config = MatcherConfig.from_dict({"methods": [], "patterns": []})
        assert config.methods == ()
        assert config.patterns == ()
        assert config.is_empty is False

    def test_malformed_methods_fail_closed(self, make_request):
        """Test a non-list methods value allows no method."""
        config = MatcherConfig.from_dict({"methods": "GET"})
        assert config.methods == ()
        assert should_run(make_request("/", "GET"), config) is False

    def test_non_string_methods_dropped(self):
        """Test non-string methods are ignored."""
        config = MatcherConfig.from_dict({"methods": ["GET", 1, None]})
        assert config.methods == ("GET",)

    def test_direct_construction_with_raw_patterns(self, make_request):
        """Test strings and regexes passed to the constructor are parsed."""
        config = MatcherConfig(patterns=("/api/*", re.compile(r"^/auth/")))

        assert config.patterns[0] == GlobPattern("/api/*")
        assert should_run(make_request("/api/x"), config) is True
        assert should_run(make_request("/auth/login"), config) is True
        assert should_run(make_request("/other"), config) is False

    def test_direct_construction_with_raw_methods(self, make_request):
        """Test constructor methods are uppercased like parsed ones."""
        config = MatcherConfig(methods=["post", 7])

        assert config.methods == ("POST",)
        assert should_run(make_request("/", "POST"), config) is True

    def test_direct_construction_with_unrecognized_pattern(self, make_request):
        """Test an unrecognized pattern never matches and never raises."""
        config = MatcherConfig(patterns=(42, b"/api"))

        assert config.patterns == (None, None)
        assert should_run(make_request("/api"), config) is False

    def test_to_matcher_config(self):
        """Test conversion of the accepted matcher forms."""
        config = MatcherConfig(methods=("GET",))
        assert to_matcher_config(None) is None
        assert to_matcher_config(config) is config
        assert to_matcher_config({"methods": ["GET"]}) == config
        assert to_matcher_config(["not", "a", "mapping"]) == MatcherConfig()


class TestHelpers:
    """Tests for module helpers."""

    def test_request_path(self, make_request):
        """Test the path excludes query and fragment."""
        assert request_path(make_request("/api/users?page=1#top")) == "/api/users"

    def test_request_path_duck_typed(self):
        """Test any object with a url attribute is accepted."""
        class Req:
            method = "GET"
            url = "http://localhost:3000/health?full=1"

        assert request_path(Req()) == "/health"
        assert should_run(Req(), {"patterns": ["/health"]}) is True

    def test_matcher_from_options(self):
        """Test building a raw matcher from option lists."""
        assert matcher_from_options() == {}
        assert matcher_from_options(methods=[]) == {"methods": []}

        matcher = matcher_from_options(patterns=["/api/*"], regexes=[r"^/auth"])
        assert matcher["patterns"][0] == "/api/*"
        assert matcher["patterns"][1].pattern == r"^/auth"

    def test_matcher_from_options_bad_regex(self):
        """Test invalid regex sources raise re.error."""
        with pytest.raises(re.error):
            matcher_from_options(regexes=["("])
