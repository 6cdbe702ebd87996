"""
=============================================================================
MIDDLEWARE MATCHER
=============================================================================

Decides whether a middleware should run for a request.

A matcher has two optional clauses:

    {
        "methods":  ["POST", "PUT"],           # HTTP method allow-list
        "patterns": ["/api/*", "/admin/**"],   # Path patterns (any may match)
    }

=============================================================================
DECISION TABLE
=============================================================================

    ┌──────────────────────────────┬──────────────────────────────────────┐
    │ Matcher                      │ Middleware runs when...              │
    ├──────────────────────────────┼──────────────────────────────────────┤
    │ None / {}                    │ always                               │
    │ {"methods": [...]}           │ method is listed                     │
    │ {"patterns": [...]}          │ any pattern matches the path         │
    │ {"methods": ..., "patterns"} │ both of the above                    │
    │ {"methods": []}              │ never                                │
    │ {"patterns": []}             │ never                                │
    └──────────────────────────────┴──────────────────────────────────────┘

A missing clause is permissive. An empty clause matches nothing.

The method clause is checked first: it is a cheap set lookup, while
patterns may need glob compilation.

=============================================================================
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Optional, Tuple, Union
import re

from ..http.request import HTTPRequest, url_path
from .patterns import PathPattern, parse_pattern


# Containers accepted for the methods / patterns clauses
_SEQUENCE_TYPES = (list, tuple, set, frozenset)


@dataclass(frozen=True)
class MatcherConfig:
    """
    Parsed matcher configuration.

    None means the clause is absent. An empty tuple means the clause is
    present but matches nothing.

    Patterns that had no recognizable shape are kept as None entries so
    the clause stays present; they never match.

    Raw values are accepted and normalized on construction, so
    MatcherConfig(patterns=("/api/*",)) works like from_dict. Malformed
    values never raise:
    - methods that is not a list becomes an empty allow-list
    - non-string methods are dropped
    - a single string or regex in patterns is treated as a list of one
    - anything else in patterns becomes a never-matching entry
    """

    methods: Optional[Tuple[str, ...]] = None
    patterns: Optional[Tuple[Optional[PathPattern], ...]] = None

    def __post_init__(self):
        if self.methods is not None:
            object.__setattr__(self, "methods", _normalize_methods(self.methods))
        if self.patterns is not None:
            object.__setattr__(self, "patterns", _normalize_patterns(self.patterns))

    @property
    def is_empty(self) -> bool:
        """True when neither clause is present."""
        return self.methods is None and self.patterns is None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "MatcherConfig":
        """Parse a raw matcher mapping."""
        return cls(methods=data.get("methods"), patterns=data.get("patterns"))

    def allows_method(self, method: str) -> bool:
        if self.methods is None:
            return True
        return method.upper() in self.methods

    def allows_path(self, path: str) -> bool:
        if self.patterns is None:
            return True
        return any(p is not None and p.matches(path) for p in self.patterns)


def _normalize_methods(methods: Any) -> Tuple[str, ...]:
    if not isinstance(methods, _SEQUENCE_TYPES):
        return ()
    return tuple(m.upper() for m in methods if isinstance(m, str))


def _normalize_patterns(patterns: Any) -> Tuple[Optional[PathPattern], ...]:
    if not isinstance(patterns, (list, tuple)):
        patterns = [patterns]
    return tuple(parse_pattern(p) for p in patterns)


MatcherLike = Union[MatcherConfig, Mapping[str, Any], None]


def to_matcher_config(matcher: MatcherLike) -> Optional[MatcherConfig]:
    """
    Convert a raw mapping to a MatcherConfig. None stays None.

    Any other non-mapping value has no clauses, so it behaves like {}.
    """
    if matcher is None or isinstance(matcher, MatcherConfig):
        return matcher
    if not isinstance(matcher, Mapping):
        return MatcherConfig()
    return MatcherConfig.from_dict(matcher)


def should_run(request: HTTPRequest, matcher: MatcherLike) -> bool:
    """
    Decide whether a middleware should run for this request.

    Args:
        request: Anything with ``method`` and ``url`` attributes
        matcher: MatcherConfig, raw matcher mapping, or None

    Returns:
        True if the middleware should run
    """
    config = to_matcher_config(matcher)
    if config is None or config.is_empty:
        return True

    # Cheap rejection first
    if not config.allows_method(request.method):
        return False

    if config.patterns is not None:
        return config.allows_path(request_path(request))

    return True


def request_path(request: HTTPRequest) -> str:
    """Path of the request URL, without query string or fragment."""
    return url_path(request.url)


def matcher_from_options(
    methods: Optional[list] = None,
    patterns: Optional[list] = None,
    regexes: Optional[list] = None,
) -> dict:
    """
    Build a raw matcher mapping from separate option lists.

    Regex sources are compiled; a clause is left out when none of its
    options were given.

    Raises:
        re.error: If a regex source is invalid
    """
    matcher: dict = {}
    if methods is not None:
        matcher["methods"] = list(methods)
    if patterns is not None or regexes is not None:
        matcher["patterns"] = list(patterns or []) + [re.compile(r) for r in regexes or []]
    return matcher
