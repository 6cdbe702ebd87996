"""
=============================================================================
PATH PATTERNS
=============================================================================

Decides whether a single pattern matches a request path.

Three kinds of pattern are supported:
- Literal paths: /about, /api/
- Glob paths:    /api/*, /api/**, /**/health, /files/*.json
- Regexes:       re.compile(r"^/auth/(login|logout)$")

=============================================================================
PATTERN CLASSIFICATION
=============================================================================

Raw values from a matcher config are turned into tagged pattern objects
before matching:

    ┌─────────────────────────────────────────────────────────────────────┐
    │                    RAW VALUE → PATTERN                              │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │   "/about"                  → LiteralPattern("/about")               │
    │   "/api/*"                  → GlobPattern("/api/*")                  │
    │   re.compile("^/auth")      → RegexPattern(<compiled>)               │
    │   42, None, {}, b"/x"       → None  (never matches)                  │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

A glob is compiled once, when its GlobPattern is built, and the matcher
holding it reuses the regex for every request. compile_glob itself keeps
no cache. A string without "*" is never compiled.

=============================================================================
GLOB SEGMENT RULES
=============================================================================

The leading "/" is removed and the glob is split on "/". Each segment is
translated on its own:

    Segment      Position            Regex
    ─────────    ─────────────────   ──────────────────────
    **           only (/**)          .*
    **           first of several    (?:/[^/]+)+
    **           interior            (?:/[^/]+)*
    **           last                (?:/.*)?
    *            trailing            (?:/[^/]+)?   (base path also matches)
    *            elsewhere           /[^/]+
    api**        any                 /api[^/]*(?:/.*)?
    *.json       any                 /[^/]*\\.json
    users        any                 /users

The joined regex is tested with fullmatch, so it is anchored at both ends.

    /api/*   matches /api, /api/users        not /api/users/1
    /api*    matches /api, /apitest          not /api/users
    /api/**  matches /api, /api/a/b/c        not /apix
    /a/**/b  matches /a/b, /a/x/y/b          not /a//b
    /**/api  matches /x/api, /x/y/api        not /api
    /*/api   matches /x/api                  not /api, /x/y/api

=============================================================================
"""

from dataclasses import dataclass, field
from typing import Any, Optional, Union
import re


# Separator between path segments
SEPARATOR = "/"

# Wildcard tokens
STAR = "*"
DOUBLE_STAR = "**"

# Regex fragments for each segment rule
_ANYTHING = r".*"
_ONE_OR_MORE_SEGMENTS = r"(?:/[^/]+)+"
_ZERO_OR_MORE_SEGMENTS = r"(?:/[^/]+)*"
_OPTIONAL_REST = r"(?:/.*)?"
_ONE_SEGMENT = r"/[^/]+"
_OPTIONAL_SEGMENT = r"(?:/[^/]+)?"
_IN_SEGMENT = r"[^/]*"


@dataclass(frozen=True)
class LiteralPattern:
    """A path that must equal the request path exactly."""

    text: str

    def matches(self, path: str) -> bool:
        return path == self.text


@dataclass(frozen=True)
class GlobPattern:
    """
    A path containing "*" wildcards.

    Exact equality is tried before the regex, so a glob always
    matches its own text (e.g. "/api/*" matches the path "/api/*").

    The regex is compiled once here; keep the pattern to reuse it.
    """

    text: str
    regex: "re.Pattern[str]" = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "regex", compile_glob(self.text))

    def matches(self, path: str) -> bool:
        if path == self.text:
            return True
        return self.regex.fullmatch(path) is not None


@dataclass(frozen=True)
class RegexPattern:
    """
    A compiled regular expression tested against the path.

    Uses search(), not match(): the regex decides its own anchoring,
    just like RegExp.test() in a browser.
    """

    regex: "re.Pattern[str]"

    def matches(self, path: str) -> bool:
        return self.regex.search(path) is not None


PathPattern = Union[LiteralPattern, GlobPattern, RegexPattern]


def parse_pattern(value: Any) -> Optional[PathPattern]:
    """
    Classify a raw matcher value.

    Args:
        value: A string, a compiled regex, or an already parsed pattern

    Returns:
        The tagged pattern, or None if the value has no pattern shape
        (numbers, None, dicts, bytes regexes, ...)
    """
    if isinstance(value, (LiteralPattern, GlobPattern, RegexPattern)):
        return value

    if isinstance(value, str):
        if STAR in value:
            return GlobPattern(value)
        return LiteralPattern(value)

    if isinstance(value, re.Pattern) and isinstance(value.pattern, str):
        return RegexPattern(value)

    return None


def matches(path: str, pattern: Any) -> bool:
    """
    Test whether a path matches a pattern.

    Accepts either a parsed pattern or a raw value. Unrecognized values
    never match.

    Example:
        matches("/api/users", "/api/*")               # True
        matches("/api/users/1", "/api/*")             # False
        matches("/auth/login", re.compile("^/auth/")) # True
    """
    parsed = parse_pattern(pattern)
    if parsed is None:
        return False
    return parsed.matches(path)


# =============================================================================
# GLOB COMPILATION
# =============================================================================

def compile_glob(glob: str) -> "re.Pattern[str]":
    """
    Compile a glob into a regex to be used with fullmatch().

    Nothing is cached here. GlobPattern holds on to the result.

    Args:
        glob: Glob string (e.g. "/api/*")

    Returns:
        Compiled regex equivalent to the glob
    """
    body = glob[1:] if glob.startswith(SEPARATOR) else glob
    segments = body.split(SEPARATOR)

    if segments == [DOUBLE_STAR]:
        return re.compile(_ANYTHING, re.DOTALL)

    if segments == [STAR]:
        # Root, or any single segment below it
        return re.compile(SEPARATOR + _IN_SEGMENT)

    regex_parts = []

    # A trailing "/*" is optional: "/api/*" also matches "/api"
    optional_tail = len(segments) > 1 and segments[-1] == STAR
    if optional_tail:
        segments = segments[:-1]

    last_index = len(segments) - 1
    for index, segment in enumerate(segments):
        regex_parts.append(_translate_segment(
            segment,
            first=index == 0,
            last=index == last_index and not optional_tail,
        ))

    if optional_tail:
        regex_parts.append(_OPTIONAL_SEGMENT)

    return re.compile("".join(regex_parts), re.DOTALL)


def _translate_segment(segment: str, first: bool, last: bool) -> str:
    """Translate one glob segment (no "/") into a regex fragment."""
    if segment == DOUBLE_STAR:
        # Leading "**" consumes at least one segment. Interior "**" skips
        # whole non-empty segments; trailing "**" accepts any rest.
        if first:
            return _ONE_OR_MORE_SEGMENTS
        return _OPTIONAL_REST if last else _ZERO_OR_MORE_SEGMENTS

    if segment == STAR:
        return _ONE_SEGMENT

    if segment.endswith(DOUBLE_STAR):
        # "api**": segment starts with "api", may continue deeper
        prefix = segment[:-len(DOUBLE_STAR)]
        return SEPARATOR + _escape_in_segment(prefix) + _IN_SEGMENT + _OPTIONAL_REST

    return SEPARATOR + _escape_in_segment(segment)


def _escape_in_segment(text: str) -> str:
    """Escape literal text, turning each "*" into a within-segment wildcard."""
    return _IN_SEGMENT.join(re.escape(part) for part in text.split(STAR))
