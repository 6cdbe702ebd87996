"""
=============================================================================
MATCHING ENGINE
=============================================================================

Decides which requests a middleware applies to.

    ┌─────────────────────────────────────────────────────────────────────┐
    │ MATCHER (matcher.py)                                                │
    │ ─────────────────────────────────────────────────────────────────── │
    │ should_run(request, {"methods": [...], "patterns": [...]}) → bool   │
    │   • Method allow-list (case-insensitive)                            │
    │   • Pattern list (any match wins)                                   │
    │   • Both clauses must pass                                          │
    └───────────────────────────────┬─────────────────────────────────────┘
                                    │ one call per pattern
                                    ▼
    ┌─────────────────────────────────────────────────────────────────────┐
    │ PATTERNS (patterns.py)                                              │
    │ ─────────────────────────────────────────────────────────────────── │
    │ matches(path, pattern) → bool                                       │
    │   • Literal paths:  /about                                          │
    │   • Globs:          /api/*, /api/**, /**/health                     │
    │   • Regexes:        re.compile(r"^/auth/(login|logout)$")           │
    └─────────────────────────────────────────────────────────────────────┘

    ┌─────────────────────────────────────────────────────────────────────┐
    │ VALIDATION (validation.py)                                          │
    │ ─────────────────────────────────────────────────────────────────── │
    │ validate_matcher(raw) → list of diagnostics (logged, never raised)  │
    └─────────────────────────────────────────────────────────────────────┘

=============================================================================
"""

from .patterns import (
    LiteralPattern,
    GlobPattern,
    RegexPattern,
    PathPattern,
    parse_pattern,
    compile_glob,
    matches,
)
from .matcher import (
    MatcherConfig,
    should_run,
    request_path,
    to_matcher_config,
    matcher_from_options,
)
from .validation import validate_matcher, VALID_METHODS

__all__ = [
    # Patterns
    "LiteralPattern",
    "GlobPattern",
    "RegexPattern",
    "PathPattern",
    "parse_pattern",
    "compile_glob",
    "matches",

    # Matcher
    "MatcherConfig",
    "should_run",
    "request_path",
    "to_matcher_config",
    "matcher_from_options",

    # Validation
    "validate_matcher",
    "VALID_METHODS",
]
