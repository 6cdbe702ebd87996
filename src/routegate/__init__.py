"""
=============================================================================
ROUTEGATE - MIDDLEWARE MATCHERS FOR HTTP DISPATCH
=============================================================================

Decides, per request, whether a middleware should run, from a declarative
matcher:

    from routegate import HTTPRequest, should_run

    matcher = {"methods": ["POST"], "patterns": ["/api/**"]}

    should_run(HTTPRequest("POST", "https://example.com/api/users"), matcher)  # True
    should_run(HTTPRequest("GET", "https://example.com/api/users"), matcher)   # False

=============================================================================
PACKAGE LAYOUT
=============================================================================

    routegate/
    ├── matching/      Pattern compiler, matcher evaluator, diagnostics
    ├── http/          Request / response types
    ├── middleware/    Pipeline and matcher-gated middleware modules
    ├── config.py      GateConfig and logging setup
    └── __main__.py    python -m routegate

=============================================================================
"""

__version__ = "1.0.0"

from .config import GateConfig, setup_logging
from .http import HTTPRequest, HTTPResponse
from .matching import MatcherConfig, matches, should_run, validate_matcher
from .middleware import MatcherMiddleware, MiddlewareModule, MiddlewarePipeline

__all__ = [
    "GateConfig",
    "setup_logging",
    "HTTPRequest",
    "HTTPResponse",
    "MatcherConfig",
    "matches",
    "should_run",
    "validate_matcher",
    "MatcherMiddleware",
    "MiddlewareModule",
    "MiddlewarePipeline",
    "__version__",
]
