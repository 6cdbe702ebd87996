"""
=============================================================================
MATCHER-GATED MIDDLEWARE MODULES
=============================================================================

User middleware is written as a module (or any object) with a default
handler and optional settings:

    # middleware.py
    def default(request):
        if not request.get_header("Authorization"):
            return unauthorized()        # short-circuit
        return None                      # continue dispatch

    unstable_settings = {
        "matcher": {
            "methods": ["POST", "PUT", "DELETE"],
            "patterns": ["/api/**"],
        },
    }

=============================================================================
DISPATCH
=============================================================================

    Request
       │
       ▼
    should_run(request, matcher)? ──── no ───► next(request)
       │
      yes
       │
       ▼
    handler(request)
       │
       ├── HTTPResponse ──► returned as is (short-circuit)
       │
       └── None ──────────► next(request)

=============================================================================
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional
import logging

from ..config import GateConfig
from ..http.request import HTTPRequest
from ..http.response import HTTPResponse
from ..matching.matcher import MatcherConfig, should_run, to_matcher_config
from ..matching.validation import validate_matcher
from .base import Middleware, NextHandler


logger = logging.getLogger(__name__)

# Handler: returns a response to short-circuit, None to continue
MiddlewareHandler = Callable[[HTTPRequest], Optional[HTTPResponse]]


@dataclass
class MiddlewareModule:
    """
    A user middleware: its handler plus its settings.

    Attributes:
        handler:  Called with the request when the matcher allows it
        settings: Raw settings, e.g. {"matcher": {"patterns": ["/api/*"]}}
    """

    handler: MiddlewareHandler
    settings: Optional[Dict[str, Any]] = field(default=None)

    @classmethod
    def from_module(cls, module: Any) -> "MiddlewareModule":
        """
        Build from a module or object exposing ``default`` and, optionally,
        ``unstable_settings``.

        Raises:
            TypeError: If ``default`` is missing or not callable
        """
        handler = getattr(module, "default", None)
        if not callable(handler):
            raise TypeError(f"Middleware {module!r} has no callable 'default' handler")
        return cls(handler=handler, settings=getattr(module, "unstable_settings", None))

    @property
    def matcher(self) -> Any:
        """The raw matcher from settings, or None when there is none."""
        if not self.settings:
            return None
        return self.settings.get("matcher")


def should_run_middleware(request: HTTPRequest, module: MiddlewareModule) -> bool:
    """Decide whether a middleware module applies to the request."""
    return should_run(request, module.matcher)


class MatcherMiddleware(Middleware):
    """
    Pipeline adapter for a MiddlewareModule.

    The matcher is parsed and (optionally) validated once, here. Each
    request then only pays for the method check and pattern tests.

        module = MiddlewareModule.from_module(my_middleware)
        pipeline.add(MatcherMiddleware(module))
    """

    def __init__(self, module: MiddlewareModule, config: Optional[GateConfig] = None):
        self.module = module
        self.config = config or GateConfig()

        raw = module.matcher
        if self.config.validate_matchers and not isinstance(raw, MatcherConfig):
            validate_matcher(raw)
        self.matcher = to_matcher_config(raw)

    def __call__(self, request: HTTPRequest, next: NextHandler) -> HTTPResponse:
        if not should_run(request, self.matcher):
            logger.debug(f"Skipping {self.name}: {request.method} {request.url}")
            return next(request)

        logger.debug(f"Running {self.name}: {request.method} {request.url}")
        response = self.module.handler(request)
        if response is not None:
            return response
        return next(request)

    @property
    def name(self) -> str:
        return getattr(self.module.handler, "__name__", self.__class__.__name__)
