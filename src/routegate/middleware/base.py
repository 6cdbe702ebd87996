"""
=============================================================================
MIDDLEWARE PIPELINE
=============================================================================

Defines the middleware protocol and the pipeline that chains middleware
around a final handler (Chain of Responsibility).

    ┌─────────────────────────────────────────────────────────────────────┐
    │                    PIPELINE - REQUEST FLOW                          │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │   Request ────────────────────────────────────────────────►         │
    │                                                                      │
    │   ┌──────────┐    ┌──────────┐    ┌──────────┐    ┌──────────┐     │
    │   │  Auth    │───►│  Audit   │───►│  Cache   │───►│ Handler  │     │
    │   │ /api/**  │    │ POST,PUT │    │ (always) │    │          │     │
    │   └──────────┘    └──────────┘    └──────────┘    └──────────┘     │
    │                                                                      │
    │   A middleware registered with a matcher is skipped (the request    │
    │   goes straight to the next link) when the matcher rejects it.      │
    │                                                                      │
    │   ◄──────────────────────────────────────────────── Response        │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

=============================================================================
"""

from abc import ABC, abstractmethod
from typing import Callable, List, Optional
import logging

from ..http.request import HTTPRequest
from ..http.response import HTTPResponse
from ..config import GateConfig
from ..matching.matcher import MatcherConfig, MatcherLike, should_run, to_matcher_config
from ..matching.validation import validate_matcher


logger = logging.getLogger(__name__)


# NextHandler is the signature for the next middleware or final handler.
NextHandler = Callable[[HTTPRequest], HTTPResponse]


class Middleware(ABC):
    """
    Abstract base class for middleware.

    Every middleware implements __call__:

        def __call__(self, request: HTTPRequest, next: NextHandler) -> HTTPResponse

    It either returns its own response (short-circuit) or calls
    next(request) to continue the chain.
    """

    @abstractmethod
    def __call__(self, request: HTTPRequest, next: NextHandler) -> HTTPResponse:
        """
        Process the request.

        Args:
            request: The incoming HTTP request
            next: The next handler in the chain

        Returns:
            HTTP response (either from next() or short-circuited)
        """
        pass

    @property
    def name(self) -> str:
        """Get the middleware name for logging."""
        return self.__class__.__name__


class ConditionalMiddleware(Middleware):
    """
    Runs a middleware only for requests its matcher accepts.

    Rejected requests are passed directly to next().

        pipeline.add(AuthMiddleware(), matcher={"patterns": ["/admin/**"]})
    """

    def __init__(self, middleware: Middleware, matcher: MatcherLike):
        self.middleware = middleware
        self.matcher = to_matcher_config(matcher)

    def __call__(self, request: HTTPRequest, next: NextHandler) -> HTTPResponse:
        if not should_run(request, self.matcher):
            logger.debug(f"Skipping {self.name} for {request.method} {request.url}")
            return next(request)
        return self.middleware(request, next)

    @property
    def name(self) -> str:
        return self.middleware.name


class MiddlewarePipeline:
    """
    Chains multiple middleware together with a final handler.

    First added = outermost:

        pipeline = MiddlewarePipeline()
        pipeline.add(LoggingMiddleware())
        pipeline.add(AuthMiddleware(), matcher={"patterns": ["/api/**"]})

        handler = pipeline.wrap(router.handle)
        response = handler(request)
    """

    def __init__(self, config: Optional[GateConfig] = None):
        """
        Initialize an empty middleware pipeline.

        Args:
            config: Gate settings (matcher validation on add)
        """
        self.config = config or GateConfig()
        self._middleware: List[Middleware] = []

    def add(
        self,
        middleware: Middleware,
        matcher: MatcherLike = None,
    ) -> "MiddlewarePipeline":
        """
        Add middleware to the pipeline.

        Args:
            middleware: Middleware instance to add
            matcher: Optional matcher limiting which requests it runs for

        Returns:
            Self for method chaining
        """
        if matcher is not None:
            if self.config.validate_matchers and not isinstance(matcher, MatcherConfig):
                validate_matcher(matcher)
            middleware = ConditionalMiddleware(middleware, matcher)
        self._middleware.append(middleware)
        logger.debug(f"Added middleware: {middleware.name}")
        return self  # Enable chaining: pipeline.add(A).add(B).add(C)

    def wrap(self, handler: NextHandler) -> NextHandler:
        """
        Wrap a handler with all middleware in the pipeline.

        Given [MW1, MW2, MW3] the result is MW1 → MW2 → MW3 → handler.
        We wrap in REVERSE order so that the first-added middleware is the
        outermost wrapper.

        Args:
            handler: The final request handler

        Returns:
            Wrapped handler function that includes all middleware
        """
        current = handler
        for middleware in reversed(self._middleware):
            current = self._create_wrapped_handler(middleware, current)
        return current

    def _create_wrapped_handler(
        self,
        middleware: Middleware,
        next_handler: NextHandler
    ) -> NextHandler:
        """Create a closure that calls middleware with next."""
        def wrapped(request: HTTPRequest) -> HTTPResponse:
            return middleware(request, next_handler)

        return wrapped

    def __len__(self) -> int:
        """Get the number of middleware in the pipeline."""
        return len(self._middleware)

    def __iter__(self):
        """Iterate over middleware."""
        return iter(self._middleware)


# =============================================================================
# FUNCTION MIDDLEWARE
# =============================================================================

class FunctionMiddleware(Middleware):
    """
    Wraps a simple function as middleware.

        def add_header(request, next):
            response = next(request)
            response.set_header("X-Custom", "value")
            return response

        pipeline.add(FunctionMiddleware(add_header))
    """

    def __init__(
        self,
        func: Callable[[HTTPRequest, NextHandler], HTTPResponse],
        name: Optional[str] = None
    ):
        self._func = func
        self._name = name or func.__name__

    def __call__(self, request: HTTPRequest, next: NextHandler) -> HTTPResponse:
        """Delegate to the wrapped function."""
        return self._func(request, next)

    @property
    def name(self) -> str:
        """Return the middleware name."""
        return self._name


def function_middleware(
    func: Callable[[HTTPRequest, NextHandler], HTTPResponse]
) -> FunctionMiddleware:
    """Decorator to create middleware from a function."""
    return FunctionMiddleware(func)
