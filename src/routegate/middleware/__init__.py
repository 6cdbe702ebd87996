"""
=============================================================================
MIDDLEWARE
=============================================================================

Middleware runs BETWEEN receiving a request and calling the final
handler. Each middleware can be restricted to some requests with a
matcher:

    pipeline = MiddlewarePipeline()

    # Plain middleware, restricted at registration
    pipeline.add(AuditMiddleware(), matcher={"methods": ["POST", "PUT"]})

    # User middleware module carrying its own matcher
    pipeline.add(MatcherMiddleware(MiddlewareModule.from_module(auth)))

=============================================================================
"""

from .base import (
    Middleware,
    MiddlewarePipeline,
    ConditionalMiddleware,
    FunctionMiddleware,
    function_middleware,
    NextHandler,
)
from .gated import (
    MiddlewareModule,
    MatcherMiddleware,
    MiddlewareHandler,
    should_run_middleware,
)

__all__ = [
    # Base classes
    "Middleware",
    "MiddlewarePipeline",
    "ConditionalMiddleware",
    "FunctionMiddleware",
    "function_middleware",
    "NextHandler",

    # Matcher-gated modules
    "MiddlewareModule",
    "MatcherMiddleware",
    "MiddlewareHandler",
    "should_run_middleware",
]
