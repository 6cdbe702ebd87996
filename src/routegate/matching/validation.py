"""
Matcher configuration diagnostics.

Reports malformed entries in a raw matcher before it is used. Nothing
here raises: each problem is logged once at ERROR and returned, and
matching goes ahead with the bad entries simply never matching.
"""

from typing import Any, List
from collections.abc import Mapping
import logging
import re


logger = logging.getLogger(__name__)

# Standard HTTP methods (RFC 7231 + PATCH)
VALID_METHODS = frozenset({
    "GET",
    "POST",
    "PUT",
    "DELETE",
    "PATCH",
    "HEAD",
    "OPTIONS",
    "TRACE",
    "CONNECT",
})

METHODS_NOT_A_LIST = "Middleware matcher methods must be a list of valid HTTP methods."
INVALID_METHOD = "Invalid middleware HTTP method: {method}."
INVALID_PATTERN = "Middleware matcher patterns must be strings or regular expressions."
MATCHER_NOT_A_MAPPING = "Middleware matcher must be a mapping with 'methods' and/or 'patterns'."


def validate_matcher(matcher: Any) -> List[str]:
    """
    Check a raw matcher and report every malformed entry.

    Args:
        matcher: Raw matcher object, usually a dict from middleware settings

    Returns:
        List of diagnostic messages (empty when the matcher is valid)
    """
    problems: List[str] = []

    if matcher is None:
        return problems

    if not isinstance(matcher, Mapping):
        problems.append(f"{MATCHER_NOT_A_MAPPING} Received: {matcher!r}")
        return _report(problems)

    methods = matcher.get("methods")
    if methods is not None:
        if not isinstance(methods, (list, tuple, set, frozenset)):
            problems.append(f"{METHODS_NOT_A_LIST} Received: {methods!r}")
        else:
            for method in methods:
                if not isinstance(method, str) or method.upper() not in VALID_METHODS:
                    problems.append(
                        INVALID_METHOD.format(method=method)
                        + f" Valid methods are: {', '.join(sorted(VALID_METHODS))}"
                    )

    patterns = matcher.get("patterns")
    if patterns is not None:
        # A single pattern is allowed in place of a list
        if not isinstance(patterns, (list, tuple)):
            patterns = [patterns]
        for pattern in patterns:
            if not _is_pattern(pattern):
                problems.append(f"{INVALID_PATTERN} Received: {pattern!r}")

    return _report(problems)


def _is_pattern(value: Any) -> bool:
    if isinstance(value, str):
        return True
    return isinstance(value, re.Pattern) and isinstance(value.pattern, str)


def _report(problems: List[str]) -> List[str]:
    for message in problems:
        logger.error(message)
    return problems
