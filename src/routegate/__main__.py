"""
=============================================================================
ROUTEGATE CLI ENTRY POINT
=============================================================================

Evaluates a matcher against a request from the shell. Handy for checking how
a glob behaves before putting it in middleware settings.

=============================================================================
USAGE
=============================================================================

    # Does /api/* cover /api/users?
    python -m routegate https://example.com/api/users --pattern '/api/*'

    # Method and pattern together
    python -m routegate https://example.com/api --method POST \\
        --methods POST PUT --pattern /api

    # Regular expression
    python -m routegate https://example.com/auth/login \\
        --regex '^/auth/(login|logout)$'

    # Path target, made absolute with --host (default: localhost)
    python -m routegate '/api/users?page=1' --host example.com --pattern '/api/*'

Prints "run" or "skip". Exit status: 0 = run, 1 = skip, 2 = bad arguments.

=============================================================================
"""

import argparse
import re
import sys
from typing import List, Optional

from . import __version__
from .config import GateConfig, LOG_LEVELS, setup_logging
from .http.request import HTTPParseError, HTTPRequest
from .matching.matcher import matcher_from_options, should_run
from .matching.validation import validate_matcher


EXIT_RUN = 0
EXIT_SKIP = 1
EXIT_USAGE = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="routegate",
        description="Check whether a middleware matcher applies to a request",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m routegate https://example.com/api/users --pattern '/api/*'
  python -m routegate https://example.com/api --method POST --methods POST --pattern /api
  python -m routegate https://example.com/auth/login --regex '^/auth/(login|logout)$'
        """
    )

    # ─────────────────────────────────────────────────────────────────────
    # REQUEST
    # ─────────────────────────────────────────────────────────────────────

    parser.add_argument(
        "target",
        help="Absolute URL, or a path such as /api/users?page=1"
    )

    parser.add_argument(
        "--host", "-H",
        default=None,
        help="Host header for path targets (default: localhost)"
    )

    parser.add_argument(
        "--method", "-X",
        default="GET",
        help="Request method (default: GET)"
    )

    # ─────────────────────────────────────────────────────────────────────
    # MATCHER (a clause is absent unless its flag is given)
    # ─────────────────────────────────────────────────────────────────────

    parser.add_argument(
        "--methods", "-m",
        nargs="*",
        default=None,
        help="Allowed methods; give the flag with no values for an empty list"
    )

    parser.add_argument(
        "--pattern", "-p",
        action="append",
        default=None,
        help="Literal or glob path pattern (repeatable)"
    )

    parser.add_argument(
        "--regex", "-r",
        action="append",
        default=None,
        help="Regular expression path pattern (repeatable)"
    )

    # ─────────────────────────────────────────────────────────────────────
    # META
    # ─────────────────────────────────────────────────────────────────────

    parser.add_argument(
        "--log-level", "-l",
        choices=LOG_LEVELS,
        default=None,
        help="Logging level (default: ROUTEGATE_LOG_LEVEL or WARNING)"
    )

    parser.add_argument(
        "--version", "-v",
        action="version",
        version=f"routegate {__version__}"
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point. Returns the process exit status."""
    args = build_parser().parse_args(argv)

    config = GateConfig.from_env()
    if args.log_level:
        config.log_level = args.log_level
    try:
        config.validate()
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_USAGE
    setup_logging(config)

    try:
        matcher = matcher_from_options(args.methods, args.pattern, args.regex)
    except re.error as e:
        print(f"Error: invalid regex: {e}", file=sys.stderr)
        return EXIT_USAGE

    validate_matcher(matcher)

    headers = {"Host": args.host} if args.host else None
    try:
        request = HTTPRequest.from_target(args.method, args.target, headers)
    except HTTPParseError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_USAGE

    if should_run(request, matcher):
        print("run")
        return EXIT_RUN
    print("skip")
    return EXIT_SKIP


if __name__ == "__main__":
    sys.exit(main())
