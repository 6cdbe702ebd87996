"""
=============================================================================
GATE CONFIGURATION
=============================================================================

Settings for matcher validation and logging.

=============================================================================
CONFIGURATION SOURCES
=============================================================================

    Priority (highest to lowest):

    1. Command-line arguments
       └── python -m routegate --log-level DEBUG ...

    2. Environment variables
       └── ROUTEGATE_LOG_LEVEL=DEBUG python -m routegate ...

    3. Default values (in this dataclass)

=============================================================================
"""

import json
import logging
import os
from dataclasses import dataclass


LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
LOG_FORMATS = ("text", "json")

TEXT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


@dataclass
class GateConfig:
    """
    Configuration for gated middleware.

        GateConfig(
            validate_matchers=True,   # Report malformed matchers on registration
            log_level="WARNING",      # Level for the "routegate" logger
            log_format="text",        # "text" or "json"
        )
    """

    validate_matchers: bool = True
    """
    Run matcher diagnostics when a middleware is registered.
    Diagnostics are logged, never raised.
    """

    log_level: str = "WARNING"
    """
    Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
    DEBUG logs every run/skip decision.
    """

    log_format: str = "text"
    """Log format: 'json' or 'text'."""

    @classmethod
    def from_env(cls) -> "GateConfig":
        """
        Create configuration from environment variables.

        ROUTEGATE_VALIDATE_MATCHERS  "0"/"false"/"no" disables (default: on)
        ROUTEGATE_LOG_LEVEL          Logging level (default: WARNING)
        ROUTEGATE_LOG_FORMAT         text or json (default: text)
        """
        validate = os.getenv("ROUTEGATE_VALIDATE_MATCHERS", "1")
        return cls(
            validate_matchers=validate.strip().lower() not in ("0", "false", "no", "off"),
            log_level=os.getenv("ROUTEGATE_LOG_LEVEL", "WARNING").upper(),
            log_format=os.getenv("ROUTEGATE_LOG_FORMAT", "text").lower(),
        )

    def validate(self) -> None:
        """Validate configuration values. Fails fast at startup."""
        if self.log_level.upper() not in LOG_LEVELS:
            raise ValueError(
                f"Invalid log_level: {self.log_level}. Must be one of {', '.join(LOG_LEVELS)}."
            )

        if self.log_format not in LOG_FORMATS:
            raise ValueError(f"Invalid log_format: {self.log_format}. Must be 'text' or 'json'.")


class JsonFormatter(logging.Formatter):
    """
    Formats each record as one JSON object per line.

        {"time": "2024-01-01 12:00:00", "level": "ERROR",
         "logger": "routegate.matching.validation", "message": "..."}
    """

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "time": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            entry["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(entry)


def setup_logging(config: GateConfig) -> None:
    """Configure logging based on config."""
    level = getattr(logging, config.log_level.upper(), logging.WARNING)

    handler = logging.StreamHandler()
    if config.log_format == "json":
        handler.setFormatter(JsonFormatter(datefmt=DATE_FORMAT))
    else:
        handler.setFormatter(logging.Formatter(TEXT_FORMAT, datefmt=DATE_FORMAT))

    logging.basicConfig(level=level, handlers=[handler])

    logging.getLogger("routegate").setLevel(level)
