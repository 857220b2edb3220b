"""
Logging configuration for hahaha.

Configures structlog for human-readable text logging (default) with optional JSON format.
Supports colored console output.
"""

import logging
import sys
from typing import Any

import structlog
from structlog.types import EventDict

# Color codes for terminal output
COLORS = {
    "debug": "\033[36m",     # Cyan
    "info": "\033[32m",      # Green
    "warning": "\033[33m",   # Yellow
    "error": "\033[31m",     # Red
    "critical": "\033[35m",  # Magenta
    "reset": "\033[0m",      # Reset
}

# Third-party loggers that are only interesting when something goes wrong
QUIET_LOGGERS = ("kubernetes", "urllib3", "websocket", "uvicorn.access")


def add_color(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """
    Add ANSI color codes to log level for better console readability.
    """
    level_color = COLORS.get(method_name, COLORS["reset"])

    if "level" in event_dict:
        event_dict["level"] = f"{level_color}{event_dict['level'].upper()}{COLORS['reset']}"

    return event_dict


def human_readable_renderer(
    logger: Any,
    method_name: str,
    event_dict: EventDict
) -> str:
    """
    Human-readable log format renderer.

    Format: [timestamp] [level] [logger] message key=value key2=value2
    Example: [2025-01-14 10:30:45] [INFO] [hahaha.application.services.dispatcher] Sent HTTP signal container=istio-proxy
    """
    timestamp = event_dict.pop("timestamp", "")
    level = event_dict.pop("level", "INFO").upper()
    logger_name = event_dict.pop("logger_name", event_dict.pop("logger", "unknown"))
    message = event_dict.pop("event", "")

    parts = []

    if timestamp:
        parts.append(f"[{timestamp}]")

    # Level with color (added by add_color processor)
    parts.append(f"[{level}]")

    if logger_name != "root":
        parts.append(f"[{logger_name}]")

    parts.append(str(message))

    # Key-value pairs, sorted for consistency
    for key, value in sorted(event_dict.items()):
        if key in ("exc_info", "stack_info", "exception"):
            continue
        if isinstance(value, (str, int, float, bool)):
            parts.append(f"{key}={value}")
        else:
            parts.append(f"{key}={repr(value)}")

    log_line = " ".join(parts)

    # format_exc_info has already rendered the traceback into "exception"
    exception = event_dict.get("exception")
    if exception:
        log_line += "\n" + exception

    return log_line


def configure_logging(
    log_level: str = "INFO",
    log_format: str = "text",
) -> None:
    """
    Configure structlog for the application.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: Format type - "text" (default) or "json"
    """
    use_json = log_format.lower() == "json"

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, log_level.upper(), logging.INFO),
        force=True,
    )
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    processors = [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="%Y-%m-%d %H:%M:%S"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if use_json:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(add_color)
        processors.append(human_readable_renderer)

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str = None, **context) -> structlog.stdlib.BoundLogger:
    """
    Get a configured logger instance.

    Args:
        name: Logger name (usually __name__)
        **context: Additional context to bind to the logger

    Returns:
        Configured logger instance

    Example:
        logger = get_logger(__name__)
        logger.info("Shut down sidecar", pod="job-7", container="istio-proxy")
    """
    if name:
        return structlog.get_logger(name, **context)
    return structlog.get_logger(**context)

