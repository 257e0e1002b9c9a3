"""Structured logging configuration.

Features:
- JSON-formatted log output for production
- Human-readable format for development
- Service context (service name, environment, transport) on every entry
- Configurable output stream (stderr when stdout carries MCP traffic)
"""

import logging
import sys
from typing import Any, TextIO

import structlog
from structlog.types import Processor

from affine_kb.core.config import get_settings


_configured = False

_CREDENTIAL_KEYS = frozenset({"api_key", "authorization", "token"})
_MASK = "***"


def add_service_context(
    logger: logging.Logger,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Add service context to all log entries.

    Args:
        logger: The wrapped logger object.
        method_name: The name of the method called on the logger.
        event_dict: The event dictionary to process.

    Returns:
        Updated event dictionary with service context.
    """
    settings = get_settings()
    event_dict["service"] = settings.service_name
    event_dict["environment"] = settings.environment
    # transports bind their own name under "transport"
    event_dict.setdefault("transport", getattr(settings.transport, "value", settings.transport))
    return event_dict


def mask_credentials(
    logger: logging.Logger,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Replace credential-bearing fields with a fixed mask.

    Applies to top-level keys only; callers never bind whole header maps.
    """
    for key in _CREDENTIAL_KEYS & event_dict.keys():
        event_dict[key] = _MASK
    return event_dict


def configure_logging(stream: TextIO | None = None) -> None:
    """Configure structured logging for the application.

    In development: Human-readable colored output
    In production: JSON-formatted structured logs

    Args:
        stream: Output stream. Defaults to stdout; the MCP stdio server
            passes stderr so log lines never corrupt the protocol stream.
    """
    global _configured
    if _configured:
        return

    settings = get_settings()
    output = stream or sys.stdout
    level = logging.getLevelName(settings.log_level.upper())

    use_json = settings.environment in ("production", "staging")

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        add_service_context,
        mask_credentials,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if use_json:
        processors: list[Processor] = [
            *shared_processors,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors = [
            *shared_processors,
            structlog.dev.ConsoleRenderer(colors=output.isatty()),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=output),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=output,
        level=level,
    )

    # Reduce noise from third-party libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

    _configured = True


def get_logger(name: str | None = None) -> structlog.BoundLogger:
    """Get a structured logger instance.

    Args:
        name: Optional logger name (module name recommended).

    Returns:
        Configured structlog BoundLogger instance.

    Example:
        ```python
        from affine_kb.core.logging import get_logger

        logger = get_logger(__name__)
        logger.info("Dispatching action", action="search", transport="graphql")
        ```
    """
    return structlog.get_logger(name)


# Convenience type alias
Logger = structlog.BoundLogger
