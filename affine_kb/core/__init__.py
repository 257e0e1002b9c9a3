"""Core module - Configuration, logging, HTTP clients, and shared utilities.

Exports:
    - Settings, TransportKind, get_settings: Pydantic Settings configuration
    - configure_logging, get_logger: Structured logging (structlog)
    - HTTPClientFactory, build_default_headers: HTTP clients
    - Exception classes: KnowledgeBaseError, TransportError, etc.
"""

from affine_kb.core.config import Settings, TransportKind, get_settings
from affine_kb.core.constants import (
    DEFAULT_LIMIT,
    DEFAULT_TIMEOUT,
    MAX_LIMIT,
    MIN_LIMIT,
    TOOL_NAME,
)
from affine_kb.core.exceptions import (
    ApplicationError,
    ArgumentValidationError,
    ExtractionError,
    KnowledgeBaseError,
    TransportError,
)
from affine_kb.core.http import HTTPClientFactory, build_default_headers
from affine_kb.core.logging import configure_logging, get_logger


__all__ = [
    # Constants
    "DEFAULT_LIMIT",
    "DEFAULT_TIMEOUT",
    "MAX_LIMIT",
    "MIN_LIMIT",
    "TOOL_NAME",
    # Exceptions
    "ApplicationError",
    "ArgumentValidationError",
    "ExtractionError",
    # HTTP Clients
    "HTTPClientFactory",
    "KnowledgeBaseError",
    # Configuration
    "Settings",
    "TransportError",
    "TransportKind",
    "build_default_headers",
    # Logging
    "configure_logging",
    "get_logger",
    "get_settings",
]
