"""Custom exceptions for the Affine knowledge-base adapter.

All exceptions are namespaced to avoid shadowing Python builtins
(TransportError rather than ConnectionError, and so on). Every failure a
tool call can hit maps onto exactly one of these classes; the tool converts
them into an error ToolResult rather than letting them cross its boundary.
"""

from typing import Any


class KnowledgeBaseError(Exception):
    """Base exception for all adapter errors.

    Attributes:
        message: Human-readable error description.
        cause: Original exception that caused this error (optional).
    """

    def __init__(self, message: str, cause: Exception | None = None) -> None:
        """Initialize adapter error.

        Args:
            message: Human-readable error description.
            cause: Original exception that caused this error.
        """
        self.message = message
        self.cause = cause
        super().__init__(message)
        if cause is not None:
            self.__cause__ = cause


class ArgumentValidationError(KnowledgeBaseError):
    """Raised when a tool argument is missing or malformed.

    Detected before any network call is made.
    """

    def __init__(
        self,
        message: str,
        field: str,
        action: str | None = None,
        value: Any | None = None,
    ) -> None:
        """Initialize validation error.

        Args:
            message: Error description
            field: The argument that failed validation
            action: The action being validated, if known
            value: The invalid value
        """
        self.field = field
        self.action = action
        self.value = value
        super().__init__(message)


class TransportError(KnowledgeBaseError):
    """Raised when the HTTP exchange itself fails.

    Covers network failures, timeouts, non-2xx statuses and bodies that
    cannot be decoded as the expected JSON envelope.
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        body: str | None = None,
        cause: Exception | None = None,
    ) -> None:
        """Initialize transport error.

        Args:
            message: Error description
            status_code: HTTP status code if a response was received
            body: Raw response body text if available
            cause: Underlying httpx or JSON exception
        """
        self.status_code = status_code
        self.body = body
        super().__init__(message, cause)


class ApplicationError(KnowledgeBaseError):
    """Raised when the service answers but reports a domain-level failure.

    The remote message is kept verbatim in the exception text.
    """

    def __init__(self, message: str, code: int | None = None) -> None:
        """Initialize application error.

        Args:
            message: Error description including the remote message
            code: Remote error code (JSON-RPC) if provided
        """
        self.code = code
        super().__init__(message)


class ExtractionError(KnowledgeBaseError):
    """Raised when a success payload matches none of the expected shapes."""
