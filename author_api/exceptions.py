"""
Author API: Custom Exception Hierarchy
========================================

What:  Application-specific exceptions for the error scenarios of the API.
How:   Each exception carries a message and an optional context dict.
       Global exception handlers (registered in main.py) turn them into
       ``{"error": <message>}`` responses with the matching status code.
Who:   Raised by the service layer; caught by the global handlers.

Exception Hierarchy:
    AuthorApiError (base)
    ├── ValidationError   → 400 Bad Request
    ├── NotFoundError     → 404 Not Found
    └── StorageError      → 500 Internal Server Error
"""

from typing import Any, Dict, Optional


class AuthorApiError(Exception):
    """
    Base exception for all Author API errors.

    Attributes:
        message:  Error description returned in the response body
        context:  Additional debug info (logged, not returned to the client)
    """

    status_code = 500

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(AuthorApiError):
    """
    Raised when client input fails validation.

    When:  Missing or oversized field, malformed id, unparseable body.
    HTTP:  400 Bad Request. Never reaches the storage layer.
    """

    status_code = 400

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class NotFoundError(AuthorApiError):
    """
    Raised when a requested row does not exist.

    The storage layer reports absence as ``None``; the service converts that
    into this exception so the handler layer can choose the status code.
    """

    status_code = 404

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[Any] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id is not None:
            message = f"{resource} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id is not None:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)
        self.resource_id = resource_id


class StorageError(AuthorApiError):
    """
    Raised when a database statement fails.

    The message names the operation and includes the underlying cause,
    e.g. ``"error creating author: <cause>"``. For SQLAlchemy errors the cause
    is the DBAPI exception (``exc.orig``), so the statement text and bound
    parameters stay out of the message. The original exception is chained as
    ``__cause__`` and logged in full by the service.
    """

    status_code = 500

    def __init__(
        self,
        operation: str,
        cause: Optional[BaseException] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"error {operation}"
        if cause is not None:
            message = f"{message}: {getattr(cause, 'orig', None) or cause}"
        ctx = context or {}
        if cause is not None:
            ctx["original_error"] = type(cause).__name__
        super().__init__(message=message, context=ctx)
        self.operation = operation
