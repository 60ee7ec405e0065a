"""
Todo API - Custom Exception Hierarchy
======================================

What:  Application-specific exceptions for the error scenarios of the service.
How:   Each exception carries a user-facing message and an optional context
       dict. Handlers registered in main.py turn them into HTTP responses;
       context is logged server-side and never returned to the client.

Exception Hierarchy:
    TodoAPIError (base)      -> 500 Internal Server Error
    ├── ValidationError      -> 400 Bad Request
    ├── NotFoundError        -> 404 Not Found
    ├── DatabaseError        -> 500 Internal Server Error
    └── StoreInitError       -> fatal at startup (never reaches a client)
"""

from typing import Any, Dict, Optional


class TodoAPIError(Exception):
    """
    Base exception for all Todo API errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(TodoAPIError):
    """Raised when client input cannot be used (bad id, malformed body)."""

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


class NotFoundError(TodoAPIError):
    """
    Raised when a requested resource does not exist.

    The repository reports absence with None/False rather than raising; the
    route handlers convert that into this exception so the 404 mapping lives
    in one place.
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[Any] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id is not None:
            message = f"{resource.capitalize()} with id {resource_id} was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id is not None:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)
        self.resource_id = resource_id


class DatabaseError(TodoAPIError):
    """
    Raised when a storage operation fails (I/O error, lock timeout, corruption).

    The message returned to the client is always generic; the driver error is
    kept in `context` for the server log.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class StoreInitError(TodoAPIError):
    """
    Raised when the store cannot be opened or the schema cannot be ensured.

    Only raised during startup; the lifespan lets it propagate so the server
    exits before accepting requests.
    """

    def __init__(
        self,
        message: str = "Could not initialize the todo store",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
