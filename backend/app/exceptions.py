"""
Vidly Backend — Custom Exception Hierarchy
===========================================

What:  Application-specific exceptions for each failure class of a request.
Why:   Services and dependencies raise these instead of building responses;
       global handlers registered in main.py turn them into JSON errors with
       the right status code.
How:   Each exception carries a user-safe message and an optional context
       dict. Context is logged; only selected keys reach the client.

Exception Hierarchy:
    VidlyError (base)              → 500
    ├── ValidationError            → 400 Bad Request (malformed body, bad reference)
    │   └── BusinessRuleError      → 400 Bad Request (e.g. movie not in stock)
    ├── InvalidTokenError          → 400 Bad Request (token failed verification)
    ├── AuthenticationError        → 401 Unauthorized (no token)
    ├── PermissionDeniedError      → 403 Forbidden (not an admin)
    ├── NotFoundError              → 404 Not Found (missing entity or malformed id)
    └── DatabaseError              → 500 Internal Server Error

No error is retried: every one of these is terminal for its request.
"""

from typing import Any, Dict, List, Optional


class VidlyError(Exception):
    """
    Base exception for all application errors.

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


class ValidationError(VidlyError):
    """
    Raised when client input fails validation.

    When:  Body violates field rules, a referenced id does not resolve,
           an email is already registered, credentials do not match.
    HTTP:  400 Bad Request

    Example response:
        {
            "error": "validation_error",
            "message": "\"name\" String should have at least 3 characters",
            "details": {"field": "name", "errors": [...]}
        }
    """

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        errors: Optional[List[str]] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        if errors:
            ctx["errors"] = errors
        super().__init__(message=message, context=ctx)
        self.field = field
        self.errors = errors or [message]


class BusinessRuleError(ValidationError):
    """
    Raised when well-formed input breaks a business rule.

    When:  Renting a movie whose numberInStock is 0.
    HTTP:  400 Bad Request
    """


class InvalidTokenError(VidlyError):
    """
    Raised when an auth token is present but cannot be verified.

    HTTP:  400 Bad Request, to match the existing API clients.
    """

    def __init__(
        self,
        message: str = "Invalid token.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class AuthenticationError(VidlyError):
    """Raised when a protected route is called without a token. HTTP 401."""

    def __init__(
        self,
        message: str = "Access denied. No token provided.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class PermissionDeniedError(VidlyError):
    """Raised when an authenticated caller lacks the admin flag. HTTP 403."""

    def __init__(
        self,
        message: str = "Access denied.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class NotFoundError(VidlyError):
    """
    Raised when a requested resource does not exist.

    When:  GET/PUT/DELETE on an id with no matching row, or on an id that is
           not shaped like an ObjectId at all.
    HTTP:  404 Not Found

    SQLAlchemy returns None for missing rows; services convert that None
    into this exception so HTTP concerns stay out of the service logic.
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        message: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        if message is None:
            message = f"The {resource} with the given ID was not found."
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class DatabaseError(VidlyError):
    """
    Raised when database operations fail unexpectedly.

    When:  Connection lost mid-query, constraint violation, deadlock, etc.
    HTTP:  500 Internal Server Error

    Security Note:
        The message returned to the client is always generic. Query text and
        driver errors are logged server-side only.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
