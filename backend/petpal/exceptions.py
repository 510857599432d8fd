"""
PetPal Backend — Custom Exception Hierarchy
=============================================

What:  Application-specific exceptions for the different failure scenarios.
How:   Each exception carries a user-facing message and an optional context
       dict. Global exception handlers (registered in main.py) turn them into
       the JSON failure envelope; web routes catch them and re-render a page.
Who:   Raised by services; caught by global handlers or web route handlers.

Exception Hierarchy:
    PetPalError (base)
    ├── ValidationError   → 400 Bad Request (client can fix)
    ├── NotFoundError     → 404 Not Found
    ├── DuplicateError    → 409 Conflict (username/email already taken)
    └── DatabaseError     → 500 Internal Server Error
"""

from typing import Any, Dict, Optional


class PetPalError(Exception):
    """
    Base exception for all PetPal application errors.

    Attributes:
        message:  User-facing error description (safe to return in a response)
        context:  Additional debug info (logged, returned only for validation errors)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(PetPalError):
    """
    Raised when client input fails a business rule.

    When:    Missing name/species, species outside the allowed set,
             stat outside [0, 100], blank username.
    HTTP:    400 Bad Request

    Example response:
        {
            "success": false,
            "error": "validation_error",
            "message": "Invalid species. Must be one of: dragon, cat, ...",
            "details": {"field": "species", "allowed": ["dragon", "cat", ...]}
        }
    """

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


class NotFoundError(PetPalError):
    """
    Raised when a requested record does not exist (or is not visible to the caller).

    When:    Unknown or malformed pet id, pet owned by another user (web layer),
             unknown username on create-by-username.
    HTTP:    404 Not Found
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        message: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message or f"{resource} not found", context=ctx)
        self.resource = resource
        self.resource_id = resource_id


class DuplicateError(PetPalError):
    """
    Raised when a unique field (username, email) is already taken.

    HTTP:    409 Conflict on the API; the registration page re-renders instead.
    """

    def __init__(
        self,
        message: str = "Username or email already exists",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class DatabaseError(PetPalError):
    """
    Raised when a database operation fails unexpectedly.

    HTTP:    500 Internal Server Error

    The response message is always generic; the driver error is logged
    server-side only.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
