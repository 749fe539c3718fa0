"""
Exercise Tracker Backend — Custom Exception Hierarchy
======================================================

What:  Application-specific exceptions raised by the service layer.
Why:   Services stay free of HTTP concerns; the global handlers in main.py
       turn every one of these into the same response shape.
How:   Each exception carries a human-readable message and an optional
       context dict (logged, never returned to the client).

Exception Hierarchy:
    ExerciseTrackerError (base)
    ├── ValidationError     → input missing or could not be coerced
    ├── NotFoundError       → delete/update matched no record
    └── PersistenceError    → the database call itself failed

Every one of them is answered with HTTP 400 and the body
"Error: <message>". Callers cannot tell the causes apart by status code;
the distinction exists for logging and for tests.
"""

from typing import Any, Dict, Optional


class ExerciseTrackerError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message:  User-facing error description (returned in the API response)
        context:  Additional debug info (logged only)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(ExerciseTrackerError):
    """
    Raised when request input fails presence or coercion checks.

    When: a required field is missing, duration is not numeric, date is not
    ISO 8601, or a path id is not a valid identifier.
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


class NotFoundError(ExerciseTrackerError):
    """
    Raised when a delete or update matched no record.

    Get-by-id does NOT raise this: an absent record is answered with null.
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id:
            message = f"{resource} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class PersistenceError(ExerciseTrackerError):
    """
    Raised when a database operation fails.

    When: connection lost, constraint violation, driver error. The original
    exception type is kept in context under "original_error".
    """

    def __init__(
        self,
        message: str = "A database error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
