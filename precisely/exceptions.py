"""
Precisely Documents: Error Kinds and Exception Hierarchy
=========================================================

What:  The closed set of domain failures and the exceptions that carry them.
How:   Every application exception has a `kind` drawn from `ErrorKind`.
       Services and repositories raise; the HTTP layer is the only place that
       maps a kind to a status code (see `precisely.main`).
Who:   Raised by the validator, the repository and the service.

Exception Hierarchy:
    PreciselyError (base)
    ├── ValidationError
    │   ├── InvalidTitleError    kind=INVALID_TITLE       → 422
    │   └── InvalidSigneeError   kind=INVALID_SIGNEE      → 422
    ├── NotFoundError            kind=NOT_FOUND           → 404
    └── PersistenceError         kind=PERSISTENCE_FAILURE → 500

    Malformed requests (bad JSON, non-numeric id) never reach this hierarchy:
    FastAPI rejects them first and the HTTP layer answers 400.
"""

import enum
from typing import Any, Dict, Optional


class ErrorKind(str, enum.Enum):
    """Closed enumeration of domain failure kinds."""

    INVALID_TITLE = "invalid_title"
    INVALID_SIGNEE = "invalid_signee"
    NOT_FOUND = "not_found"
    PERSISTENCE_FAILURE = "persistence_failure"


class PreciselyError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        kind:     The `ErrorKind` the HTTP layer switches on.
        message:  Client-facing description, returned in the envelope.
        context:  Debug details for server-side logs only.
    """

    kind: ErrorKind = ErrorKind.PERSISTENCE_FAILURE

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(PreciselyError):
    """A document failed the business rule for a required field."""

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


class InvalidTitleError(ValidationError):
    """Title is empty after trimming."""

    kind = ErrorKind.INVALID_TITLE

    def __init__(self, context: Optional[Dict[str, Any]] = None):
        super().__init__(
            message="title had empty value, expect a valid one",
            field="title",
            context=context,
        )


class InvalidSigneeError(ValidationError):
    """Signee is empty after trimming."""

    kind = ErrorKind.INVALID_SIGNEE

    def __init__(self, context: Optional[Dict[str, Any]] = None):
        super().__init__(
            message="signee had empty value, expect a valid one",
            field="signee",
            context=context,
        )


class NotFoundError(PreciselyError):
    """
    Raised when no row matches the requested identifier.

    Also raised by the service's existence pre-check ahead of update and
    delete, so those operations report "not found" instead of silently
    affecting zero rows.
    """

    kind = ErrorKind.NOT_FOUND

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


class PersistenceError(PreciselyError):
    """
    Raised when the store fails for any reason other than a missing row.

    Connectivity loss, constraint violations and SQL errors all land here
    without finer classification. The client sees only `message`; the
    driver error type goes to `context` for the logs.
    """

    kind = ErrorKind.PERSISTENCE_FAILURE

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
