"""
Petora Backend - Custom Exception Hierarchy
============================================

What:  Application-specific exceptions for the error taxonomy of the API.
How:   Each exception class carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return JSON error responses with the matching HTTP status code.
Who:   Raised by the store, services and the access guard; caught by global handlers.
When:  During request processing when a request cannot be completed.

Exception Hierarchy:
    PetoraError (base)
    ├── ValidationError          → 400 Bad Request (missing field, enum mismatch, bad upload)
    ├── DuplicateKeyError        → 400 Bad Request (unique constraint)
    ├── NotFoundError            → 404 Not Found
    ├── AuthenticationError      → 401 Unauthorized (bad credentials, missing/invalid token)
    ├── AuthorizationError       → 403 Forbidden (valid session, insufficient role)
    ├── FileStorageError         → 500 Internal Server Error
    └── DatabaseError            → 500 Internal Server Error (store failure)

No error is retried; each one maps to exactly one response.
"""

from typing import Any, Dict, List, Optional


class PetoraError(Exception):
    """
    Base exception for all Petora application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional info for logs and the response `details` field
    """

    status_code = 500
    error_code = "server_error"

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(PetoraError):
    """
    Raised when client input fails validation.

    When:    Missing required field, enum value outside the allowed set,
             malformed reference, missing or non-image upload.
    HTTP:    400 Bad Request

    Example response:
        {
            "error": "validation_error",
            "message": "Pet validation failed: name: Field required",
            "details": {"violations": [{"field": "name", "message": "Field required"}]}
        }
    """

    status_code = 400
    error_code = "validation_error"

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        violations: Optional[List[Dict[str, str]]] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        if violations:
            ctx["violations"] = violations
        super().__init__(message=message, context=ctx)
        self.field = field
        self.violations = violations or []


class DuplicateKeyError(PetoraError):
    """
    Raised when a create would break a unique constraint (User.email).

    HTTP:    400 Bad Request, but reported separately from ValidationError so
             callers can tell "already exists" apart from "malformed".
    """

    status_code = 400
    error_code = "duplicate_key"

    def __init__(
        self,
        message: str = "A record with the same unique value already exists.",
        key: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if key:
            ctx["key"] = key
        super().__init__(message=message, context=ctx)
        self.key = key


class NotFoundError(PetoraError):
    """
    Raised when a requested record does not exist.

    When:    GET/PUT/DELETE /api/pets/{id} with an unknown or malformed id,
             login with an unknown email.
    HTTP:    404 Not Found
    """

    status_code = 404
    error_code = "not_found"

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        message: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        if message is None:
            message = f"{resource.capitalize()} not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class AuthenticationError(PetoraError):
    """
    Raised when the caller cannot be authenticated.

    When:    Password mismatch at login; missing, malformed, expired or
             wrongly-signed bearer token.
    HTTP:    401 Unauthorized
    """

    status_code = 401
    error_code = "not_authenticated"

    def __init__(
        self,
        message: str = "Not authorized",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class AuthorizationError(PetoraError):
    """
    Raised when a valid session lacks the role an action requires.

    HTTP:    403 Forbidden
    """

    status_code = 403
    error_code = "not_authorized"

    def __init__(
        self,
        message: str = "Not authorized as an admin",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class FileStorageError(PetoraError):
    """
    Raised when an uploaded image cannot be written to the upload root.

    HTTP:    500 Internal Server Error
    """

    def __init__(
        self,
        message: str = "File storage operation failed",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class DatabaseError(PetoraError):
    """
    Raised when a MongoDB operation fails unexpectedly.

    When:    Server unreachable, timeout, write concern error.
    HTTP:    500 Internal Server Error

    The message returned to the client is generic; the driver error is kept
    in `context` and only logged server-side.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
