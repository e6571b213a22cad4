"""
Verse Graph API — Custom Exception Hierarchy
==============================================

What:  Defines application-specific exceptions for different error scenarios.
How:   Each exception class carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return structured JSON error responses with correct HTTP status codes.
Who:   StoreError is raised by the store access layer; NotFoundError and
       ConflictError are raised by the resource router after matching on the
       store error kind.

Exception Hierarchy:
    VerseGraphError (base)
    ├── NotFoundError    → 404 Not Found
    ├── ConflictError    → 409 Conflict (duplicate key or stale revision)
    ├── DatabaseError    → 500 Internal Server Error
    └── StoreError       → tagged store outcome (NOT_FOUND, DUPLICATE,
                           CONFLICT, OTHER); untranslated ones become 500
"""

import enum
from typing import Any, Dict, Optional


class VerseGraphError(Exception):
    """
    Base exception for all Verse Graph application errors.

    Attributes:
        message:  Error description returned in the API response
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


class NotFoundError(VerseGraphError):
    """
    Raised when a requested record does not exist.

    When:    GET/PUT/PATCH/DELETE /{resource}/{key} with an unknown key.
    HTTP:    404 Not Found

    The message is the store's own text (e.g. "document not found") so the
    client sees exactly what ArangoDB reported.
    """

    def __init__(
        self,
        message: str = "The requested record was not found",
        resource: Optional[str] = None,
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if resource:
            ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class ConflictError(VerseGraphError):
    """
    Raised when a write collides with existing state.

    When:    POST with a `_key` that already exists (unique constraint), or
             PUT/PATCH carrying a `_rev` that is no longer current.
    HTTP:    409 Conflict

    No retry happens server-side; the client re-reads and tries again.
    """

    def __init__(
        self,
        message: str = "The record conflicts with the current state",
        resource: Optional[str] = None,
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if resource:
            ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class DatabaseError(VerseGraphError):
    """
    Raised when the database cannot be reached or configured.

    When:    Provisioning or connection setup fails.
    HTTP:    500 Internal Server Error (details logged server-side only)
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class StoreErrorKind(str, enum.Enum):
    """Outcome tags for failed store operations."""

    NOT_FOUND = "not_found"
    DUPLICATE = "duplicate"
    CONFLICT = "conflict"
    OTHER = "other"


class StoreError(VerseGraphError):
    """
    A failed store primitive, tagged with what went wrong.

    Raised by CollectionStore implementations for every failure so callers
    match on `kind` instead of inspecting driver-specific error numbers.

    Attributes:
        kind:        StoreErrorKind tag
        error_code:  Native ArangoDB error number when known (e.g. 1202)
    """

    def __init__(
        self,
        kind: StoreErrorKind,
        message: str,
        error_code: Optional[int] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["kind"] = kind.value
        if error_code is not None:
            ctx["error_code"] = error_code
        super().__init__(message=message, context=ctx)
        self.kind = kind
        self.error_code = error_code

    def __repr__(self) -> str:
        return f"StoreError(kind={self.kind.value!r}, error_code={self.error_code!r}, message={self.message!r})"
