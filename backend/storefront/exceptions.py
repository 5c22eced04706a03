"""
Storefront Backend: Custom Exception Hierarchy
===============================================

What:  Application-specific exceptions for the error outcomes of the API.
How:   Each exception carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return structured JSON error responses with correct HTTP status codes.
Who:   Raised by the persistence gateway and the routes; caught by handlers.

Exception Hierarchy:
    StorefrontError (base)
    ├── ValidationError          → 400 Bad Request (required identifier missing)
    ├── NotFoundError            → 404 Not Found
    └── DatabaseError            → 500 Internal Server Error (query failure)
        └── PartialWriteError    → 500 Internal Server Error (multi-step write cut short)

Not-found is NOT an exception inside the gateway: lookups return None and
the routes turn that into NotFoundError. A missing order and an order with
zero line items must stay distinguishable.
"""

from typing import Any, Dict, Optional


class StorefrontError(Exception):
    """
    Base exception for all Storefront application errors.

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


class ValidationError(StorefrontError):
    """
    Raised when a request lacks a required identifier.

    HTTP:    400 Bad Request
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


class NotFoundError(StorefrontError):
    """
    Raised by the routes when a single-entity lookup returned None.

    HTTP:    404 Not Found
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


class DatabaseError(StorefrontError):
    """
    Raised when the relational store rejects or fails a query.

    What:    Constraint violation, connection loss, malformed input.
    HTTP:    500 Internal Server Error

    The triggering driver/SQLAlchemy exception is chained as __cause__.
    There is no retry and no local recovery; the first failure propagates.
    The message returned to the client is always generic.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class PartialWriteError(DatabaseError):
    """
    Raised when a multi-step write fails after some steps were committed.

    What:    insert-order committed the header (and maybe some items) before
             a later item insert failed; or delete-order removed the items
             but failed on the header.
    HTTP:    500 Internal Server Error

    Committed steps are NOT rolled back. The caller decides on any
    compensating action (e.g. calling delete-order for the same id).

    Attributes:
        completed_steps: Number of statements that were committed
        total_steps:     Number of statements in the plan
    """

    def __init__(
        self,
        order_id: str,
        completed_steps: int,
        total_steps: int,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx.update(
            order_id=order_id,
            completed_steps=completed_steps,
            total_steps=total_steps,
        )
        super().__init__(
            message=(
                f"Write for order '{order_id}' failed after {completed_steps} "
                f"of {total_steps} steps"
            ),
            context=ctx,
        )
        self.order_id = order_id
        self.completed_steps = completed_steps
        self.total_steps = total_steps
