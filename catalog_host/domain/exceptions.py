"""Domain exceptions.

Errors the catalog core raises instead of returning an absent result.
Expected conditions (missing rows, unknown update properties) are never
raised; they travel as ``NotFound`` results. Only caller mistakes and
infrastructure failures end up here.
"""

from typing import Any


class DomainError(Exception):
    """Base class for all domain exceptions.

    All domain errors should inherit from this class to allow
    catching domain-specific errors at the application layer.
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """Initialize domain error.

        Args:
            message: Human-readable error message.
            details: Optional dictionary with additional error context.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}


# ============================================================================
# Paging Errors
# ============================================================================


class InvalidPageRequestError(DomainError):
    """Raised when a page index or page size is out of range."""

    def __init__(self, page_index: int, page_size: int, reason: str) -> None:
        """Initialize invalid page request error.

        Args:
            page_index: Requested zero-based page index.
            page_size: Requested page size.
            reason: Explanation of why the request is invalid.
        """
        super().__init__(
            f"Invalid page request (page_index={page_index}, page_size={page_size}): {reason}",
            details={"page_index": page_index, "page_size": page_size, "reason": reason},
        )


# ============================================================================
# Store Errors
# ============================================================================


class StoreError(DomainError):
    """Base class for persistence-related errors."""

    pass


class StoreUnavailableError(StoreError):
    """Raised when the store cannot be reached or times out.

    Distinguishes "could not ask" from "nothing there": callers get this
    exception, never an absent result.
    """

    def __init__(self, operation: str, cause: str) -> None:
        """Initialize store unavailable error.

        Args:
            operation: Repository operation that failed.
            cause: Underlying error description.
        """
        super().__init__(
            f"Catalog store unavailable during '{operation}': {cause}",
            details={"operation": operation, "cause": cause},
        )
