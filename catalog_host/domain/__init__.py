"""Domain layer - results and exceptions shared by the catalog core.

Example usage:
    from catalog_host.domain import Found, NotFound, FailureReason

    result = await repository.get_by_id(42)
    if isinstance(result, Found):
        print(result.value.name)
    elif result.reason is FailureReason.NOT_FOUND:
        print("no such item")
"""

from catalog_host.domain.exceptions import (
    DomainError,
    InvalidPageRequestError,
    StoreError,
    StoreUnavailableError,
)
from catalog_host.domain.result import FailureReason, Found, NotFound, Result

__all__ = [
    # Results
    "FailureReason",
    "Found",
    "NotFound",
    "Result",
    # Exceptions
    "DomainError",
    "InvalidPageRequestError",
    "StoreError",
    "StoreUnavailableError",
]
