"""Paging primitives shared by the repository and the service."""

from dataclasses import dataclass, field
from typing import Generic, TypeVar

from catalog_host.domain.exceptions import InvalidPageRequestError

T = TypeVar("T")


@dataclass(frozen=True)
class PageRequest:
    """Zero-based page selection.

    Attributes:
        page_index: Page number (0-indexed).
        page_size: Items per page.
    """

    page_index: int
    page_size: int

    def __post_init__(self) -> None:
        if self.page_index < 0:
            raise InvalidPageRequestError(
                self.page_index, self.page_size, "page_index must be non-negative"
            )
        if self.page_size < 1:
            raise InvalidPageRequestError(
                self.page_index, self.page_size, "page_size must be positive"
            )

    @property
    def offset(self) -> int:
        """Rows to skip before the page starts."""
        return self.page_index * self.page_size

    @property
    def limit(self) -> int:
        """Get limit (alias for page_size)."""
        return self.page_size


@dataclass
class PaginatedItems(Generic[T]):
    """One page of rows plus the size of the whole filtered set.

    Attributes:
        data: Rows on this page.
        total_count: Rows matching the filter, regardless of paging.
    """

    data: list[T] = field(default_factory=list)
    total_count: int = 0
