"""Lookup results for single-row repository operations.

A repository call either finds what it was asked for (``Found``) or
reports why it could not (``NotFound`` with a ``FailureReason``).
Infrastructure failures are not part of this type; they are raised.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar, Union

T = TypeVar("T")


class FailureReason(str, Enum):
    """Why a single-row operation produced no value."""

    NOT_FOUND = "not_found"
    INVALID_PROPERTY = "invalid_property"
    INVALID_VALUE = "invalid_value"
    CONSTRAINT_VIOLATION = "constraint_violation"


@dataclass(frozen=True)
class Found(Generic[T]):
    """Successful lookup carrying its value."""

    value: T

    @property
    def is_found(self) -> bool:
        return True


@dataclass(frozen=True)
class NotFound:
    """Expected absence.

    Attributes:
        reason: Failure category.
        message: Human-readable context for logs.
    """

    reason: FailureReason = FailureReason.NOT_FOUND
    message: str = ""

    @property
    def is_found(self) -> bool:
        return False


Result = Union[Found[T], NotFound]
