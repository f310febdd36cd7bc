"""
Booking error kinds and the Result type returned by every core operation.

Inside the core, failures are raised as BookingError subclasses. The
operation boundary converts them into Result objects so callers (views,
tasks, payment callbacks) branch on ``result.ok`` / ``result.error.kind``
instead of catching exceptions.
"""

from __future__ import annotations

import functools
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ErrorKind(str, Enum):
    INVALID_DATE_RANGE = "InvalidDateRange"
    LISTING_UNAVAILABLE = "ListingUnavailable"
    INVALID_TRANSITION = "InvalidTransition"
    NOT_FOUND = "NotFound"
    STALE_WRITE = "StaleWrite"
    INVALID_INPUT = "InvalidInput"


class BookingError(Exception):
    kind: ErrorKind

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __repr__(self):
        return f"{self.__class__.__name__}({self.message!r})"


class InvalidDateRange(BookingError):
    kind = ErrorKind.INVALID_DATE_RANGE


class ListingUnavailable(BookingError):
    kind = ErrorKind.LISTING_UNAVAILABLE


class InvalidTransition(BookingError):
    kind = ErrorKind.INVALID_TRANSITION


class NotFound(BookingError):
    kind = ErrorKind.NOT_FOUND


class StaleWrite(BookingError):
    """A conditional update matched no row: another writer moved the booking first."""
    kind = ErrorKind.STALE_WRITE


class InvalidInput(BookingError):
    """A caller-supplied value the core cannot act on (e.g. an unknown cancellation actor)."""
    kind = ErrorKind.INVALID_INPUT


@dataclass(frozen=True)
class Result(Generic[T]):
    value: T | None = None
    error: BookingError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T) -> "Result[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: BookingError) -> "Result[T]":
        return cls(error=error)

    def unwrap(self) -> T:
        """Return the value or re-raise the error (handy in tests and scripts)."""
        if self.error is not None:
            raise self.error
        return self.value  # type: ignore[return-value]


def returns_result(func: Callable[..., T]) -> Callable[..., Result[T]]:
    """Wrap an operation so BookingError comes back as Result.failure."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Result[T]:
        try:
            return Result.success(func(*args, **kwargs))
        except BookingError as exc:
            logger.info(f"{func.__name__} rejected: {exc.kind.value}: {exc.message}")
            return Result.failure(exc)

    return wrapper
