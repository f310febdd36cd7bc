"""
Common Value Objects

Value objects used across the booking and finance apps:
- Money: Represents monetary amounts with currency
- DateRange: Represents a stay window (check-in to check-out)
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterator

SUPPORTED_CURRENCIES = frozenset({"KRW", "USD", "EUR", "JPY"})

# Currencies without minor units
ZERO_DECIMAL_CURRENCIES = frozenset({"KRW", "JPY"})


def quantize_amount(amount: Decimal, currency: str) -> Decimal:
    """Round an amount to the minor unit of ``currency`` (cents unless zero-decimal)."""
    exponent = Decimal("1") if currency in ZERO_DECIMAL_CURRENCIES else Decimal("0.01")
    return Decimal(amount).quantize(exponent, rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class Money:
    """
    Money value object

    Represents a non-negative monetary amount with currency.
    Immutable; arithmetic between different currencies is refused.
    """
    amount: Decimal
    currency: str = "KRW"

    def __post_init__(self):
        if not isinstance(self.amount, Decimal):
            object.__setattr__(self, "amount", Decimal(str(self.amount)))
        if self.amount < 0:
            raise ValueError("Amount cannot be negative")
        if self.currency not in SUPPORTED_CURRENCIES:
            raise ValueError(f"Unsupported currency: {self.currency}")

    @classmethod
    def zero(cls, currency: str) -> "Money":
        return cls(Decimal("0"), currency)

    def _check_currency(self, other: "Money") -> None:
        if not isinstance(other, Money):
            raise TypeError("Money arithmetic requires Money operands")
        if self.currency != other.currency:
            raise ValueError(f"Currency mismatch: {self.currency} and {other.currency}")

    def __add__(self, other: "Money") -> "Money":
        self._check_currency(other)
        return Money(self.amount + other.amount, self.currency)

    def __sub__(self, other: "Money") -> "Money":
        """Subtract, flooring at zero (a fee never makes a payout negative)."""
        self._check_currency(other)
        return Money(max(self.amount - other.amount, Decimal("0")), self.currency)

    def __mul__(self, factor: int | Decimal) -> "Money":
        if not isinstance(factor, (int, Decimal)):
            raise TypeError("Can only multiply Money by int or Decimal")
        return Money(self.amount * factor, self.currency)

    def quantized(self) -> "Money":
        """Round to the currency's minor unit."""
        return Money(quantize_amount(self.amount, self.currency), self.currency)

    def __str__(self):
        return f"{self.amount:,.2f} {self.currency}"


@dataclass(frozen=True)
class DateRange:
    """
    Date range value object

    Represents a range from start_date (inclusive) to end_date (exclusive).
    Used for stays, availability checks and calendar months.
    """
    start_date: date
    end_date: date

    def __post_init__(self):
        if self.start_date >= self.end_date:
            raise ValueError(f"Start date ({self.start_date}) must be before end date ({self.end_date})")

    def overlaps_with(self, other: "DateRange") -> bool:
        """
        Half-open overlap test: [a, b) and [c, d) overlap iff a < d and c < b.

        Adjacent ranges (one ends on the day the other starts) do not overlap.
        """
        return self.start_date < other.end_date and other.start_date < self.end_date

    def contains(self, check_date: date) -> bool:
        return self.start_date <= check_date < self.end_date

    def days(self) -> Iterator[date]:
        current = self.start_date
        while current < self.end_date:
            yield current
            current += timedelta(days=1)

    def __len__(self) -> int:
        """Number of nights in the range."""
        return (self.end_date - self.start_date).days

    def __str__(self):
        return f"{self.start_date.isoformat()} - {self.end_date.isoformat()}"
