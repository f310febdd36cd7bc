"""
Platform fee policies.

A fee policy is any callable ``(total_amount, currency) -> fee``. The
settlement engine subtracts the fee from the booking total to get the
amount payable to the host. Which policy is used by default is configured
with BOOKING_POLICY["FEE_POLICY"] (a dotted path).
"""

from __future__ import annotations

from decimal import Decimal
from typing import Callable

from django.utils.module_loading import import_string  # type: ignore

from shared.conf import policy_setting
from shared.domain.value_objects import quantize_amount

FeePolicy = Callable[[Decimal, str], Decimal]

HUNDRED = Decimal("100")


def no_fee(amount: Decimal, currency: str) -> Decimal:
    return Decimal("0")


def percentage_fee(percent: Decimal | str | int) -> FeePolicy:
    rate = Decimal(str(percent)) / HUNDRED

    def policy(amount: Decimal, currency: str) -> Decimal:
        return quantize_amount(amount * rate, currency)

    return policy


def fixed_fee(fixed: Decimal | str | int) -> FeePolicy:
    fixed_amount = Decimal(str(fixed))

    def policy(amount: Decimal, currency: str) -> Decimal:
        return fixed_amount

    return policy


def combined_fee(*policies: FeePolicy) -> FeePolicy:
    def policy(amount: Decimal, currency: str) -> Decimal:
        return sum((p(amount, currency) for p in policies), Decimal("0"))

    return policy


def configured_fee_policy(amount: Decimal, currency: str) -> Decimal:
    """Percentage plus fixed fee, both read from BOOKING_POLICY on every call."""
    policy = combined_fee(
        percentage_fee(policy_setting("PLATFORM_FEE_PERCENT")),
        fixed_fee(policy_setting("PLATFORM_FEE_FIXED")),
    )
    return policy(amount, currency)


def load_fee_policy(path: str | None = None) -> FeePolicy:
    return import_string(path or policy_setting("FEE_POLICY"))
