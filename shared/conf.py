"""Access to the BOOKING_POLICY settings block with defaults."""

from __future__ import annotations

from typing import Any

from django.conf import settings  # type: ignore

DEFAULTS: dict[str, Any] = {
    "LOCAL_TIME_ZONE": "Asia/Seoul",
    "FREE_CANCELLATION_DAYS": 3,
    "PENDING_HOLD_HOURS": 24,
    "SETTLEMENT_HOLD_HOURS": 48,
    "PLATFORM_FEE_PERCENT": "0",
    "PLATFORM_FEE_FIXED": "0",
    "FEE_POLICY": "apps.finances.fees.configured_fee_policy",
}


def policy_setting(name: str) -> Any:
    """Return a booking policy value, falling back to DEFAULTS."""
    if name not in DEFAULTS:
        raise KeyError(f"Unknown booking policy setting: {name}")
    overrides = getattr(settings, "BOOKING_POLICY", {}) or {}
    return overrides.get(name, DEFAULTS[name])
