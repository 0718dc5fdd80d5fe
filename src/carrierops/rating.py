"""
Pricing rules: usage rating and the plan x region x device class rate table.

Usage rating is the one piece of business logic in the dataset:
    voice: ceil(seconds / 60) * 4 cents
    data:  ceil(kilobytes / 1024) * 2 cents
    sms:   0 cents
"""

import math

from .constants import (
    DATA_CENTS_PER_MB,
    DEVICE_CLASSES,
    PLANS,
    REGIONS,
    SMS_CENTS,
    VOICE_CENTS_PER_MINUTE,
)

_PLAN_BASE = {p["code"]: p["base_cents"] for p in PLANS}
_REGION_DELTA = {r["code"]: r["delta_cents"] for r in REGIONS}
_CLASS_DELTA = {c["code"]: c["delta_cents"] for c in DEVICE_CLASSES}


def rate_usage(usage_type: str, units: int) -> int:
    """
    Rate one usage record in cents.

    Args:
        usage_type: "voice" (units = seconds), "sms" (messages) or "data" (KB)
        units: Non-negative unit count

    Raises:
        ValueError: Unknown usage type or negative units
    """
    if units < 0:
        raise ValueError(f"units must be >= 0, got {units}")
    if usage_type == "sms":
        return SMS_CENTS
    if usage_type == "voice":
        return math.ceil(units / 60) * VOICE_CENTS_PER_MINUTE
    if usage_type == "data":
        return math.ceil(units / 1024) * DATA_CENTS_PER_MB
    raise ValueError(f"Unknown usage type: {usage_type!r}")


def rate_plan(plan_code: str, region_code: str, device_class_code: str) -> int:
    """Monthly rate in cents: plan base + region delta + device class delta."""
    return (
        _PLAN_BASE[plan_code]
        + _REGION_DELTA[region_code]
        + _CLASS_DELTA[device_class_code]
    )
