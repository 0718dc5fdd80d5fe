"""
Generation rules: fixed probabilities, id plan, time window and pricing.

The probabilities below are part of the dataset contract. The validator
checks that observed frequencies converge on them.
"""

from datetime import datetime, timezone

DATASET_VERSION = "1.2.0"

# "Now" of the dataset; every timestamp is an offset back from this instant.
REFERENCE_INSTANT = datetime(2026, 1, 18, tzinfo=timezone.utc)

# =============================================================================
# Branch probabilities
# =============================================================================

PROBABILITIES = {
    "subscriber_suspended": 0.10,
    "marketing_opt_in": 0.5,
    "paperless_billing": 0.7,
    "feature_state_present": 0.45,
    "feature_state_skip": 0.55,  # Presence is drawn as skip when random() < 0.55
    "provisioning_active": 0.75,  # Otherwise uniform over PROVISIONING_STATES
    "feature_state_expires": 0.15,
}

# =============================================================================
# Identifier plan (base start per entity type, multiplied by preset.id_scale)
# =============================================================================

ID_RANGES = {
    "accounts": 1001,
    "subscribers": 2001,
    "devices": 3001,
    "orders": 4001,
    "order_items": 4101,
    "features": 5001,
    "subscriber_feature_state": 6001,
    "tickets": 7001,
    "notes": 8001,
    "org_units": 9001,
    "plans": 10001,
    "regions": 11001,
    "device_classes": 12001,
    "device_events": 13001,
    "usage_records": 14001,
}

# Limits on how many rows of each type receive a note
NOTE_TARGET_LIMITS = {
    "subscriber": 4,
    "order": 3,
    "ticket": 4,
}

# =============================================================================
# Usage rating (cents)
# =============================================================================

VOICE_CENTS_PER_MINUTE = 4
DATA_CENTS_PER_MB = 2
SMS_CENTS = 0

# Units drawn per usage type: voice seconds, sms messages, data kilobytes
USAGE_UNIT_RANGES = {
    "voice": (30, 600),
    "sms": (1, 5),
    "data": (256, 10240),
}

USAGE_UNITS = {
    "voice": "seconds",
    "sms": "messages",
    "data": "KB",
}
