"""
Constants Package - Catalogs and rules for CarrierOps data generation.

Modules:
- reference: Static catalogs and vocabularies (plans, regions, SKUs, names)
- rules: Probabilities, id plan, reference instant, rating constants

Usage:
    from carrierops.constants import ORDER_SKUS, PROBABILITIES, ID_RANGES
"""

from .reference import (
    ACCOUNT_NAMES,
    ATTACH_FAIL_CAUSES,
    CELL_PREFIX,
    DEVICE_CLASSES,
    DEVICE_MODELS,
    EVENT_TYPES,
    FEATURE_SOURCES,
    FEATURES,
    FIRST_NAMES,
    IMEI_PREFIX,
    LAST_NAMES,
    MSISDN_PREFIX,
    NOTE_AUTHORS,
    NOTE_PHRASES,
    ORDER_SKUS,
    ORDER_STATUSES,
    ORG_UNITS,
    PLANS,
    PROVISIONING_STATES,
    REGION_CODES,
    REGIONS,
    SESSION_APN,
    TICKET_STATUSES,
    TICKET_SUMMARIES,
    USAGE_TYPES,
)
from .rules import (
    DATA_CENTS_PER_MB,
    DATASET_VERSION,
    ID_RANGES,
    NOTE_TARGET_LIMITS,
    PROBABILITIES,
    REFERENCE_INSTANT,
    SMS_CENTS,
    USAGE_UNIT_RANGES,
    USAGE_UNITS,
    VOICE_CENTS_PER_MINUTE,
)

__all__ = [
    # Reference data
    "PLANS",
    "REGIONS",
    "REGION_CODES",
    "DEVICE_CLASSES",
    "ORG_UNITS",
    "ACCOUNT_NAMES",
    "FIRST_NAMES",
    "LAST_NAMES",
    "DEVICE_MODELS",
    "MSISDN_PREFIX",
    "IMEI_PREFIX",
    "ORDER_SKUS",
    "ORDER_STATUSES",
    "FEATURES",
    "FEATURE_SOURCES",
    "PROVISIONING_STATES",
    "TICKET_STATUSES",
    "TICKET_SUMMARIES",
    "NOTE_AUTHORS",
    "NOTE_PHRASES",
    "EVENT_TYPES",
    "CELL_PREFIX",
    "SESSION_APN",
    "ATTACH_FAIL_CAUSES",
    "USAGE_TYPES",
    # Rules
    "DATASET_VERSION",
    "REFERENCE_INSTANT",
    "PROBABILITIES",
    "ID_RANGES",
    "NOTE_TARGET_LIMITS",
    "VOICE_CENTS_PER_MINUTE",
    "DATA_CENTS_PER_MB",
    "SMS_CENTS",
    "USAGE_UNIT_RANGES",
    "USAGE_UNITS",
]
