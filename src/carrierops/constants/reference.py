"""
Static catalogs and vocabularies for CarrierOps generation.

Order within every list is significant: generators index and shuffle these
sequences, so reordering an entry changes seeded output.
"""

# =============================================================================
# Rating reference data (plans x regions x device classes)
# =============================================================================

PLANS = [
    {"code": "PLAN-UNL-5G", "name": "Unlimited 5G", "base_cents": 6500},
    {"code": "PLAN-5G-STARTER", "name": "5G Starter", "base_cents": 4500},
]

REGIONS = [
    {"code": "TX-NORTH", "delta_cents": 0},
    {"code": "TX-SOUTH", "delta_cents": -200},
]

DEVICE_CLASSES = [
    {"code": "PHONE", "delta_cents": 0},
    {"code": "TABLET", "delta_cents": -1000},
]

REGION_CODES = [r["code"] for r in REGIONS]

# =============================================================================
# Organization
# =============================================================================

# parent is an index into this list (None for roots)
ORG_UNITS = [
    {"name": "Network Ops", "parent": None},
    {"name": "Core Network", "parent": 0},
    {"name": "Radio Access Network", "parent": 0},
    {"name": "Customer Care", "parent": None},
    {"name": "Field Ops", "parent": 3},
]

# =============================================================================
# Accounts / subscribers
# =============================================================================

ACCOUNT_NAMES = [
    "Oak Hill Coffee Co",
    "Red River Hardware",
    "Pecan Street Apartments",
    "Bluebonnet Clinic",
    "Cedar Ridge Auto",
    "Trinity Bookshop",
]

FIRST_NAMES = ["Alex", "Jordan", "Casey", "Taylor", "Morgan", "Riley", "Sam", "Drew"]
LAST_NAMES = ["Bennett", "Kim", "Nguyen", "Reed", "Patel", "Santos", "Carter", "Lopez"]

DEVICE_MODELS = ["Pixel 8", "Pixel 7a", "iPhone 15", "iPhone 14", "Galaxy S24", "Galaxy A54"]

MSISDN_PREFIX = "+1214555"
IMEI_PREFIX = "356789012"

# =============================================================================
# Orders
# =============================================================================

ORDER_SKUS = [
    {"sku": "SIM-ESIM", "price_cents": 0},
    {"sku": "SIM-PHYSICAL", "price_cents": 500},
    {"sku": "PLAN-UNL-5G", "price_cents": 6500},
    {"sku": "PLAN-5G-STARTER", "price_cents": 4500},
    {"sku": "ADDON-HOTSPOT", "price_cents": 1000},
    {"sku": "ADDON-INTL_ROAM", "price_cents": 1500},
    {"sku": "ADDON-DEVICE_PROTECT", "price_cents": 1700},
    {"sku": "DEVICE-PHONE", "price_cents": 79900},
]

ORDER_STATUSES = ["submitted", "fulfilled", "canceled"]

# =============================================================================
# Features
# =============================================================================

FEATURES = [
    {"code": "HOTSPOT", "name": "Mobile Hotspot"},
    {"code": "INTL_ROAM", "name": "International Roaming Pack"},
    {"code": "DEVICE_PROTECT", "name": "Device Protection"},
    {"code": "VISUAL_VM", "name": "Visual Voicemail"},
]

FEATURE_SOURCES = ["self-serve", "call-center", "system"]
PROVISIONING_STATES = ["pending", "active", "failed"]

# =============================================================================
# Care
# =============================================================================

TICKET_STATUSES = [
    {"code": "OPEN", "description": "Open / Investigating"},
    {"code": "WIP", "description": "Work in Progress"},
    {"code": "RESOLVED", "description": "Resolved"},
]

TICKET_SUMMARIES = [
    "Intermittent data connectivity in downtown area",
    "Unable to activate device after SIM swap",
    "Voicemail not syncing",
    "Roaming add-on stuck in provisioning",
    "High latency during evening hours",
    "Dropped calls reported near highway corridor",
]

NOTE_AUTHORS = ["opsAgent7", "netOps2", "care1", "care2", "fulfill3", "netOps4"]

NOTE_PHRASES = [
    "Investigating.",
    "Collecting logs.",
    "Escalated to ops.",
    "Customer contacted.",
    "Retrying provisioning.",
    "Monitoring impact.",
]

# =============================================================================
# Telemetry
# =============================================================================

EVENT_TYPES = [
    "radio_attach",
    "handover",
    "data_session_start",
    "data_session_end",
    "latency_probe",
    "attach_fail",
]

CELL_PREFIX = "DFW"
SESSION_APN = "carrierops"
ATTACH_FAIL_CAUSES = ["network_congestion", "auth_reject", "radio_no_service"]

USAGE_TYPES = ["voice", "sms", "data"]
