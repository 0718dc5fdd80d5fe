"""
Size presets - fixed entity-count configuration per size class.

A size class selects one row of a lookup table; nothing here is computed.
"""

from dataclasses import asdict, dataclass

from .errors import InvalidConfiguration


@dataclass(frozen=True)
class SizePreset:
    """Entity-count ranges and time window for one size class."""

    name: str
    accounts: int
    subs_per_account_min: int
    subs_per_account_max: int
    orders_per_account_min: int
    orders_per_account_max: int
    items_per_order_min: int
    items_per_order_max: int
    tickets_per_subscriber_min: int
    tickets_per_subscriber_max: int
    device_events_per_device_min: int
    device_events_per_device_max: int
    usage_records_per_subscriber: int  # Fixed count, not ranged
    days: int  # Generation window ends at the reference instant
    embed_feature_codes: bool  # Attach featureCodes in the optimized shape
    id_scale: int = 1  # Multiplier applied to every id range start

    def to_dict(self) -> dict:
        """Render the manifest form (camelCase keys, name omitted)."""
        fields = asdict(self)
        fields.pop("name")
        return {_MANIFEST_KEYS[key]: value for key, value in fields.items()}


_MANIFEST_KEYS = {
    "accounts": "accounts",
    "subs_per_account_min": "subsPerAccountMin",
    "subs_per_account_max": "subsPerAccountMax",
    "orders_per_account_min": "ordersPerAccountMin",
    "orders_per_account_max": "ordersPerAccountMax",
    "items_per_order_min": "itemsPerOrderMin",
    "items_per_order_max": "itemsPerOrderMax",
    "tickets_per_subscriber_min": "ticketsPerSubscriberMin",
    "tickets_per_subscriber_max": "ticketsPerSubscriberMax",
    "device_events_per_device_min": "deviceEventsPerDeviceMin",
    "device_events_per_device_max": "deviceEventsPerDeviceMax",
    "usage_records_per_subscriber": "usageRecordsPerSubscriber",
    "days": "days",
    "embed_feature_codes": "embedFeatureCodes",
    "id_scale": "idScale",
}


PRESETS: dict[str, SizePreset] = {
    "small": SizePreset(
        name="small",
        accounts=3,
        subs_per_account_min=2,
        subs_per_account_max=2,
        orders_per_account_min=1,
        orders_per_account_max=2,
        items_per_order_min=2,
        items_per_order_max=3,
        tickets_per_subscriber_min=0,
        tickets_per_subscriber_max=1,
        device_events_per_device_min=3,
        device_events_per_device_max=6,
        usage_records_per_subscriber=10,
        days=2,
        embed_feature_codes=True,
        id_scale=1,
    ),
    "medium": SizePreset(
        name="medium",
        accounts=25,
        subs_per_account_min=2,
        subs_per_account_max=5,
        orders_per_account_min=1,
        orders_per_account_max=4,
        items_per_order_min=2,
        items_per_order_max=5,
        tickets_per_subscriber_min=0,
        tickets_per_subscriber_max=2,
        device_events_per_device_min=20,
        device_events_per_device_max=60,
        usage_records_per_subscriber=250,
        days=7,
        embed_feature_codes=True,
        id_scale=1000,
    ),
    "large": SizePreset(
        name="large",
        accounts=200,
        subs_per_account_min=2,
        subs_per_account_max=6,
        orders_per_account_min=1,
        orders_per_account_max=5,
        items_per_order_min=2,
        items_per_order_max=6,
        tickets_per_subscriber_min=0,
        tickets_per_subscriber_max=2,
        device_events_per_device_min=200,
        device_events_per_device_max=600,
        usage_records_per_subscriber=2500,
        days=30,
        embed_feature_codes=True,
        id_scale=1000,
    ),
}

# Short forms accepted on the command line
SIZE_ALIASES = {"s": "small", "m": "medium", "l": "large"}


def normalize_size(size: str) -> str:
    """
    Map a size class or its alias to the canonical class name.

    Raises:
        InvalidConfiguration: If size is not a known size class
    """
    if not isinstance(size, str):
        raise InvalidConfiguration(f"Invalid size {size!r}")
    key = size.strip().lower()
    key = SIZE_ALIASES.get(key, key)
    if key not in PRESETS:
        valid = ", ".join(list(PRESETS) + [a.upper() for a in SIZE_ALIASES])
        raise InvalidConfiguration(f"Invalid size {size!r} (expected one of: {valid})")
    return key


def resolve_preset(size: str) -> SizePreset:
    """Return the preset for a size class ("small", "M", ...)."""
    return PRESETS[normalize_size(size)]
