"""
Tagged variants in the CarrierOps data model.

- Device event payloads: one TypedDict per event type, disjoint field sets
- Note references: closed union over subscriber / order / ticket
- Entity collection names and their canonical primary keys
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import TypedDict, Union

# Collection order for files, manifest counts and projections
ENTITY_ORDER = [
    "accounts",
    "subscribers",
    "subscriber_profiles",
    "devices",
    "device_events",
    "orders",
    "order_items",
    "features",
    "subscriber_features",
    "subscriber_feature_state",
    "ticket_status_codes",
    "tickets",
    "notes",
    "org_units",
    "plans",
    "regions",
    "device_classes",
    "rates",
    "usage_records",
]

# Canonical primary key field(s) per collection (composite keys as tuples)
PRIMARY_KEYS: dict[str, tuple[str, ...]] = {
    "accounts": ("accountId",),
    "subscribers": ("subscriberId",),
    "subscriber_profiles": ("subscriberId",),
    "devices": ("deviceId",),
    "device_events": ("deviceEventId",),
    "orders": ("orderId",),
    "order_items": ("orderItemId",),
    "features": ("featureId",),
    "subscriber_features": ("subscriberId", "featureId"),
    "subscriber_feature_state": ("subscriberFeatureStateId",),
    "ticket_status_codes": ("code",),
    "tickets": ("ticketId",),
    "notes": ("noteId",),
    "org_units": ("orgUnitId",),
    "plans": ("planId",),
    "regions": ("regionId",),
    "device_classes": ("deviceClassId",),
    "rates": ("planId", "regionId", "deviceClassId"),
    "usage_records": ("usageRecordId",),
}


def iso(dt: datetime) -> str:
    """Format a UTC datetime as 2026-01-18T00:00:00Z (second precision)."""
    return dt.strftime("%Y-%m-%dT%H:%M:%SZ")


# =============================================================================
# Device event payloads
# =============================================================================


class RadioAttachPayload(TypedDict):
    cellId: str
    rssi: int


class HandoverPayload(TypedDict):
    fromCellId: str
    toCellId: str


class DataSessionStartPayload(TypedDict):
    apn: str
    ip: str


class DataSessionEndPayload(TypedDict):
    bytesUp: int
    bytesDown: int


class LatencyProbePayload(TypedDict):
    p50Ms: int
    p95Ms: int


class AttachFailPayload(TypedDict):
    cause: str


DevicePayload = Union[
    RadioAttachPayload,
    HandoverPayload,
    DataSessionStartPayload,
    DataSessionEndPayload,
    LatencyProbePayload,
    AttachFailPayload,
]

PAYLOAD_TYPES: dict[str, type] = {
    "radio_attach": RadioAttachPayload,
    "handover": HandoverPayload,
    "data_session_start": DataSessionStartPayload,
    "data_session_end": DataSessionEndPayload,
    "latency_probe": LatencyProbePayload,
    "attach_fail": AttachFailPayload,
}

PAYLOAD_FIELDS: dict[str, frozenset[str]] = {
    event_type: frozenset(payload_type.__required_keys__)
    for event_type, payload_type in PAYLOAD_TYPES.items()
}


class UnknownEventType(ValueError):
    """Raised for a device event type outside the fixed vocabulary."""

    def __init__(self, event_type: str):
        self.event_type = event_type
        super().__init__(
            f"Unknown device event type {event_type!r} "
            f"(expected one of: {', '.join(PAYLOAD_TYPES)})"
        )


def payload_fields(event_type: str) -> frozenset[str]:
    """Field set of the payload variant for event_type."""
    try:
        return PAYLOAD_FIELDS[event_type]
    except KeyError:
        raise UnknownEventType(event_type) from None


# =============================================================================
# Note references
# =============================================================================


class NoteTarget(str, Enum):
    """Entity types a note may be attached to."""

    SUBSCRIBER = "subscriber"
    ORDER = "order"
    TICKET = "ticket"

    @property
    def collection(self) -> str:
        return f"{self.value}s"

    @property
    def id_field(self) -> str:
        return f"{self.value}Id"


@dataclass(frozen=True)
class NoteRef:
    """Reference from a note to exactly one subscriber, order or ticket."""

    target: NoteTarget
    ref_id: int

    @classmethod
    def from_fields(cls, ref_type: str, ref_id: int) -> "NoteRef":
        """Parse the (refType, refId) pair stored on a note row."""
        return cls(NoteTarget(ref_type), ref_id)

    def as_fields(self) -> dict:
        return {"refType": self.target.value, "refId": self.ref_id}
