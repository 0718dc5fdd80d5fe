"""
Document projections of the canonical dataset.

- to_normalized: one document per canonical row, with an integer or code _id
- to_optimized: read-optimized documents with profiles, feature codes and
  order items embedded

Both functions are pure: inputs are never mutated and output contains fresh
dicts only.
"""

from ..models import ENTITY_ORDER
from ..presets import SizePreset

# Collections whose _id is the row's own primary key
_ID_FIELDS = {
    "accounts": "accountId",
    "subscribers": "subscriberId",
    "subscriber_profiles": "subscriberId",
    "devices": "deviceId",
    "device_events": "deviceEventId",
    "orders": "orderId",
    "order_items": "orderItemId",
    "features": "featureId",
    "subscriber_feature_state": "subscriberFeatureStateId",
    "ticket_status_codes": "code",
    "tickets": "ticketId",
    "notes": "noteId",
    "org_units": "orgUnitId",
    "plans": "planId",
    "regions": "regionId",
    "device_classes": "deviceClassId",
    "usage_records": "usageRecordId",
}

# Composite-key collections take _id from a shared sequence, in this order
SEQUENCED_COLLECTIONS = ["subscriber_features", "rates"]

# Collections absorbed into their parents in the optimized shape
EMBEDDED_COLLECTIONS = ("order_items", "subscriber_profiles")

ORDER_ITEM_EMBED_FIELDS = ("orderItemId", "sku", "qty", "priceCents")


class IdSequence:
    """Explicit integer counter for synthetic document ids."""

    __slots__ = ("value",)

    def __init__(self, start: int = 1) -> None:
        self.value = start

    def next(self) -> int:
        current = self.value
        self.value += 1
        return current


def _with_id(doc_id, row: dict) -> dict:
    doc = {"_id": doc_id}
    doc.update(_copy_doc(row))
    return doc


def to_normalized(
    canonical: dict[str, list[dict]], sequence: IdSequence | None = None
) -> dict[str, list[dict]]:
    """
    Mirror every canonical row as a document with _id first.

    _id is the primary key for id-keyed collections, the code for
    ticket_status_codes, and the next value of the sequence for
    subscriber_features then rates.

    Args:
        canonical: Collection name -> canonical rows
        sequence: Shared counter for composite-key collections (fresh if None)

    Returns:
        Collection name -> documents, in ENTITY_ORDER
    """
    sequence = sequence or IdSequence()
    sequenced: dict[str, list[dict]] = {}
    for name in SEQUENCED_COLLECTIONS:
        sequenced[name] = [
            _with_id(sequence.next(), row) for row in canonical.get(name, [])
        ]

    out: dict[str, list[dict]] = {}
    for name in ENTITY_ORDER:
        if name in sequenced:
            out[name] = sequenced[name]
        else:
            id_field = _ID_FIELDS[name]
            out[name] = [_with_id(row[id_field], row) for row in canonical.get(name, [])]
    return out


def _feature_codes_by_subscriber(canonical: dict[str, list[dict]]) -> dict[int, list[str]]:
    code_by_feature = {f["featureId"]: f["code"] for f in canonical.get("features", [])}
    codes: dict[int, set[str]] = {}
    for link in canonical.get("subscriber_features", []):
        code = code_by_feature.get(link["featureId"])
        if code is None:
            continue
        codes.setdefault(link["subscriberId"], set()).add(code)
    return {sub_id: sorted(found) for sub_id, found in codes.items()}


def to_optimized(
    canonical: dict[str, list[dict]],
    normalized: dict[str, list[dict]],
    preset: SizePreset,
) -> dict[str, list[dict]]:
    """
    Build the read-optimized document shape.

    Subscribers embed their profile (minus subscriberId) and, when the preset
    asks for it, the sorted distinct featureCodes; orders embed their items
    ordered by orderItemId. order_items and subscriber_profiles are dropped.

    Args:
        canonical: Canonical collections (source of profiles and feature links)
        normalized: Output of to_normalized for the same canonical data
        preset: Size preset (embed_feature_codes)

    Returns:
        Collection name -> documents, in ENTITY_ORDER minus embedded collections
    """
    profiles = {
        p["subscriberId"]: {k: v for k, v in p.items() if k != "subscriberId"}
        for p in canonical.get("subscriber_profiles", [])
    }
    feature_codes = _feature_codes_by_subscriber(canonical)

    items_by_order: dict[int, list[dict]] = {}
    for item in normalized.get("order_items", []):
        items_by_order.setdefault(item["orderId"], []).append(
            {field: item[field] for field in ORDER_ITEM_EMBED_FIELDS}
        )

    out: dict[str, list[dict]] = {}
    for name in ENTITY_ORDER:
        if name in EMBEDDED_COLLECTIONS:
            continue
        docs = [_copy_doc(doc) for doc in normalized.get(name, [])]
        if name == "subscribers":
            for doc in docs:
                profile = profiles.get(doc["subscriberId"])
                if profile is not None:
                    doc["profile"] = _copy_doc(profile)
                if preset.embed_feature_codes:
                    doc["featureCodes"] = list(feature_codes.get(doc["subscriberId"], []))
        elif name == "orders":
            for doc in docs:
                items = items_by_order.get(doc["orderId"], [])
                doc["items"] = sorted(items, key=lambda it: it["orderItemId"])
        out[name] = docs
    return out


def _copy_doc(doc: dict) -> dict:
    """Copy a document, including nested dict/list values."""
    return {k: _deep_copy(v) if isinstance(v, (dict, list)) else v for k, v in doc.items()}


def _deep_copy(value):
    if isinstance(value, dict):
        return {k: _deep_copy(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_deep_copy(v) for v in value]
    return value
