"""
Level 8-9 Generator: Telemetry and usage (the high-volume facts).

Level 8 Tables:
- device_events (device_events_per_device_min..max per device)

Level 9 Tables:
- usage_records (usage_records_per_subscriber per subscriber, rated)

Both levels place timestamps at a whole-minute offset of 1..days*1440 minutes
after the window start.
"""

from datetime import timedelta
from typing import Callable

from .base import BaseLevelGenerator
from ..constants import (
    ATTACH_FAIL_CAUSES,
    CELL_PREFIX,
    EVENT_TYPES,
    SESSION_APN,
    USAGE_TYPES,
    USAGE_UNIT_RANGES,
)
from ..models import (
    AttachFailPayload,
    DataSessionEndPayload,
    DataSessionStartPayload,
    DevicePayload,
    HandoverPayload,
    LatencyProbePayload,
    RadioAttachPayload,
    UnknownEventType,
    iso,
)
from ..random_source import RandomSource
from ..rating import rate_usage


# =============================================================================
# Payload builders (one per event type, drawn in field order)
# =============================================================================


def _cell_id(rng: RandomSource) -> str:
    return f"{CELL_PREFIX}-{rng.int_between(100, 399)}"


def _radio_attach(rng: RandomSource) -> RadioAttachPayload:
    return {"cellId": _cell_id(rng), "rssi": -rng.int_between(70, 100)}


def _handover(rng: RandomSource) -> HandoverPayload:
    return {"fromCellId": _cell_id(rng), "toCellId": _cell_id(rng)}


def _data_session_start(rng: RandomSource) -> DataSessionStartPayload:
    a = rng.int_between(0, 255)
    b = rng.int_between(0, 255)
    c = rng.int_between(1, 254)
    return {"apn": SESSION_APN, "ip": f"10.{a}.{b}.{c}"}


def _data_session_end(rng: RandomSource) -> DataSessionEndPayload:
    return {
        "bytesUp": rng.int_between(1_000_000, 8_000_000),
        "bytesDown": rng.int_between(3_000_000, 30_000_000),
    }


def _latency_probe(rng: RandomSource) -> LatencyProbePayload:
    return {"p50Ms": rng.int_between(20, 80), "p95Ms": rng.int_between(100, 350)}


def _attach_fail(rng: RandomSource) -> AttachFailPayload:
    return {"cause": rng.choice(ATTACH_FAIL_CAUSES)}


PAYLOAD_BUILDERS: dict[str, Callable[[RandomSource], DevicePayload]] = {
    "radio_attach": _radio_attach,
    "handover": _handover,
    "data_session_start": _data_session_start,
    "data_session_end": _data_session_end,
    "latency_probe": _latency_probe,
    "attach_fail": _attach_fail,
}


def build_payload(event_type: str, rng: RandomSource) -> DevicePayload:
    """
    Draw the payload variant for event_type.

    Raises:
        UnknownEventType: If event_type is outside the fixed vocabulary
    """
    try:
        builder = PAYLOAD_BUILDERS[event_type]
    except KeyError:
        raise UnknownEventType(event_type) from None
    return builder(rng)


def draw_usage_units(usage_type: str, rng: RandomSource) -> int:
    """Draw units for one usage record (voice seconds, sms messages, data KB)."""
    low, high = USAGE_UNIT_RANGES[usage_type]
    return rng.int_between(low, high)


# =============================================================================
# Level generators
# =============================================================================


class Level8Generator(BaseLevelGenerator):
    """Generate Level 8 device events with typed payloads."""

    LEVEL = 8

    def generate(self) -> None:
        """Generate device_events."""
        print("  Level 8: Device events")
        rng = self.rng
        ts_base = self.ctx.window_start()
        window_minutes = self.preset.days * 24 * 60

        for device in self.data["devices"]:
            count = rng.int_between(
                self.preset.device_events_per_device_min,
                self.preset.device_events_per_device_max,
            )
            for _ in range(count):
                event_id = self.ctx.allocate("device_events")
                ts = ts_base + timedelta(minutes=rng.int_between(1, window_minutes))
                event_type = rng.choice(EVENT_TYPES)
                self.data["device_events"].append(
                    {
                        "deviceEventId": event_id,
                        "deviceId": device["deviceId"],
                        "eventType": event_type,
                        "ts": iso(ts),
                        "payload": build_payload(event_type, rng),
                    }
                )

        self.ctx.generated_levels.add(self.LEVEL)
        print(f"    Generated: {len(self.data['device_events']):,} device events")


class Level9Generator(BaseLevelGenerator):
    """
    Generate Level 9 usage records.

    ratedCents is computed by rate_usage at generation time; it is never
    drawn.
    """

    LEVEL = 9

    def generate(self) -> None:
        """Generate usage_records."""
        print("  Level 9: Usage records")
        rng = self.rng
        ts_base = self.ctx.window_start()
        window_minutes = self.preset.days * 24 * 60

        for subscriber in self.data["subscribers"]:
            for _ in range(self.preset.usage_records_per_subscriber):
                record_id = self.ctx.allocate("usage_records")
                ts = ts_base + timedelta(minutes=rng.int_between(1, window_minutes))
                usage_type = rng.choice(USAGE_TYPES)
                units = draw_usage_units(usage_type, rng)
                self.data["usage_records"].append(
                    {
                        "usageRecordId": record_id,
                        "subscriberId": subscriber["subscriberId"],
                        "ts": iso(ts),
                        "usageType": usage_type,
                        "units": units,
                        "ratedCents": rate_usage(usage_type, units),
                    }
                )

        self.ctx.generated_levels.add(self.LEVEL)
        print(f"    Generated: {len(self.data['usage_records']):,} usage records")
