"""
Validation methods for generated CarrierOps datasets.

Contains all validation checks for canonical data:
- Referential integrity (schema foreign keys + polymorphic note targets)
- Primary key uniqueness (composite keys included)
- Device event payloads (field set matches the event type's variant)
- Identifier ranges (ascending within a type, disjoint across types)
- Rating (usage records and the rate table)
- Probability convergence (observed branch frequencies vs. configured p)

Checks return (passed, message) tuples and never raise on bad data.
"""

from typing import Optional

import numpy as np

from .constants import ID_RANGES, PROBABILITIES, USAGE_TYPES
from .models import PRIMARY_KEYS, NoteRef, UnknownEventType, payload_fields
from .rating import rate_plan, rate_usage
from .schema import RelationalSchema, load_schema

# Below this many observations a frequency check is reported but not enforced
MIN_SAMPLES = 30


class DataValidator:
    """
    Validator for canonical CarrierOps data.

    Works on the canonical mapping (collection name -> rows); table and key
    definitions come from the relational schema.
    """

    def __init__(
        self,
        canonical: dict[str, list[dict]],
        schema: Optional[RelationalSchema] = None,
    ) -> None:
        """
        Initialize validator.

        Args:
            canonical: Canonical collections to check
            schema: Relational schema (packaged schema.yaml if None)
        """
        self.data = canonical
        self.schema = schema or load_schema()

    def _key_values(self, table: str, columns) -> list[tuple]:
        fields = [self.schema.field_for(c) for c in columns]
        return [tuple(row.get(f) for f in fields) for row in self.data.get(table, [])]

    def validate_referential_integrity(self) -> tuple[bool, str]:
        """
        Check every foreign key and polymorphic reference resolves.

        Nullable foreign keys may be null; composite keys are checked as
        tuples (feature state -> subscriber feature bridge).

        Returns:
            Tuple of (passed, message)
        """
        errors = []
        checked = 0

        for table in self.schema.tables:
            for fk in self.schema.foreign_keys(table):
                parents = set(self._key_values(fk.references, fk.ref_columns))
                children = self._key_values(table, fk.columns)
                bad = 0
                for key in children:
                    if any(v is None for v in key):
                        if fk.nullable:
                            continue
                        bad += 1
                    elif key not in parents:
                        bad += 1
                checked += len(children)
                if bad:
                    errors.append(f"{fk}: {bad} unresolved")

            poly = self.schema.polymorphic(table)
            if poly:
                targets = {
                    ref_type: {row.get(self.schema.field_for(col)) for row in self.data.get(t, [])}
                    for ref_type, (t, col) in poly.targets.items()
                }
                type_field = self.schema.field_for(poly.discriminator)
                id_field = self.schema.field_for(poly.id_column)
                bad = 0
                for row in self.data.get(table, []):
                    try:
                        ref = NoteRef.from_fields(row.get(type_field), row.get(id_field))
                    except ValueError:
                        bad += 1
                        continue
                    ids = targets.get(ref.target.value)
                    if ids is None or ref.ref_id not in ids:
                        bad += 1
                checked += len(self.data.get(table, []))
                if bad:
                    errors.append(f"{table}.{poly.discriminator}/{poly.id_column}: {bad} unresolved")

        if not errors:
            return True, f"{checked:,} references resolved"
        return False, "; ".join(errors)

    def validate_primary_keys(self) -> tuple[bool, str]:
        """
        Check primary keys are unique in every table.

        Returns:
            Tuple of (passed, message)
        """
        errors = []
        for table in self.schema.tables:
            keys = self._key_values(table, self.schema.primary_key(table))
            duplicates = len(keys) - len(set(keys))
            if duplicates:
                errors.append(f"{table}: {duplicates} duplicate keys")
        if not errors:
            return True, f"{len(self.schema.tables)} tables with unique keys"
        return False, "; ".join(errors)

    def validate_event_payloads(self) -> tuple[bool, str]:
        """
        Check every device event carries the payload variant of its type.

        Returns:
            Tuple of (passed, message)
        """
        events = self.data.get("device_events", [])
        unknown = 0
        malformed = 0
        for event in events:
            try:
                expected = payload_fields(event.get("eventType"))
            except UnknownEventType:
                unknown += 1
                continue
            if set(event.get("payload") or ()) != expected:
                malformed += 1

        errors = []
        if unknown:
            errors.append(f"device_events: {unknown} unknown event types")
        if malformed:
            errors.append(f"device_events: {malformed} payloads of the wrong variant")
        if not errors:
            return True, f"{len(events):,} payloads match their event type"
        return False, "; ".join(errors)

    def validate_id_ranges(self) -> tuple[bool, str]:
        """
        Check ids ascend within each entity type and that the id intervals of
        different types never overlap.

        Returns:
            Tuple of (passed, message)
        """
        errors = []
        intervals = []
        for entity in ID_RANGES:
            (id_field,) = PRIMARY_KEYS[entity]
            ids = np.array([row[id_field] for row in self.data.get(entity, [])], dtype=np.int64)
            if ids.size == 0:
                continue
            if ids.size > 1 and not np.all(np.diff(ids) > 0):
                errors.append(f"{entity}: ids not strictly ascending")
            intervals.append((int(ids.min()), int(ids.max()), entity))

        intervals.sort()
        for (lo_a, hi_a, a), (lo_b, hi_b, b) in zip(intervals, intervals[1:]):
            if hi_a >= lo_b:
                errors.append(f"{a} [{lo_a}-{hi_a}] overlaps {b} [{lo_b}-{hi_b}]")

        if not errors:
            return True, f"{len(intervals)} disjoint id ranges"
        return False, "; ".join(errors)

    def validate_rating(self) -> tuple[bool, str]:
        """
        Check usage records carry rate_usage(type, units) and every rate
        matches the plan/region/device class price rule.

        Returns:
            Tuple of (passed, message)
        """
        errors = []
        usage = self.data.get("usage_records", [])
        bad_usage = 0
        for record in usage:
            try:
                expected = rate_usage(record["usageType"], record["units"])
            except ValueError:
                bad_usage += 1
                continue
            if record["ratedCents"] != expected:
                bad_usage += 1
        if bad_usage:
            errors.append(f"usage_records: {bad_usage} mis-rated")

        plans = {p["planId"]: p["code"] for p in self.data.get("plans", [])}
        regions = {r["regionId"]: r["code"] for r in self.data.get("regions", [])}
        classes = {c["deviceClassId"]: c["code"] for c in self.data.get("device_classes", [])}
        rates = self.data.get("rates", [])
        bad_rates = 0
        for rate in rates:
            try:
                expected = rate_plan(
                    plans[rate["planId"]],
                    regions[rate["regionId"]],
                    classes[rate["deviceClassId"]],
                )
            except KeyError:
                bad_rates += 1
                continue
            if rate["rateCents"] != expected:
                bad_rates += 1
        if bad_rates:
            errors.append(f"rates: {bad_rates} mispriced")

        if not errors:
            return True, f"{len(usage):,} usage records and {len(rates)} rates priced correctly"
        return False, "; ".join(errors)

    def validate_probabilities(self, tolerance_sigma: float = 4.0) -> tuple[bool, str]:
        """
        Check observed branch frequencies converge on their probabilities.

        Each observed share must lie within tolerance_sigma binomial standard
        errors of its expected p. Samples smaller than MIN_SAMPLES are
        reported but not enforced.

        Returns:
            Tuple of (passed, message)
        """
        subscribers = self.data.get("subscribers", [])
        profiles = self.data.get("subscriber_profiles", [])
        usage_types = [r["usageType"] for r in self.data.get("usage_records", [])]
        n_links = len(self.data.get("subscriber_features", []))
        n_states = len(self.data.get("subscriber_feature_state", []))

        observations = [
            (
                "suspended",
                np.array([s["status"] == "suspended" for s in subscribers], dtype=bool),
                PROBABILITIES["subscriber_suspended"],
            ),
            (
                "marketingOptIn",
                np.array([p["preferences"]["marketingOptIn"] for p in profiles], dtype=bool),
                PROBABILITIES["marketing_opt_in"],
            ),
            (
                "paperlessBilling",
                np.array([p["preferences"]["paperlessBilling"] for p in profiles], dtype=bool),
                PROBABILITIES["paperless_billing"],
            ),
            (
                "featureState",
                np.arange(n_links) < n_states,
                PROBABILITIES["feature_state_present"],
            ),
        ]
        for usage_type in USAGE_TYPES:
            observations.append(
                (
                    f"usage:{usage_type}",
                    np.array([t == usage_type for t in usage_types], dtype=bool),
                    1 / len(USAGE_TYPES),
                )
            )

        failures = []
        details = []
        for name, sample, p in observations:
            n = sample.size
            if n == 0:
                continue
            observed = float(np.mean(sample))
            if n < MIN_SAMPLES:
                details.append(f"{name}={observed:.2f} (n={n}, not enforced)")
                continue
            stderr = np.sqrt(p * (1 - p) / n)
            z = abs(observed - p) / stderr
            details.append(f"{name}={observed:.3f}")
            if z > tolerance_sigma:
                failures.append(f"{name}={observed:.3f} vs p={p:.3f} ({z:.1f} sigma, n={n})")

        if failures:
            return False, "; ".join(failures)
        return True, ", ".join(details) if details else "no samples"

    def validate_all(self) -> dict[str, tuple[bool, str]]:
        """
        Run all validation checks.

        Returns:
            Dict of {check_name: (passed, message)}
        """
        return {
            "referential_integrity": self.validate_referential_integrity(),
            "primary_keys": self.validate_primary_keys(),
            "event_payloads": self.validate_event_payloads(),
            "id_ranges": self.validate_id_ranges(),
            "rating": self.validate_rating(),
            "probabilities": self.validate_probabilities(),
        }

    def print_validation_report(self) -> bool:
        """
        Run all validations and print a summary.

        Returns:
            True if all validations passed, False otherwise
        """
        print()
        print("=" * 60)
        print("Validation Suite")
        print("=" * 60)

        results = self.validate_all()
        passed_checks = sum(1 for ok, _ in results.values() if ok)
        print(f"Validation: {passed_checks}/{len(results)} checks passed")
        for name, (ok, msg) in results.items():
            status = "+" if ok else "x"
            print(f"  {status} {name}: {msg}")

        return passed_checks == len(results)
