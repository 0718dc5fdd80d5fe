"""
Tests for the dataset validator.

Generated datasets must pass every check; hand-corrupted copies must fail
the matching check.
"""

import pytest

from carrierops.validation import DataValidator


class TestGeneratedData:
    """Generated datasets pass validation."""

    def test_small_passes(self, small_dataset):
        """Every check passes for the small seed 42 dataset."""
        results = DataValidator(small_dataset.canonical).validate_all()
        assert set(results) == {
            "referential_integrity",
            "primary_keys",
            "event_payloads",
            "id_ranges",
            "rating",
            "probabilities",
        }
        for name, (passed, message) in results.items():
            assert passed, f"{name}: {message}"

    def test_report(self, small_dataset, capsys):
        """The printed report summarizes every check."""
        assert DataValidator(small_dataset.canonical).print_validation_report() is True
        out = capsys.readouterr().out
        assert "Validation: 6/6 checks passed" in out
        assert "+ referential_integrity" in out

    def test_small_samples_not_enforced(self, small_dataset):
        """Frequencies over fewer than 30 rows are reported only."""
        passed, message = DataValidator(small_dataset.canonical).validate_probabilities()
        assert passed
        assert "suspended=" in message
        assert "not enforced" in message


@pytest.mark.slow
class TestMediumData:
    """Medium datasets exercise scaled ids and frequency convergence."""

    def test_medium_passes(self, medium_dataset):
        """Every check passes for the medium seed 42 dataset."""
        for name, (passed, message) in DataValidator(medium_dataset.canonical).validate_all().items():
            assert passed, f"{name}: {message}"

    def test_scaled_ids(self, medium_dataset):
        """Medium ids start at the scaled range starts."""
        canonical = medium_dataset.canonical
        assert canonical["accounts"][0]["accountId"] == 1_001_000
        assert canonical["features"][0]["featureId"] == 5_001_000
        assert canonical["usage_records"][0]["usageRecordId"] == 14_001_000

    def test_usage_frequencies_enforced(self, medium_dataset):
        """Usage type shares are checked on thousands of records."""
        passed, message = DataValidator(medium_dataset.canonical).validate_probabilities()
        assert passed, message
        assert "usage:voice=" in message
        assert "not enforced" not in message.split("usage:voice=")[1]


class TestCorruptedData:
    """Corrupted copies fail the matching check."""

    def test_dangling_foreign_key(self, small_canonical):
        """An order item pointing at a missing order is caught."""
        small_canonical["order_items"][0]["orderId"] = 999_999
        passed, message = DataValidator(small_canonical).validate_referential_integrity()
        assert not passed
        assert "order_items(order_id) -> orders(order_id)" in message

    def test_orphan_feature_state(self, small_canonical):
        """A state row without its subscription link is caught."""
        small_canonical["subscriber_feature_state"].append(
            {
                "subscriberFeatureStateId": 6999,
                "subscriberId": 2001,
                "featureId": 5004,
                "effectiveFrom": "2026-01-16T00:00:00Z",
                "effectiveTo": None,
                "provisioningState": "active",
                "source": "system",
            }
        )
        small_canonical["subscriber_features"] = [
            link for link in small_canonical["subscriber_features"]
            if (link["subscriberId"], link["featureId"]) != (2001, 5004)
        ]
        passed, message = DataValidator(small_canonical).validate_referential_integrity()
        assert not passed
        assert "subscriber_features" in message

    def test_dangling_note(self, small_canonical):
        """A note pointing at a missing ticket is caught."""
        small_canonical["notes"][0]["refType"] = "ticket"
        small_canonical["notes"][0]["refId"] = 1
        passed, message = DataValidator(small_canonical).validate_referential_integrity()
        assert not passed
        assert "notes.ref_type/ref_id" in message

    def test_unknown_note_target(self, small_canonical):
        """A refType outside subscriber/order/ticket does not resolve."""
        small_canonical["notes"][0]["refType"] = "invoice"
        passed, message = DataValidator(small_canonical).validate_referential_integrity()
        assert not passed
        assert "notes.ref_type/ref_id: 1 unresolved" in message

    def test_payload_of_wrong_variant(self, small_canonical):
        """A payload whose fields belong to another event type is caught."""
        event = small_canonical["device_events"][0]
        event["payload"] = (
            {"cause": "AUTH_REJECT"}
            if event["eventType"] != "attach_fail"
            else {"p50Ms": 40, "p95Ms": 90}
        )
        passed, message = DataValidator(small_canonical).validate_event_payloads()
        assert not passed
        assert "1 payloads of the wrong variant" in message

    def test_unknown_event_type(self, small_canonical):
        small_canonical["device_events"][0]["eventType"] = "sim_swap"
        passed, message = DataValidator(small_canonical).validate_event_payloads()
        assert not passed
        assert "1 unknown event types" in message

    def test_null_required_foreign_key(self, small_canonical):
        """NULL in a non-nullable foreign key is caught; nullable parents are fine."""
        assert DataValidator(small_canonical).validate_referential_integrity()[0]
        small_canonical["devices"][0]["subscriberId"] = None
        assert not DataValidator(small_canonical).validate_referential_integrity()[0]

    def test_duplicate_primary_key(self, small_canonical):
        """Duplicate ids are caught."""
        small_canonical["accounts"].append(dict(small_canonical["accounts"][0]))
        passed, message = DataValidator(small_canonical).validate_primary_keys()
        assert not passed
        assert "accounts: 1 duplicate" in message

    def test_overlapping_ranges(self, small_canonical):
        """An id from another type's range is caught."""
        small_canonical["devices"][-1]["deviceId"] = 4050
        passed, message = DataValidator(small_canonical).validate_id_ranges()
        assert not passed
        assert "overlaps" in message

    def test_unsorted_ids(self, small_canonical):
        """Ids must ascend within a type."""
        accounts = small_canonical["accounts"]
        accounts[0], accounts[1] = accounts[1], accounts[0]
        passed, message = DataValidator(small_canonical).validate_id_ranges()
        assert not passed
        assert "accounts" in message

    def test_mis_rated_usage(self, small_canonical):
        """A usage record whose price disagrees with the rule is caught."""
        record = next(u for u in small_canonical["usage_records"] if u["usageType"] == "voice")
        record["ratedCents"] += 1
        passed, message = DataValidator(small_canonical).validate_rating()
        assert not passed
        assert "usage_records: 1 mis-rated" in message

    def test_unknown_usage_type(self, small_canonical):
        """An unknown usage type counts as mis-rated."""
        small_canonical["usage_records"][0]["usageType"] = "fax"
        passed, _ = DataValidator(small_canonical).validate_rating()
        assert not passed

    def test_mispriced_rate(self, small_canonical):
        """A rate that breaks the price rule is caught."""
        small_canonical["rates"][0]["rateCents"] = 1
        passed, message = DataValidator(small_canonical).validate_rating()
        assert not passed
        assert "rates: 1 mispriced" in message

    def test_skewed_frequency(self, small_canonical):
        """A branch far from its probability fails once the sample is large."""
        template = small_canonical["subscribers"][0]
        small_canonical["subscribers"] = [
            dict(template, subscriberId=2001 + i, status="suspended") for i in range(100)
        ]
        passed, message = DataValidator(small_canonical).validate_probabilities()
        assert not passed
        assert "suspended=1.000" in message
