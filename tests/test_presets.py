"""
Tests for size presets.

Tests size class resolution, aliases and the manifest rendering.
"""

import dataclasses

import pytest

from carrierops.errors import InvalidConfiguration
from carrierops.presets import PRESETS, normalize_size, resolve_preset


class TestSizeResolution:
    """Tests for normalize_size / resolve_preset."""

    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("small", "small"),
            ("S", "small"),
            ("s", "small"),
            ("M", "medium"),
            ("Medium", "medium"),
            ("L", "large"),
            (" large ", "large"),
        ],
    )
    def test_aliases(self, raw, expected):
        """Short and long forms resolve case-insensitively."""
        assert normalize_size(raw) == expected

    @pytest.mark.parametrize("raw", ["XL", "", "tiny", None, 3])
    def test_unknown_size(self, raw):
        """Unknown size classes are rejected."""
        with pytest.raises(InvalidConfiguration):
            normalize_size(raw)

    def test_resolve_returns_table_row(self):
        """resolve_preset is a lookup, not a computation."""
        assert resolve_preset("S") is PRESETS["small"]


class TestPresetTable:
    """Tests for the preset values themselves."""

    def test_small_preset(self):
        """Small preset matches the fixed table."""
        small = PRESETS["small"]
        assert small.accounts == 3
        assert (small.subs_per_account_min, small.subs_per_account_max) == (2, 2)
        assert (small.orders_per_account_min, small.orders_per_account_max) == (1, 2)
        assert (small.items_per_order_min, small.items_per_order_max) == (2, 3)
        assert (small.tickets_per_subscriber_min, small.tickets_per_subscriber_max) == (0, 1)
        assert (small.device_events_per_device_min, small.device_events_per_device_max) == (3, 6)
        assert small.usage_records_per_subscriber == 10
        assert small.days == 2
        assert small.embed_feature_codes is True

    def test_sizes_grow(self):
        """Each size class is at least as large as the previous."""
        small, medium, large = PRESETS["small"], PRESETS["medium"], PRESETS["large"]
        assert small.accounts < medium.accounts < large.accounts
        assert small.usage_records_per_subscriber < medium.usage_records_per_subscriber
        assert medium.usage_records_per_subscriber < large.usage_records_per_subscriber
        assert small.days < medium.days < large.days

    def test_ranges_are_ordered(self):
        """Every min is <= its max."""
        for preset in PRESETS.values():
            assert preset.subs_per_account_min <= preset.subs_per_account_max
            assert preset.orders_per_account_min <= preset.orders_per_account_max
            assert preset.items_per_order_min <= preset.items_per_order_max
            assert preset.tickets_per_subscriber_min <= preset.tickets_per_subscriber_max
            assert preset.device_events_per_device_min <= preset.device_events_per_device_max

    def test_presets_are_frozen(self):
        """Presets cannot be mutated in place."""
        with pytest.raises(dataclasses.FrozenInstanceError):
            PRESETS["small"].accounts = 99

    def test_manifest_form(self):
        """to_dict uses camelCase keys and omits the name."""
        rendered = PRESETS["small"].to_dict()
        assert "name" not in rendered
        assert rendered["subsPerAccountMin"] == 2
        assert rendered["usageRecordsPerSubscriber"] == 10
        assert rendered["embedFeatureCodes"] is True
        assert rendered["idScale"] == 1
        assert all("_" not in key for key in rendered)
