"""
Tests for the artifact writer and canonical reader.

Tests the output layout, the all-or-nothing overwrite guard, byte-level
determinism and reading canonical data back for reprojection.
"""

import dataclasses
import json

import pytest

from carrierops import DatasetGenerator, generate_dataset
from carrierops.errors import DestinationConflict, InvalidConfiguration, WriteFailure
from carrierops.writer import (
    MANIFEST_FILENAME,
    DatasetWriter,
    Shape,
    ndjson_lines,
    parse_shapes,
    read_canonical,
)


def snapshot(root) -> dict[str, bytes]:
    return {
        p.relative_to(root).as_posix(): p.read_bytes()
        for p in sorted(root.rglob("*"))
        if p.is_file()
    }


class TestParseShapes:
    """Tests for shape selection."""

    def test_all(self):
        """'all' selects every shape in write order."""
        assert parse_shapes("all") == [
            Shape.CANONICAL,
            Shape.MONGO_NORMALIZED,
            Shape.MONGO_OPTIMIZED,
            Shape.POSTGRES,
        ]

    def test_aliases_and_lists(self):
        """Aliases and comma lists resolve and keep write order."""
        assert parse_shapes("relational,canonical") == [Shape.CANONICAL, Shape.POSTGRES]
        assert parse_shapes(["optimized"]) == [Shape.MONGO_OPTIMIZED]
        assert parse_shapes([Shape.POSTGRES]) == [Shape.POSTGRES]

    @pytest.mark.parametrize("only", ["csv", "", "canonical,parquet", []])
    def test_invalid(self, only):
        """Unknown selectors are rejected."""
        with pytest.raises(InvalidConfiguration):
            parse_shapes(only)


class TestLayout:
    """Tests for the written file layout."""

    def test_planned_paths(self, tmp_path):
        """19 + 19 + 17 + 19 artifacts plus the manifest."""
        writer = DatasetWriter(tmp_path)
        paths = writer.planned_paths(parse_shapes("all"))
        assert len(paths) == 75
        assert paths[-1] == tmp_path / MANIFEST_FILENAME
        assert tmp_path / "postgres" / "data" / "rates.csv" in paths
        assert tmp_path / "mongo_optimized" / "order_items.ndjson" not in paths

    def test_write_all(self, small_dataset, tmp_path):
        """Every shape is written with one line per row."""
        stats = DatasetWriter(tmp_path).write(small_dataset)
        assert len(stats) == 75
        assert stats["canonical/accounts.ndjson"] == 3
        assert stats["postgres/data/usage_records.csv"] == 60

        accounts = (tmp_path / "canonical" / "accounts.ndjson").read_text().splitlines()
        assert len(accounts) == 3
        assert json.loads(accounts[0]) == small_dataset.canonical["accounts"][0]

        rates_csv = (tmp_path / "postgres" / "data" / "rates.csv").read_text()
        assert rates_csv.splitlines()[0] == "plan_id,region_id,device_class_id,rate_cents"
        assert rates_csv.count("\n") == 9

        manifest = json.loads((tmp_path / MANIFEST_FILENAME).read_text())
        assert manifest == small_dataset.manifest

    def test_ndjson_compact(self, small_dataset, tmp_path):
        """NDJSON lines are compact JSON, one document per line."""
        DatasetWriter(tmp_path).write(small_dataset, ["normalized"])
        line = (tmp_path / "mongo_normalized" / "rates.ndjson").read_text().splitlines()[0]
        assert line.startswith('{"_id":')
        assert ", " not in line and ": " not in line

    def test_empty_collection_empty_file(self, small_dataset, tmp_path):
        """An empty collection is written as an empty NDJSON file."""
        canonical = dict(small_dataset.canonical, notes=[])
        dataset = dataclasses.replace(small_dataset, canonical=canonical)
        DatasetWriter(tmp_path).write(dataset, ["canonical"])
        assert (tmp_path / "canonical" / "notes.ndjson").read_bytes() == b""
        assert list(ndjson_lines([])) == []

    def test_only_selected_shapes(self, small_dataset, tmp_path):
        """Unselected shapes are not written."""
        DatasetWriter(tmp_path).write(small_dataset, ["postgres"])
        assert (tmp_path / "postgres" / "data").is_dir()
        assert (tmp_path / MANIFEST_FILENAME).exists()
        assert not (tmp_path / "canonical").exists()


class TestOverwriteGuard:
    """Tests for the all-or-nothing destination check."""

    def test_refuses_existing(self, small_dataset, tmp_path):
        """A second write fails and leaves the first untouched."""
        DatasetWriter(tmp_path).write(small_dataset)
        before = snapshot(tmp_path)
        with pytest.raises(DestinationConflict) as exc_info:
            DatasetWriter(tmp_path).write(small_dataset)
        assert len(exc_info.value.conflicts) == 75
        assert "--overwrite" in str(exc_info.value)
        assert snapshot(tmp_path) == before

    def test_single_conflict_blocks_everything(self, small_dataset, tmp_path):
        """One existing artifact prevents every write."""
        (tmp_path / MANIFEST_FILENAME).write_text("{}")
        with pytest.raises(DestinationConflict) as exc_info:
            DatasetWriter(tmp_path).write(small_dataset)
        assert exc_info.value.conflicts == [tmp_path / MANIFEST_FILENAME]
        assert not (tmp_path / "canonical").exists()
        assert (tmp_path / MANIFEST_FILENAME).read_text() == "{}"

    def test_unrelated_files_ignored(self, small_dataset, tmp_path):
        """Files outside the planned set are not conflicts."""
        (tmp_path / "README.txt").write_text("keep")
        DatasetWriter(tmp_path).write(small_dataset, ["canonical"])
        assert (tmp_path / "README.txt").read_text() == "keep"

    def test_overwrite(self, small_dataset, tmp_path):
        """overwrite=True replaces existing artifacts."""
        (tmp_path / MANIFEST_FILENAME).write_text("{}")
        DatasetWriter(tmp_path, overwrite=True).write(small_dataset)
        assert json.loads((tmp_path / MANIFEST_FILENAME).read_text())["seed"] == 42

    def test_write_failure(self, small_dataset, tmp_path):
        """Filesystem errors surface as WriteFailure."""
        blocker = tmp_path / "blocked"
        blocker.write_text("not a directory")
        with pytest.raises(WriteFailure):
            DatasetWriter(blocker / "out").write(small_dataset, ["canonical"])


class TestDeterminism:
    """Tests for byte-identical output."""

    def test_byte_identical_runs(self, generated_at, tmp_path):
        """Two independent runs write identical bytes."""
        first = generate_dataset(seed=42, size="small", generated_at=generated_at)
        second = generate_dataset(seed=42, size="small", generated_at=generated_at)
        DatasetWriter(tmp_path / "a").write(first)
        DatasetWriter(tmp_path / "b").write(second)
        assert snapshot(tmp_path / "a") == snapshot(tmp_path / "b")

    def test_only_generated_at_differs(self, tmp_path):
        """With wall-clock timestamps only the manifest's generatedAt varies."""
        DatasetWriter(tmp_path / "a").write(generate_dataset(seed=7, size="small"))
        DatasetWriter(tmp_path / "b").write(generate_dataset(seed=7, size="small"))
        a, b = snapshot(tmp_path / "a"), snapshot(tmp_path / "b")
        manifest_a = json.loads(a.pop(MANIFEST_FILENAME))
        manifest_b = json.loads(b.pop(MANIFEST_FILENAME))
        assert a == b
        manifest_a.pop("generatedAt")
        manifest_b.pop("generatedAt")
        assert manifest_a == manifest_b


class TestReadCanonical:
    """Tests for reading canonical data back."""

    def test_round_trip(self, small_dataset, tmp_path):
        """Canonical files read back to the same collections."""
        DatasetWriter(tmp_path).write(small_dataset, ["canonical"])
        assert read_canonical(tmp_path) == small_dataset.canonical
        assert read_canonical(tmp_path / "canonical") == small_dataset.canonical

    def test_reproject_from_disk(self, small_dataset, generated_at, tmp_path):
        """Projections rebuilt from disk match the originals."""
        DatasetWriter(tmp_path).write(small_dataset, ["canonical"])
        dataset = DatasetGenerator.reproject(
            read_canonical(tmp_path), seed=42, size="small", generated_at=generated_at
        )
        assert dataset.optimized == small_dataset.optimized
        assert dataset.normalized == small_dataset.normalized
        assert [b.to_csv() for b in dataset.relational] == [
            b.to_csv() for b in small_dataset.relational
        ]

    def test_missing_files(self, tmp_path):
        """Missing collections read as empty lists."""
        canonical = read_canonical(tmp_path)
        assert all(rows == [] for rows in canonical.values())
        assert len(canonical) == 19
