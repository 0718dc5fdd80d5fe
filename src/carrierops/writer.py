"""
Artifact writer and canonical reader.

Output layout under the destination directory:

    canonical/<entity>.ndjson
    mongo_normalized/<entity>.ndjson
    mongo_optimized/<entity>.ndjson      (no order_items / subscriber_profiles)
    postgres/data/<entity>.csv
    manifest.json

The overwrite guard is all-or-nothing: every planned path is checked before
the first byte is written.
"""

import json
from enum import Enum
from pathlib import Path
from typing import Any, Iterable, Iterator

from .errors import DestinationConflict, InvalidConfiguration, WriteFailure
from .manifest import render_manifest
from .models import ENTITY_ORDER
from .pipeline import Dataset
from .projections import csv_lines, dumps_compact
from .projections.documents import EMBEDDED_COLLECTIONS


class Shape(str, Enum):
    """Output shapes, in write order."""

    CANONICAL = "canonical"
    MONGO_NORMALIZED = "mongo_normalized"
    MONGO_OPTIMIZED = "mongo_optimized"
    POSTGRES = "postgres"


SHAPE_ALIASES = {
    "normalized": Shape.MONGO_NORMALIZED,
    "optimized": Shape.MONGO_OPTIMIZED,
    "relational": Shape.POSTGRES,
}

MANIFEST_FILENAME = "manifest.json"


def parse_shapes(only: str | Iterable[str | Shape] = "all") -> list[Shape]:
    """
    Resolve a shape selector to the shapes to write, in write order.

    Accepts "all", a shape name, an alias (normalized, optimized, relational),
    a comma-separated list or an iterable of those.

    Raises:
        InvalidConfiguration: Unknown selector
    """
    if isinstance(only, str):
        tokens = only.split(",")
    else:
        tokens = list(only)
    if not tokens:
        raise InvalidConfiguration("Empty shape selector")

    selected: set[Shape] = set()
    for token in tokens:
        if isinstance(token, Shape):
            selected.add(token)
            continue
        key = str(token).strip().lower()
        if key == "all":
            selected.update(Shape)
        elif key in SHAPE_ALIASES:
            selected.add(SHAPE_ALIASES[key])
        else:
            try:
                selected.add(Shape(key))
            except ValueError:
                valid = ", ".join(["all"] + [s.value for s in Shape] + list(SHAPE_ALIASES))
                raise InvalidConfiguration(
                    f"Invalid --only {token!r} (expected one of: {valid})"
                ) from None
    return [shape for shape in Shape if shape in selected]


def ndjson_line(row: dict) -> str:
    """One compact JSON document (no trailing newline)."""
    return dumps_compact(row)


def ndjson_lines(rows: Iterable[dict]) -> Iterator[str]:
    for row in rows:
        yield ndjson_line(row) + "\n"


def shape_entities(shape: Shape) -> list[str]:
    """Entities written for a shape (the optimized shape drops embedded ones)."""
    if shape is Shape.MONGO_OPTIMIZED:
        return [name for name in ENTITY_ORDER if name not in EMBEDDED_COLLECTIONS]
    return list(ENTITY_ORDER)


class DatasetWriter:
    """
    Writes a Dataset to disk.

    Attributes:
        out_dir: Destination directory
        overwrite: Replace existing artifacts instead of refusing
        stats: Relative path -> rows written (set by write())
    """

    def __init__(self, out_dir: Path | str, overwrite: bool = False) -> None:
        self.out_dir = Path(out_dir)
        self.overwrite = overwrite
        self.stats: dict[str, int] = {}

    # ------------------------------------------------------------------
    # Planning
    # ------------------------------------------------------------------

    def shape_dir(self, shape: Shape) -> Path:
        if shape is Shape.POSTGRES:
            return self.out_dir / "postgres" / "data"
        return self.out_dir / shape.value

    def shape_paths(self, shape: Shape) -> list[Path]:
        suffix = ".csv" if shape is Shape.POSTGRES else ".ndjson"
        directory = self.shape_dir(shape)
        return [directory / f"{name}{suffix}" for name in shape_entities(shape)]

    def planned_paths(self, shapes: Iterable[Shape | str]) -> list[Path]:
        """Every artifact path for the selected shapes plus the manifest."""
        paths: list[Path] = []
        for shape in parse_shapes(shapes):
            paths.extend(self.shape_paths(shape))
        paths.append(self.out_dir / MANIFEST_FILENAME)
        return paths

    def check_destination(self, shapes: Iterable[Shape | str]) -> None:
        """
        Refuse to write if any planned artifact exists and overwrite is off.

        Raises:
            DestinationConflict: Lists every existing planned path
        """
        if self.overwrite:
            return
        conflicts = [p for p in self.planned_paths(shapes) if p.exists()]
        if conflicts:
            raise DestinationConflict(conflicts)

    # ------------------------------------------------------------------
    # Writing
    # ------------------------------------------------------------------

    def write(self, dataset: Dataset, shapes: Iterable[Shape | str] = tuple(Shape)) -> dict[str, int]:
        """
        Write the selected shapes, then the manifest.

        Returns:
            Relative path -> rows written

        Raises:
            DestinationConflict: Before any write, if artifacts exist
            WriteFailure: The filesystem rejected a write
        """
        shapes = parse_shapes(shapes)
        self.check_destination(shapes)
        self.stats = {}

        for shape in shapes:
            if shape is Shape.POSTGRES:
                for bundle in dataset.relational:
                    path = self.shape_dir(shape) / bundle.filename
                    self._write_lines(path, csv_lines(bundle.headers, bundle.rows))
                    self._record(path, len(bundle.rows))
                continue

            collections = {
                Shape.CANONICAL: dataset.canonical,
                Shape.MONGO_NORMALIZED: dataset.normalized,
                Shape.MONGO_OPTIMIZED: dataset.optimized,
            }[shape]
            for name, path in zip(shape_entities(shape), self.shape_paths(shape)):
                rows = collections.get(name, [])
                self._write_lines(path, ndjson_lines(rows))
                self._record(path, len(rows))

        manifest_path = self.out_dir / MANIFEST_FILENAME
        self._write_lines(manifest_path, [render_manifest(dataset.manifest)])
        self._record(manifest_path, 1)
        return self.stats

    def _record(self, path: Path, rows: int) -> None:
        self.stats[path.relative_to(self.out_dir).as_posix()] = rows

    def _write_lines(self, path: Path, lines: Iterable[str]) -> None:
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(path, "w", encoding="utf-8", newline="") as f:
                f.writelines(lines)
        except OSError as exc:
            raise WriteFailure(path, exc.strerror or str(exc)) from exc


# =============================================================================
# Reading
# =============================================================================


def read_ndjson(path: Path) -> list[dict[str, Any]]:
    """Read one NDJSON file (blank lines ignored)."""
    rows = []
    with open(path, encoding="utf-8") as f:
        for line in f:
            line = line.strip()
            if line:
                rows.append(json.loads(line))
    return rows


def read_canonical(directory: Path | str) -> dict[str, list[dict]]:
    """
    Read canonical NDJSON files back into the canonical mapping.

    Args:
        directory: A dataset root (containing canonical/) or the canonical
            directory itself

    Returns:
        Collection name -> rows, in ENTITY_ORDER (missing file -> empty list)
    """
    directory = Path(directory)
    if (directory / Shape.CANONICAL.value).is_dir():
        directory = directory / Shape.CANONICAL.value

    canonical: dict[str, list[dict]] = {}
    for name in ENTITY_ORDER:
        path = directory / f"{name}.ndjson"
        canonical[name] = read_ndjson(path) if path.exists() else []
    return canonical
