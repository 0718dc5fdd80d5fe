"""
Dataset pipeline: canonical generation followed by every projection.

    generator = DatasetGenerator(seed=42, size="small")
    dataset = generator.run()          # generate_all() + project()

Data flows one way: RandomSource -> level generators -> canonical ->
{normalized -> optimized, relational} -> manifest. Nothing downstream of the
canonical stage consumes random draws, so projections can be re-run from
canonical data read back from disk (DatasetGenerator.reproject).
"""

import time
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from .generators import LEVEL_GENERATORS, GeneratorContext
from .manifest import build_manifest
from .presets import SizePreset, normalize_size, resolve_preset
from .projections import TableBundle, to_normalized, to_optimized, to_relational
from .random_source import coerce_seed
from .schema import RelationalSchema, load_schema

# Collections produced by each generation level
LEVEL_TABLES = {
    0: ["plans", "regions", "device_classes", "org_units", "rates", "features",
        "ticket_status_codes"],
    1: ["accounts"],
    2: ["subscribers", "subscriber_profiles"],
    3: ["devices"],
    4: ["orders", "order_items"],
    5: ["subscriber_features", "subscriber_feature_state"],
    6: ["tickets"],
    7: ["notes"],
    8: ["device_events"],
    9: ["usage_records"],
}


@dataclass
class Dataset:
    """Every shape of one generated dataset, plus its manifest."""

    seed: int
    size: str
    preset: SizePreset
    canonical: dict[str, list[dict]]
    normalized: dict[str, list[dict]] = field(default_factory=dict)
    optimized: dict[str, list[dict]] = field(default_factory=dict)
    relational: list[TableBundle] = field(default_factory=list)
    manifest: dict = field(default_factory=dict)

    @property
    def counts(self) -> dict[str, int]:
        return self.manifest.get("counts", {})


class DatasetGenerator:
    """
    Orchestrates generation of a CarrierOps dataset using level-based
    dependencies.

    Generation follows 10 levels (0-9); each level reads only rows produced by
    earlier levels. Instances share no state, so two generators with the same
    seed and size produce identical datasets.
    """

    def __init__(
        self,
        seed: int = 42,
        size: str = "small",
        schema: Optional[RelationalSchema] = None,
    ):
        """
        Initialize generator with reproducible random state.

        Args:
            seed: Non-negative integer seed
            size: Size class (small/medium/large or S/M/L)
            schema: Relational schema (packaged schema.yaml if None)

        Raises:
            InvalidConfiguration: Bad seed or size (before any work)
        """
        self.seed = coerce_seed(seed)
        self.size = normalize_size(size)
        self.preset = resolve_preset(self.size)
        self.schema = schema or load_schema()
        self._reset()

    def _reset(self) -> None:
        self.ctx = GeneratorContext.create(self.seed, self.preset)
        self._generators = [cls(self.ctx) for cls in LEVEL_GENERATORS]

    # ------------------------------------------------------------------
    # Canonical generation
    # ------------------------------------------------------------------

    def generate_all(self) -> dict[str, list[dict]]:
        """
        Generate the canonical dataset in dependency order (levels 0-9).

        Returns:
            Collection name -> rows, each sorted by primary key
        """
        if self.ctx.generated_levels:
            self._reset()

        print("=" * 60)
        print("CarrierOps - Dataset Generation")
        print("=" * 60)
        print(f"Seed: {self.seed}")
        print(f"Size: {self.size} ({self.preset.accounts} accounts, {self.preset.days} days)")
        print()
        print("Generating levels 0-9...")
        print()

        gen_start = time.time()
        for generator in self._generators:
            level_start = time.time()
            generator.generate()
            self._report_level_stats(generator.LEVEL, time.time() - level_start)
        canonical = self.ctx.finalize()
        gen_elapsed = time.time() - gen_start

        print()
        print("=" * 60)
        print("Generation Summary")
        print("=" * 60)
        total_rows = sum(self.ctx.counts().values())
        rows_per_sec = total_rows / gen_elapsed if gen_elapsed > 0 else 0
        print(f"Total rows: {total_rows:,}")
        print(f"Total time: {gen_elapsed:.2f}s ({rows_per_sec:,.0f} rows/sec)")
        print(f"Random draws: {self.ctx.rng.draws:,}")

        print()
        print("Id Ranges:")
        for entity, alloc in self.ctx.ids.items():
            if alloc.last is not None:
                print(f"  {entity}: {alloc.start}-{alloc.last}")

        if self.ctx._level_times:
            print()
            print("Level Performance:")
            for level in sorted(self.ctx._level_times):
                t = self.ctx._level_times[level]
                r = self.ctx._level_rows.get(level, 0)
                rps = r / t if t > 0 else 0
                print(f"  Level {level}: {t:6.2f}s - {r:9,} rows ({rps:,.0f}/sec)")

        return canonical

    def _report_level_stats(self, level: int, elapsed: float) -> None:
        """Report statistics for a completed level."""
        level_row_count = sum(
            len(self.ctx.data.get(t, [])) for t in LEVEL_TABLES.get(level, [])
        )
        self.ctx._level_times[level] = elapsed
        self.ctx._level_rows[level] = level_row_count

        rows_per_sec = level_row_count / elapsed if elapsed > 0 else 0
        print(f"    {elapsed:.2f}s ({rows_per_sec:,.0f} rows/sec)")

    # ------------------------------------------------------------------
    # Projections
    # ------------------------------------------------------------------

    def project(
        self,
        canonical: Optional[dict[str, list[dict]]] = None,
        generated_at: Optional[datetime] = None,
    ) -> Dataset:
        """
        Build every projection and the manifest from canonical data.

        Args:
            canonical: Canonical collections (this generator's data if None)
            generated_at: Fixed manifest timestamp (wall clock if None)
        """
        if canonical is None:
            if not self.ctx.generated_levels:
                self.generate_all()
            canonical = self.ctx.data
        return self.reproject(
            canonical,
            seed=self.seed,
            size=self.size,
            generated_at=generated_at,
            schema=self.schema,
        )

    @staticmethod
    def reproject(
        canonical: dict[str, list[dict]],
        *,
        seed: int,
        size: str,
        generated_at: Optional[datetime] = None,
        schema: Optional[RelationalSchema] = None,
    ) -> Dataset:
        """
        Re-run the projection stages on canonical data (e.g. read back from
        disk with writer.read_canonical). No random draws are made.
        """
        size = normalize_size(size)
        preset = resolve_preset(size)
        schema = schema or load_schema()

        normalized = to_normalized(canonical)
        optimized = to_optimized(canonical, normalized, preset)
        relational = to_relational(canonical, schema)
        manifest = build_manifest(
            canonical,
            seed=coerce_seed(seed),
            size=size,
            preset=preset,
            generated_at=generated_at,
            schema=schema,
        )
        return Dataset(
            seed=coerce_seed(seed),
            size=size,
            preset=preset,
            canonical=canonical,
            normalized=normalized,
            optimized=optimized,
            relational=relational,
            manifest=manifest,
        )

    def run(self, generated_at: Optional[datetime] = None) -> Dataset:
        """Generate the canonical dataset and every projection."""
        canonical = self.generate_all()
        return self.project(canonical, generated_at=generated_at)


def generate_dataset(
    seed: int = 42, size: str = "small", generated_at: Optional[datetime] = None
) -> Dataset:
    """Generate a complete dataset in one call."""
    return DatasetGenerator(seed=seed, size=size).run(generated_at=generated_at)
