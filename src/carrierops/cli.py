#!/usr/bin/env python3
"""
Generate a deterministic CarrierOps dataset.

Outputs (under --out):
    canonical/           NDJSON, single source of truth
    mongo_normalized/    NDJSON mirror of canonical with _id
    mongo_optimized/     NDJSON with profiles, feature codes and items embedded
    postgres/data/       CSV per table, COPY-compatible
    manifest.json        version, seed, size, equivalence rules, counts

Usage:
    carrierops-generate --size S --seed 42 --out seed --only all --overwrite
"""

import argparse
import json
import sys
import time
from pathlib import Path

from .constants import DATASET_VERSION
from .errors import CarrierOpsError
from .pipeline import DatasetGenerator
from .validation import DataValidator
from .writer import MANIFEST_FILENAME, DatasetWriter, parse_shapes

DEFAULT_SEED = 42
DEFAULT_SIZE = "S"
DEFAULT_OUT = Path("seed")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="carrierops-generate",
        description="Generate a deterministic synthetic telecom dataset.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Small dataset, every shape, into ./seed
  carrierops-generate

  # Medium dataset, relational CSV only, replacing existing files
  carrierops-generate --size M --only postgres --overwrite

  # Different random seed into a scratch directory
  carrierops-generate --seed 7 --out /tmp/carrierops

--only values:
  canonical | mongo_normalized | mongo_optimized | postgres | all
""",
    )

    parser.add_argument(
        "--size",
        default=DEFAULT_SIZE,
        help=f"Size class: S|M|L or small|medium|large (default: {DEFAULT_SIZE})",
    )

    parser.add_argument(
        "--seed",
        default=str(DEFAULT_SEED),
        help=f"Non-negative integer seed (default: {DEFAULT_SEED})",
    )

    parser.add_argument(
        "--out",
        type=Path,
        default=DEFAULT_OUT,
        help=f"Output directory (default: {DEFAULT_OUT})",
    )

    parser.add_argument(
        "--only",
        default="all",
        help="Shape(s) to write (default: all)",
    )

    parser.add_argument(
        "--overwrite",
        action="store_true",
        help="Replace existing dataset artifacts",
    )

    parser.add_argument(
        "--skip-validation",
        action="store_true",
        help="Skip validation checks after generation",
    )

    return parser.parse_args(argv)


def run(args: argparse.Namespace) -> int:
    """
    Generate, validate and write a dataset.

    Returns:
        0 on success, 1 on validation failure

    Raises:
        CarrierOpsError: Bad configuration, destination conflict or write failure
    """
    # Configuration and destination are checked before any generation work
    shapes = parse_shapes(args.only)
    generator = DatasetGenerator(seed=args.seed, size=args.size)
    out_dir = args.out.resolve()
    writer = DatasetWriter(out_dir, overwrite=args.overwrite)
    writer.check_destination(shapes)

    dataset = generator.run()

    if not args.skip_validation:
        all_passed = DataValidator(dataset.canonical, generator.schema).print_validation_report()
    else:
        all_passed = True
        print("\nValidation skipped.")

    print()
    print(f"Writing {', '.join(s.value for s in shapes)} to {out_dir}...")
    write_start = time.time()
    stats = writer.write(dataset, shapes)
    print(f"Done. {len(stats)} files written in {time.time() - write_start:.2f}s")

    if not all_passed:
        print("\nValidation failed. Review errors above.")
        return 1

    print(
        json.dumps(
            {
                "ok": True,
                "out": str(out_dir),
                "manifest": MANIFEST_FILENAME,
                "datasetVersion": dataset.manifest.get("datasetVersion", DATASET_VERSION),
            }
        )
    )
    return 0


def main(argv: list[str] | None = None) -> int:
    """
    Command line entry point.

    Returns:
        0 on success, 1 on error or validation failure
    """
    args = parse_args(argv)
    try:
        return run(args)
    except CarrierOpsError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
