"""
Dataset manifest: version, seed, size, preset, equivalence rules and counts.

generatedAt is the only wall-clock value anywhere in the output; every other
field is a function of (seed, size).
"""

import json
from datetime import datetime, timezone
from typing import Optional

from .constants import DATASET_VERSION, USAGE_UNITS
from .models import ENTITY_ORDER
from .presets import SizePreset
from .schema import RelationalSchema, load_schema

CSV_FORMAT = "CSV header, Postgres COPY-compatible"


def utc_timestamp(now: Optional[datetime] = None) -> str:
    """ISO-8601 UTC with milliseconds, e.g. 2026-01-18T12:34:56.789Z."""
    now = now or datetime.now(timezone.utc)
    return now.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace(
        "+00:00", "Z"
    )


def build_manifest(
    canonical: dict[str, list[dict]],
    *,
    seed: int,
    size: str,
    preset: SizePreset,
    generated_at: Optional[datetime] = None,
    schema: Optional[RelationalSchema] = None,
) -> dict:
    """
    Build the manifest record for a generated dataset.

    Args:
        canonical: Canonical collections (counts are taken from here)
        seed: Seed the dataset was generated from
        size: Canonical size class name
        preset: Resolved size preset
        generated_at: Fixed timestamp (wall clock if None)
        schema: Relational schema (packaged schema.yaml if None)
    """
    schema = schema or load_schema()
    subscriber_embeds = ["profile"]
    if preset.embed_feature_codes:
        subscriber_embeds.append("featureCodes")

    return {
        "datasetVersion": DATASET_VERSION,
        "generatedAt": utc_timestamp(generated_at),
        "seed": seed,
        "size": size,
        "presets": preset.to_dict(),
        "equivalenceRules": {
            "idStrategy": "integers",
            "canonicalIsTruth": True,
            "mongoNormalizedMirrorsCanonical": True,
            "mongoOptimizedEmbeds": {
                "subscribers": subscriber_embeds,
                "orders": ["items"],
            },
            "usageUnits": ", ".join(f"{k}={v}" for k, v in USAGE_UNITS.items()),
            "postgresCsv": {
                "format": CSV_FORMAT,
                "jsonbColumns": schema.json_column_names(),
                "loadOrder": schema.load_order(),
            },
        },
        "counts": {name: len(canonical.get(name, [])) for name in ENTITY_ORDER},
    }


def render_manifest(manifest: dict) -> str:
    """2-space indented JSON with a trailing newline."""
    return json.dumps(manifest, indent=2, ensure_ascii=False) + "\n"
