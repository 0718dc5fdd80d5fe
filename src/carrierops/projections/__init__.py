"""
Projections Package - Alternate shapes of the canonical dataset.

Modules:
- documents: normalized and read-optimized document shapes
- relational: CSV table bundles driven by schema.yaml
"""

from .documents import IdSequence, to_normalized, to_optimized
from .relational import (
    TableBundle,
    csv_escape,
    csv_lines,
    dumps_compact,
    encode_csv,
    format_csv_value,
    to_relational,
)

__all__ = [
    "IdSequence",
    "to_normalized",
    "to_optimized",
    "TableBundle",
    "to_relational",
    "encode_csv",
    "csv_escape",
    "csv_lines",
    "format_csv_value",
    "dumps_compact",
]
