"""
Relational projection: canonical collections -> CSV table bundles.

Column lists come from schema.yaml. CSV text is Postgres COPY-compatible:
header row, "\\n" line terminator, empty field for NULL, and a quoted field
(inner quotes doubled) whenever a value contains a comma, quote or newline.
CR and CRLF inside values are written as LF, so a value holding "\\r" reads
back with "\\n" in its place.
"""

import json
from dataclasses import dataclass, field
from typing import Any, Iterable, Iterator, Optional

from ..models import ENTITY_ORDER
from ..schema import RelationalSchema, load_schema


@dataclass
class TableBundle:
    """One relational table ready to be written as CSV."""

    filename: str
    headers: list[str]
    rows: list[dict[str, Any]] = field(default_factory=list)

    @property
    def table(self) -> str:
        return self.filename.rsplit(".", 1)[0]

    def to_csv(self) -> str:
        return encode_csv(self.headers, self.rows)


def dumps_compact(value: Any) -> str:
    """Compact JSON text (no whitespace after separators, non-ASCII kept)."""
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


def format_csv_value(value: Any) -> str:
    """
    Render one cell as text before quoting.

    None -> "", bool -> "true"/"false", dict/list -> compact JSON,
    everything else -> str(). CR and CRLF are normalized to LF.
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (dict, list)):
        text = dumps_compact(value)
    else:
        text = str(value)
    return text.replace("\r\n", "\n").replace("\r", "\n")


def csv_escape(value: Any) -> str:
    """Format and quote one cell (quoted only if it holds a comma, quote or newline)."""
    text = format_csv_value(value)
    if "," in text or '"' in text or "\n" in text:
        return '"' + text.replace('"', '""') + '"'
    return text


def csv_lines(headers: list[str], rows: Iterable[dict[str, Any]]) -> Iterator[str]:
    """Yield the header line, then one line per row, each ending in "\\n"."""
    yield ",".join(csv_escape(h) for h in headers) + "\n"
    for row in rows:
        yield ",".join(csv_escape(row.get(h)) for h in headers) + "\n"


def encode_csv(headers: list[str], rows: Iterable[dict[str, Any]]) -> str:
    """
    Encode rows as CSV text with a header line and a trailing newline.

    Missing keys are written as NULL (empty field).
    """
    return "".join(csv_lines(headers, rows))


def to_relational(
    canonical: dict[str, list[dict]], schema: Optional[RelationalSchema] = None
) -> list[TableBundle]:
    """
    Project canonical collections onto relational tables.

    Args:
        canonical: Collection name -> canonical rows
        schema: Relational schema (packaged schema.yaml if None)

    Returns:
        One TableBundle per entity, in ENTITY_ORDER
    """
    schema = schema or load_schema()
    bundles = []
    for name in ENTITY_ORDER:
        headers = schema.columns(name)
        json_cols = set(schema.json_columns(name))
        fields = [(col, schema.field_for(col)) for col in headers]

        rows = []
        for record in canonical.get(name, []):
            row = {}
            for col, fld in fields:
                value = record.get(fld)
                if col in json_cols and value is not None:
                    value = dumps_compact(value)
                row[col] = value
            rows.append(row)
        bundles.append(TableBundle(filename=f"{name}.csv", headers=headers, rows=rows))
    return bundles
