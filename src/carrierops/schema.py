"""
Relational schema accessor for schema.yaml.

Provides a stable API over the declarative table definitions used by the
relational projection, the validator and the bulk-load ordering:

    schema = load_schema()
    schema.columns("subscribers")       # ['subscriber_id', 'account_id', ...]
    schema.field_for("pii_last4_ssn")   # 'piiLast4Ssn'
    schema.load_order()                 # ['features', 'ticket_status_codes', ...]

The schema is validated on construction; every problem found is reported in a
single SchemaError.
"""

from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import Optional

import networkx as nx
import yaml

SCHEMA_PATH = Path(__file__).parent / "schema.yaml"

TIERS = ("lookup", "core", "dependent", "fact")


@dataclass
class SchemaProblem:
    """A validation problem for one table of the schema."""

    table: str
    field: str
    message: str

    def __str__(self):
        return f"table '{self.table}': {self.field} - {self.message}"


class SchemaError(Exception):
    """Raised when schema.yaml fails validation."""

    def __init__(self, problems: list[SchemaProblem]):
        self.problems = problems
        message = f"Relational schema invalid with {len(problems)} problem(s):\n"
        message += "\n".join(f"  - {p}" for p in problems)
        super().__init__(message)


@dataclass(frozen=True)
class ForeignKey:
    """columns -> references(ref_columns); nullable FKs may hold NULL."""

    table: str
    columns: tuple[str, ...]
    references: str
    ref_columns: tuple[str, ...]
    nullable: bool = False

    def __str__(self):
        return (
            f"{self.table}({', '.join(self.columns)}) -> "
            f"{self.references}({', '.join(self.ref_columns)})"
        )


@dataclass(frozen=True)
class PolymorphicRef:
    """A discriminator column naming which table an id column points into."""

    table: str
    discriminator: str
    id_column: str
    targets: dict[str, tuple[str, str]] = field(default_factory=dict)  # type -> (table, column)


def field_for(column: str) -> str:
    """Map a snake_case column to its camelCase document field."""
    head, *rest = column.split("_")
    return head + "".join(part[:1].upper() + part[1:] for part in rest)


class RelationalSchema:
    """
    Accessor for the relational table definitions.

    Tables keep their declaration order, which is also the order in which
    the relational projection emits them.
    """

    def __init__(self, raw: dict, source: Optional[Path] = None):
        self.source = source
        if raw is not None and not isinstance(raw, dict):
            raise SchemaError([SchemaProblem("*", "document", "must be a mapping")])
        self._tables: dict[str, dict] = dict((raw or {}).get("tables") or {})
        self._validate()

    # ------------------------------------------------------------------
    # Table access
    # ------------------------------------------------------------------

    @property
    def tables(self) -> list[str]:
        return list(self._tables)

    def columns(self, table: str) -> list[str]:
        return list(self._table(table)["columns"])

    def field_for(self, column: str) -> str:
        return field_for(column)

    def primary_key(self, table: str) -> list[str]:
        return list(self._table(table)["primary_key"])

    def tier(self, table: str) -> str:
        return self._table(table)["tier"]

    def json_columns(self, table: str) -> list[str]:
        return list(self._table(table).get("json_columns") or [])

    def foreign_keys(self, table: str) -> list[ForeignKey]:
        return [
            ForeignKey(
                table=table,
                columns=tuple(fk["columns"]),
                references=fk["references"],
                ref_columns=tuple(fk["ref_columns"]),
                nullable=bool(fk.get("nullable", False)),
            )
            for fk in self._table(table).get("foreign_keys") or []
        ]

    def polymorphic(self, table: str) -> Optional[PolymorphicRef]:
        definition = self._table(table).get("polymorphic")
        if not definition:
            return None
        return PolymorphicRef(
            table=table,
            discriminator=definition["discriminator"],
            id_column=definition["id_column"],
            targets={
                ref_type: (target["table"], target["column"])
                for ref_type, target in definition["targets"].items()
            },
        )

    def json_column_names(self) -> list[str]:
        """All JSON columns as table.column (manifest jsonbColumns)."""
        return [
            f"{table}.{column}"
            for table in self._tables
            for column in self.json_columns(table)
        ]

    # ------------------------------------------------------------------
    # Dependency graph
    # ------------------------------------------------------------------

    def dependency_graph(self) -> nx.DiGraph:
        """
        Build the parent -> child foreign-key graph.

        Self-references (org_units hierarchy) are omitted; they do not
        constrain load order between tables.
        """
        G = nx.DiGraph()
        for table in self._tables:
            G.add_node(table, tier=self.tier(table))
        for table in self._tables:
            for fk in self.foreign_keys(table):
                if fk.references != table:
                    G.add_edge(fk.references, table, columns=fk.columns)
            poly = self.polymorphic(table)
            if poly:
                for target_table, _ in poly.targets.values():
                    G.add_edge(target_table, table, columns=(poly.id_column,))
        return G

    def load_order(self) -> list[str]:
        """
        Dependency-safe bulk-load order.

        Lexicographic topological sort: among tables whose parents are all
        loaded, lower tier first, then declaration order.
        """
        G = self.dependency_graph()
        rank = {table: i for i, table in enumerate(self._tables)}

        def sort_key(table: str) -> tuple[int, int]:
            return (TIERS.index(self.tier(table)), rank[table])

        return list(nx.lexicographical_topological_sort(G, key=sort_key))

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def _table(self, table: str) -> dict:
        try:
            return self._tables[table]
        except KeyError:
            raise KeyError(f"Unknown table: {table}") from None

    def _validate(self) -> None:
        problems: list[SchemaProblem] = []
        if not self._tables:
            problems.append(SchemaProblem("*", "tables", "no tables declared"))

        for name, definition in self._tables.items():
            if not isinstance(definition, dict):
                problems.append(SchemaProblem(name, "definition", "must be a mapping"))
                continue
            columns = definition.get("columns") or []
            if not columns:
                problems.append(SchemaProblem(name, "columns", "no columns declared"))
            if len(set(columns)) != len(columns):
                problems.append(SchemaProblem(name, "columns", "duplicate column"))
            if definition.get("tier") not in TIERS:
                problems.append(
                    SchemaProblem(name, "tier", f"must be one of {', '.join(TIERS)}")
                )
            pk = definition.get("primary_key") or []
            if not pk:
                problems.append(SchemaProblem(name, "primary_key", "missing"))
            for col in pk:
                if col not in columns:
                    problems.append(SchemaProblem(name, "primary_key", f"unknown column {col}"))
            for col in definition.get("json_columns") or []:
                if col not in columns:
                    problems.append(SchemaProblem(name, "json_columns", f"unknown column {col}"))
            problems.extend(self._validate_foreign_keys(name, definition, columns))
            problems.extend(self._validate_polymorphic(name, definition, columns))

        if problems:
            raise SchemaError(problems)

        G = self.dependency_graph()
        if not nx.is_directed_acyclic_graph(G):
            cycle = nx.find_cycle(G)
            raise SchemaError(
                [SchemaProblem(cycle[0][0], "foreign_keys", f"dependency cycle {cycle}")]
            )

    def _validate_foreign_keys(self, name: str, definition: dict, columns: list) -> list[SchemaProblem]:
        problems = []
        for fk in definition.get("foreign_keys") or []:
            fk_cols = fk.get("columns") or []
            ref_table = fk.get("references")
            ref_cols = fk.get("ref_columns") or []
            for col in fk_cols:
                if col not in columns:
                    problems.append(SchemaProblem(name, "foreign_keys", f"unknown column {col}"))
            if ref_table not in self._tables:
                problems.append(
                    SchemaProblem(name, "foreign_keys", f"unknown table {ref_table}")
                )
                continue
            if len(fk_cols) != len(ref_cols):
                problems.append(
                    SchemaProblem(name, "foreign_keys", f"column count mismatch with {ref_table}")
                )
            ref_columns = self._tables[ref_table].get("columns") or []
            for col in ref_cols:
                if col not in ref_columns:
                    problems.append(
                        SchemaProblem(name, "foreign_keys", f"unknown column {ref_table}.{col}")
                    )
        return problems

    def _validate_polymorphic(self, name: str, definition: dict, columns: list) -> list[SchemaProblem]:
        poly = definition.get("polymorphic")
        if not poly:
            return []
        problems = []
        for key in ("discriminator", "id_column"):
            if poly.get(key) not in columns:
                problems.append(SchemaProblem(name, f"polymorphic.{key}", "unknown column"))
        targets = poly.get("targets") or {}
        if not targets:
            problems.append(SchemaProblem(name, "polymorphic.targets", "no targets declared"))
        for ref_type, target in targets.items():
            table = (target or {}).get("table")
            column = (target or {}).get("column")
            if table not in self._tables:
                problems.append(
                    SchemaProblem(name, "polymorphic.targets", f"{ref_type}: unknown table {table}")
                )
            elif column not in (self._tables[table].get("columns") or []):
                problems.append(
                    SchemaProblem(
                        name, "polymorphic.targets", f"{ref_type}: unknown column {table}.{column}"
                    )
                )
        return problems


def load_schema(path: Optional[Path] = None) -> RelationalSchema:
    """Load and validate a schema file (the packaged schema.yaml by default)."""
    if path is None:
        return _default_schema()
    path = Path(path)
    with open(path) as f:
        raw = yaml.safe_load(f)
    return RelationalSchema(raw, source=path)


@lru_cache(maxsize=1)
def _default_schema() -> RelationalSchema:
    with open(SCHEMA_PATH) as f:
        raw = yaml.safe_load(f)
    return RelationalSchema(raw, source=SCHEMA_PATH)
