"""
Base classes for level generators.

This module provides:
- IdAllocator: Monotonic id issuer bounded to one entity type's range
- GeneratorContext: Shared state dataclass passed to all level generators
- BaseLevelGenerator: Abstract base class for level-specific generators

Design Principles:
- Context owns all mutable state (RandomSource, id allocators, data storage)
- Generators are stateless functions that read/write to context
- The RandomSource is threaded through the context, never held globally
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timedelta

from ..constants import ID_RANGES, REFERENCE_INSTANT
from ..errors import IdRangeExhausted
from ..models import ENTITY_ORDER, PRIMARY_KEYS
from ..presets import SizePreset
from ..random_source import RandomSource


class IdAllocator:
    """
    Issues ascending integer ids for one entity type.

    Attributes:
        entity: Entity collection name (for error messages)
        start: First id issued
        capacity: Ids available before the next type's range (None = unbounded)
        issued: Number of ids issued so far
    """

    __slots__ = ("entity", "start", "capacity", "issued")

    def __init__(self, entity: str, start: int, capacity: int | None = None) -> None:
        self.entity = entity
        self.start = start
        self.capacity = capacity
        self.issued = 0

    def next(self) -> int:
        """Issue the next id."""
        if self.capacity is not None and self.issued >= self.capacity:
            raise IdRangeExhausted(
                f"{self.entity}: id range starting at {self.start} is full "
                f"({self.capacity} ids)"
            )
        value = self.start + self.issued
        self.issued += 1
        return value

    @property
    def last(self) -> int | None:
        """Most recently issued id, or None before the first call."""
        return self.start + self.issued - 1 if self.issued else None


def build_allocators(id_scale: int = 1) -> dict[str, IdAllocator]:
    """
    Build one allocator per id-keyed entity type.

    Range starts are ID_RANGES scaled by id_scale; each range ends where the
    next-higher start begins.
    """
    starts = sorted((base * id_scale, entity) for entity, base in ID_RANGES.items())
    allocators = {}
    for i, (start, entity) in enumerate(starts):
        capacity = starts[i + 1][0] - start if i + 1 < len(starts) else None
        allocators[entity] = IdAllocator(entity, start, capacity)
    return allocators


@dataclass
class GeneratorContext:
    """
    Shared state for all level generators.

    Generators receive this context and can:
    - Draw from the run's RandomSource (the only source of variation)
    - Allocate ids for their entity types
    - Read/write the shared data dict

    Attributes:
        seed: Seed the RandomSource was started from
        rng: The run's RandomSource
        preset: Resolved size preset
        data: Collection name -> list of canonical row dicts
        ids: Entity name -> IdAllocator
        generated_levels: Levels already generated
    """

    # ==========================================================================
    # Core Random State
    # ==========================================================================
    seed: int
    rng: RandomSource
    preset: SizePreset

    # ==========================================================================
    # Shared Data Storage
    # ==========================================================================
    data: dict[str, list[dict]] = field(default_factory=dict)
    ids: dict[str, IdAllocator] = field(default_factory=dict)

    # ==========================================================================
    # Generation Tracking
    # ==========================================================================
    generated_levels: set[int] = field(default_factory=set)
    _level_times: dict[int, float] = field(default_factory=dict, repr=False)
    _level_rows: dict[int, int] = field(default_factory=dict, repr=False)

    @classmethod
    def create(cls, seed: int, preset: SizePreset) -> "GeneratorContext":
        """Build a fresh context with its own RandomSource and allocators."""
        ctx = cls(seed=seed, rng=RandomSource(seed), preset=preset)
        ctx.ids = build_allocators(preset.id_scale)
        ctx.init_data_tables()
        return ctx

    def init_data_tables(self) -> None:
        """Initialize empty lists for all collections."""
        for name in ENTITY_ORDER:
            self.data[name] = []

    def allocate(self, entity: str) -> int:
        """Issue the next id for an entity type."""
        return self.ids[entity].next()

    def window_start(self, extra_days: int = 0) -> datetime:
        """Reference instant minus (preset.days + extra_days) days."""
        return REFERENCE_INSTANT - timedelta(days=self.preset.days + extra_days)

    def finalize(self) -> dict[str, list[dict]]:
        """
        Sort every collection by primary key ascending.

        Returns:
            The sorted data dict (same object as self.data)
        """
        for name, rows in self.data.items():
            keys = PRIMARY_KEYS[name]
            rows.sort(key=lambda r: tuple(r[k] for k in keys))
        return self.data

    def counts(self) -> dict[str, int]:
        """Row count per collection in ENTITY_ORDER."""
        return {name: len(self.data.get(name, [])) for name in ENTITY_ORDER}


class BaseLevelGenerator(ABC):
    """
    Abstract base class for level-specific generators.

    Each level generator implements generate(), which reads from and writes
    to the shared GeneratorContext. Levels run in ascending order and each
    level consumes the RandomSource in a fixed sequence, so a level may only
    reference ids produced by earlier levels.
    """

    LEVEL: int = -1

    def __init__(self, ctx: GeneratorContext) -> None:
        self.ctx = ctx

    @abstractmethod
    def generate(self) -> None:
        """
        Generate data for this level.

        Implementations should:
        - Read dependencies from self.ctx.data
        - Append new rows to their collections
        - Mark level as complete: self.ctx.generated_levels.add(LEVEL)
        """
        pass

    @property
    def rng(self) -> RandomSource:
        """Convenience accessor for the run's RandomSource."""
        return self.ctx.rng

    @property
    def data(self) -> dict[str, list[dict]]:
        """Convenience accessor for shared data storage."""
        return self.ctx.data

    @property
    def preset(self) -> SizePreset:
        return self.ctx.preset
