"""
Generators Package - Level generators for the canonical CarrierOps dataset.

Base Classes:
- GeneratorContext: Shared state dataclass passed to all generators
- BaseLevelGenerator: Abstract base class for level-specific generators
- IdAllocator: Bounded, monotonic id issuer per entity type

Level Generators (run in ascending order; draw order is fixed):
- Level0Generator: Reference data (plans, regions, rates, features, ...)
- Level1Generator: Accounts
- Level2Generator: Subscribers and profiles
- Level3Generator: Devices
- Level4Generator: Orders and order items
- Level5Generator: Subscriber features and provisioning state
- Level6Generator: Tickets
- Level7Generator: Notes (polymorphic)
- Level8Generator: Device events
- Level9Generator: Usage records
"""

from .base import BaseLevelGenerator, GeneratorContext, IdAllocator, build_allocators
from .level_0_reference import Level0Generator
from .level_1_3_subscribers import Level1Generator, Level2Generator, Level3Generator
from .level_4_5_commerce import Level4Generator, Level5Generator
from .level_6_7_care import Level6Generator, Level7Generator
from .level_8_9_telemetry import (
    PAYLOAD_BUILDERS,
    Level8Generator,
    Level9Generator,
    build_payload,
)

LEVEL_GENERATORS = [
    Level0Generator,
    Level1Generator,
    Level2Generator,
    Level3Generator,
    Level4Generator,
    Level5Generator,
    Level6Generator,
    Level7Generator,
    Level8Generator,
    Level9Generator,
]

__all__ = [
    # Base classes
    "GeneratorContext",
    "BaseLevelGenerator",
    "IdAllocator",
    "build_allocators",
    # Level 0: Reference data
    "Level0Generator",
    # Level 1-3: Accounts, subscribers, devices
    "Level1Generator",
    "Level2Generator",
    "Level3Generator",
    # Level 4-5: Commerce
    "Level4Generator",
    "Level5Generator",
    # Level 6-7: Care
    "Level6Generator",
    "Level7Generator",
    # Level 8-9: Telemetry
    "Level8Generator",
    "Level9Generator",
    "PAYLOAD_BUILDERS",
    "build_payload",
    "LEVEL_GENERATORS",
]
