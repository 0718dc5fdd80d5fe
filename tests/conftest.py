"""
Pytest fixtures for CarrierOps tests.

Provides:
- Generated datasets (small and medium size classes, fixed manifest timestamp)
- Relational schema accessor
- Deep copies of canonical data for tests that corrupt rows
"""

import copy
from datetime import datetime, timezone

import pytest

from carrierops import generate_dataset
from carrierops.schema import load_schema

# Fixed manifest timestamp so every artifact is byte-stable across runs
GENERATED_AT = datetime(2026, 1, 18, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture(scope="session")
def generated_at() -> datetime:
    """Manifest timestamp used by the session datasets."""
    return GENERATED_AT


@pytest.fixture(scope="session")
def small_dataset():
    """Small dataset for seed 42 (3 accounts, 6 subscribers)."""
    return generate_dataset(seed=42, size="small", generated_at=GENERATED_AT)


@pytest.fixture(scope="session")
def medium_dataset():
    """Medium dataset for seed 42, large enough for frequency checks."""
    return generate_dataset(seed=42, size="medium", generated_at=GENERATED_AT)


@pytest.fixture(scope="session")
def schema():
    """Packaged relational schema."""
    return load_schema()


@pytest.fixture
def small_canonical(small_dataset) -> dict:
    """Private copy of the small canonical data, safe to mutate."""
    return copy.deepcopy(small_dataset.canonical)
