"""
CarrierOps - Deterministic synthetic telecom dataset generator.

This package generates a referentially consistent telecom operator dataset
(accounts, subscribers, devices, orders, usage, tickets) from a seed and a
size class, and projects it into canonical, document and relational shapes.
Given the same seed and size class, every artifact is byte-identical.
"""

from .constants import DATASET_VERSION
from .pipeline import Dataset, DatasetGenerator, generate_dataset

__version__ = "0.1.0"

__all__ = [
    "DATASET_VERSION",
    "Dataset",
    "DatasetGenerator",
    "generate_dataset",
]
