"""
Persistence adapters.

Each module encapsulates how the snapshot is stored/retrieved (flat CSV,
JSON document, pickled blob, SQL tables). Services depend on the
SnapshotRepository contract rather than touching files directly.
"""

from .base import BACKENDS, SnapshotRepository, create_repository

__all__ = ["BACKENDS", "SnapshotRepository", "create_repository"]
