"""Repository contract shared by every backend, plus configuration-driven selection."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Optional

from studymate.domain.models import Snapshot

if TYPE_CHECKING:
    from studymate.core.config import Settings

BACKENDS = ("csv", "json", "binary", "sql")


class SnapshotRepository(ABC):
    """Full-overwrite save and all-or-nothing load of a Snapshot.

    load() returns an empty Snapshot when nothing was stored yet. Failures
    raise RepositoryIOError (storage unreachable) or DecodeError (stored data
    is malformed); a partially populated Snapshot is never returned.
    """

    name: str = "repository"

    @abstractmethod
    def save(self, snapshot: Snapshot) -> None:
        ...

    @abstractmethod
    def load(self) -> Snapshot:
        ...

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name}>"


def create_repository(kind: str, settings: Optional["Settings"] = None) -> SnapshotRepository:
    """Build the backend named by ``kind`` using paths from settings."""
    from studymate.core.config import get_settings
    from .binary_storage import BinaryRepository
    from .csv_storage import CsvRepository
    from .json_storage import JsonRepository
    from .sql_repository import SQLRepository

    cfg = settings or get_settings()
    key = (kind or "").strip().lower()
    if key == "csv":
        return CsvRepository(cfg.courses_csv, cfg.assignments_csv)
    if key == "json":
        return JsonRepository(cfg.json_path)
    if key == "binary":
        return BinaryRepository(cfg.binary_path)
    if key == "sql":
        return SQLRepository(cfg.database_url)
    raise ValueError(f"Unknown backend {kind!r}; expected one of {', '.join(BACKENDS)}")
