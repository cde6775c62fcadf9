"""
Flat-text persistence: one line-delimited file per entity type.

Only courses and assignments are wired into this backend; notes, tests,
habits and habit logs are not stored here and load back empty.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Generic, Iterable, TypeVar

from studymate.core.errors import DecodeError, RepositoryIOError
from studymate.domain.models import Assignment, Course, Snapshot
from studymate.domain.records import (
    parse_assignment,
    parse_course,
    serialize_assignment,
    serialize_course,
)

from .base import SnapshotRepository

logger = logging.getLogger(__name__)

T = TypeVar("T")


class CsvFile(Generic[T]):
    """Reads and writes every record of one entity type to a single text file."""

    def __init__(self, path: str | Path, parse: Callable[[str], T], serialize: Callable[[T], str]):
        self.path = Path(path)
        self._parse = parse
        self._serialize = serialize

    def load_all(self) -> list[T]:
        if not self.path.exists():
            return []
        result: list[T] = []
        try:
            with self.path.open("r", encoding="utf-8") as f:
                for lineno, raw in enumerate(f, start=1):
                    line = raw.rstrip("\r\n")
                    if not line.strip():
                        continue
                    try:
                        result.append(self._parse(line))
                    except DecodeError as exc:
                        raise DecodeError(f"{self.path}:{lineno}: {exc.message}") from exc
        except (OSError, UnicodeDecodeError) as exc:
            raise RepositoryIOError(f"Failed to read {self.path}: {exc}") from exc
        return result

    def save_all(self, entities: Iterable[T]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with self.path.open("w", encoding="utf-8", newline="\n") as f:
                for entity in entities:
                    f.write(self._serialize(entity))
                    f.write("\n")
        except OSError as exc:
            raise RepositoryIOError(f"Failed to write {self.path}: {exc}") from exc


class CsvRepository(SnapshotRepository):
    name = "csv"

    def __init__(self, courses_path: str | Path, assignments_path: str | Path):
        self.courses = CsvFile[Course](courses_path, parse_course, serialize_course)
        self.assignments = CsvFile[Assignment](assignments_path, parse_assignment, serialize_assignment)

    def save(self, snapshot: Snapshot) -> None:
        self.courses.save_all(snapshot.courses)
        self.assignments.save_all(snapshot.assignments)
        logger.debug(
            "Saved %d courses and %d assignments as CSV", len(snapshot.courses), len(snapshot.assignments)
        )

    def load(self) -> Snapshot:
        courses = self.courses.load_all()
        assignments = self.assignments.load_all()
        return Snapshot(courses=courses, assignments=assignments)
