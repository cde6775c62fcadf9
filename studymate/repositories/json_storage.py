"""
JSON document persistence for the full snapshot.

One root object with an array per entity type (courses, assignments, notes,
tests, habits, habitLogs). Entries are keyed by field name and dates are ISO
calendar-date strings. A missing array loads as an empty collection.
"""

from __future__ import annotations

from datetime import date
import json
import logging
from pathlib import Path
from typing import Any, Callable

from studymate.core.errors import DecodeError, RepositoryIOError
from studymate.domain.models import (
    Assignment,
    Course,
    HabitLog,
    Note,
    Snapshot,
    StudyHabit,
    Test,
)

from .base import SnapshotRepository

logger = logging.getLogger(__name__)


def _field(o: dict, key: str) -> Any:
    if key not in o:
        raise DecodeError(f"Missing field {key!r}")
    return o[key]


def _int_field(o: dict, key: str) -> int:
    value = _field(o, key)
    if isinstance(value, bool) or not isinstance(value, int):
        raise DecodeError(f"Field {key!r} must be an integer, got {value!r}")
    return value


def _float_field(o: dict, key: str) -> float:
    value = _field(o, key)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise DecodeError(f"Field {key!r} must be a number, got {value!r}")
    return float(value)


def _str_field(o: dict, key: str, optional: bool = False) -> str:
    # optional text fields load missing or null as ""
    if optional and o.get(key) is None:
        return ""
    value = _field(o, key)
    if not isinstance(value, str):
        raise DecodeError(f"Field {key!r} must be a string, got {value!r}")
    return value


def _date_field(o: dict, key: str) -> date:
    value = _str_field(o, key)
    try:
        return date.fromisoformat(value)
    except ValueError as exc:
        raise DecodeError(f"Field {key!r} is not an ISO date: {value!r}") from exc


def _course_to_dict(c: Course) -> dict:
    return {
        "id": c.id,
        "name": c.name,
        "instructor": c.instructor,
        "semester": c.semester,
        "creditHours": c.credit_hours,
        "description": c.description,
    }


def _course_from_dict(o: dict) -> Course:
    return Course(
        id=_int_field(o, "id"),
        name=_str_field(o, "name"),
        instructor=_str_field(o, "instructor"),
        semester=_str_field(o, "semester"),
        credit_hours=_int_field(o, "creditHours"),
        description=_str_field(o, "description", optional=True),
    )


def _assignment_to_dict(a: Assignment) -> dict:
    return {
        "id": a.id,
        "courseId": a.course_id,
        "title": a.title,
        "description": a.description,
        "dueDate": a.due_date.isoformat(),
        "priority": a.priority,
        "status": a.status,
    }


def _assignment_from_dict(o: dict) -> Assignment:
    return Assignment(
        id=_int_field(o, "id"),
        course_id=_int_field(o, "courseId"),
        title=_str_field(o, "title"),
        description=_str_field(o, "description"),
        due_date=_date_field(o, "dueDate"),
        priority=_int_field(o, "priority"),
        status=_str_field(o, "status"),
    )


def _note_to_dict(n: Note) -> dict:
    return {
        "id": n.id,
        "courseId": n.course_id,
        "title": n.title,
        "content": n.content,
        "createdOn": n.created_on.isoformat(),
    }


def _note_from_dict(o: dict) -> Note:
    return Note(
        id=_int_field(o, "id"),
        course_id=_int_field(o, "courseId"),
        title=_str_field(o, "title"),
        content=_str_field(o, "content"),
        created_on=_date_field(o, "createdOn"),
    )


def _test_to_dict(t: Test) -> dict:
    return {
        "id": t.id,
        "courseId": t.course_id,
        "name": t.name,
        "date": t.date.isoformat(),
        "maxScore": t.max_score,
        "score": t.score,
    }


def _test_from_dict(o: dict) -> Test:
    return Test(
        id=_int_field(o, "id"),
        course_id=_int_field(o, "courseId"),
        name=_str_field(o, "name"),
        date=_date_field(o, "date"),
        max_score=_float_field(o, "maxScore"),
        score=_float_field(o, "score"),
    )


def _habit_to_dict(h: StudyHabit) -> dict:
    return {
        "id": h.id,
        "name": h.name,
        "description": h.description,
        "weeklyTarget": h.weekly_target,
    }


def _habit_from_dict(o: dict) -> StudyHabit:
    return StudyHabit(
        id=_int_field(o, "id"),
        name=_str_field(o, "name"),
        description=_str_field(o, "description"),
        weekly_target=_int_field(o, "weeklyTarget"),
    )


def _habit_log_to_dict(log: HabitLog) -> dict:
    return {
        "id": log.id,
        "habitId": log.habit_id,
        "date": log.date.isoformat(),
        "amount": log.amount,
        "note": log.note,
    }


def _habit_log_from_dict(o: dict) -> HabitLog:
    return HabitLog(
        id=_int_field(o, "id"),
        habit_id=_int_field(o, "habitId"),
        date=_date_field(o, "date"),
        amount=_int_field(o, "amount"),
        note=_str_field(o, "note", optional=True),
    )


def snapshot_to_document(snapshot: Snapshot) -> dict:
    return {
        "courses": [_course_to_dict(c) for c in snapshot.courses],
        "assignments": [_assignment_to_dict(a) for a in snapshot.assignments],
        "notes": [_note_to_dict(n) for n in snapshot.notes],
        "tests": [_test_to_dict(t) for t in snapshot.tests],
        "habits": [_habit_to_dict(h) for h in snapshot.habits],
        "habitLogs": [_habit_log_to_dict(log) for log in snapshot.habit_logs],
    }


def _read_array(root: dict, key: str, build: Callable[[dict], Any]) -> list:
    entries = root.get(key)
    if entries is None:
        return []
    if not isinstance(entries, list):
        raise DecodeError(f"Field {key!r} must be an array")
    items = []
    for index, entry in enumerate(entries):
        if not isinstance(entry, dict):
            raise DecodeError(f"{key}[{index}] must be an object")
        try:
            items.append(build(entry))
        except DecodeError as exc:
            raise DecodeError(f"{key}[{index}]: {exc.message}") from exc
    return items


def snapshot_from_document(root: Any) -> Snapshot:
    if not isinstance(root, dict):
        raise DecodeError("Snapshot document must be a JSON object")
    return Snapshot(
        courses=_read_array(root, "courses", _course_from_dict),
        assignments=_read_array(root, "assignments", _assignment_from_dict),
        notes=_read_array(root, "notes", _note_from_dict),
        tests=_read_array(root, "tests", _test_from_dict),
        habits=_read_array(root, "habits", _habit_from_dict),
        habit_logs=_read_array(root, "habitLogs", _habit_log_from_dict),
    )


class JsonRepository(SnapshotRepository):
    name = "json"

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def save(self, snapshot: Snapshot) -> None:
        payload = json.dumps(snapshot_to_document(snapshot), ensure_ascii=False, indent=2)
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(payload, encoding="utf-8")
        except OSError as exc:
            raise RepositoryIOError(f"Failed to write {self.path}: {exc}") from exc
        logger.debug("Saved snapshot document to %s", self.path)

    def load(self) -> Snapshot:
        if not self.path.exists():
            return Snapshot()
        try:
            with self.path.open("r", encoding="utf-8") as f:
                root = json.load(f)
        except json.JSONDecodeError as exc:
            raise DecodeError(f"Malformed JSON in {self.path}: {exc}") from exc
        except (OSError, UnicodeDecodeError) as exc:
            raise RepositoryIOError(f"Failed to read {self.path}: {exc}") from exc
        return snapshot_from_document(root)
