"""
Plain value types for the academic records managed by StudyMate.

Entities are mutable dataclasses: callers build them once and may update
fields in place (for example moving an assignment from Pending to Completed).
Equality compares every field; hashing uses the id only, so an entity can be
used as a dict key while it is being edited.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date


class Status:
    PENDING = "Pending"
    IN_PROGRESS = "In Progress"
    COMPLETED = "Completed"


@dataclass
class Course:
    id: int
    name: str
    instructor: str
    semester: str
    credit_hours: int
    description: str = ""

    def __hash__(self) -> int:
        return hash(("course", self.id))


@dataclass
class Assignment:
    id: int
    course_id: int
    title: str
    description: str
    due_date: date
    priority: int = 1  # 1 = highest
    status: str = Status.PENDING

    def __hash__(self) -> int:
        return hash(("assignment", self.id))

    @property
    def is_completed(self) -> bool:
        return (self.status or "").lower() == Status.COMPLETED.lower()

    def sort_key(self) -> tuple[date, int, int]:
        """Total order used for deadlines: due date, then priority, then id."""
        return (self.due_date, self.priority, self.id)


@dataclass
class Note:
    id: int
    course_id: int
    title: str
    content: str
    created_on: date

    def __hash__(self) -> int:
        return hash(("note", self.id))


@dataclass
class Test:
    __test__ = False  # keep pytest from collecting the entity

    id: int
    course_id: int
    name: str
    date: date
    max_score: float
    score: float = 0.0

    def __hash__(self) -> int:
        return hash(("test", self.id))

    def compute_score(self) -> float:
        """Ratio between achieved and max score, 0 when max score is not positive."""
        if self.max_score <= 0:
            return 0.0
        return self.score / self.max_score


@dataclass
class StudyHabit:
    id: int
    name: str
    description: str
    weekly_target: int

    def __hash__(self) -> int:
        return hash(("habit", self.id))

    def compute_score(self) -> float:
        """A habit has no intrinsic score; its weekly target stands in for one."""
        return float(self.weekly_target)


@dataclass
class HabitLog:
    id: int
    habit_id: int
    date: date
    amount: int
    note: str = ""

    def __hash__(self) -> int:
        return hash(("habit_log", self.id))


@dataclass
class Snapshot:
    """Aggregate of all six collections; the unit exchanged with every backend."""

    courses: list[Course] = field(default_factory=list)
    assignments: list[Assignment] = field(default_factory=list)
    notes: list[Note] = field(default_factory=list)
    tests: list[Test] = field(default_factory=list)
    habits: list[StudyHabit] = field(default_factory=list)
    habit_logs: list[HabitLog] = field(default_factory=list)

    def copy(self) -> "Snapshot":
        return Snapshot(
            courses=list(self.courses),
            assignments=list(self.assignments),
            notes=list(self.notes),
            tests=list(self.tests),
            habits=list(self.habits),
            habit_logs=list(self.habit_logs),
        )

    def is_empty(self) -> bool:
        return not any(
            (self.courses, self.assignments, self.notes, self.tests, self.habits, self.habit_logs)
        )
