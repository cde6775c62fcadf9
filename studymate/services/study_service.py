"""
Course and assignment use cases with auto-persist.

The service is the single owner of the live collections and of the
course-by-id index. Mutations are meant for one writer at a time; the only
concurrent operation is the read-only pending credit analysis, which works
on a copy taken before it starts.
"""

from __future__ import annotations

from concurrent.futures import Future
from datetime import date
import logging
from typing import TYPE_CHECKING, Callable, Iterable, Optional, Union

from studymate.core.errors import (
    DecodeError,
    DuplicateIdError,
    InvalidReferenceError,
    Outcome,
    StudyMateError,
)
from studymate.domain.models import (
    Assignment,
    Course,
    HabitLog,
    Note,
    Snapshot,
    StudyHabit,
    Test,
)
from studymate.repositories.base import SnapshotRepository, create_repository
from studymate.services import analysis

if TYPE_CHECKING:
    from studymate.core.config import Settings

logger = logging.getLogger(__name__)


class _Unresolved:
    """Bucket key for assignments whose course id no longer resolves."""

    _instance: Optional["_Unresolved"] = None

    def __new__(cls) -> "_Unresolved":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNRESOLVED"

    def __reduce__(self):
        return (_Unresolved, ())


UNRESOLVED = _Unresolved()

CourseKey = Union[Course, _Unresolved]


def _check_unique_ids(entity_type: str, items: Iterable[Union[Course, Assignment]]) -> None:
    seen: set[int] = set()
    for item in items:
        if item.id in seen:
            raise DecodeError(f"Loaded data repeats {entity_type} ID {item.id}")
        seen.add(item.id)


class StudyMateService:
    """Owns the canonical snapshot and enforces admission rules."""

    def __init__(
        self,
        csv_repo: SnapshotRepository,
        json_repo: SnapshotRepository,
        binary_repo: Optional[SnapshotRepository] = None,
        sql_repo: Optional[SnapshotRepository] = None,
        *,
        today: Callable[[], date] = date.today,
        settings: Optional["Settings"] = None,
    ) -> None:
        self._csv_repo = csv_repo
        self._json_repo = json_repo
        self._binary_repo = binary_repo
        self._sql_repo = sql_repo
        self._today = today
        self._settings = settings
        self._state = Snapshot()
        self._course_index: dict[int, Course] = {}
        self.last_autosave: Optional[Outcome] = None

    @classmethod
    def from_settings(cls, settings: Optional["Settings"] = None, *, today: Callable[[], date] = date.today) -> "StudyMateService":
        from studymate.core.config import get_settings

        cfg = settings or get_settings()
        return cls(
            create_repository("csv", cfg),
            create_repository("json", cfg),
            create_repository("binary", cfg),
            today=today,
            settings=cfg,
        )

    def bootstrap(self) -> Outcome:
        """Load courses/assignments from CSV and optionally seed sample data."""
        outcome = self.load_all_data()
        if not outcome:
            logger.error("Failed to load data, starting empty: %s", outcome.message)
        if self._settings is not None and self._settings.seed_sample_data and not self._course_index:
            from studymate.services.sample_data import seed

            logger.info("No courses found on disk, initializing sample data")
            seed(self)
        return outcome

    # -------------------------------------- state helpers --------------------------------------
    def _rebuild_course_index(self) -> None:
        self._course_index = {course.id: course for course in self._state.courses}

    def snapshot(self) -> Snapshot:
        """Copy of the current state (lists are copied, entities are shared)."""
        return self._state.copy()

    def restore(self, snapshot: Snapshot) -> None:
        """Replace every collection wholesale and rebuild the course index.

        Raises DecodeError, leaving the state untouched, when the snapshot
        repeats a course or assignment id.
        """
        _check_unique_ids("Course", snapshot.courses)
        _check_unique_ids("Assignment", snapshot.assignments)
        self._state = snapshot.copy()
        self._rebuild_course_index()

    # -------------------------------------- queries --------------------------------------
    def get_courses(self) -> list[Course]:
        return list(self._state.courses)

    def get_assignments(self) -> list[Assignment]:
        return list(self._state.assignments)

    def get_notes(self) -> list[Note]:
        return list(self._state.notes)

    def get_tests(self) -> list[Test]:
        return list(self._state.tests)

    def get_habits(self) -> list[StudyHabit]:
        return list(self._state.habits)

    def get_habit_logs(self) -> list[HabitLog]:
        return list(self._state.habit_logs)

    def today(self) -> date:
        return self._today()

    def get_course(self, course_id: int) -> Optional[Course]:
        return self._course_index.get(course_id)

    # -------------------------------------- admission --------------------------------------
    def add_course(self, course: Course) -> Outcome:
        if course.id in self._course_index:
            return self._reject(DuplicateIdError("Course", course.id))
        self._state.courses.append(course)
        self._course_index[course.id] = course
        self._auto_save()
        return Outcome.success()

    def add_assignment(self, assignment: Assignment) -> Outcome:
        # reference first, then uniqueness
        if assignment.course_id not in self._course_index:
            return self._reject(InvalidReferenceError("Course", assignment.course_id))
        if any(existing.id == assignment.id for existing in self._state.assignments):
            return self._reject(DuplicateIdError("Assignment", assignment.id))
        self._state.assignments.append(assignment)
        self._auto_save()
        return Outcome.success()

    # Notes, tests and habits are appended as-is and do not trigger auto-persist.
    def add_note(self, note: Note) -> None:
        self._state.notes.append(note)

    def add_test(self, test: Test) -> None:
        self._state.tests.append(test)

    def add_habit(self, habit: StudyHabit) -> None:
        self._state.habits.append(habit)

    def add_habit_log(self, log: HabitLog) -> None:
        self._state.habit_logs.append(log)

    def _reject(self, exc: StudyMateError) -> Outcome:
        logger.info("Rejected: %s", exc.message)
        return Outcome.failure(exc)

    def _auto_save(self) -> None:
        """Save to CSV then JSON. Failures are logged; the in-memory change stays."""
        state = self.snapshot()
        try:
            self._csv_repo.save(state)
            self._json_repo.save(state)
        except StudyMateError as exc:
            logger.error("Error auto-saving data: %s", exc.message, exc_info=True)
            self.last_autosave = Outcome.failure(exc)
        else:
            self.last_autosave = Outcome.success()

    # -------------------------------------- analytics --------------------------------------
    def get_upcoming_deadlines(self) -> list[Assignment]:
        """Pending assignments due today or later, by due date, priority, id."""
        today = self._today()
        upcoming = [
            a for a in self._state.assignments
            if not a.is_completed and a.due_date >= today
        ]
        return sorted(upcoming, key=Assignment.sort_key)

    def get_completion_counts_by_course(self) -> dict[CourseKey, int]:
        counts: dict[CourseKey, int] = {}
        for assignment in self._state.assignments:
            if not assignment.is_completed:
                continue
            key: CourseKey = self._course_index.get(assignment.course_id, UNRESOLVED)
            counts[key] = counts.get(key, 0) + 1
        return counts

    def start_analysis(self) -> "Future[int]":
        """Start the pending credit-hour analysis on a worker thread."""
        task = analysis.PendingCreditAnalysis(self._course_index, self._state.assignments)
        workers = self._settings.analysis_workers if self._settings is not None else 2
        return analysis.submit(task, max_workers=workers)

    # -------------------------------------- explicit persistence --------------------------------------
    def save_to(self, repository: SnapshotRepository) -> Outcome:
        try:
            repository.save(self.snapshot())
        except StudyMateError as exc:
            logger.warning("Save to %s failed: %s", repository.name, exc.message)
            return Outcome.failure(exc)
        return Outcome.success()

    def load_from(self, repository: SnapshotRepository) -> Outcome:
        try:
            self.restore(repository.load())
        except StudyMateError as exc:
            logger.warning("Load from %s failed: %s", repository.name, exc.message)
            return Outcome.failure(exc)
        return Outcome.success()

    def save_all_data(self) -> Outcome:
        return self.save_to(self._csv_repo)

    def load_all_data(self) -> Outcome:
        """Reload courses and assignments from CSV; the other collections are kept."""
        try:
            loaded = self._csv_repo.load()
            _check_unique_ids("Course", loaded.courses)
            _check_unique_ids("Assignment", loaded.assignments)
        except StudyMateError as exc:
            logger.warning("Load from %s failed: %s", self._csv_repo.name, exc.message)
            return Outcome.failure(exc)
        self._state.courses = list(loaded.courses)
        self._state.assignments = list(loaded.assignments)
        self._rebuild_course_index()
        return Outcome.success()

    def save_as_json(self) -> Outcome:
        return self.save_to(self._json_repo)

    def load_from_json(self) -> Outcome:
        return self.load_from(self._json_repo)

    def save_as_binary(self) -> Outcome:
        return self.save_to(self._binary())

    def load_from_binary(self) -> Outcome:
        return self.load_from(self._binary())

    def save_to_sql(self) -> Outcome:
        try:
            repo = self._sql()
        except StudyMateError as exc:
            return Outcome.failure(exc)
        return self.save_to(repo)

    def load_from_sql(self) -> Outcome:
        try:
            repo = self._sql()
        except StudyMateError as exc:
            return Outcome.failure(exc)
        return self.load_from(repo)

    def _binary(self) -> SnapshotRepository:
        if self._binary_repo is None:
            self._binary_repo = create_repository("binary", self._settings)
        return self._binary_repo

    def _sql(self) -> SnapshotRepository:
        if self._sql_repo is None:
            self._sql_repo = create_repository("sql", self._settings)
        return self._sql_repo
