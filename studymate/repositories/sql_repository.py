"""Relational persistence of the full snapshot backed by SQLAlchemy.

save() replaces all six tables inside one transaction; load() reads each
table in full. Row order is not guaranteed, so callers sort after loading.
"""
from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError

from studymate.core.errors import RepositoryIOError
from studymate.db.models import (
    AssignmentRow,
    CourseRow,
    HabitLogRow,
    NoteRow,
    StudyHabitRow,
    TestRow,
)
from studymate.db.session import create_all, get_session
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

# children before parents, matching the wipe order of a schema with real FKs
_WIPE_ORDER = (HabitLogRow, StudyHabitRow, TestRow, NoteRow, AssignmentRow, CourseRow)


class SQLRepository(SnapshotRepository):
    """Snapshot store wrapping the SQLAlchemy session."""

    name = "sql"

    def __init__(self, database_url: Optional[str] = None, *, create_schema: bool = True):
        self.database_url = database_url
        if create_schema:
            try:
                create_all(database_url)
            except (SQLAlchemyError, OSError) as exc:
                raise RepositoryIOError(f"Failed to initialize SQL schema: {exc}") from exc

    # -------------------------- save --------------------------
    def save(self, snapshot: Snapshot) -> None:
        try:
            with get_session(self.database_url) as session:
                with session.begin():
                    for table in _WIPE_ORDER:
                        session.execute(delete(table))
                    session.add_all(self._rows_for(snapshot))
        except (SQLAlchemyError, OSError) as exc:
            raise RepositoryIOError(f"Failed to save state to SQL DB: {exc}") from exc
        logger.debug("Saved snapshot to SQL database")

    def _rows_for(self, snapshot: Snapshot) -> list:
        rows: list = []
        rows.extend(
            CourseRow(
                id=c.id,
                name=c.name,
                instructor=c.instructor,
                semester=c.semester,
                credit_hours=c.credit_hours,
                description=c.description,
            )
            for c in snapshot.courses
        )
        rows.extend(
            AssignmentRow(
                id=a.id,
                course_id=a.course_id,
                title=a.title,
                description=a.description,
                due_date=a.due_date,
                priority=a.priority,
                status=a.status,
            )
            for a in snapshot.assignments
        )
        rows.extend(
            NoteRow(id=n.id, course_id=n.course_id, title=n.title, content=n.content, created_on=n.created_on)
            for n in snapshot.notes
        )
        rows.extend(
            TestRow(
                id=t.id,
                course_id=t.course_id,
                name=t.name,
                test_date=t.date,
                max_score=t.max_score,
                score=t.score,
            )
            for t in snapshot.tests
        )
        rows.extend(
            StudyHabitRow(id=h.id, name=h.name, description=h.description, weekly_target=h.weekly_target)
            for h in snapshot.habits
        )
        rows.extend(
            HabitLogRow(id=log.id, habit_id=log.habit_id, log_date=log.date, amount=log.amount, note=log.note)
            for log in snapshot.habit_logs
        )
        return rows

    # -------------------------- load --------------------------
    def load(self) -> Snapshot:
        try:
            with get_session(self.database_url) as session:
                courses = [
                    Course(
                        id=r.id,
                        name=r.name,
                        instructor=r.instructor,
                        semester=r.semester,
                        credit_hours=r.credit_hours,
                        description=r.description or "",
                    )
                    for r in session.execute(select(CourseRow)).scalars()
                ]
                assignments = [
                    Assignment(
                        id=r.id,
                        course_id=r.course_id,
                        title=r.title,
                        description=r.description or "",
                        due_date=r.due_date,
                        priority=r.priority,
                        status=r.status,
                    )
                    for r in session.execute(select(AssignmentRow)).scalars()
                ]
                notes = [
                    Note(id=r.id, course_id=r.course_id, title=r.title, content=r.content or "", created_on=r.created_on)
                    for r in session.execute(select(NoteRow)).scalars()
                ]
                tests = [
                    Test(
                        id=r.id,
                        course_id=r.course_id,
                        name=r.name,
                        date=r.test_date,
                        max_score=r.max_score,
                        score=r.score,
                    )
                    for r in session.execute(select(TestRow)).scalars()
                ]
                habits = [
                    StudyHabit(id=r.id, name=r.name, description=r.description or "", weekly_target=r.weekly_target)
                    for r in session.execute(select(StudyHabitRow)).scalars()
                ]
                habit_logs = [
                    HabitLog(id=r.id, habit_id=r.habit_id, date=r.log_date, amount=r.amount, note=r.note or "")
                    for r in session.execute(select(HabitLogRow)).scalars()
                ]
        except (SQLAlchemyError, OSError) as exc:
            raise RepositoryIOError(f"Failed to load state from SQL DB: {exc}") from exc
        return Snapshot(
            courses=courses,
            assignments=assignments,
            notes=notes,
            tests=tests,
            habits=habits,
            habit_logs=habit_logs,
        )
