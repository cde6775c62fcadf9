"""Domain entities and record encoding for StudyMate."""

from .models import (
    Assignment,
    Course,
    HabitLog,
    Note,
    Snapshot,
    Status,
    StudyHabit,
    Test,
)

__all__ = [
    "Assignment",
    "Course",
    "HabitLog",
    "Note",
    "Snapshot",
    "Status",
    "StudyHabit",
    "Test",
]
