"""
Flat-text record codec for courses and assignments.

One record per line, fields comma-joined in a fixed order, no header and no
escaping. A delimiter inside a text field is not escaped; only the course
description tolerates it, because it is the last field and gets re-joined.
"""

from __future__ import annotations

from datetime import date

from studymate.core.errors import DecodeError
from studymate.domain.models import Assignment, Course

DELIMITER = ","

COURSE_FIELDS = ("id", "name", "instructor", "semester", "creditHours", "description")
ASSIGNMENT_FIELDS = ("id", "courseId", "title", "description", "dueDate", "priority", "status")


def _int(value: str, field_name: str, line: str) -> int:
    try:
        return int(value)
    except ValueError as exc:
        raise DecodeError(f"Invalid {field_name} {value!r} in record: {line!r}") from exc


def _date(value: str, field_name: str, line: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError as exc:
        raise DecodeError(f"Invalid {field_name} {value!r} in record: {line!r}") from exc


def serialize_course(course: Course) -> str:
    return DELIMITER.join(
        [
            str(course.id),
            course.name,
            course.instructor,
            course.semester,
            str(course.credit_hours),
            course.description or "",
        ]
    )


def parse_course(line: str) -> Course:
    parts = line.split(DELIMITER)
    if len(parts) < len(COURSE_FIELDS):
        raise DecodeError(f"Invalid Course record format: {line!r}")
    return Course(
        id=_int(parts[0], "id", line),
        name=parts[1],
        instructor=parts[2],
        semester=parts[3],
        credit_hours=_int(parts[4], "creditHours", line),
        description=DELIMITER.join(parts[5:]),
    )


def serialize_assignment(assignment: Assignment) -> str:
    return DELIMITER.join(
        [
            str(assignment.id),
            str(assignment.course_id),
            assignment.title,
            assignment.description,
            assignment.due_date.isoformat(),
            str(assignment.priority),
            assignment.status,
        ]
    )


def parse_assignment(line: str) -> Assignment:
    parts = line.split(DELIMITER)
    if len(parts) != len(ASSIGNMENT_FIELDS):
        raise DecodeError(f"Invalid Assignment record format: {line!r}")
    return Assignment(
        id=_int(parts[0], "id", line),
        course_id=_int(parts[1], "courseId", line),
        title=parts[2],
        description=parts[3],
        due_date=_date(parts[4], "dueDate", line),
        priority=_int(parts[5], "priority", line),
        status=parts[6],
    )
