"""Request/response bodies for the HTTP surface."""
from __future__ import annotations

from datetime import date

from pydantic import BaseModel, Field

from studymate.domain.models import Assignment, Course, Status


class CourseIn(BaseModel):
    id: int = Field(gt=0)
    name: str = Field(min_length=1)
    instructor: str = ""
    semester: str = ""
    credit_hours: int = Field(gt=0)
    description: str = ""

    def to_entity(self) -> Course:
        return Course(
            id=self.id,
            name=self.name,
            instructor=self.instructor,
            semester=self.semester,
            credit_hours=self.credit_hours,
            description=self.description,
        )


class CourseOut(BaseModel):
    id: int
    name: str
    instructor: str
    semester: str
    credit_hours: int
    description: str

    @classmethod
    def of(cls, course: Course) -> "CourseOut":
        return cls(
            id=course.id,
            name=course.name,
            instructor=course.instructor,
            semester=course.semester,
            credit_hours=course.credit_hours,
            description=course.description,
        )


class AssignmentIn(BaseModel):
    id: int = Field(gt=0)
    course_id: int = Field(gt=0)
    title: str = Field(min_length=1)
    description: str = ""
    due_date: date
    priority: int = Field(default=1, ge=1)
    status: str = Status.PENDING

    def to_entity(self) -> Assignment:
        return Assignment(
            id=self.id,
            course_id=self.course_id,
            title=self.title,
            description=self.description,
            due_date=self.due_date,
            priority=self.priority,
            status=self.status,
        )


class AssignmentOut(BaseModel):
    id: int
    course_id: int
    title: str
    description: str
    due_date: date
    priority: int
    status: str

    @classmethod
    def of(cls, assignment: Assignment) -> "AssignmentOut":
        return cls(
            id=assignment.id,
            course_id=assignment.course_id,
            title=assignment.title,
            description=assignment.description,
            due_date=assignment.due_date,
            priority=assignment.priority,
            status=assignment.status,
        )


class CompletionCount(BaseModel):
    course_id: int | None
    course_name: str | None
    completed: int


class Dashboard(BaseModel):
    course_count: int
    assignment_count: int
    upcoming_deadlines: list[AssignmentOut]
    completion_counts: list[CompletionCount]
