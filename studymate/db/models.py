"""SQLAlchemy tables mirroring the six StudyMate collections.

course_id/habit_id columns mirror the entity associations but carry no
enforced foreign key: the service owns referential integrity.
"""
from __future__ import annotations

from sqlalchemy import Column, Date, Float, Integer, String, Text

from .session import Base


class CourseRow(Base):
    __tablename__ = "courses"

    id = Column(Integer, primary_key=True, autoincrement=False)
    name = Column(String(255), nullable=False)
    instructor = Column(String(255), nullable=False, default="")
    semester = Column(String(50), nullable=False, default="")
    credit_hours = Column(Integer, nullable=False)
    description = Column(Text, nullable=False, default="")


class AssignmentRow(Base):
    __tablename__ = "assignments"

    id = Column(Integer, primary_key=True, autoincrement=False)
    course_id = Column(Integer, nullable=False, index=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False, default="")
    due_date = Column(Date, nullable=False)
    priority = Column(Integer, nullable=False)
    status = Column(String(50), nullable=False)


class NoteRow(Base):
    __tablename__ = "notes"

    id = Column(Integer, primary_key=True, autoincrement=False)
    course_id = Column(Integer, nullable=False, index=True)
    title = Column(String(255), nullable=False)
    content = Column(Text, nullable=False, default="")
    created_on = Column(Date, nullable=False)


class TestRow(Base):
    __tablename__ = "tests"
    __test__ = False

    id = Column(Integer, primary_key=True, autoincrement=False)
    course_id = Column(Integer, nullable=False, index=True)
    name = Column(String(255), nullable=False)
    test_date = Column(Date, nullable=False)
    max_score = Column(Float, nullable=False)
    score = Column(Float, nullable=False)


class StudyHabitRow(Base):
    __tablename__ = "study_habits"

    id = Column(Integer, primary_key=True, autoincrement=False)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=False, default="")
    weekly_target = Column(Integer, nullable=False)


class HabitLogRow(Base):
    __tablename__ = "habit_logs"

    id = Column(Integer, primary_key=True, autoincrement=False)
    habit_id = Column(Integer, nullable=False, index=True)
    log_date = Column(Date, nullable=False)
    amount = Column(Integer, nullable=False)
    note = Column(Text, nullable=False, default="")
