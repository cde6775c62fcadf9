"""Sample records used when STUDYMATE_SEED is enabled and no courses exist."""

from __future__ import annotations

from datetime import timedelta
from typing import TYPE_CHECKING

from studymate.domain.models import Assignment, Course, Status

if TYPE_CHECKING:
    from studymate.services.study_service import StudyMateService


def seed(service: "StudyMateService") -> None:
    today = service.today()
    service.add_course(
        Course(101, "Calculus I", "Dr. Smith", "Fall 2025", 3, "Introduction to limits and derivatives.")
    )
    service.add_course(
        Course(102, "Programming III", "Dr. Spataru", "Fall 2025", 5, "Collections, streams and threads.")
    )
    service.add_assignment(
        Assignment(1, 101, "Limits Worksheet", "Solve problems 1-20 from chapter 1.", today + timedelta(days=5), 1, Status.PENDING)
    )
    service.add_assignment(
        Assignment(2, 101, "Derivatives Quiz", "Prepare for in-class quiz.", today + timedelta(days=10), 2, Status.PENDING)
    )
    service.add_assignment(
        Assignment(3, 102, "Threads Lab", "Implement the thread benchmark.", today + timedelta(days=7), 1, Status.PENDING)
    )
