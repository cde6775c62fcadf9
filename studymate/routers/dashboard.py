from __future__ import annotations

from fastapi import APIRouter, Depends

from studymate.routers.deps import get_service
from studymate.routers.schemas import AssignmentOut, CompletionCount, Dashboard
from studymate.services.study_service import UNRESOLVED, StudyMateService

router = APIRouter(tags=["dashboard"])


@router.get("/dashboard", response_model=Dashboard)
def dashboard(svc: StudyMateService = Depends(get_service)):
    counts = []
    for course, completed in svc.get_completion_counts_by_course().items():
        if course is UNRESOLVED:
            counts.append(CompletionCount(course_id=None, course_name=None, completed=completed))
        else:
            counts.append(CompletionCount(course_id=course.id, course_name=course.name, completed=completed))
    return Dashboard(
        course_count=len(svc.get_courses()),
        assignment_count=len(svc.get_assignments()),
        upcoming_deadlines=[AssignmentOut.of(a) for a in svc.get_upcoming_deadlines()],
        completion_counts=counts,
    )


@router.get("/analysis/pending-credits")
def pending_credits(svc: StudyMateService = Depends(get_service)):
    future = svc.start_analysis()
    return {"pending_credit_hours": future.result()}
