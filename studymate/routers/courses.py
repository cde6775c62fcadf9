from __future__ import annotations

from fastapi import APIRouter, Depends

from studymate.routers.deps import get_service, raise_for_outcome
from studymate.routers.schemas import CourseIn, CourseOut
from studymate.services.study_service import StudyMateService

router = APIRouter(prefix="/courses", tags=["courses"])


@router.get("", response_model=list[CourseOut])
def list_courses(svc: StudyMateService = Depends(get_service)):
    return [CourseOut.of(c) for c in svc.get_courses()]


@router.post("", response_model=CourseOut, status_code=201)
def add_course(body: CourseIn, svc: StudyMateService = Depends(get_service)):
    course = body.to_entity()
    raise_for_outcome(svc.add_course(course))
    return CourseOut.of(course)
