from __future__ import annotations

from fastapi import APIRouter, Depends

from studymate.routers.deps import get_service, raise_for_outcome
from studymate.routers.schemas import AssignmentIn, AssignmentOut
from studymate.services.study_service import StudyMateService

router = APIRouter(prefix="/assignments", tags=["assignments"])


@router.get("", response_model=list[AssignmentOut])
def list_assignments(svc: StudyMateService = Depends(get_service)):
    return [AssignmentOut.of(a) for a in svc.get_assignments()]


@router.post("", response_model=AssignmentOut, status_code=201)
def add_assignment(body: AssignmentIn, svc: StudyMateService = Depends(get_service)):
    assignment = body.to_entity()
    raise_for_outcome(svc.add_assignment(assignment))
    return AssignmentOut.of(assignment)
