from __future__ import annotations

from fastapi import HTTPException, Request

from studymate.core.errors import ErrorKind, Outcome
from studymate.services.study_service import StudyMateService

_STATUS_BY_KIND = {
    ErrorKind.DUPLICATE_ID: 409,
    ErrorKind.INVALID_REFERENCE: 404,
    ErrorKind.IO_ERROR: 503,
    ErrorKind.DECODE_ERROR: 500,
}


def get_service(request: Request) -> StudyMateService:
    svc = getattr(getattr(request.app, "state", None), "study_service", None)
    if not svc:
        raise RuntimeError("StudyMateService not configured")
    return svc


def raise_for_outcome(outcome: Outcome) -> None:
    if outcome.ok:
        return
    status = _STATUS_BY_KIND.get(outcome.error, 400)
    raise HTTPException(status, {"error": outcome.error.value if outcome.error else "unknown", "message": outcome.message})
