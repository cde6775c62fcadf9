from __future__ import annotations

from typing import Optional

from fastapi import FastAPI

from studymate.core.config import get_settings
from studymate.core.logging_config import init_logging
from studymate.routers import assignments as assignments_router
from studymate.routers import courses as courses_router
from studymate.routers import dashboard as dashboard_router
from studymate.services.study_service import StudyMateService


def create_app(service: Optional[StudyMateService] = None) -> FastAPI:
    """Factory compatible with uvicorn (``uvicorn studymate.app:create_app --factory``)."""
    settings = get_settings()
    init_logging(settings.log_level, settings.log_format)

    if service is None:
        service = StudyMateService.from_settings(settings)
        service.bootstrap()

    app = FastAPI(title="StudyMate API")
    app.state.study_service = service
    app.include_router(courses_router.router)
    app.include_router(assignments_router.router)
    app.include_router(dashboard_router.router)
    return app
