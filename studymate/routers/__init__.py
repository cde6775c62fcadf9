"""
FastAPI routers grouped by domain (courses, assignments, dashboard).

Each module exposes an APIRouter included by studymate.app. Routers read the
StudyMateService from app.state and never touch repositories directly.
"""
