"""
Shared fixtures: isolated data directory, SQLite database and a service
with a fixed "today".
"""
from __future__ import annotations

from datetime import date
import sys
from pathlib import Path

import pytest

# Make the studymate package importable during local test runs
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from studymate.core import config as core_config  # noqa: E402
from studymate.db import session as db_session  # noqa: E402
from studymate.services import analysis  # noqa: E402
from studymate.services.study_service import StudyMateService  # noqa: E402

TODAY = date(2025, 10, 1)


@pytest.fixture()
def settings(tmp_path, monkeypatch):
    """Point every backend at tmp_path and reset cached settings/engines."""
    data_dir = tmp_path / "data"
    monkeypatch.setenv("STUDYMATE_DATA_DIR", str(data_dir))
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{data_dir / 'test.db'}")
    for name in (
        "STUDYMATE_COURSES_CSV",
        "STUDYMATE_ASSIGNMENTS_CSV",
        "STUDYMATE_JSON_PATH",
        "STUDYMATE_BINARY_PATH",
        "STUDYMATE_SEED",
    ):
        monkeypatch.delenv(name, raising=False)
    core_config.get_settings.cache_clear()
    db_session.reset_caches()

    yield core_config.get_settings()

    try:
        db_session.get_engine().dispose()
    except Exception:
        pass
    db_session.reset_caches()
    core_config.get_settings.cache_clear()


@pytest.fixture()
def service(settings):
    return StudyMateService.from_settings(settings, today=lambda: TODAY)


@pytest.fixture(scope="session", autouse=True)
def _shutdown_analysis_pool():
    yield
    analysis.shutdown()
