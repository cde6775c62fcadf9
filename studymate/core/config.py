"""
Configuration helpers for StudyMate.

Settings reads environment variables (data directory, backend paths, database
URL, logging) so that repositories and services do not fetch os.environ
directly.
"""

from dataclasses import dataclass
from functools import lru_cache
import os


@dataclass(frozen=True)
class Settings:
    """Typed view of environment variables."""

    app_env: str
    data_dir: str
    courses_csv: str
    assignments_csv: str
    json_path: str
    binary_path: str
    database_url: str
    log_level: str
    log_format: str
    seed_sample_data: bool
    analysis_workers: int


@lru_cache
def get_settings() -> Settings:
    """Read the current environment and build a Settings instance."""
    def _int(value: str, default: int = 0) -> int:
        try:
            return int(value)
        except (TypeError, ValueError):
            return default

    def _bool(value: str | None, default: bool = False) -> bool:
        if value is None:
            return default
        return value.strip().lower() in {"1", "true", "yes", "on"}

    data_dir = (os.getenv("STUDYMATE_DATA_DIR") or "data").rstrip("/")
    log_format = (os.getenv("LOG_FORMAT") or "text").lower()
    if log_format not in {"text", "json"}:
        log_format = "text"

    return Settings(
        app_env=(os.getenv("APP_ENV") or "dev").lower(),
        data_dir=data_dir,
        courses_csv=os.getenv("STUDYMATE_COURSES_CSV", os.path.join(data_dir, "courses.csv")),
        assignments_csv=os.getenv("STUDYMATE_ASSIGNMENTS_CSV", os.path.join(data_dir, "assignments.csv")),
        json_path=os.getenv("STUDYMATE_JSON_PATH", os.path.join(data_dir, "studymate.json")),
        binary_path=os.getenv("STUDYMATE_BINARY_PATH", os.path.join(data_dir, "studymate.bin")),
        database_url=os.getenv("DATABASE_URL", f"sqlite:///{os.path.join(data_dir, 'studymate.db')}"),
        log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
        log_format=log_format,
        seed_sample_data=_bool(os.getenv("STUDYMATE_SEED"), False),
        analysis_workers=max(1, _int(os.getenv("STUDYMATE_ANALYSIS_WORKERS", "2"), 2)),
    )
