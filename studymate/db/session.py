"""Engine/session helpers for the SQL backend."""
from __future__ import annotations

from contextlib import contextmanager
from functools import lru_cache
from pathlib import Path
from typing import Iterator, Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import declarative_base, sessionmaker, Session

from studymate.core.config import get_settings

Base = declarative_base()


def _resolve_url(url: Optional[str]) -> str:
    value = (url or get_settings().database_url or "").strip()
    if not value:
        raise RuntimeError("DATABASE_URL must be configured to use the SQL backend.")
    return value


def _ensure_sqlite_dir(url: str) -> None:
    parsed = make_url(url)
    if parsed.get_backend_name() != "sqlite":
        return
    database = parsed.database or ""
    if database and database != ":memory:":
        Path(database).parent.mkdir(parents=True, exist_ok=True)


@lru_cache
def _engine_for(url: str) -> Engine:
    _ensure_sqlite_dir(url)
    return create_engine(url, future=True, pool_pre_ping=True)


@lru_cache
def _sessionmaker_for(url: str) -> sessionmaker:
    return sessionmaker(bind=_engine_for(url), autoflush=False, future=True)


def get_engine(url: Optional[str] = None) -> Engine:
    return _engine_for(_resolve_url(url))


@contextmanager
def get_session(url: Optional[str] = None) -> Iterator[Session]:
    session: Session = _sessionmaker_for(_resolve_url(url))()
    try:
        yield session
    finally:
        session.close()


def create_all(url: Optional[str] = None) -> None:
    from . import models  # noqa: F401  # ensure models are imported for metadata

    Base.metadata.create_all(bind=get_engine(url))


def reset_caches() -> None:
    """Forget cached engines and sessionmakers; tests call this between databases."""
    _engine_for.cache_clear()
    _sessionmaker_for.cache_clear()
