"""Database helpers (engine/session export)."""

from .session import Base, create_all, get_engine, get_session

__all__ = ["Base", "create_all", "get_engine", "get_session"]
