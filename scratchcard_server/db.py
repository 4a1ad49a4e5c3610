from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Dict, Iterator

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, scoped_session, sessionmaker
from sqlalchemy.pool import StaticPool

from .config import load_settings


def _engine_options(database_url: str) -> Dict[str, Any]:
    # In-memory SQLite lives on one connection; share it across request threads.
    if database_url.startswith("sqlite") and (":memory:" in database_url or database_url.rstrip("/") == "sqlite:"):
        return {"poolclass": StaticPool, "connect_args": {"check_same_thread": False}}
    return {"pool_pre_ping": True}


def build_engine(database_url: str) -> Engine:
    return create_engine(database_url, future=True, echo=False, **_engine_options(database_url))


engine = build_engine(load_settings().database_url)
SessionLocal = scoped_session(sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True))


def bind_engine(database_url: str) -> Engine:
    """Point the ledger session factory at ``database_url``; returns the new engine."""
    global engine
    SessionLocal.remove()
    engine.dispose()
    engine = build_engine(database_url)
    SessionLocal.configure(bind=engine)
    return engine


@contextmanager
def session_scope() -> Iterator[Session]:
    session = SessionLocal()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
