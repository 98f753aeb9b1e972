"""
Database connection and session management
"""

from contextlib import contextmanager
from typing import Any, Generator

from fastapi import HTTPException
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from loguru import logger as log

from common import global_config


def build_engine(uri: str, echo: bool = False) -> Engine:
    """Create an engine; SQLite URIs get the options needed by a threaded server."""
    kwargs: dict[str, Any] = {"echo": echo}
    if uri.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
        if uri in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
    else:
        kwargs["pool_pre_ping"] = True
        kwargs["pool_recycle"] = 300
    return create_engine(uri, **kwargs)


# Database engine
engine = build_engine(global_config.database_uri, echo=global_config.database.echo)

# Session factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db_session() -> Generator[Session, None, None]:
    """
    FastAPI dependency to get a database session.

    Yields:
        Database session
    """
    db_session = SessionLocal()
    try:
        yield db_session
    except Exception as e:
        if isinstance(e, HTTPException) and e.status_code == 404:
            log.warning(f"Database session raised HTTP 404: {e.detail}")
        else:
            log.error(f"Database session error: {e}")
        db_session.rollback()
        raise
    finally:
        db_session.close()


@contextmanager
def use_db_session() -> Generator[Session, None, None]:
    """
    Context manager to use a database session.
    """
    db_session = SessionLocal()
    try:
        yield db_session
    finally:
        db_session.close()
