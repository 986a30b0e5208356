"""Composition root — wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from functools import lru_cache

from sqlalchemy import Engine
from sqlalchemy.orm import Session, sessionmaker

from orderdesk.infrastructure.config import get_settings
from orderdesk.infrastructure.persistence.database import (
    create_db_engine,
    create_session_factory,
)
from orderdesk.infrastructure.persistence.sql_unit_of_work import SqlUnitOfWork
from orderdesk.infrastructure.session_store import SessionStore, load_or_create_secret


@lru_cache()
def engine() -> Engine:
    settings = get_settings()
    if not settings.DATABASE_URL:
        settings.DATA_DIR.mkdir(parents=True, exist_ok=True)
    return create_db_engine(
        settings.database_url,
        echo=settings.SQL_ECHO,
        lock_timeout=settings.DB_LOCK_TIMEOUT,
    )


@lru_cache()
def session_factory() -> sessionmaker[Session]:
    return create_session_factory(engine())


def unit_of_work() -> SqlUnitOfWork:
    return SqlUnitOfWork(session_factory())


def session_store() -> SessionStore:
    settings = get_settings()
    secret_key = settings.SECRET_KEY or load_or_create_secret(settings.secret_key_file)
    return SessionStore(
        settings.session_file,
        secret_key,
        ttl_hours=settings.SESSION_TTL_HOURS,
        algorithm=settings.ALGORITHM,
    )


def reset() -> None:
    """Drop cached settings and engine (used when the environment changes)."""
    if engine.cache_info().currsize:
        engine().dispose()
    engine.cache_clear()
    session_factory.cache_clear()
    get_settings.cache_clear()
