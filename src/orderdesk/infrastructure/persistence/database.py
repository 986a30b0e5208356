"""Engine, session factory and declarative base for the relational store."""

from __future__ import annotations

from sqlalchemy import Engine, create_engine, event, update
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""
    pass


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    # SQLite ignores ON DELETE CASCADE / RESTRICT unless this is on.
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_db_engine(
    database_url: str,
    echo: bool = False,
    lock_timeout: float = 5.0,
) -> Engine:
    """Create an engine with settings appropriate to the backend.

    On SQLite a writer waits up to ``lock_timeout`` seconds for another
    writer to finish before failing with "database is locked".
    """
    if database_url.startswith("sqlite"):
        engine = create_engine(
            database_url,
            echo=echo,
            connect_args={"check_same_thread": False, "timeout": lock_timeout},
        )
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
        return engine

    return create_engine(
        database_url,
        echo=echo,
        pool_pre_ping=True,  # Check connection health before use
    )


def create_session_factory(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(
        bind=engine,
        expire_on_commit=False,
        autoflush=False,
    )


def init_db(engine: Engine) -> None:
    """Create every table that does not exist yet."""
    # Import models so they are registered with Base.metadata
    from orderdesk.infrastructure.persistence import tables  # noqa: F401

    Base.metadata.create_all(engine)


def versioned_update(
    session: Session,
    model: type,
    row_id: int,
    expected_version: int,
    **values,
) -> bool:
    """UPDATE one row only if its version is still ``expected_version``.

    Bumps the version on success.  Returns False when no row matched, i.e.
    the row was deleted or written by someone else since it was read.
    """
    stmt = (
        update(model)
        .where(model.id == row_id, model.version == expected_version)
        .values(version=model.version + 1, **values)
        .execution_options(synchronize_session=False)
    )
    return session.execute(stmt).rowcount == 1
