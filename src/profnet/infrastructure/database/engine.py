"""Database engine setup for SQLite with WAL mode.

Every transaction is opened with ``BEGIN IMMEDIATE`` so the write lock is
taken before the first read. A workflow's eligibility check and its write
therefore cannot interleave with another writer's.

The pysqlite driver's own transaction handling is disabled on connect and
SQLAlchemy emits BEGIN itself (the recipe from the SQLAlchemy SQLite
dialect documentation).
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from sqlalchemy import create_engine, event, insert, select
from sqlalchemy.engine import Connection, Engine

from profnet.infrastructure.database.schema import id_counters, metadata

_COUNTERS = ("message",)


def create_db_engine(db_path: Path, *, echo: bool = False) -> Engine:
    """Create a SQLite engine with WAL mode, foreign keys, and immediate BEGIN."""
    engine = create_engine(f"sqlite:///{db_path}", echo=echo)

    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_conn: Any, _: Any) -> None:
        dbapi_conn.isolation_level = None
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine, "begin")
    def _begin_immediate(conn: Connection) -> None:
        conn.exec_driver_sql("BEGIN IMMEDIATE")

    return engine


def init_database(db_path: Path, *, echo: bool = False) -> Engine:
    """Initialize the profnet database at *db_path*.

    Creates the parent directory, all tables from :data:`schema.metadata`,
    and seeds the ``id_counters`` rows.

    Safe to call again on an existing database.

    Returns the engine ready for use.
    """
    db_path.parent.mkdir(parents=True, exist_ok=True)
    engine = create_db_engine(db_path, echo=echo)

    metadata.create_all(engine)
    _seed_counters(engine)
    return engine


def _seed_counters(engine: Engine) -> None:
    """Insert initial counter rows if they don't exist."""
    with engine.begin() as conn:
        for counter in _COUNTERS:
            row = conn.execute(
                select(id_counters.c.counter).where(id_counters.c.counter == counter)
            ).first()
            if row is None:
                conn.execute(insert(id_counters).values(counter=counter, next_value=1))
