"""SQLite database engine, schema, and ID counters via SQLAlchemy Core."""

from profnet.infrastructure.database.counters import next_sequential_id
from profnet.infrastructure.database.engine import create_db_engine, init_database
from profnet.infrastructure.database.schema import (
    accounts,
    connections,
    id_counters,
    messages,
    metadata,
)

__all__ = [
    "accounts",
    "connections",
    "create_db_engine",
    "id_counters",
    "init_database",
    "messages",
    "metadata",
    "next_sequential_id",
]
