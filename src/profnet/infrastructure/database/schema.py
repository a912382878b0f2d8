"""SQLAlchemy Core table definitions for the profnet database.

Status and visibility columns hold the string values of the domain
enums. The unique constraint on ``(requester_id, target_id)`` backs the
one-edge-per-ordered-pair rule even if two writers race.
"""

from __future__ import annotations

from sqlalchemy import (
    Column,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    Table,
    Text,
    UniqueConstraint,
)

metadata = MetaData()

accounts = Table(
    "accounts",
    metadata,
    Column("id", Text, primary_key=True),
    Column("created", Text, nullable=False),
)

connections = Table(
    "connections",
    metadata,
    Column("requester_id", Text, ForeignKey("accounts.id"), nullable=False),
    Column("target_id", Text, ForeignKey("accounts.id"), nullable=False),
    Column("status", Text, nullable=False),
    Column("created", Text, nullable=False),
    Column("responded", Text),
    UniqueConstraint("requester_id", "target_id", name="uq_connections_pair"),
)

messages = Table(
    "messages",
    metadata,
    # Issued by id_counters, never by SQLite rowid allocation.
    Column("id", Integer, primary_key=True, autoincrement=False),
    Column("sender_id", Text, ForeignKey("accounts.id"), nullable=False),
    Column("receiver_id", Text, ForeignKey("accounts.id"), nullable=False),
    Column("body", Text, nullable=False),
    Column("sent_at", Text, nullable=False),
    Column("visibility", Text, nullable=False),
)

id_counters = Table(
    "id_counters",
    metadata,
    Column("counter", Text, primary_key=True),
    Column("next_value", Integer, nullable=False, default=1, server_default="1"),
)

# ---------------------------------------------------------------------------
# Indexes for frequently filtered columns
# ---------------------------------------------------------------------------

Index("ix_connections_target", connections.c.target_id)
Index("ix_connections_status", connections.c.status)
Index("ix_messages_sender", messages.c.sender_id)
Index("ix_messages_receiver", messages.c.receiver_id)
