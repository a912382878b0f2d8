"""Atomic sequential ID generation.

Uses the ``id_counters`` table so that ids are never reused, even after
the highest-numbered row is gone. The caller owns the transaction: the
claim commits or rolls back together with the insert that uses the id.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import select, update

from profnet.infrastructure.database.schema import id_counters

if TYPE_CHECKING:
    from sqlalchemy import Connection


def next_sequential_id(conn: Connection, counter: str) -> int:
    """Claim the next value of *counter*.

    Args:
        conn: Active SQLAlchemy connection (caller owns the transaction).
        counter: Counter name, e.g. ``"message"``.

    Returns:
        The claimed value, starting at 1.

    Raises:
        ValueError: If *counter* has no row in ``id_counters``.
    """
    row = conn.execute(
        select(id_counters.c.next_value).where(id_counters.c.counter == counter)
    ).first()
    if row is None:
        msg = f"Unknown counter: {counter!r}"
        raise ValueError(msg)

    current_value: int = row.next_value

    conn.execute(
        update(id_counters)
        .where(id_counters.c.counter == counter)
        .values(next_value=current_value + 1)
    )

    return current_value
