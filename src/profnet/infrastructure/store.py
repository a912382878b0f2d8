"""Store — repository with scoped, all-or-nothing transactions.

The Store is the single dependency injected into every service. It owns
the database engine. :meth:`Store.transaction` opens one SQLite write
transaction (``BEGIN IMMEDIATE``) that commits when the block exits
normally and rolls back on any exception, so a workflow's reads, checks,
and writes land together or not at all.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from typing import TYPE_CHECKING

from sqlalchemy import insert, select

from profnet.infrastructure.database.counters import next_sequential_id
from profnet.infrastructure.database.engine import init_database
from profnet.infrastructure.database.schema import accounts
from profnet.infrastructure.graph.engine import GraphEngine

if TYPE_CHECKING:
    from collections.abc import Collection, Iterator
    from pathlib import Path

    from sqlalchemy import Connection
    from sqlalchemy.engine import Engine

    from profnet.config.settings import NetSettings

logger = logging.getLogger(__name__)


@dataclass
class StoreTransaction:
    """Active transaction context yielded by :meth:`Store.transaction`."""

    conn: Connection

    def account_exists(self, account_id: str) -> bool:
        """Account Store existence check."""
        row = self.conn.execute(select(accounts.c.id).where(accounts.c.id == account_id)).first()
        return row is not None

    def insert_account(self, account_id: str, created: str) -> None:
        self.conn.execute(insert(accounts).values(id=account_id, created=created))

    def next_id(self, counter: str) -> int:
        """Claim the next id of *counter* inside this transaction."""
        return next_sequential_id(self.conn, counter)

    def load_graph(self, *, statuses: Collection[str] | None = None) -> GraphEngine:
        """Graph of connection edges as seen by this transaction."""
        return GraphEngine.load(self.conn, statuses=statuses)


class Store:
    """Repository encapsulating database access.

    Constructed once per CLI invocation from :class:`NetSettings`.
    Services receive the Store via their :class:`BaseService` constructor.
    """

    def __init__(self, settings: NetSettings) -> None:
        self._settings = settings
        self._engine: Engine = init_database(
            settings.database_path, echo=settings.database.echo
        )

    @property
    def path(self) -> Path:
        """The SQLite database file."""
        return self._settings.database_path

    @property
    def engine(self) -> Engine:
        """The underlying SQLAlchemy engine (for direct access when needed)."""
        return self._engine

    @property
    def settings(self) -> NetSettings:
        return self._settings

    @contextmanager
    def transaction(self) -> Iterator[StoreTransaction]:
        """One atomic unit of work.

        Usage::

            with store.transaction() as txn:
                if not txn.account_exists(target):
                    raise UnknownAccountError(...)
                txn.conn.execute(insert(connections).values(...))
                # Commits on success, rolls back on any exception.
        """
        with self._engine.begin() as conn:
            yield StoreTransaction(conn=conn)

    def close(self) -> None:
        """Release pooled connections."""
        logger.debug("Disposing engine for %s", self.path)
        self._engine.dispose()
