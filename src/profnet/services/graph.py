"""ConnectionGraph — connection request eligibility and lifecycle.

Operates inside one :class:`StoreTransaction`; every method reads and
writes through that transaction's connection. Failures are raised as
:class:`~profnet.domain.errors.NetworkError` subclasses and never
swallowed, so the surrounding transaction rolls back.

Eligibility for a new request ``(requester, target)``:

1. An existing edge for the ordered pair, in any status, blocks it.
2. Fewer than :data:`DIRECT_QUOTA` outgoing edges → allowed.
3. Otherwise the target must lie in the requester's depth-2 frontier,
   walking outgoing edges (all statuses, or accepted only when
   ``reach_accepted_only`` is set).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import func, insert, or_, select, update
from sqlalchemy.exc import IntegrityError

from profnet.domain.connections import (
    REACH_DEPTH,
    ConnectionStatus,
    Decision,
    Eligibility,
    is_valid_transition,
    quota_reached,
)
from profnet.domain.errors import (
    DuplicateRequestError,
    NoSuchRequestError,
    NotInRequestedStateError,
    SelfRequestError,
    UnknownAccountError,
)
from profnet.infrastructure.database.schema import connections
from profnet.services._helpers import now_iso
from profnet.services.telemetry import trace_span

if TYPE_CHECKING:
    from profnet.infrastructure.store import StoreTransaction


class ConnectionGraph:
    """Directed connection edges and the rules that govern them."""

    def __init__(self, txn: StoreTransaction, *, reach_accepted_only: bool = False) -> None:
        self._txn = txn
        self._reach_accepted_only = reach_accepted_only

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def edge_status(self, requester: str, target: str) -> ConnectionStatus | None:
        """Status of the edge ``(requester, target)``, or None if absent."""
        row = self._txn.conn.execute(
            select(connections.c.status).where(
                connections.c.requester_id == requester,
                connections.c.target_id == target,
            )
        ).first()
        return ConnectionStatus(row.status) if row is not None else None

    def direct_count(self, requester: str) -> int:
        """Outgoing edges held by *requester*, any status."""
        stmt = (
            select(func.count())
            .select_from(connections)
            .where(connections.c.requester_id == requester)
        )
        return int(self._txn.conn.execute(stmt).scalar_one())

    def is_friend(self, a: str, b: str) -> bool:
        """True iff an accepted edge joins *a* and *b* in either direction."""
        row = self._txn.conn.execute(
            select(connections.c.status).where(
                connections.c.status == ConnectionStatus.ACCEPTED,
                or_(
                    (connections.c.requester_id == a) & (connections.c.target_id == b),
                    (connections.c.requester_id == b) & (connections.c.target_id == a),
                ),
            )
        ).first()
        return row is not None

    def friend_count(self, account_id: str) -> int:
        """Accepted edges where *account_id* is the requester."""
        stmt = (
            select(func.count())
            .select_from(connections)
            .where(
                connections.c.requester_id == account_id,
                connections.c.status == ConnectionStatus.ACCEPTED,
            )
        )
        return int(self._txn.conn.execute(stmt).scalar_one())

    def list_friends(self, account_id: str) -> list[str]:
        """Accounts joined to *account_id* by an accepted edge, sorted."""
        rows = self._txn.conn.execute(
            select(connections.c.requester_id, connections.c.target_id).where(
                connections.c.status == ConnectionStatus.ACCEPTED,
                or_(
                    connections.c.requester_id == account_id,
                    connections.c.target_id == account_id,
                ),
            )
        ).fetchall()
        friends = {
            row.target_id if row.requester_id == account_id else row.requester_id
            for row in rows
        }
        return sorted(friends)

    def list_incoming(self, account_id: str) -> list[str]:
        """Requesters with a pending request to *account_id*, sorted."""
        rows = self._txn.conn.execute(
            select(connections.c.requester_id)
            .where(
                connections.c.target_id == account_id,
                connections.c.status == ConnectionStatus.REQUESTED,
            )
            .order_by(connections.c.requester_id)
        ).fetchall()
        return [row.requester_id for row in rows]

    # ------------------------------------------------------------------
    # Eligibility
    # ------------------------------------------------------------------

    def can_request(self, requester: str, target: str) -> Eligibility:
        """Decide whether *requester* may send a new request to *target*.

        Raises:
            SelfRequestError: *requester* and *target* are the same account.
            UnknownAccountError: either account is not in the Account Store.
        """
        if requester == target:
            raise SelfRequestError("Cannot send a connection request to yourself", account=target)
        for role, account_id in (("requester", requester), ("target", target)):
            if not self._txn.account_exists(account_id):
                raise UnknownAccountError(
                    f"No account found with ID: {account_id}", account=account_id, role=role
                )

        existing = self.edge_status(requester, target)
        direct_count = self.direct_count(requester)
        if existing is not None:
            return Eligibility(
                eligible=False,
                reason="exists",
                direct_count=direct_count,
                existing_status=existing,
            )

        if not quota_reached(direct_count):
            return Eligibility(eligible=True, reason="under_quota", direct_count=direct_count)

        with trace_span("reach") as span:
            reachable = target in self.reach(requester)
            if span is not None:
                span.annotate("reachable", reachable)

        return Eligibility(
            eligible=reachable,
            reason="reachable" if reachable else "unreachable",
            direct_count=direct_count,
        )

    def reach(self, requester: str) -> set[str]:
        """The depth-2 frontier of *requester* in the edge graph."""
        statuses = [ConnectionStatus.ACCEPTED] if self._reach_accepted_only else None
        graph = self._txn.load_graph(statuses=statuses)
        return graph.frontier(requester, REACH_DEPTH)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def create_request(self, requester: str, target: str) -> None:
        """Insert ``(requester, target, REQUESTED)``.

        Raises:
            DuplicateRequestError: the ordered pair already has an edge.
        """
        try:
            self._txn.conn.execute(
                insert(connections).values(
                    requester_id=requester,
                    target_id=target,
                    status=ConnectionStatus.REQUESTED,
                    created=now_iso(),
                )
            )
        except IntegrityError as exc:
            raise DuplicateRequestError(
                f"Connection request to {target} already exists",
                requester=requester,
                target=target,
            ) from exc

    def respond(self, responder: str, requester: str, decision: Decision) -> ConnectionStatus:
        """Answer the pending request ``(requester, responder)``.

        Returns the new edge status.

        Raises:
            NoSuchRequestError: no edge from *requester* to *responder*.
            NotInRequestedStateError: the edge was already answered.
        """
        current = self.edge_status(requester, responder)
        if current is None:
            raise NoSuchRequestError(
                f"No connection request from {requester} to {responder}",
                requester=requester,
                responder=responder,
            )

        new_status = decision.status
        if not is_valid_transition(current, new_status):
            raise NotInRequestedStateError(
                f"Request from {requester} is already {current}",
                requester=requester,
                responder=responder,
                status=str(current),
            )

        self._txn.conn.execute(
            update(connections)
            .where(
                connections.c.requester_id == requester,
                connections.c.target_id == responder,
            )
            .values(status=new_status, responded=now_iso())
        )
        return new_status
