"""NetworkService — the public connection and messaging workflows.

Each method runs as one store transaction: eligibility checks and the
writes they guard commit together, and any :class:`NetworkError` aborts
the transaction before it is returned to the caller as a failed
:class:`ServiceResult` carrying the error's code.

Every workflow takes its subject account explicitly; there is no
ambient "current user".
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from profnet.domain.connections import ConnectionStatus, Decision
from profnet.domain.errors import (
    AccountExistsError,
    DuplicateRequestError,
    InvalidAccountError,
    InvalidDecisionError,
    NetworkError,
    NotEligibleError,
)
from profnet.domain.ids import validate_account_id
from profnet.services._helpers import now_iso
from profnet.services.base import BaseService
from profnet.services.graph import ConnectionGraph
from profnet.services.messaging import Messaging
from profnet.services.result import ServiceResult
from profnet.services.telemetry import traced

if TYPE_CHECKING:
    from profnet.domain.messages import Message
    from profnet.infrastructure.store import StoreTransaction

logger = logging.getLogger(__name__)


class NetworkService(BaseService):
    """Accounts, connection requests, and messaging."""

    def _graph(self, txn: StoreTransaction) -> ConnectionGraph:
        return ConnectionGraph(
            txn, reach_accepted_only=self._store.settings.network.reach_accepted_only
        )

    def _messaging(self, txn: StoreTransaction) -> Messaging:
        return Messaging(txn, self._graph(txn))

    # ------------------------------------------------------------------
    # Accounts
    # ------------------------------------------------------------------

    @traced
    def create_account(self, account_id: str) -> ServiceResult:
        """Register a new account identity."""
        op = "create_account"
        try:
            if not validate_account_id(account_id):
                raise InvalidAccountError(
                    f"Invalid account ID: {account_id!r} (1-50 characters, no spaces)",
                    account=account_id,
                )
            with self._store.transaction() as txn:
                if txn.account_exists(account_id):
                    raise AccountExistsError(
                        f"Account already exists: {account_id}", account=account_id
                    )
                txn.insert_account(account_id, now_iso())
        except NetworkError as exc:
            return self._failure(op, exc)

        logger.debug("Created account %s", account_id)
        return ServiceResult(ok=True, op=op, data={"id": account_id})

    # ------------------------------------------------------------------
    # Connections
    # ------------------------------------------------------------------

    @traced
    def can_request(self, requester: str, target: str) -> ServiceResult:
        """Report whether *requester* may send a request to *target*."""
        op = "can_request"
        try:
            with self._store.transaction() as txn:
                eligibility = self._graph(txn).can_request(requester, target)
        except NetworkError as exc:
            return self._failure(op, exc)

        return ServiceResult(
            ok=True,
            op=op,
            data={"requester": requester, "target": target, **eligibility.to_dict()},
        )

    @traced
    def request_connection(self, requester: str, target: str) -> ServiceResult:
        """Create a pending connection request from *requester* to *target*."""
        op = "request_connection"
        warnings: list[str] = []
        try:
            with self._store.transaction() as txn:
                graph = self._graph(txn)
                eligibility = graph.can_request(requester, target)
                if eligibility.existing_status is not None:
                    raise DuplicateRequestError(
                        f"Connection request to {target} already exists "
                        f"(status: {eligibility.existing_status})",
                        requester=requester,
                        target=target,
                        status=str(eligibility.existing_status),
                    )
                if not eligibility.eligible:
                    raise NotEligibleError(
                        f"Cannot send request to {target}: {eligibility.direct_count} "
                        "connections already held and no connection of a connection "
                        f"links to {target}",
                        requester=requester,
                        target=target,
                        direct_count=eligibility.direct_count,
                    )
                graph.create_request(requester, target)
                if graph.edge_status(target, requester) is ConnectionStatus.REQUESTED:
                    warnings.append(f"{target} has a pending request to you")
        except NetworkError as exc:
            logger.debug("Request %s -> %s failed: %s", requester, target, exc.code)
            return self._failure(op, exc)

        logger.debug("Request %s -> %s created (%s)", requester, target, eligibility.reason)
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "requester": requester,
                "target": target,
                "status": str(ConnectionStatus.REQUESTED),
                "reason": eligibility.reason,
            },
            warnings=warnings,
        )

    @traced
    def respond_to_request(
        self, responder: str, requester: str, decision: Decision | str
    ) -> ServiceResult:
        """Accept or reject the pending request from *requester*.

        *decision* may be a :class:`Decision` or its string value.
        """
        op = "respond_to_request"
        try:
            choice = _decision(decision)
            with self._store.transaction() as txn:
                status = self._graph(txn).respond(responder, requester, choice)
        except NetworkError as exc:
            return self._failure(op, exc)

        logger.debug("Request %s -> %s is now %s", requester, responder, status)
        return ServiceResult(
            ok=True,
            op=op,
            data={"requester": requester, "responder": responder, "status": str(status)},
        )

    @traced
    def request_status(self, requester: str, target: str) -> ServiceResult:
        """Status of the request from *requester* to *target*, if any."""
        with self._store.transaction() as txn:
            status = self._graph(txn).edge_status(requester, target)
        return ServiceResult(
            ok=True,
            op="request_status",
            data={
                "requester": requester,
                "target": target,
                "status": str(status) if status is not None else None,
            },
        )

    @traced
    def is_friend(self, a: str, b: str) -> ServiceResult:
        with self._store.transaction() as txn:
            friends = self._graph(txn).is_friend(a, b)
        return ServiceResult(ok=True, op="is_friend", data={"a": a, "b": b, "is_friend": friends})

    @traced
    def friend_count(self, account_id: str) -> ServiceResult:
        with self._store.transaction() as txn:
            count = self._graph(txn).friend_count(account_id)
        return ServiceResult(ok=True, op="friend_count", data={"id": account_id, "count": count})

    @traced
    def list_friends(self, account_id: str) -> ServiceResult:
        """Accounts joined to *account_id* by an accepted request."""
        with self._store.transaction() as txn:
            friends = self._graph(txn).list_friends(account_id)
        items = [{"id": friend} for friend in friends]
        return ServiceResult(
            ok=True, op="list_friends", data={"items": items, "count": len(items)}
        )

    @traced
    def list_incoming(self, account_id: str) -> ServiceResult:
        """Pending requests waiting on *account_id*."""
        with self._store.transaction() as txn:
            requesters = self._graph(txn).list_incoming(account_id)
        items = [{"id": requester} for requester in requesters]
        return ServiceResult(
            ok=True, op="list_incoming", data={"items": items, "count": len(items)}
        )

    # ------------------------------------------------------------------
    # Messaging
    # ------------------------------------------------------------------

    @traced
    def send_message(self, sender: str, receiver: str, body: str) -> ServiceResult:
        """Send *body* from *sender* to a connected *receiver*."""
        op = "send_message"
        try:
            with self._store.transaction() as txn:
                message = self._messaging(txn).send(sender, receiver, body)
        except NetworkError as exc:
            logger.debug("Message %s -> %s failed: %s", sender, receiver, exc.code)
            return self._failure(op, exc)

        logger.debug("Message %d sent %s -> %s", message.id, sender, receiver)
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "id": message.id,
                "sender": message.sender,
                "receiver": message.receiver,
                "sent_at": message.sent_at,
            },
        )

    @traced
    def delete_message(self, actor: str, message_id: int) -> ServiceResult:
        """Hide a message from *actor*'s side of the conversation."""
        op = "delete_message"
        try:
            with self._store.transaction() as txn:
                message, role = self._messaging(txn).delete(actor, message_id)
        except NetworkError as exc:
            return self._failure(op, exc)

        logger.debug("Message %d deleted by %s (%s)", message_id, role, message.visibility)
        return ServiceResult(
            ok=True,
            op=op,
            data={"id": message.id, "role": str(role), "visibility": str(message.visibility)},
        )

    @traced
    def get_message(self, actor: str, message_id: int) -> ServiceResult:
        """A single message as *actor* sees it."""
        op = "get_message"
        try:
            with self._store.transaction() as txn:
                message = self._messaging(txn).read(actor, message_id)
        except NetworkError as exc:
            return self._failure(op, exc)
        return ServiceResult(ok=True, op=op, data=message.to_dict())

    @traced
    def list_inbox(self, owner: str) -> ServiceResult:
        """Messages received by *owner*, oldest first."""
        with self._store.transaction() as txn:
            found = self._messaging(txn).inbox(owner)
        return _listing("list_inbox", found)

    @traced
    def list_sent(self, owner: str) -> ServiceResult:
        """Messages sent by *owner*, oldest first."""
        with self._store.transaction() as txn:
            found = self._messaging(txn).sent(owner)
        return _listing("list_sent", found)


def _decision(value: Decision | str) -> Decision:
    try:
        return Decision(value)
    except ValueError as exc:
        raise InvalidDecisionError(
            f"Unknown decision: {value!r} (expected accept or reject)", decision=str(value)
        ) from exc


def _listing(op: str, found: list[Message]) -> ServiceResult:
    items = [message.to_dict() for message in found]
    return ServiceResult(ok=True, op=op, data={"items": items, "count": len(items)})
