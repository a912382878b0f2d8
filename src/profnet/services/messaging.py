"""Messaging — send, soft-delete, and list messages.

Operates inside one :class:`StoreTransaction` and consults the
:class:`ConnectionGraph` bound to the same transaction for the friendship
gate. Deletion applies :func:`next_visibility`; only ``visibility`` ever
changes on a stored message.
"""

from __future__ import annotations

from dataclasses import replace
from typing import TYPE_CHECKING, Any

from sqlalchemy import insert, select, update

from profnet.domain.errors import (
    AlreadyHiddenError,
    NoSuchMessageError,
    NotAParticipantError,
    NotConnectedError,
)
from profnet.domain.ids import MESSAGE_COUNTER
from profnet.domain.messages import (
    INBOX_VISIBLE,
    SENT_VISIBLE,
    Message,
    Role,
    Visibility,
    next_visibility,
    visible_to,
)
from profnet.infrastructure.database.schema import messages
from profnet.services._helpers import now_iso

if TYPE_CHECKING:
    from collections.abc import Collection

    from sqlalchemy import ColumnElement, Row

    from profnet.infrastructure.store import StoreTransaction
    from profnet.services.graph import ConnectionGraph


def _to_message(row: Row[Any]) -> Message:
    return Message(
        id=row.id,
        sender=row.sender_id,
        receiver=row.receiver_id,
        body=row.body,
        sent_at=row.sent_at,
        visibility=Visibility(row.visibility),
    )


class Messaging:
    """Messages between connected accounts."""

    def __init__(self, txn: StoreTransaction, graph: ConnectionGraph) -> None:
        self._txn = txn
        self._graph = graph

    def send(self, sender: str, receiver: str, body: str) -> Message:
        """Store a new message visible to both sides.

        Raises:
            NotConnectedError: *sender* and *receiver* are not friends.
        """
        if not self._graph.is_friend(sender, receiver):
            raise NotConnectedError(
                f"{receiver} is not a connection of {sender}",
                sender=sender,
                receiver=receiver,
            )

        message = Message(
            id=self._txn.next_id(MESSAGE_COUNTER),
            sender=sender,
            receiver=receiver,
            body=body,
            sent_at=now_iso(),
            visibility=Visibility.VISIBLE_TO_BOTH,
        )
        self._txn.conn.execute(
            insert(messages).values(
                id=message.id,
                sender_id=message.sender,
                receiver_id=message.receiver,
                body=message.body,
                sent_at=message.sent_at,
                visibility=message.visibility,
            )
        )
        return message

    def get(self, message_id: int) -> Message:
        """Fetch a stored message regardless of visibility.

        Raises:
            NoSuchMessageError: no message has *message_id*.
        """
        row = self._txn.conn.execute(select(messages).where(messages.c.id == message_id)).first()
        if row is None:
            raise NoSuchMessageError(f"No message found with ID: {message_id}", id=message_id)
        return _to_message(row)

    def role_of(self, message: Message, actor: str) -> Role:
        """The side *actor* is on.

        Raises:
            NotAParticipantError: *actor* neither sent nor received it.
        """
        role = message.role_of(actor)
        if role is None:
            raise NotAParticipantError(
                f"{actor} is not a participant in message {message.id}",
                id=message.id,
                actor=actor,
            )
        return role

    def read(self, actor: str, message_id: int) -> Message:
        """Fetch a message as *actor* sees it.

        A message already hidden from the actor's side is reported as
        missing.
        """
        message = self.get(message_id)
        role = self.role_of(message, actor)
        if not visible_to(message.visibility, role):
            raise NoSuchMessageError(f"No message found with ID: {message_id}", id=message_id)
        return message

    def delete(self, actor: str, message_id: int) -> tuple[Message, Role]:
        """Hide a message from *actor*'s side.

        Returns the updated message and the role the actor deleted as.

        Raises:
            NoSuchMessageError: no message has *message_id*.
            NotAParticipantError: *actor* is neither sender nor receiver.
            AlreadyHiddenError: the actor's side is already hidden.
        """
        message = self.get(message_id)
        role = self.role_of(message, actor)

        new_visibility = next_visibility(message.visibility, role)
        if new_visibility is None:
            raise AlreadyHiddenError(
                f"Message {message_id} has already been deleted",
                id=message_id,
                role=str(role),
                visibility=str(message.visibility),
            )

        self._txn.conn.execute(
            update(messages).where(messages.c.id == message_id).values(visibility=new_visibility)
        )
        return replace(message, visibility=new_visibility), role

    def inbox(self, owner: str) -> list[Message]:
        """Messages received by *owner* and not hidden from the receiver."""
        return self._list(messages.c.receiver_id == owner, INBOX_VISIBLE)

    def sent(self, owner: str) -> list[Message]:
        """Messages sent by *owner* and not hidden from the sender."""
        return self._list(messages.c.sender_id == owner, SENT_VISIBLE)

    def _list(
        self, owner_clause: ColumnElement[bool], shown: Collection[Visibility]
    ) -> list[Message]:
        rows = self._txn.conn.execute(
            select(messages)
            .where(owner_clause, messages.c.visibility.in_([str(v) for v in shown]))
            .order_by(messages.c.sent_at, messages.c.id)
        ).fetchall()
        return [_to_message(row) for row in rows]
