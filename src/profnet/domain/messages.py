"""Message visibility lattice.

Sender and receiver each hide a message independently. Visibility only
narrows: VISIBLE_TO_BOTH → HIDDEN_FROM_SENDER | HIDDEN_FROM_RECEIVER →
HIDDEN_FROM_BOTH. Messages are never erased.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class Visibility(StrEnum):
    """Which participants can still see a message."""

    VISIBLE_TO_BOTH = "visible_to_both"
    HIDDEN_FROM_RECEIVER = "hidden_from_receiver"
    HIDDEN_FROM_SENDER = "hidden_from_sender"
    HIDDEN_FROM_BOTH = "hidden_from_both"


class Role(StrEnum):
    """An actor's side of a message."""

    SENDER = "sender"
    RECEIVER = "receiver"


# (current visibility, deleting role) -> next visibility.
# Pairs missing from the map are already hidden for that role.
DELETE_TRANSITIONS: dict[tuple[Visibility, Role], Visibility] = {
    (Visibility.VISIBLE_TO_BOTH, Role.SENDER): Visibility.HIDDEN_FROM_SENDER,
    (Visibility.VISIBLE_TO_BOTH, Role.RECEIVER): Visibility.HIDDEN_FROM_RECEIVER,
    (Visibility.HIDDEN_FROM_RECEIVER, Role.SENDER): Visibility.HIDDEN_FROM_BOTH,
    (Visibility.HIDDEN_FROM_SENDER, Role.RECEIVER): Visibility.HIDDEN_FROM_BOTH,
}

INBOX_VISIBLE: frozenset[Visibility] = frozenset(
    {Visibility.VISIBLE_TO_BOTH, Visibility.HIDDEN_FROM_SENDER}
)
SENT_VISIBLE: frozenset[Visibility] = frozenset(
    {Visibility.VISIBLE_TO_BOTH, Visibility.HIDDEN_FROM_RECEIVER}
)


def next_visibility(current: Visibility, role: Role) -> Visibility | None:
    """Visibility after *role* deletes, or None if already hidden from it."""
    return DELETE_TRANSITIONS.get((current, role))


def visible_to(visibility: Visibility, role: Role) -> bool:
    """Whether a message in *visibility* still shows for *role*."""
    if role is Role.SENDER:
        return visibility in SENT_VISIBLE
    return visibility in INBOX_VISIBLE


@dataclass(frozen=True)
class Message:
    """A message between two connected accounts."""

    id: int
    sender: str
    receiver: str
    body: str
    sent_at: str
    visibility: Visibility

    def role_of(self, account_id: str) -> Role | None:
        """The side *account_id* is on, or None for non-participants."""
        if account_id == self.sender:
            return Role.SENDER
        if account_id == self.receiver:
            return Role.RECEIVER
        return None

    def to_dict(self) -> dict[str, object]:
        return {
            "id": self.id,
            "sender": self.sender,
            "receiver": self.receiver,
            "body": self.body,
            "sent_at": self.sent_at,
            "visibility": str(self.visibility),
        }
