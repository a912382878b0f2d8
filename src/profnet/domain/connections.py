"""Connection request lifecycle and eligibility rules.

An edge ``(requester, target)`` is created REQUESTED and answered exactly
once by the target. Both answers are terminal; a rejected pair can never
be requested again.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class ConnectionStatus(StrEnum):
    """Status of a directed connection edge."""

    REQUESTED = "requested"
    ACCEPTED = "accepted"
    REJECTED = "rejected"


class Decision(StrEnum):
    """A target's answer to a pending request."""

    ACCEPT = "accept"
    REJECT = "reject"

    @property
    def status(self) -> ConnectionStatus:
        """The edge status this decision moves the request to."""
        if self is Decision.ACCEPT:
            return ConnectionStatus.ACCEPTED
        return ConnectionStatus.REJECTED


CONNECTION_TRANSITIONS: dict[str, list[str]] = {
    "requested": ["accepted", "rejected"],
    "accepted": [],
    "rejected": [],
}

# Outgoing edges a requester may hold before reachability is required.
DIRECT_QUOTA = 5
# Hops from the requester a target must sit at once the quota is reached.
REACH_DEPTH = 2


def is_valid_transition(current: str, target: str) -> bool:
    """Check if an edge may move from *current* to *target*."""
    return target in CONNECTION_TRANSITIONS.get(current, [])


def quota_reached(direct_count: int) -> bool:
    """True once a requester's outgoing edges hit :data:`DIRECT_QUOTA`."""
    return direct_count >= DIRECT_QUOTA


@dataclass(frozen=True)
class Eligibility:
    """Outcome of an eligibility check for a new request.

    Attributes:
        eligible: Whether a new edge may be created.
        reason: ``"under_quota"``, ``"reachable"``, ``"unreachable"`` or
            ``"exists"``.
        direct_count: Outgoing edges the requester already holds.
        existing_status: Status of the existing edge when ``reason`` is
            ``"exists"``.
    """

    eligible: bool
    reason: str
    direct_count: int = 0
    existing_status: ConnectionStatus | None = None

    def to_dict(self) -> dict[str, object]:
        return {
            "eligible": self.eligible,
            "reason": self.reason,
            "direct_count": self.direct_count,
            "existing_status": (
                str(self.existing_status) if self.existing_status is not None else None
            ),
        }
