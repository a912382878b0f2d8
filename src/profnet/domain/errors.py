"""Typed failures raised by the connection and messaging engines.

Every error is an expected, caller-recoverable condition. The ``code``
attribute is stable and becomes ``ServiceError.code`` at the service
boundary.
"""

from __future__ import annotations

from typing import Any, ClassVar


class NetworkError(Exception):
    """Base class for all connection and messaging failures."""

    code: ClassVar[str] = "NETWORK_ERROR"

    def __init__(self, message: str, **detail: Any) -> None:
        self.message = message
        self.detail = detail
        super().__init__(message)


# --- Accounts ---


class UnknownAccountError(NetworkError):
    code = "UNKNOWN_ACCOUNT"


class InvalidAccountError(NetworkError):
    code = "INVALID_ACCOUNT"


class AccountExistsError(NetworkError):
    code = "ACCOUNT_EXISTS"


# --- Connection requests ---


class SelfRequestError(NetworkError):
    code = "SELF_REQUEST"


class DuplicateRequestError(NetworkError):
    code = "DUPLICATE_REQUEST"


class NotEligibleError(NetworkError):
    """Quota reached and the target is outside the requester's reach."""

    code = "NOT_ELIGIBLE"


class NoSuchRequestError(NetworkError):
    code = "NO_SUCH_REQUEST"


class InvalidDecisionError(NetworkError):
    code = "INVALID_DECISION"


class NotInRequestedStateError(NetworkError):
    code = "NOT_IN_REQUESTED_STATE"


# --- Messaging ---


class NotConnectedError(NetworkError):
    code = "NOT_CONNECTED"


class NoSuchMessageError(NetworkError):
    code = "NO_SUCH_MESSAGE"


class NotAParticipantError(NetworkError):
    code = "NOT_A_PARTICIPANT"


class AlreadyHiddenError(NetworkError):
    code = "ALREADY_HIDDEN"
