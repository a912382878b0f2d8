"""Account and message identifier contracts.

- Accounts: caller-chosen login ids, 1-50 characters, no whitespace.
- Messages: positive integers from an atomic counter, first id is 1.

INVARIANT: IDs are permanent. Once issued, an ID never changes.
"""

from __future__ import annotations

import re

ACCOUNT_ID_PATTERN = re.compile(r"^[A-Za-z0-9_.@+\-]{1,50}$")

# Counter key for message ids in the ``id_counters`` table.
MESSAGE_COUNTER = "message"


def validate_account_id(account_id: str) -> bool:
    """Check whether *account_id* is a well-formed account id."""
    return ACCOUNT_ID_PATTERN.match(account_id) is not None
