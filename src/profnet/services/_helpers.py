"""Shared service-layer helper functions."""

from __future__ import annotations

from datetime import UTC, datetime


def now_iso() -> str:
    """Current UTC time as ISO 8601 with fixed microsecond precision.

    Fixed width keeps lexicographic order equal to chronological order,
    which message listings rely on.
    """
    return datetime.now(UTC).isoformat(timespec="microseconds")
