"""Shared service-layer helper functions."""

from __future__ import annotations

from datetime import UTC, datetime


def now_iso() -> str:
    """Current UTC time as ISO 8601 (for the ``generated`` stamp)."""
    return datetime.now(UTC).isoformat(timespec="seconds")

