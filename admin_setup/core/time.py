"""Time helpers.

We keep DB timestamps naive (no tzinfo) but always in UTC to avoid mixing
offset-aware/naive datetimes while remaining explicit about the timezone.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timezone

Clock = Callable[[], datetime]


def utcnow() -> datetime:
    """Naive UTC datetime (tzinfo stripped)."""
    return datetime.now(timezone.utc).replace(tzinfo=None)
