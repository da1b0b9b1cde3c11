"""Clock protocol used to timestamp order completion and domain events.

The state machine never reads wall-clock time directly; callers inject a
Clock so that completion instants are deterministic under test.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Protocol


class Clock(Protocol):
    """Single-method capability: give the current instant."""

    def now(self) -> datetime:
        """Return the current instant as a timezone-aware datetime."""


class SystemClock:
    """Wall clock (UTC)."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


@dataclass(frozen=True, slots=True)
class FixedClock:
    """Clock that always returns the same instant (tests, deterministic replays)."""

    instant: datetime

    def now(self) -> datetime:
        return self.instant
