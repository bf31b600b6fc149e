from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime, timedelta, timezone


class Clock(ABC):
    """Injectable source of "now".

    Services take a clock (or an explicit ``now``) instead of calling
    ``datetime.now()`` inline, so every decision can be replayed in tests.
    """

    @abstractmethod
    def now(self) -> datetime:
        """Current instant, timezone-aware UTC."""
        raise NotImplementedError


class SystemClock(Clock):
    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class FixedClock(Clock):
    """Clock pinned to a given instant; ``advance`` moves it forward."""

    def __init__(self, instant: datetime):
        self._instant = instant

    def now(self) -> datetime:
        return self._instant

    def set(self, instant: datetime) -> None:
        self._instant = instant

    def advance(self, **kwargs) -> datetime:
        self._instant = self._instant + timedelta(**kwargs)
        return self._instant
