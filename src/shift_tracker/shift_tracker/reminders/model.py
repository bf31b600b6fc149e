from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from typing import Optional

from ..core import constants
from ..core.enums import ReminderKind


@dataclass(frozen=True)
class ReminderSettings:
    pre_completion_offset_minutes: int = constants.PRE_COMPLETION_OFFSET_MINUTES
    tolerance_minutes: int = constants.REMINDER_TOLERANCE_MINUTES
    poll_interval_minutes: int = constants.REMINDER_POLL_INTERVAL_MINUTES

    @property
    def pre_completion_offset(self) -> timedelta:
        return timedelta(minutes=self.pre_completion_offset_minutes)

    @property
    def tolerance(self) -> timedelta:
        return timedelta(minutes=self.tolerance_minutes)

    @property
    def poll_interval(self) -> timedelta:
        return timedelta(minutes=self.poll_interval_minutes)


@dataclass(frozen=True)
class ReminderEvent:
    """Something the notification layer should deliver to ``user_id``."""

    user_id: str
    kind: ReminderKind
    work_date: date
    checkpoint: datetime
    check_in_time: Optional[datetime] = None

    def as_dict(self) -> dict:
        return {
            "user_id": self.user_id,
            "kind": self.kind.value,
            "work_date": self.work_date.isoformat(),
            "checkpoint": self.checkpoint.isoformat(),
            "check_in_time": self.check_in_time.isoformat() if self.check_in_time else None,
        }


@dataclass
class PollResult:
    """Summary of one poll tick."""

    checked: int = 0
    events: list[ReminderEvent] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
    skipped_reason: Optional[str] = None

    def as_dict(self) -> dict:
        return {
            "checked": self.checked,
            "sent": len(self.events),
            "failed": list(self.failed),
            "skipped": list(self.skipped),
            "skipped_reason": self.skipped_reason,
            "events": [e.as_dict() for e in self.events],
        }
