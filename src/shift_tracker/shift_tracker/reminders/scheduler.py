from __future__ import annotations

from datetime import datetime, timedelta
from typing import Optional

from ..common.datetime_utils import as_utc
from ..core.enums import ReminderKind
from ..policy.service import PolicyEvaluator
from .model import ReminderEvent, ReminderSettings


def is_due(checkpoint: datetime, now: datetime, tolerance: timedelta) -> bool:
    """``|now - checkpoint| <= tolerance``, both ends inclusive."""
    return abs(as_utc(now) - as_utc(checkpoint)) <= tolerance


class ReminderScheduler:
    """Stateless reminder timing.

    Checkpoints are recomputed from each check-in on every poll, so there is
    no per-user schedule to store or clean up. The trade-off: a poller that
    runs less often than every ``2 * tolerance`` can step over a checkpoint.
    """

    def __init__(self, policy: PolicyEvaluator, settings: Optional[ReminderSettings] = None):
        self._policy = policy
        self._settings = settings or ReminderSettings()

    @property
    def settings(self) -> ReminderSettings:
        return self._settings

    @property
    def max_poll_interval(self) -> timedelta:
        return 2 * self._settings.tolerance

    def completion_checkpoint(self, check_in_time: datetime) -> datetime:
        return self._policy.expected_completion(check_in_time)

    def pre_completion_checkpoint(self, check_in_time: datetime) -> datetime:
        return self.completion_checkpoint(check_in_time) - self._settings.pre_completion_offset

    def should_send_pre_completion_reminder(
        self,
        check_in_time: datetime,
        now: datetime,
        tolerance: Optional[timedelta] = None,
    ) -> bool:
        if tolerance is None:
            tolerance = self._settings.tolerance
        return is_due(self.pre_completion_checkpoint(check_in_time), now, tolerance)

    def should_send_final_reminder(
        self,
        check_in_time: datetime,
        now: datetime,
        tolerance: Optional[timedelta] = None,
    ) -> bool:
        if tolerance is None:
            tolerance = self._settings.tolerance
        return is_due(self.completion_checkpoint(check_in_time), now, tolerance)

    def due_reminders(self, *, user_id: str, check_in_time: datetime, now: datetime) -> list[ReminderEvent]:
        work_date = self._policy.normalizer.local_date(check_in_time)
        events = []
        if self.should_send_pre_completion_reminder(check_in_time, now):
            events.append(
                ReminderEvent(
                    user_id=user_id,
                    kind=ReminderKind.PRE_COMPLETION,
                    work_date=work_date,
                    checkpoint=self.pre_completion_checkpoint(check_in_time),
                    check_in_time=as_utc(check_in_time),
                )
            )
        if self.should_send_final_reminder(check_in_time, now):
            events.append(
                ReminderEvent(
                    user_id=user_id,
                    kind=ReminderKind.FINAL,
                    work_date=work_date,
                    checkpoint=self.completion_checkpoint(check_in_time),
                    check_in_time=as_utc(check_in_time),
                )
            )
        return events
