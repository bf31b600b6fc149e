from __future__ import annotations

import logging
from datetime import datetime, time
from typing import Optional

from ..attendance.service import AttendanceService
from ..common.datetime_utils import as_utc
from ..core import constants
from ..core.enums import ReminderKind
from ..policy.service import PolicyEvaluator
from .model import PollResult, ReminderEvent
from .notifier import LoggingReminderNotifier, ReminderNotifier
from .recipients import RecipientDirectory

logger = logging.getLogger(__name__)


class CheckInReminderService:
    """Morning nudge for people who have not checked in yet.

    Only fires on working days and inside ``[window_start, window_end)`` local.
    """

    def __init__(
        self,
        attendance: AttendanceService,
        policy: PolicyEvaluator,
        recipients: RecipientDirectory,
        notifier: Optional[ReminderNotifier] = None,
        *,
        window_start: time = constants.CHECK_IN_REMINDER_START,
        window_end: time = constants.CHECK_IN_REMINDER_END,
    ):
        self._attendance = attendance
        self._policy = policy
        self._recipients = recipients
        self._notifier = notifier or LoggingReminderNotifier()
        self._window_start = window_start
        self._window_end = window_end

    def poll(self, *, now: Optional[datetime] = None) -> PollResult:
        normalizer = self._policy.normalizer
        now = as_utc(now) if now is not None else normalizer.now()
        local = normalizer.to_local(now)

        if not (self._window_start <= local.time < self._window_end):
            return PollResult(skipped_reason="outside_window")

        rejection = self._policy.working_day_rejection(local.date)
        if rejection is not None:
            return PollResult(skipped_reason=rejection.value)

        result = PollResult()
        for user_id in self._recipients.list_check_in_recipients(local.date):
            result.checked += 1
            if self._attendance.get_today(user_id, now=now) is not None:
                continue
            event = ReminderEvent(
                user_id=user_id,
                kind=ReminderKind.CHECK_IN,
                work_date=local.date,
                checkpoint=now,
            )
            try:
                self._notifier.notify(event)
            except Exception:
                logger.exception("check-in reminder delivery failed user=%s", user_id)
                result.failed.append(user_id)
                continue
            result.events.append(event)

        logger.info("check-in reminder poll date=%s checked=%d sent=%d", local.date, result.checked, len(result.events))
        return result
