from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime
from typing import Optional

from ..attendance.model import AttendanceRecord
from ..attendance.service import AttendanceService
from ..common.datetime_utils import as_utc
from ..leaves.service import LeaveService
from ..user_settings.service import UserSettingsService
from .model import PollResult, ReminderEvent
from .notifier import LoggingReminderNotifier, ReminderNotifier
from .scheduler import ReminderScheduler

logger = logging.getLogger(__name__)


class ReminderPoller:
    """One checkout-reminder poll tick over every open record of today.

    Users are evaluated independently; with ``max_workers`` > 1 they fan out
    over a thread pool. A failed delivery is reported in the result and does
    not stop the tick for other users. Users who switched checkout reminders
    off, or who are on leave that day, are listed under ``skipped``.
    """

    def __init__(
        self,
        attendance: AttendanceService,
        scheduler: ReminderScheduler,
        notifier: Optional[ReminderNotifier] = None,
        *,
        settings: Optional[UserSettingsService] = None,
        leaves: Optional[LeaveService] = None,
        max_workers: int = 1,
    ):
        self._attendance = attendance
        self._scheduler = scheduler
        self._notifier = notifier or LoggingReminderNotifier()
        self._settings = settings
        self._leaves = leaves
        self._max_workers = max(int(max_workers), 1)

        interval = scheduler.settings.poll_interval
        if interval > scheduler.max_poll_interval:
            logger.warning(
                "poll interval %s exceeds %s (2 x tolerance); reminders can be missed",
                interval,
                scheduler.max_poll_interval,
            )

    def poll(self, *, now: Optional[datetime] = None) -> PollResult:
        now = as_utc(now) if now is not None else self._attendance.normalizer.now()
        records = list(self._attendance.pending_checkouts(now=now))
        result = PollResult(checked=len(records))

        eligible = []
        for record in records:
            if self._opted_out(record):
                result.skipped.append(record.user_id)
            else:
                eligible.append(record)

        if self._max_workers > 1 and len(eligible) > 1:
            with ThreadPoolExecutor(max_workers=self._max_workers) as pool:
                outcomes = list(pool.map(lambda r: self._process(r, now), eligible))
        else:
            outcomes = [self._process(r, now) for r in eligible]

        for user_id, sent, ok in outcomes:
            result.events.extend(sent)
            if not ok:
                result.failed.append(user_id)

        logger.info(
            "reminder poll at=%s checked=%d sent=%d failed=%d skipped=%d",
            now.isoformat(),
            result.checked,
            len(result.events),
            len(result.failed),
            len(result.skipped),
        )
        return result

    def _opted_out(self, record: AttendanceRecord) -> bool:
        if self._settings is not None and not self._settings.checkout_reminders_enabled(record.user_id):
            return True
        if self._leaves is not None and self._leaves.is_on_leave(record.user_id, record.work_date):
            return True
        return False

    def _process(self, record: AttendanceRecord, now: datetime) -> tuple[str, list[ReminderEvent], bool]:
        due = self._scheduler.due_reminders(user_id=record.user_id, check_in_time=record.check_in_time, now=now)
        sent: list[ReminderEvent] = []
        for event in due:
            try:
                self._notifier.notify(event)
            except Exception:
                logger.exception("reminder delivery failed user=%s kind=%s", event.user_id, event.kind.value)
                return record.user_id, sent, False
            sent.append(event)
        return record.user_id, sent, True
