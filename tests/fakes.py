"""In-memory stores and a recording notifier used across the test suite."""
from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime, timezone
from typing import Optional

from shift_tracker.attendance.model import AttendanceRecord
from shift_tracker.common.datetime_utils import as_utc
from shift_tracker.core.enums import AttendanceStatus
from shift_tracker.core.exceptions import DuplicateRecordError, StorageError
from shift_tracker.holidays.model import HolidayEntry
from shift_tracker.leaves.model import LeaveEntry
from shift_tracker.user_settings.model import NotificationSettings


def utc(*args) -> datetime:
    return datetime(*args, tzinfo=timezone.utc)


class InMemoryAttendance:
    def __init__(self):
        self._by_user_date: dict[tuple[str, date], AttendanceRecord] = {}
        self._id = 0

    def get_for_user_and_date(self, user_id: str, work_date: date) -> Optional[AttendanceRecord]:
        return self._by_user_date.get((user_id, work_date))

    def create_checkin(self, *, user_id: str, work_date: date, check_in_time: datetime) -> AttendanceRecord:
        if (user_id, work_date) in self._by_user_date:
            raise DuplicateRecordError(user_id=user_id, work_date=work_date)
        self._id += 1
        rec = AttendanceRecord(
            attendance_id=self._id,
            user_id=user_id,
            work_date=work_date,
            check_in_time=as_utc(check_in_time),
            check_out_time=None,
            status=AttendanceStatus.CHECKED_IN,
        )
        self._by_user_date[(user_id, work_date)] = rec
        return rec

    def _find(self, attendance_id: int) -> Optional[AttendanceRecord]:
        for rec in self._by_user_date.values():
            if rec.attendance_id == attendance_id:
                return rec
        return None

    def reopen(self, *, attendance_id: int, check_in_time: datetime, expected_status: AttendanceStatus) -> bool:
        rec = self._find(attendance_id)
        if rec is None or rec.status is not expected_status:
            return False
        self._by_user_date[(rec.user_id, rec.work_date)] = rec.reopened(as_utc(check_in_time))
        return True

    def close(self, *, attendance_id: int, check_out_time: datetime, status: AttendanceStatus) -> bool:
        rec = self._find(attendance_id)
        if rec is None or rec.status is not AttendanceStatus.CHECKED_IN:
            return False
        self._by_user_date[(rec.user_id, rec.work_date)] = rec.closed(as_utc(check_out_time), status)
        return True

    def correct(
        self,
        *,
        attendance_id: int,
        check_in_time: datetime,
        check_out_time: Optional[datetime],
        status: AttendanceStatus,
        expected_status: AttendanceStatus,
    ) -> bool:
        rec = self._find(attendance_id)
        if rec is None or rec.status is not expected_status:
            return False
        self._by_user_date[(rec.user_id, rec.work_date)] = replace(
            rec,
            check_in_time=as_utc(check_in_time),
            check_out_time=as_utc(check_out_time) if check_out_time is not None else None,
            status=status,
        )
        return True

    def list_open_for_date(self, work_date: date):
        return [r for (_, d), r in sorted(self._by_user_date.items()) if d == work_date and r.is_open]

    def list_for_user_between(self, user_id: str, start: date, end: date):
        return [
            r for (u, d), r in sorted(self._by_user_date.items()) if u == user_id and start <= d <= end
        ]

    def put(self, record: AttendanceRecord) -> None:
        self._id = max(self._id, record.attendance_id)
        self._by_user_date[(record.user_id, record.work_date)] = record


class InMemoryHolidays:
    def __init__(self, days: Optional[dict[date, str]] = None, *, broken: bool = False):
        self.days = dict(days or {})
        self.broken = broken

    def get_active(self, work_date: date) -> Optional[HolidayEntry]:
        if self.broken:
            raise StorageError("holiday table unreachable")
        name = self.days.get(work_date)
        if name is None:
            return None
        return HolidayEntry(holiday_id=1, date=work_date, name=name)

    def list_active_between(self, start: date, end: date):
        return [
            HolidayEntry(holiday_id=i, date=d, name=n)
            for i, (d, n) in enumerate(sorted(self.days.items()), start=1)
            if start <= d <= end
        ]


class InMemoryLeaves:
    def __init__(self):
        self._by_user_date: dict[tuple[str, date], LeaveEntry] = {}

    def get_active(self, user_id: str, leave_date: date) -> Optional[LeaveEntry]:
        entry = self._by_user_date.get((user_id, leave_date))
        return entry if entry is not None and entry.is_active else None

    def create(self, *, user_id: str, leave_date: date, leave_type: str, reason: Optional[str]) -> LeaveEntry:
        if (user_id, leave_date) in self._by_user_date:
            raise DuplicateRecordError()
        entry = LeaveEntry(
            leave_id=len(self._by_user_date) + 1,
            user_id=user_id,
            leave_date=leave_date,
            leave_type=leave_type,
            reason=reason,
        )
        self._by_user_date[(user_id, leave_date)] = entry
        return entry

    def list_active_between(self, user_id: str, start: date, end: date):
        return [
            e
            for (u, d), e in sorted(self._by_user_date.items())
            if u == user_id and start <= d <= end and e.is_active
        ]


class InMemoryUserSettings:
    def __init__(self):
        self.rows: dict[str, NotificationSettings] = {}

    def get(self, user_id: str) -> Optional[NotificationSettings]:
        return self.rows.get(user_id)

    def save(self, settings: NotificationSettings) -> None:
        self.rows[settings.user_id] = settings


class InMemoryRecipients:
    def __init__(self, user_ids=()):
        self.user_ids = list(user_ids)

    def list_check_in_recipients(self, work_date: date):
        return list(self.user_ids)


class RecordingNotifier:
    def __init__(self, fail_for=()):
        self.events = []
        self.fail_for = set(fail_for)

    def notify(self, event) -> None:
        if event.user_id in self.fail_for:
            raise RuntimeError("chat platform down")
        self.events.append(event)
