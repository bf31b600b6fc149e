from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus
from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    """Record store keyed by ``(user_id, work_date)``.

    Every method is one atomic store operation. Transitions are conditional
    on the status the caller last read and return ``False`` when another
    writer got there first.
    """

    def get_for_user_and_date(self, user_id: str, work_date: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def create_checkin(self, *, user_id: str, work_date: date, check_in_time: datetime) -> AttendanceRecord:
        """Insert a CHECKED_IN record.

        Raises ``DuplicateRecordError`` when the key already exists.
        """

        raise NotImplementedError

    def reopen(self, *, attendance_id: int, check_in_time: datetime, expected_status: AttendanceStatus) -> bool:
        raise NotImplementedError

    def close(self, *, attendance_id: int, check_out_time: datetime, status: AttendanceStatus) -> bool:
        """Close a CHECKED_IN record with ``status``."""

        raise NotImplementedError

    def correct(
        self,
        *,
        attendance_id: int,
        check_in_time: datetime,
        check_out_time: Optional[datetime],
        status: AttendanceStatus,
        expected_status: AttendanceStatus,
    ) -> bool:
        """Overwrite both times and the status, if the status is still ``expected_status``."""

        raise NotImplementedError

    def list_open_for_date(self, work_date: date) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def list_for_user_between(self, user_id: str, start: date, end: date) -> Sequence[AttendanceRecord]:
        raise NotImplementedError
