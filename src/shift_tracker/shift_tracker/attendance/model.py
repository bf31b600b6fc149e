from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date, datetime
from typing import Optional

from ..core.enums import AttendanceStatus, CheckInTiming, Reason


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one attendance record per user per local workday.

    Instants are timezone-aware UTC. ``check_out_time`` is ``None`` exactly
    while the record is ``CHECKED_IN``.
    """

    attendance_id: int
    user_id: str
    work_date: date
    check_in_time: datetime
    check_out_time: Optional[datetime]
    status: AttendanceStatus

    @property
    def work_date_key(self) -> str:
        return self.work_date.strftime("%Y-%m-%d")

    @property
    def is_open(self) -> bool:
        return self.status.is_open

    def reopened(self, check_in_time: datetime) -> "AttendanceRecord":
        return replace(self, check_in_time=check_in_time, check_out_time=None, status=AttendanceStatus.CHECKED_IN)

    def closed(self, check_out_time: datetime, status: AttendanceStatus) -> "AttendanceRecord":
        return replace(self, check_out_time=check_out_time, status=status)


@dataclass(frozen=True)
class CheckInOutcome:
    """Result of a check-in attempt.

    Rejections and the "already checked in" conflict still carry whatever
    record state exists so the messaging layer can render a useful reply.
    """

    accepted: bool
    work_date: date
    reason: Optional[Reason] = None
    check_in_time: Optional[datetime] = None
    expected_completion: Optional[datetime] = None
    timing: Optional[CheckInTiming] = None
    reopened: bool = False
    record: Optional[AttendanceRecord] = None


@dataclass(frozen=True)
class CheckOutOutcome:
    accepted: bool
    work_date: date
    reason: Optional[Reason] = None
    check_in_time: Optional[datetime] = None
    check_out_time: Optional[datetime] = None
    actual_hours: float = 0.0
    is_complete: bool = False
    shortfall_hours: float = 0.0
    record: Optional[AttendanceRecord] = None


@dataclass(frozen=True)
class AutoCheckoutResult:
    user_id: str
    attendance_id: int
    closed: bool
    check_in_time: datetime
    check_out_time: Optional[datetime] = None
    worked_hours: float = 0.0


@dataclass(frozen=True)
class CorrectionOutcome:
    """Result of a manual correction of a stored record."""

    accepted: bool
    work_date: date
    reason: Optional[Reason] = None
    record: Optional[AttendanceRecord] = None
    actual_hours: float = 0.0
    is_complete: bool = False
