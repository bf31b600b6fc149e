from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional

from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class ReportDay:
    """Read-model row: one attendance record with its worked hours."""

    work_date: date
    check_in_time: datetime
    check_out_time: Optional[datetime]
    status: AttendanceStatus
    hours_worked: Optional[float]


@dataclass(frozen=True)
class MonthlyReport:
    user_id: str
    month: str
    total_days_worked: int
    total_hours_worked: float
    working_days_in_month: int
    attendance_rate: float
    compliance_rate: float
    average_hours_per_day: float
    complete_days: int
    days: list[ReportDay] = field(default_factory=list)

    def as_dict(self) -> dict:
        return {
            "user_id": self.user_id,
            "month": self.month,
            "total_days_worked": self.total_days_worked,
            "total_hours_worked": self.total_hours_worked,
            "working_days_in_month": self.working_days_in_month,
            "attendance_rate": self.attendance_rate,
            "compliance_rate": self.compliance_rate,
            "average_hours_per_day": self.average_hours_per_day,
            "complete_days": self.complete_days,
            "days": [
                {
                    "work_date": d.work_date.isoformat(),
                    "check_in_time": d.check_in_time.isoformat(),
                    "check_out_time": d.check_out_time.isoformat() if d.check_out_time else None,
                    "status": d.status.value,
                    "hours_worked": d.hours_worked,
                }
                for d in self.days
            ],
        }
