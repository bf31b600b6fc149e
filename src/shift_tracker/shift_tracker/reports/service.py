from __future__ import annotations

from typing import Optional

from ..attendance.service import AttendanceService
from ..common.datetime_utils import month_bounds, parse_month
from ..policy.service import PolicyEvaluator
from .calculator.base import HoursCalculator
from .calculator.standard_calculator import StandardHoursCalculator
from .model import MonthlyReport, ReportDay


def percentage(part: float, whole: float) -> float:
    """``part / whole * 100`` clamped to [0, 100]; 0 when ``whole`` is 0."""
    if whole <= 0:
        return 0.0
    return min(max(part / whole * 100, 0.0), 100.0)


class MonthlyReportService:
    def __init__(
        self,
        attendance: AttendanceService,
        policy: PolicyEvaluator,
        *,
        calculator: Optional[HoursCalculator] = None,
    ):
        self._attendance = attendance
        self._policy = policy
        self._calculator = calculator or StandardHoursCalculator()

    def working_days_in_month(self, year: int, month: int) -> int:
        return self._policy.working_days_in_month(year, month)

    def build_monthly_report(self, user_id: str, month: str) -> MonthlyReport:
        year, month_num = parse_month(month)
        start, end = month_bounds(year, month_num)
        records = self._attendance.records_between(user_id, start, end)

        hours = [self._calculator.worked_hours(r) for r in records]

        required = self._policy.policy.workday_total_hours
        days_worked = len(records)
        total_hours = sum((h for h in hours if h is not None), 0.0)
        complete_days = sum(1 for h in hours if h is not None and h >= required)
        working_days = self.working_days_in_month(year, month_num)
        average = total_hours / days_worked if days_worked else 0.0

        return MonthlyReport(
            user_id=user_id,
            month=f"{year:04d}-{month_num:02d}",
            total_days_worked=days_worked,
            total_hours_worked=round(total_hours, 2),
            working_days_in_month=working_days,
            attendance_rate=round(percentage(days_worked, working_days), 2),
            compliance_rate=round(percentage(complete_days, days_worked), 2),
            average_hours_per_day=round(average, 2),
            complete_days=complete_days,
            days=[
                ReportDay(
                    work_date=r.work_date,
                    check_in_time=r.check_in_time,
                    check_out_time=r.check_out_time,
                    status=r.status,
                    hours_worked=round(h, 2) if h is not None else None,
                )
                for r, h in zip(records, hours)
            ],
        )
