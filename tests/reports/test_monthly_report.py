from __future__ import annotations

from datetime import date, time

import pytest

from shift_tracker.attendance.model import AttendanceRecord
from shift_tracker.attendance.service import AttendanceService
from shift_tracker.core.enums import AttendanceStatus
from shift_tracker.core.exceptions import ValidationError
from shift_tracker.holidays.service import HolidayLookup
from shift_tracker.policy.model import WorkplacePolicy
from shift_tracker.policy.service import PolicyEvaluator
from shift_tracker.reports.service import MonthlyReportService, percentage


def make_record(normalizer, attendance_id, day, start, end=None, user_id="u1"):
    check_in = normalizer.at(day, start).to_instant()
    check_out = normalizer.at(day, end).to_instant() if end else None
    return AttendanceRecord(
        attendance_id=attendance_id,
        user_id=user_id,
        work_date=day,
        check_in_time=check_in,
        check_out_time=check_out,
        status=AttendanceStatus.CHECKED_OUT if end else AttendanceStatus.CHECKED_IN,
    )


@pytest.fixture
def reports(attendance, policy):
    return MonthlyReportService(attendance, policy)


def test_working_days_skip_weekends_and_holidays(reports):
    # June 2025: 21 weekdays, one of them (3rd) a public holiday
    assert reports.working_days_in_month(2025, 6) == 20


def test_monthly_report_figures(reports, attendance_repo, normalizer):
    attendance_repo.put(make_record(normalizer, 1, date(2025, 6, 16), time(9, 0), time(18, 0)))
    attendance_repo.put(make_record(normalizer, 2, date(2025, 6, 17), time(9, 0), time(15, 0)))
    attendance_repo.put(make_record(normalizer, 3, date(2025, 6, 18), time(9, 0)))
    attendance_repo.put(make_record(normalizer, 4, date(2025, 6, 18), time(9, 0), time(18, 0), user_id="u2"))
    attendance_repo.put(make_record(normalizer, 5, date(2025, 7, 1), time(9, 0), time(18, 0)))

    report = reports.build_monthly_report("u1", "2025-06")

    assert report.month == "2025-06"
    assert report.total_days_worked == 3
    assert report.total_hours_worked == 15.0
    assert report.complete_days == 1
    assert report.working_days_in_month == 20
    assert report.attendance_rate == 15.0
    assert report.compliance_rate == 33.33
    assert report.average_hours_per_day == 5.0
    assert [d.hours_worked for d in report.days] == [9.0, 6.0, None]


def test_empty_month_reports_zeros(reports):
    report = reports.build_monthly_report("nobody", "2025-06")

    assert report.total_days_worked == 0
    assert report.total_hours_worked == 0.0
    assert report.attendance_rate == 0.0
    assert report.compliance_rate == 0.0
    assert report.average_hours_per_day == 0.0
    assert report.days == []


def test_no_working_days_gives_zero_attendance_rate(attendance_repo, normalizer, holidays):
    policy = PolicyEvaluator(normalizer, HolidayLookup(holidays), WorkplacePolicy(working_weekdays=frozenset()))
    reports = MonthlyReportService(AttendanceService(attendance_repo, policy), policy)
    attendance_repo.put(make_record(normalizer, 1, date(2025, 6, 16), time(9, 0), time(18, 0)))

    report = reports.build_monthly_report("u1", "2025-06")

    assert report.working_days_in_month == 0
    assert report.attendance_rate == 0.0
    assert report.compliance_rate == 100.0


def test_attendance_rate_is_capped(attendance_repo, normalizer, holidays):
    mondays_only = WorkplacePolicy(working_weekdays=frozenset({0}))
    policy = PolicyEvaluator(normalizer, HolidayLookup(holidays), mondays_only)
    reports = MonthlyReportService(AttendanceService(attendance_repo, policy), policy)
    for i, day in enumerate(range(16, 22), start=1):
        attendance_repo.put(make_record(normalizer, i, date(2025, 6, day), time(9, 0), time(18, 0)))

    report = reports.build_monthly_report("u1", "2025-06")

    assert report.working_days_in_month == 5
    assert report.total_days_worked == 6
    assert report.attendance_rate == 100.0


def test_invalid_month(reports):
    with pytest.raises(ValidationError):
        reports.build_monthly_report("u1", "2025/06")


@pytest.mark.parametrize(
    "part, whole, expected",
    [(1, 4, 25.0), (0, 0, 0.0), (5, 0, 0.0), (7, 5, 100.0), (-1, 5, 0.0)],
)
def test_percentage(part, whole, expected):
    assert percentage(part, whole) == expected
