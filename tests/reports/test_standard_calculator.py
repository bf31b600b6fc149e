from __future__ import annotations

from datetime import date

from shift_tracker.attendance.model import AttendanceRecord
from shift_tracker.core.enums import AttendanceStatus
from shift_tracker.reports.calculator.standard_calculator import StandardHoursCalculator
from tests.fakes import utc


def record(check_in, check_out):
    return AttendanceRecord(
        attendance_id=1,
        user_id="u1",
        work_date=date(2025, 6, 17),
        check_in_time=check_in,
        check_out_time=check_out,
        status=AttendanceStatus.CHECKED_OUT if check_out else AttendanceStatus.CHECKED_IN,
    )


def test_standard_calculator_hours():
    calc = StandardHoursCalculator()

    assert calc.worked_hours(record(utc(2025, 6, 17, 2, 0), utc(2025, 6, 17, 11, 30))) == 9.5


def test_open_record_has_no_hours():
    assert StandardHoursCalculator().worked_hours(record(utc(2025, 6, 17, 2, 0), None)) is None


def test_negative_span_is_zero():
    calc = StandardHoursCalculator()
    assert calc.worked_hours(record(utc(2025, 6, 17, 2, 0), utc(2025, 6, 17, 1, 0))) == 0.0
