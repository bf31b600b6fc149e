from __future__ import annotations

from datetime import date

import pytest

from shift_tracker.attendance.service import AttendanceService
from shift_tracker.common.clock import FixedClock
from shift_tracker.common.datetime_utils import TimeNormalizer
from shift_tracker.holidays.service import HolidayLookup
from shift_tracker.policy.service import PolicyEvaluator
from tests.fakes import InMemoryAttendance, InMemoryHolidays, utc


@pytest.fixture
def clock():
    # Tuesday 2025-06-17 09:00 Asia/Bangkok
    return FixedClock(utc(2025, 6, 17, 2, 0))


@pytest.fixture
def normalizer(clock):
    return TimeNormalizer("Asia/Bangkok", clock=clock)


@pytest.fixture
def holidays():
    return InMemoryHolidays({date(2025, 6, 3): "Queen's Birthday"})


@pytest.fixture
def policy(normalizer, holidays):
    return PolicyEvaluator(normalizer, HolidayLookup(holidays))


@pytest.fixture
def attendance_repo():
    return InMemoryAttendance()


@pytest.fixture
def attendance(attendance_repo, policy):
    return AttendanceService(attendance_repo, policy)
