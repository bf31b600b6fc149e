from __future__ import annotations

from enum import Enum


class AttendanceStatus(str, Enum):
    """Stored state of a day's attendance record."""

    CHECKED_IN = "CHECKED_IN"
    CHECKED_OUT = "CHECKED_OUT"
    AUTO_CHECKOUT_MIDNIGHT = "AUTO_CHECKOUT_MIDNIGHT"

    @property
    def is_open(self) -> bool:
        return self is AttendanceStatus.CHECKED_IN


class CheckInTiming(str, Enum):
    """How a check-in relates to the nominal check-in window.

    Derived from the check-in instant, never stored.
    """

    EARLY = "EARLY"
    ON_TIME = "ON_TIME"


class Reason(str, Enum):
    """Reason codes returned with rejections and state conflicts.

    Rendering these into human text is the messaging layer's job.
    """

    NON_WORKING_DAY = "non_working_day"
    HOLIDAY = "holiday"
    TOO_LATE = "too_late"

    ALREADY_CHECKED_IN = "already_checked_in"
    ALREADY_CHECKED_OUT = "already_checked_out"
    NO_CHECKIN_TODAY = "no_checkin_today"
    NO_RECORD = "no_record"


class WorkState(str, Enum):
    IN_PROGRESS = "in_progress"
    COMPLETE = "complete"
    INCOMPLETE = "incomplete"


class ReminderKind(str, Enum):
    CHECK_IN = "CHECK_IN"
    PRE_COMPLETION = "PRE_COMPLETION"
    FINAL = "FINAL"
