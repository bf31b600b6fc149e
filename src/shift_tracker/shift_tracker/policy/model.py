from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, time, timedelta
from typing import FrozenSet, Optional

from ..core import constants
from ..core.enums import CheckInTiming, Reason, WorkState


@dataclass(frozen=True)
class WorkplacePolicy:
    """Workplace time policy. All clock times are local wall-clock."""

    check_in_open: time = constants.CHECK_IN_OPEN
    check_in_close: time = constants.CHECK_IN_CLOSE
    standard_end_of_day: time = constants.STANDARD_END_OF_DAY
    workday_total_hours: float = constants.WORKDAY_TOTAL_HOURS
    working_weekdays: FrozenSet[int] = constants.WORKING_WEEKDAYS

    def __post_init__(self):
        if self.check_in_open > self.check_in_close:
            raise ValueError("check_in_open must not be after check_in_close")
        if self.workday_total_hours <= 0:
            raise ValueError("workday_total_hours must be positive")

    @property
    def workday(self) -> timedelta:
        return timedelta(hours=self.workday_total_hours)


@dataclass(frozen=True)
class CheckInDecision:
    """Outcome of classifying a check-in moment.

    ``timing`` is set when accepted, ``reason`` when rejected.
    """

    accepted: bool
    timing: Optional[CheckInTiming] = None
    reason: Optional[Reason] = None

    @classmethod
    def accept(cls, timing: CheckInTiming) -> "CheckInDecision":
        return cls(accepted=True, timing=timing)

    @classmethod
    def reject(cls, reason: Reason) -> "CheckInDecision":
        return cls(accepted=False, reason=reason)


@dataclass(frozen=True)
class WorkingHours:
    expected_completion: datetime
    state: WorkState
    actual_hours: float = 0.0
    shortfall_hours: float = 0.0
    check_out_time: Optional[datetime] = None

    @property
    def is_complete(self) -> bool:
        return self.state is WorkState.COMPLETE
