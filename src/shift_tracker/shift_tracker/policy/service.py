from __future__ import annotations

from datetime import date, datetime, time
from typing import Optional, Union

from ..common.datetime_utils import LocalDateTime, TimeNormalizer, as_utc, iter_month_days, month_bounds
from ..core.enums import CheckInTiming, Reason, WorkState
from ..holidays.service import HolidayLookup
from .factory import CompletionStrategyFactory
from .model import CheckInDecision, WorkingHours, WorkplacePolicy


class PolicyEvaluator:
    """Pure decision logic for workplace time policy.

    Nothing here mutates state or raises for out-of-range times; rejections
    come back as :class:`CheckInDecision` values carrying a reason code.
    """

    def __init__(
        self,
        normalizer: TimeNormalizer,
        holidays: HolidayLookup,
        policy: Optional[WorkplacePolicy] = None,
        *,
        strategy_factory: Optional[CompletionStrategyFactory] = None,
    ):
        self._normalizer = normalizer
        self._holidays = holidays
        self._policy = policy or WorkplacePolicy()
        self._factory = strategy_factory or CompletionStrategyFactory()

    @property
    def policy(self) -> WorkplacePolicy:
        return self._policy

    @property
    def normalizer(self) -> TimeNormalizer:
        return self._normalizer

    def is_weekday(self, local_date: date) -> bool:
        return local_date.weekday() in self._policy.working_weekdays

    def working_day_rejection(self, local_date: date) -> Optional[Reason]:
        """``NON_WORKING_DAY`` (weekend) or ``HOLIDAY`` when no work is expected that day, else ``None``."""
        if not self.is_weekday(local_date):
            return Reason.NON_WORKING_DAY
        if self._holidays.is_holiday(local_date):
            return Reason.HOLIDAY
        return None

    def is_working_day(self, local_date: date) -> bool:
        return self.working_day_rejection(local_date) is None

    def working_days_in_month(self, year: int, month: int) -> int:
        start, end = month_bounds(year, month)
        holidays = self._holidays.holidays_between(start, end)
        return sum(1 for day in iter_month_days(year, month) if self.is_weekday(day) and day not in holidays)

    def _wall_minute(self, moment: Union[datetime, LocalDateTime]) -> time:
        # Window bounds are whole minutes; 11:00:59 still counts as 11:00.
        return self._normalizer.to_local(moment).time.replace(second=0, microsecond=0)

    def classify_check_in(self, moment: Union[datetime, LocalDateTime]) -> CheckInDecision:
        wall = self._wall_minute(moment)
        if wall < self._policy.check_in_open:
            return CheckInDecision.accept(CheckInTiming.EARLY)
        if wall <= self._policy.check_in_close:
            return CheckInDecision.accept(CheckInTiming.ON_TIME)
        return CheckInDecision.reject(Reason.TOO_LATE)

    def timing_for(self, check_in_time: datetime) -> CheckInTiming:
        """Timing of an already stored check-in.

        Anything not before the window opening is treated as on-time, so late
        records written under a looser policy still get offset completion.
        """
        wall = self._wall_minute(check_in_time)
        if wall < self._policy.check_in_open:
            return CheckInTiming.EARLY
        return CheckInTiming.ON_TIME

    def expected_completion(self, check_in_time: datetime, timing: Optional[CheckInTiming] = None) -> datetime:
        if timing is None:
            timing = self.timing_for(check_in_time)
        strategy = self._factory.for_timing(timing)
        return strategy.expected_completion(
            check_in=self._normalizer.to_local(check_in_time),
            policy=self._policy,
            normalizer=self._normalizer,
        )

    def worked_hours(self, check_in_time: datetime, check_out_time: datetime) -> float:
        seconds = (as_utc(check_out_time) - as_utc(check_in_time)).total_seconds()
        return max(seconds, 0.0) / 3600

    def working_hours(self, check_in_time: datetime, check_out_time: Optional[datetime] = None) -> WorkingHours:
        expected = self.expected_completion(check_in_time)
        if check_out_time is None:
            return WorkingHours(expected_completion=expected, state=WorkState.IN_PROGRESS)

        actual = self.worked_hours(check_in_time, check_out_time)
        required = self._policy.workday_total_hours
        if actual >= required:
            return WorkingHours(
                expected_completion=expected,
                state=WorkState.COMPLETE,
                actual_hours=round(actual, 2),
                check_out_time=as_utc(check_out_time),
            )
        return WorkingHours(
            expected_completion=expected,
            state=WorkState.INCOMPLETE,
            actual_hours=round(actual, 2),
            shortfall_hours=round(required - actual, 2),
            check_out_time=as_utc(check_out_time),
        )
