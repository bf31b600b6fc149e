from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date, datetime
from typing import Optional, Sequence

from ..common.datetime_utils import TimeNormalizer, as_utc
from ..common.locks import KeyedLock
from ..common.validators import require_non_empty
from ..core.enums import AttendanceStatus, Reason
from ..core.exceptions import StorageError, ValidationError
from ..policy.service import PolicyEvaluator
from .model import AttendanceRecord, AutoCheckoutResult, CheckInOutcome, CheckOutOutcome, CorrectionOutcome
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


class AttendanceService:
    """Owns the per-user, per-day attendance record.

    States: no record -> CHECKED_IN -> CHECKED_OUT -> (same day) CHECKED_IN
    again, or CHECKED_IN -> AUTO_CHECKOUT_MIDNIGHT via the end-of-day sweep.

    Expected business outcomes (policy rejections, already checked in/out,
    nothing to check out) are returned as outcome values. Only store failures
    raise, as ``StorageError``; nothing here retries.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        policy: PolicyEvaluator,
        *,
        locks: Optional[KeyedLock] = None,
    ):
        self._attendance = attendance
        self._policy = policy
        self._normalizer = policy.normalizer
        self._locks = locks or KeyedLock()

    @property
    def normalizer(self) -> TimeNormalizer:
        return self._normalizer

    def _resolve_now(self, now: Optional[datetime]) -> datetime:
        return as_utc(now) if now is not None else self._normalizer.now()

    def check_in(self, user_id: str, *, now: Optional[datetime] = None) -> CheckInOutcome:
        user_id = require_non_empty(user_id, "user_id")
        now = self._resolve_now(now)
        local = self._normalizer.to_local(now)
        work_date = local.date

        rejection = self._policy.working_day_rejection(work_date)
        if rejection is not None:
            logger.debug("check-in rejected user=%s date=%s reason=%s", user_id, work_date, rejection.value)
            return CheckInOutcome(accepted=False, work_date=work_date, reason=rejection)

        decision = self._policy.classify_check_in(local)
        if not decision.accepted:
            logger.debug("check-in rejected user=%s at=%s reason=%s", user_id, local, decision.reason.value)
            return CheckInOutcome(accepted=False, work_date=work_date, reason=decision.reason)

        expected = self._policy.expected_completion(now, decision.timing)

        with self._locks.hold((user_id, work_date)):
            existing = self._attendance.get_for_user_and_date(user_id, work_date)

            if existing is None:
                record = self._attendance.create_checkin(user_id=user_id, work_date=work_date, check_in_time=now)
                logger.info(
                    "check-in user=%s date=%s at=%s timing=%s",
                    user_id,
                    work_date,
                    local,
                    decision.timing.value,
                )
                return CheckInOutcome(
                    accepted=True,
                    work_date=work_date,
                    check_in_time=record.check_in_time,
                    expected_completion=expected,
                    timing=decision.timing,
                    record=record,
                )

            if existing.is_open:
                return self._already_checked_in(existing)

            if not self._attendance.reopen(
                attendance_id=existing.attendance_id,
                check_in_time=now,
                expected_status=existing.status,
            ):
                return self._after_lost_update(user_id, work_date, expect_open=True)

            record = existing.reopened(now)
            logger.info("re-entry user=%s date=%s at=%s timing=%s", user_id, work_date, local, decision.timing.value)
            return CheckInOutcome(
                accepted=True,
                work_date=work_date,
                check_in_time=record.check_in_time,
                expected_completion=expected,
                timing=decision.timing,
                reopened=True,
                record=record,
            )

    def check_out(self, user_id: str, *, now: Optional[datetime] = None) -> CheckOutOutcome:
        user_id = require_non_empty(user_id, "user_id")
        now = self._resolve_now(now)
        work_date = self._normalizer.local_date(now)

        with self._locks.hold((user_id, work_date)):
            record = self._attendance.get_for_user_and_date(user_id, work_date)
            if record is None:
                return CheckOutOutcome(accepted=False, work_date=work_date, reason=Reason.NO_CHECKIN_TODAY)

            if not record.is_open:
                return self._already_checked_out(record)

            check_out_time = max(now, record.check_in_time)
            if not self._attendance.close(
                attendance_id=record.attendance_id,
                check_out_time=check_out_time,
                status=AttendanceStatus.CHECKED_OUT,
            ):
                return self._after_lost_update(user_id, work_date, expect_open=False)

            record = record.closed(check_out_time, AttendanceStatus.CHECKED_OUT)
            hours = self._policy.working_hours(record.check_in_time, check_out_time)
            logger.info(
                "check-out user=%s date=%s hours=%.2f complete=%s",
                user_id,
                work_date,
                hours.actual_hours,
                hours.is_complete,
            )
            return CheckOutOutcome(
                accepted=True,
                work_date=work_date,
                check_in_time=record.check_in_time,
                check_out_time=check_out_time,
                actual_hours=hours.actual_hours,
                is_complete=hours.is_complete,
                shortfall_hours=hours.shortfall_hours,
                record=record,
            )

    def get_today(self, user_id: str, *, now: Optional[datetime] = None) -> Optional[AttendanceRecord]:
        now = self._resolve_now(now)
        return self._attendance.get_for_user_and_date(user_id, self._normalizer.local_date(now))

    def pending_checkouts(self, *, now: Optional[datetime] = None) -> Sequence[AttendanceRecord]:
        """Records of today's local date that are still checked in."""
        now = self._resolve_now(now)
        return self._attendance.list_open_for_date(self._normalizer.local_date(now))

    def records_between(self, user_id: str, start: date, end: date) -> Sequence[AttendanceRecord]:
        return self._attendance.list_for_user_between(user_id, start, end)

    def correct(
        self,
        user_id: str,
        work_date: date,
        *,
        check_in_time: datetime,
        check_out_time: Optional[datetime] = None,
    ) -> CorrectionOutcome:
        """Manually rewrite the times of an existing record.

        The status is re-derived: closed when a check-out is given, otherwise
        checked in. Window and working-day rules do not apply to corrections.
        """
        user_id = require_non_empty(user_id, "user_id")
        check_in_time = as_utc(check_in_time)
        check_out_time = as_utc(check_out_time) if check_out_time is not None else None

        if check_out_time is not None and check_in_time >= check_out_time:
            raise ValidationError("check_in_time must be before check_out_time")
        if self._normalizer.local_date(check_in_time) != work_date:
            raise ValidationError(f"check_in_time is not on {work_date.isoformat()}")

        status = AttendanceStatus.CHECKED_OUT if check_out_time is not None else AttendanceStatus.CHECKED_IN

        with self._locks.hold((user_id, work_date)):
            existing = self._attendance.get_for_user_and_date(user_id, work_date)
            if existing is None:
                return CorrectionOutcome(accepted=False, work_date=work_date, reason=Reason.NO_RECORD)

            if not self._attendance.correct(
                attendance_id=existing.attendance_id,
                check_in_time=check_in_time,
                check_out_time=check_out_time,
                status=status,
                expected_status=existing.status,
            ):
                raise StorageError(f"concurrent update on attendance record {user_id}/{work_date}")

        record = replace(existing, check_in_time=check_in_time, check_out_time=check_out_time, status=status)
        hours = self._policy.working_hours(check_in_time, check_out_time)
        logger.info(
            "correction user=%s date=%s status=%s hours=%.2f",
            user_id,
            work_date,
            status.value,
            hours.actual_hours,
        )
        return CorrectionOutcome(
            accepted=True,
            work_date=work_date,
            record=record,
            actual_hours=hours.actual_hours,
            is_complete=hours.is_complete,
        )

    def auto_checkout(self, work_date: date, *, at: Optional[datetime] = None) -> list[AutoCheckoutResult]:
        """Close every record of ``work_date`` still checked in.

        ``at`` defaults to the local midnight that ends ``work_date``.
        """
        closing = as_utc(at) if at is not None else self._normalizer.end_of_day(work_date)
        results: list[AutoCheckoutResult] = []

        for record in self._attendance.list_open_for_date(work_date):
            with self._locks.hold((record.user_id, work_date)):
                check_out_time = max(closing, record.check_in_time)
                closed = self._attendance.close(
                    attendance_id=record.attendance_id,
                    check_out_time=check_out_time,
                    status=AttendanceStatus.AUTO_CHECKOUT_MIDNIGHT,
                )
            if not closed:
                logger.info("auto-checkout skipped user=%s date=%s: record no longer open", record.user_id, work_date)
                results.append(
                    AutoCheckoutResult(
                        user_id=record.user_id,
                        attendance_id=record.attendance_id,
                        closed=False,
                        check_in_time=record.check_in_time,
                    )
                )
                continue

            worked = self._policy.worked_hours(record.check_in_time, check_out_time)
            logger.info("auto-checkout user=%s date=%s hours=%.2f", record.user_id, work_date, worked)
            results.append(
                AutoCheckoutResult(
                    user_id=record.user_id,
                    attendance_id=record.attendance_id,
                    closed=True,
                    check_in_time=record.check_in_time,
                    check_out_time=check_out_time,
                    worked_hours=round(worked, 2),
                )
            )
        return results

    def _already_checked_in(self, record: AttendanceRecord) -> CheckInOutcome:
        return CheckInOutcome(
            accepted=False,
            work_date=record.work_date,
            reason=Reason.ALREADY_CHECKED_IN,
            check_in_time=record.check_in_time,
            expected_completion=self._policy.expected_completion(record.check_in_time),
            timing=self._policy.timing_for(record.check_in_time),
            record=record,
        )

    def _already_checked_out(self, record: AttendanceRecord) -> CheckOutOutcome:
        hours = self._policy.working_hours(record.check_in_time, record.check_out_time)
        return CheckOutOutcome(
            accepted=False,
            work_date=record.work_date,
            reason=Reason.ALREADY_CHECKED_OUT,
            check_in_time=record.check_in_time,
            check_out_time=record.check_out_time,
            actual_hours=hours.actual_hours,
            is_complete=hours.is_complete,
            shortfall_hours=hours.shortfall_hours,
            record=record,
        )

    def _after_lost_update(self, user_id: str, work_date: date, *, expect_open: bool):
        """Another writer changed the record between our read and write.

        Report the state that won; if it is not the one we were moving to,
        hand the event back to the caller as a retryable failure.
        """
        current = self._attendance.get_for_user_and_date(user_id, work_date)
        if current is not None and current.is_open and expect_open:
            return self._already_checked_in(current)
        if current is not None and not current.is_open and not expect_open:
            return self._already_checked_out(current)
        raise StorageError(f"concurrent update on attendance record {user_id}/{work_date}")
