from __future__ import annotations

import logging
from datetime import date
from typing import Optional, Sequence

from ..common.datetime_utils import month_bounds, parse_month
from ..common.validators import require_non_empty
from ..core.exceptions import ConflictError, DuplicateRecordError
from .model import DEFAULT_LEAVE_TYPE, LeaveEntry
from .repository import LeaveRepository

logger = logging.getLogger(__name__)


class LeaveService:
    """Single-day leave records.

    A leave day keeps the user out of reminder polls; it does not create or
    change attendance records.
    """

    def __init__(self, leaves: LeaveRepository):
        self._leaves = leaves

    def is_on_leave(self, user_id: str, leave_date: date) -> bool:
        return self._leaves.get_active(user_id, leave_date) is not None

    def leaves_in_month(self, user_id: str, month: str) -> Sequence[LeaveEntry]:
        year, month_num = parse_month(month)
        start, end = month_bounds(year, month_num)
        return self._leaves.list_active_between(user_id, start, end)

    def create_leave(
        self,
        user_id: str,
        leave_date: date,
        *,
        leave_type: Optional[str] = None,
        reason: Optional[str] = None,
    ) -> LeaveEntry:
        user_id = require_non_empty(user_id, "user_id")
        leave_type = (leave_type or "").strip() or DEFAULT_LEAVE_TYPE
        reason = (reason or "").strip() or None

        if self._leaves.get_active(user_id, leave_date) is not None:
            raise ConflictError(f"{user_id} is already on leave on {leave_date.isoformat()}")
        try:
            entry = self._leaves.create(user_id=user_id, leave_date=leave_date, leave_type=leave_type, reason=reason)
        except DuplicateRecordError as exc:
            raise ConflictError(f"{user_id} already has a leave row on {leave_date.isoformat()}") from exc

        logger.info("leave user=%s date=%s type=%s", user_id, leave_date, leave_type)
        return entry
