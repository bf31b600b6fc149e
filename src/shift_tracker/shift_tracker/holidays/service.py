from __future__ import annotations

import logging
from datetime import date
from typing import Optional

from ..core.exceptions import StorageError
from .model import HolidayEntry
from .repository import HolidayRepository

logger = logging.getLogger(__name__)


class HolidayLookup:
    """Read-only ``date -> is holiday`` predicate.

    A failing holiday store is treated as "not a holiday": a broken calendar
    must not block check-ins on ordinary weekdays.
    """

    def __init__(self, holidays: HolidayRepository):
        self._holidays = holidays

    def get_holiday(self, work_date: date) -> Optional[HolidayEntry]:
        try:
            return self._holidays.get_active(work_date)
        except StorageError:
            logger.warning("holiday store unavailable for %s, treating as working day", work_date, exc_info=True)
            return None

    def is_holiday(self, work_date: date) -> bool:
        return self.get_holiday(work_date) is not None

    def holidays_between(self, start: date, end: date) -> frozenset[date]:
        """Active holiday dates in ``[start, end]``, empty when the store is down."""
        try:
            entries = self._holidays.list_active_between(start, end)
        except StorageError:
            logger.warning("holiday store unavailable for %s..%s, assuming no holidays", start, end, exc_info=True)
            return frozenset()
        return frozenset(h.date for h in entries)
