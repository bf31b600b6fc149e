from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import HolidayEntry


class HolidayRepository(Protocol):
    def get_active(self, work_date: date) -> Optional[HolidayEntry]:
        raise NotImplementedError

    def list_active_between(self, start: date, end: date) -> Sequence[HolidayEntry]:
        raise NotImplementedError
