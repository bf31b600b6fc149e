from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import LeaveEntry


class LeaveRepository(Protocol):
    def get_active(self, user_id: str, leave_date: date) -> Optional[LeaveEntry]:
        raise NotImplementedError

    def create(self, *, user_id: str, leave_date: date, leave_type: str, reason: Optional[str]) -> LeaveEntry:
        """Insert an active leave day.

        Raises ``DuplicateRecordError`` when the user already has a leave row that day.
        """

        raise NotImplementedError

    def list_active_between(self, user_id: str, start: date, end: date) -> Sequence[LeaveEntry]:
        raise NotImplementedError
