from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

DEFAULT_LEAVE_TYPE = "personal"


@dataclass(frozen=True)
class LeaveEntry:
    """One day of leave for one user."""

    leave_id: int
    user_id: str
    leave_date: date
    leave_type: str = DEFAULT_LEAVE_TYPE
    reason: Optional[str] = None
    is_active: bool = True

    def as_dict(self) -> dict:
        return {
            "leave_id": self.leave_id,
            "user_id": self.user_id,
            "date": self.leave_date.isoformat(),
            "type": self.leave_type,
            "reason": self.reason,
        }
