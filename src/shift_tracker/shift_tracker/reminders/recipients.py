from __future__ import annotations

from datetime import date
from typing import Protocol, Sequence


class RecipientDirectory(Protocol):
    def list_check_in_recipients(self, work_date: date) -> Sequence[str]:
        """User ids that want a check-in reminder on ``work_date`` and are not on leave."""

        raise NotImplementedError
