from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from ...attendance.model import AttendanceRecord


class HoursCalculator(ABC):
    """Calculator interface (Strategy Pattern for worked hours)."""

    @abstractmethod
    def worked_hours(self, record: AttendanceRecord) -> Optional[float]:
        """Hours worked on ``record``, or ``None`` while it is still open."""
        raise NotImplementedError
