from __future__ import annotations

from typing import Optional

from ...attendance.model import AttendanceRecord
from .base import HoursCalculator


class StandardHoursCalculator(HoursCalculator):
    """Standard rule: out - in, not below 0. The break is part of the flat workday."""

    def worked_hours(self, record: AttendanceRecord) -> Optional[float]:
        if record.check_out_time is None:
            return None
        seconds = (record.check_out_time - record.check_in_time).total_seconds()
        return max(seconds, 0.0) / 3600
