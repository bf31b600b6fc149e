from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional


@dataclass(frozen=True)
class HolidayEntry:
    """Public holiday calendar entry (read model)."""

    holiday_id: int
    date: date
    name: str
    is_active: bool = True
    name_local: Optional[str] = None
