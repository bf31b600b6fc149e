from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import HolidayEntry
from .repository import HolidayRepository


def _to_entry(r: dict) -> HolidayEntry:
    return HolidayEntry(
        holiday_id=int(r["holiday_id"]),
        date=r["holiday_date"],
        name=r["name"],
        is_active=bool(r["is_active"]),
        name_local=r.get("name_local"),
    )


class MySQLHolidayRepository(HolidayRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_active(self, work_date: date) -> Optional[HolidayEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT holiday_id, holiday_date, name, name_local, is_active
                FROM public_holidays
                WHERE holiday_date=%s AND is_active=1
                LIMIT 1
                """,
                (work_date,),
            )
            r = fetchone(cur)
            return _to_entry(r) if r else None

    def list_active_between(self, start: date, end: date) -> Sequence[HolidayEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT holiday_id, holiday_date, name, name_local, is_active
                FROM public_holidays
                WHERE holiday_date BETWEEN %s AND %s AND is_active=1
                ORDER BY holiday_date
                """,
                (start, end),
            )
            return [_to_entry(r) for r in fetchall(cur)]
