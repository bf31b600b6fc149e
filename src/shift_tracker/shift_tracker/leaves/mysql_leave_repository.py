from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import LeaveEntry
from .repository import LeaveRepository

_COLUMNS = "leave_id, user_id, leave_date, leave_type, reason, is_active"


def _to_entry(r: dict) -> LeaveEntry:
    return LeaveEntry(
        leave_id=int(r["leave_id"]),
        user_id=str(r["user_id"]),
        leave_date=r["leave_date"],
        leave_type=r["leave_type"],
        reason=r.get("reason"),
        is_active=bool(r["is_active"]),
    )


class MySQLLeaveRepository(LeaveRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_active(self, user_id: str, leave_date: date) -> Optional[LeaveEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM leaves
                WHERE user_id=%s AND leave_date=%s AND is_active=1
                LIMIT 1
                """,
                (user_id, leave_date),
            )
            r = fetchone(cur)
            return _to_entry(r) if r else None

    def create(self, *, user_id: str, leave_date: date, leave_type: str, reason: Optional[str]) -> LeaveEntry:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO leaves(user_id, leave_date, leave_type, reason, is_active)
                VALUES(%s,%s,%s,%s,1)
                """,
                (user_id, leave_date, leave_type, reason),
            )
            leave_id = int(cur.lastrowid)

        return LeaveEntry(
            leave_id=leave_id,
            user_id=user_id,
            leave_date=leave_date,
            leave_type=leave_type,
            reason=reason,
        )

    def list_active_between(self, user_id: str, start: date, end: date) -> Sequence[LeaveEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM leaves
                WHERE user_id=%s AND leave_date BETWEEN %s AND %s AND is_active=1
                ORDER BY leave_date
                """,
                (user_id, start, end),
            )
            return [_to_entry(r) for r in fetchall(cur)]
