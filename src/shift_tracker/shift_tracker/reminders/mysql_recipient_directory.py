from __future__ import annotations

from datetime import date
from typing import Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .recipients import RecipientDirectory


class MySQLRecipientDirectory(RecipientDirectory):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_check_in_recipients(self, work_date: date) -> Sequence[str]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT s.user_id
                FROM user_settings s
                WHERE s.enable_check_in_reminders=1
                  AND NOT EXISTS (
                      SELECT 1 FROM leaves l
                      WHERE l.user_id = s.user_id AND l.leave_date=%s AND l.is_active=1
                  )
                ORDER BY s.user_id
                """,
                (work_date,),
            )
            return [str(r["user_id"]) for r in fetchall(cur)]
