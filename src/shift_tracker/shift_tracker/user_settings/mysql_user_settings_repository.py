from __future__ import annotations

from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import NotificationSettings
from .repository import UserSettingsRepository


class MySQLUserSettingsRepository(UserSettingsRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self, user_id: str) -> Optional[NotificationSettings]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT user_id, enable_check_in_reminders, enable_check_out_reminders
                FROM user_settings
                WHERE user_id=%s
                """,
                (user_id,),
            )
            r = fetchone(cur)
            if not r:
                return None
            return NotificationSettings(
                user_id=str(r["user_id"]),
                enable_check_in_reminders=bool(r["enable_check_in_reminders"]),
                enable_check_out_reminders=bool(r["enable_check_out_reminders"]),
            )

    def save(self, settings: NotificationSettings) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO user_settings(user_id, enable_check_in_reminders, enable_check_out_reminders)
                VALUES(%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    enable_check_in_reminders=VALUES(enable_check_in_reminders),
                    enable_check_out_reminders=VALUES(enable_check_out_reminders)
                """,
                (
                    settings.user_id,
                    int(settings.enable_check_in_reminders),
                    int(settings.enable_check_out_reminders),
                ),
            )
