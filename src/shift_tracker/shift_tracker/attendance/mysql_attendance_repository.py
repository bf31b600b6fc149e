from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Sequence

from ..common.datetime_utils import as_utc, to_storage
from ..core.enums import AttendanceStatus
from ..core.exceptions import DuplicateRecordError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import AttendanceRecord
from .repository import AttendanceRepository

_COLUMNS = "attendance_id, user_id, work_date, check_in_time, check_out_time, status"


def _to_record(r: dict) -> AttendanceRecord:
    check_out = r.get("check_out_time")
    return AttendanceRecord(
        attendance_id=int(r["attendance_id"]),
        user_id=str(r["user_id"]),
        work_date=r["work_date"],
        check_in_time=as_utc(r["check_in_time"]),
        check_out_time=as_utc(check_out) if check_out else None,
        status=AttendanceStatus(r["status"]),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_for_user_and_date(self, user_id: str, work_date: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE user_id=%s AND work_date=%s
                """,
                (user_id, work_date),
            )
            r = fetchone(cur)
            return _to_record(r) if r else None

    def create_checkin(self, *, user_id: str, work_date: date, check_in_time: datetime) -> AttendanceRecord:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO attendance_records(user_id, work_date, check_in_time, status)
                    VALUES(%s,%s,%s,%s)
                    """,
                    (user_id, work_date, to_storage(check_in_time), AttendanceStatus.CHECKED_IN.value),
                )
                attendance_id = int(cur.lastrowid)
        except DuplicateRecordError as exc:
            raise DuplicateRecordError(user_id, work_date) from exc

        return AttendanceRecord(
            attendance_id=attendance_id,
            user_id=user_id,
            work_date=work_date,
            check_in_time=as_utc(check_in_time),
            check_out_time=None,
            status=AttendanceStatus.CHECKED_IN,
        )

    def reopen(self, *, attendance_id: int, check_in_time: datetime, expected_status: AttendanceStatus) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_records
                SET check_in_time=%s, check_out_time=NULL, status=%s
                WHERE attendance_id=%s AND status=%s
                """,
                (
                    to_storage(check_in_time),
                    AttendanceStatus.CHECKED_IN.value,
                    int(attendance_id),
                    expected_status.value,
                ),
            )
            return cur.rowcount > 0

    def close(self, *, attendance_id: int, check_out_time: datetime, status: AttendanceStatus) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_records
                SET check_out_time=%s, status=%s
                WHERE attendance_id=%s AND status=%s
                """,
                (to_storage(check_out_time), status.value, int(attendance_id), AttendanceStatus.CHECKED_IN.value),
            )
            return cur.rowcount > 0

    def correct(
        self,
        *,
        attendance_id: int,
        check_in_time: datetime,
        check_out_time: Optional[datetime],
        status: AttendanceStatus,
        expected_status: AttendanceStatus,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_records
                SET check_in_time=%s, check_out_time=%s, status=%s
                WHERE attendance_id=%s AND status=%s
                """,
                (
                    to_storage(check_in_time),
                    to_storage(check_out_time) if check_out_time else None,
                    status.value,
                    int(attendance_id),
                    expected_status.value,
                ),
            )
            return cur.rowcount > 0

    def list_open_for_date(self, work_date: date) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE work_date=%s AND status=%s
                ORDER BY check_in_time
                """,
                (work_date, AttendanceStatus.CHECKED_IN.value),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def list_for_user_between(self, user_id: str, start: date, end: date) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE user_id=%s AND work_date BETWEEN %s AND %s
                ORDER BY work_date ASC
                """,
                (user_id, start, end),
            )
            return [_to_record(r) for r in fetchall(cur)]
