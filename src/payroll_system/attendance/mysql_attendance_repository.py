from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Optional, Sequence

from mysql.connector.errors import IntegrityError

from ..core.enums import AttendanceType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, is_duplicate_key
from .model import AttendanceRecord
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


def _to_record(row: dict) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=int(row["attendance_id"]),
        user_id=int(row["user_id"]),
        type=AttendanceType(row["type"]),
        occurred_at=row["occurred_at"],
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_for_user_and_date(
        self, user_id: int, work_date: date, attendance_type: AttendanceType
    ) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT attendance_id, user_id, type, occurred_at
                FROM attendance_records
                WHERE user_id=%s AND work_date=%s AND type=%s
                """,
                (int(user_id), work_date, attendance_type.value),
            )
            row = fetchone(cur)
            return _to_record(row) if row else None

    def insert_if_absent(self, *, user_id: int, attendance_type: AttendanceType, occurred_at: datetime) -> Optional[int]:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO attendance_records(user_id, type, work_date, occurred_at)
                    VALUES(%s,%s,%s,%s)
                    """,
                    (int(user_id), attendance_type.value, occurred_at.date(), occurred_at),
                )
                return int(cur.lastrowid)
        except IntegrityError as exc:
            if not is_duplicate_key(exc):
                raise
            logger.debug("Duplicate %s for user %s on %s", attendance_type.value, user_id, occurred_at.date())
            return None

    def list_for_user(
        self,
        user_id: int,
        *,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> Sequence[AttendanceRecord]:
        clauses = ["user_id=%s"]
        params: list[object] = [int(user_id)]

        if start is not None:
            clauses.append("occurred_at >= %s")
            params.append(start)
        if end is not None:
            clauses.append("occurred_at <= %s")
            params.append(end)

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT attendance_id, user_id, type, occurred_at
                FROM attendance_records
                WHERE {where}
                ORDER BY occurred_at ASC, attendance_id ASC
                """,
                tuple(params),
            )
            return [_to_record(r) for r in fetchall(cur)]
