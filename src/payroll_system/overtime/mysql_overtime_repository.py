from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from ..common.approval import approval_from_row
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import OvertimeRequest
from .repository import OvertimeRepository

_COLUMNS = "overtime_id, user_id, description, overtime_at, duration_millis, created_at, approved_by, approved_at"


def _to_overtime(row: dict) -> OvertimeRequest:
    return OvertimeRequest(
        overtime_id=int(row["overtime_id"]),
        user_id=int(row["user_id"]),
        description=row["description"],
        overtime_at=row["overtime_at"],
        duration_millis=int(row["duration_millis"]),
        created_at=row["created_at"],
        approval=approval_from_row(row),
    )


class MySQLOvertimeRepository(OvertimeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(
        self,
        *,
        user_id: int,
        description: str,
        overtime_at: datetime,
        duration_millis: int,
        created_at: datetime,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO overtime_requests(user_id, description, overtime_at, duration_millis, created_at)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (int(user_id), description, overtime_at, int(duration_millis), created_at),
            )
            return int(cur.lastrowid)

    def get_by_id(self, overtime_id: int) -> Optional[OvertimeRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM overtime_requests WHERE overtime_id=%s", (int(overtime_id),))
            row = fetchone(cur)
            return _to_overtime(row) if row else None

    def approve(self, *, overtime_id: int, approved_by: int, approved_at: datetime) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE overtime_requests
                SET approved_by=%s, approved_at=%s
                WHERE overtime_id=%s AND approved_by IS NULL
                """,
                (int(approved_by), approved_at, int(overtime_id)),
            )
            return cur.rowcount > 0

    def list_for_user(
        self,
        user_id: int,
        *,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> Sequence[OvertimeRequest]:
        clauses = ["user_id=%s"]
        params: list[object] = [int(user_id)]

        if start is not None:
            clauses.append("created_at >= %s")
            params.append(start)
        if end is not None:
            clauses.append("created_at <= %s")
            params.append(end)

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM overtime_requests WHERE {where} ORDER BY created_at ASC, overtime_id ASC",
                tuple(params),
            )
            return [_to_overtime(r) for r in fetchall(cur)]

    def list_pending(self, *, limit: int = 200) -> Sequence[OvertimeRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS} FROM overtime_requests
                WHERE approved_by IS NULL
                ORDER BY created_at ASC
                LIMIT %s
                """,
                (int(limit),),
            )
            return [_to_overtime(r) for r in fetchall(cur)]
