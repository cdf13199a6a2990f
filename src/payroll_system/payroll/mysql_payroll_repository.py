from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from ..core.enums import PayrollStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import PayrollPeriod
from .repository import PayrollRepository

_COLUMNS = "payroll_id, name, started_at, ended_at, status, rolled_by, rolled_at, created_by, created_at, updated_at"


def _to_payroll(row: dict) -> PayrollPeriod:
    rolled_by = row.get("rolled_by")
    return PayrollPeriod(
        payroll_id=int(row["payroll_id"]),
        name=row["name"],
        started_at=row["started_at"],
        ended_at=row["ended_at"],
        status=PayrollStatus(row["status"]),
        created_by=int(row["created_by"]),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
        rolled_by=int(rolled_by) if rolled_by is not None else None,
        rolled_at=row.get("rolled_at"),
    )


class MySQLPayrollRepository(PayrollRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(
        self,
        *,
        name: str,
        started_at: datetime,
        ended_at: datetime,
        created_by: int,
        created_at: datetime,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO payrolls(name, started_at, ended_at, status, created_by, created_at, updated_at)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (name, started_at, ended_at, PayrollStatus.DRAFT.value, int(created_by), created_at, created_at),
            )
            return int(cur.lastrowid)

    def get_by_id(self, payroll_id: int) -> Optional[PayrollPeriod]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM payrolls WHERE payroll_id=%s", (int(payroll_id),))
            row = fetchone(cur)
            return _to_payroll(row) if row else None

    def list_all(self) -> Sequence[PayrollPeriod]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM payrolls ORDER BY started_at DESC, payroll_id DESC")
            return [_to_payroll(r) for r in fetchall(cur)]

    def roll(self, *, payroll_id: int, rolled_by: int, rolled_at: datetime) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE payrolls
                SET status=%s, rolled_by=%s, rolled_at=%s, updated_at=%s
                WHERE payroll_id=%s AND status=%s
                """,
                (
                    PayrollStatus.ROLLED.value,
                    int(rolled_by),
                    rolled_at,
                    rolled_at,
                    int(payroll_id),
                    PayrollStatus.DRAFT.value,
                ),
            )
            return cur.rowcount > 0
