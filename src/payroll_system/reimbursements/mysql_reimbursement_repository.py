from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from ..common.approval import approval_from_row
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import ReimbursementRequest
from .repository import ReimbursementRepository

_COLUMNS = "reimbursement_id, user_id, description, amount, created_at, approved_by, approved_at"


def _to_reimbursement(row: dict) -> ReimbursementRequest:
    return ReimbursementRequest(
        reimbursement_id=int(row["reimbursement_id"]),
        user_id=int(row["user_id"]),
        description=row["description"],
        amount=int(row["amount"]),
        created_at=row["created_at"],
        approval=approval_from_row(row),
    )


class MySQLReimbursementRepository(ReimbursementRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(self, *, user_id: int, description: str, amount: int, created_at: datetime) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO reimbursement_requests(user_id, description, amount, created_at)
                VALUES(%s,%s,%s,%s)
                """,
                (int(user_id), description, int(amount), created_at),
            )
            return int(cur.lastrowid)

    def get_by_id(self, reimbursement_id: int) -> Optional[ReimbursementRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM reimbursement_requests WHERE reimbursement_id=%s",
                (int(reimbursement_id),),
            )
            row = fetchone(cur)
            return _to_reimbursement(row) if row else None

    def approve(self, *, reimbursement_id: int, approved_by: int, approved_at: datetime) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE reimbursement_requests
                SET approved_by=%s, approved_at=%s
                WHERE reimbursement_id=%s AND approved_by IS NULL
                """,
                (int(approved_by), approved_at, int(reimbursement_id)),
            )
            return cur.rowcount > 0

    def list_for_user(
        self,
        user_id: int,
        *,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> Sequence[ReimbursementRequest]:
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
                f"""
                SELECT {_COLUMNS} FROM reimbursement_requests
                WHERE {where}
                ORDER BY created_at ASC, reimbursement_id ASC
                """,
                tuple(params),
            )
            return [_to_reimbursement(r) for r in fetchall(cur)]

    def list_pending(self, *, limit: int = 200) -> Sequence[ReimbursementRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS} FROM reimbursement_requests
                WHERE approved_by IS NULL
                ORDER BY created_at ASC
                LIMIT %s
                """,
                (int(limit),),
            )
            return [_to_reimbursement(r) for r in fetchall(cur)]
