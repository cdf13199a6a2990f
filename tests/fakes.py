"""In-memory repositories shared by the service and controller tests."""

from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime
from typing import Optional

from werkzeug.security import generate_password_hash

from payroll_system.attendance.model import AttendanceRecord
from payroll_system.common.approval import Approval
from payroll_system.core.enums import AttendanceType, PayrollStatus, Role
from payroll_system.overtime.model import OvertimeRequest
from payroll_system.payroll.model import PayrollPeriod
from payroll_system.reimbursements.model import ReimbursementRequest
from payroll_system.users.model import User


def _in_range(value: datetime, start: Optional[datetime], end: Optional[datetime]) -> bool:
    if start is not None and value < start:
        return False
    if end is not None and value > end:
        return False
    return True


class InMemoryUsers:
    def __init__(self):
        self._users: dict[int, User] = {}
        self._next_id = 1

    def add(self, *, full_name: str, username: str, password: str = "secret123", role: Role = Role.EMPLOYEE,
            monthly_salary: Optional[int] = None, is_active: bool = True) -> User:
        user_id = self.create_user(
            full_name=full_name,
            username=username,
            password_hash=generate_password_hash(password),
            role=role,
            monthly_salary=monthly_salary,
        )
        if not is_active:
            self._users[user_id] = replace(self._users[user_id], is_active=False)
        return self._users[user_id]

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self._users.get(user_id)

    def get_by_username(self, username: str) -> Optional[User]:
        return next((u for u in self._users.values() if u.username == username), None)

    def create_user(self, *, full_name, username, password_hash, role, monthly_salary) -> int:
        user_id = self._next_id
        self._next_id += 1
        self._users[user_id] = User(
            user_id=user_id,
            full_name=full_name,
            username=username,
            password_hash=password_hash,
            role=role,
            monthly_salary=monthly_salary,
        )
        return user_id

    def list_by_role(self, role: Role, *, active_only: bool = True):
        return [u for u in self._users.values() if u.role == role and (u.is_active or not active_only)]


class InMemoryAttendance:
    def __init__(self):
        self._records: dict[tuple[int, AttendanceType, date], AttendanceRecord] = {}
        self._next_id = 1

    def get_for_user_and_date(self, user_id: int, work_date: date, attendance_type: AttendanceType):
        return self._records.get((user_id, attendance_type, work_date))

    def insert_if_absent(self, *, user_id: int, attendance_type: AttendanceType, occurred_at: datetime):
        key = (user_id, attendance_type, occurred_at.date())
        if key in self._records:
            return None
        attendance_id = self._next_id
        self._next_id += 1
        self._records[key] = AttendanceRecord(
            attendance_id=attendance_id,
            user_id=user_id,
            type=attendance_type,
            occurred_at=occurred_at,
        )
        return attendance_id

    def list_for_user(self, user_id: int, *, start=None, end=None):
        items = [
            r for r in self._records.values()
            if r.user_id == user_id and _in_range(r.occurred_at, start, end)
        ]
        return sorted(items, key=lambda r: r.occurred_at)


class InMemoryOvertime:
    def __init__(self):
        self._items: dict[int, OvertimeRequest] = {}
        self._next_id = 1

    def create(self, *, user_id, description, overtime_at, duration_millis, created_at) -> int:
        overtime_id = self._next_id
        self._next_id += 1
        self._items[overtime_id] = OvertimeRequest(
            overtime_id=overtime_id,
            user_id=user_id,
            description=description,
            overtime_at=overtime_at,
            duration_millis=duration_millis,
            created_at=created_at,
        )
        return overtime_id

    def get_by_id(self, overtime_id: int):
        return self._items.get(overtime_id)

    def approve(self, *, overtime_id, approved_by, approved_at) -> bool:
        item = self._items.get(overtime_id)
        if item is None or item.approval is not None:
            return False
        self._items[overtime_id] = replace(item, approval=Approval(approved_by=approved_by, approved_at=approved_at))
        return True

    def list_for_user(self, user_id: int, *, start=None, end=None):
        return [o for o in self._items.values() if o.user_id == user_id and _in_range(o.created_at, start, end)]

    def list_pending(self, *, limit: int = 200):
        return [o for o in self._items.values() if o.approval is None][:limit]


class InMemoryReimbursements:
    def __init__(self):
        self._items: dict[int, ReimbursementRequest] = {}
        self._next_id = 1

    def create(self, *, user_id, description, amount, created_at) -> int:
        reimbursement_id = self._next_id
        self._next_id += 1
        self._items[reimbursement_id] = ReimbursementRequest(
            reimbursement_id=reimbursement_id,
            user_id=user_id,
            description=description,
            amount=amount,
            created_at=created_at,
        )
        return reimbursement_id

    def get_by_id(self, reimbursement_id: int):
        return self._items.get(reimbursement_id)

    def approve(self, *, reimbursement_id, approved_by, approved_at) -> bool:
        item = self._items.get(reimbursement_id)
        if item is None or item.approval is not None:
            return False
        self._items[reimbursement_id] = replace(
            item, approval=Approval(approved_by=approved_by, approved_at=approved_at)
        )
        return True

    def list_for_user(self, user_id: int, *, start=None, end=None):
        return [r for r in self._items.values() if r.user_id == user_id and _in_range(r.created_at, start, end)]

    def list_pending(self, *, limit: int = 200):
        return [r for r in self._items.values() if r.approval is None][:limit]


class InMemoryPayrolls:
    def __init__(self):
        self._items: dict[int, PayrollPeriod] = {}
        self._next_id = 1

    def create(self, *, name, started_at, ended_at, created_by, created_at) -> int:
        payroll_id = self._next_id
        self._next_id += 1
        self._items[payroll_id] = PayrollPeriod(
            payroll_id=payroll_id,
            name=name,
            started_at=started_at,
            ended_at=ended_at,
            status=PayrollStatus.DRAFT,
            created_by=created_by,
            created_at=created_at,
            updated_at=created_at,
        )
        return payroll_id

    def get_by_id(self, payroll_id: int):
        return self._items.get(payroll_id)

    def list_all(self):
        return sorted(self._items.values(), key=lambda p: p.payroll_id, reverse=True)

    def roll(self, *, payroll_id, rolled_by, rolled_at) -> bool:
        item = self._items.get(payroll_id)
        if item is None or item.status != PayrollStatus.DRAFT:
            return False
        self._items[payroll_id] = replace(
            item,
            status=PayrollStatus.ROLLED,
            rolled_by=rolled_by,
            rolled_at=rolled_at,
            updated_at=rolled_at,
        )
        return True
