from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional

from ..core.enums import PayrollStatus


@dataclass(frozen=True)
class PayrollPeriod:
    payroll_id: int
    name: str
    started_at: datetime
    ended_at: datetime
    status: PayrollStatus
    created_by: int
    created_at: datetime
    updated_at: datetime
    rolled_by: Optional[int] = None
    rolled_at: Optional[datetime] = None

    @property
    def is_rolled(self) -> bool:
        return self.status == PayrollStatus.ROLLED


@dataclass(frozen=True)
class PayslipAttendanceDetail:
    work_date: date
    checkin_at: datetime
    checkout_at: Optional[datetime]
    duration_millis: int
    amount: float


@dataclass(frozen=True)
class PayslipOvertimeDetail:
    overtime_at: datetime
    description: str
    duration_millis: int
    amount: float
    created_at: datetime


@dataclass(frozen=True)
class PayslipReimburseDetail:
    description: str
    amount: int
    created_at: datetime


@dataclass(frozen=True)
class PayslipAttendance:
    details: list[PayslipAttendanceDetail] = field(default_factory=list)
    total_duration_millis: int = 0
    total_amount: float = 0.0


@dataclass(frozen=True)
class PayslipOvertime:
    details: list[PayslipOvertimeDetail] = field(default_factory=list)
    total_duration_millis: int = 0
    total_amount: float = 0.0


@dataclass(frozen=True)
class PayslipReimburse:
    details: list[PayslipReimburseDetail] = field(default_factory=list)
    total_amount: float = 0.0


@dataclass(frozen=True)
class Payslip:
    """Derived view of one employee's pay for a rolled period. Never stored."""

    payroll_id: int
    user_id: int
    salary: int
    pro_rate: float
    attendance: PayslipAttendance
    overtime: PayslipOvertime
    reimburse: PayslipReimburse
    take_home_pay: float


@dataclass(frozen=True)
class PayslipSummary:
    payroll_id: int
    user_id: int
    full_name: str
    take_home_pay: float
