from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional, Sequence

from ..attendance.service import AttendanceService
from ..common.clock import Clock, SystemClock
from ..common.validators import require_non_empty
from ..core.exceptions import (
    AlreadyRolledError,
    NotFoundError,
    PayrollNotRolledError,
    UserInfoMissingError,
    ValidationError,
)
from ..overtime.service import OvertimeService
from ..reimbursements.service import ReimbursementService
from ..users.service import UserService
from .calculator.base import PayrollCalculator
from .calculator.standard_calculator import StandardPayrollCalculator
from .model import (
    PayrollPeriod,
    Payslip,
    PayslipAttendance,
    PayslipAttendanceDetail,
    PayslipOvertime,
    PayslipOvertimeDetail,
    PayslipReimburse,
    PayslipReimburseDetail,
    PayslipSummary,
)
from .repository import PayrollRepository

logger = logging.getLogger(__name__)


class PayrollService:
    """Payroll engine: pay periods and payslip computation.

    A period starts as DRAFT and is rolled (closed) exactly once. Payslips are
    only computable for a rolled period and are recomputed on every call from
    the attendance, overtime and reimbursement ledgers.
    """

    def __init__(
        self,
        payrolls: PayrollRepository,
        users: UserService,
        attendance: AttendanceService,
        overtime: OvertimeService,
        reimbursements: ReimbursementService,
        *,
        calculator: Optional[PayrollCalculator] = None,
        clock: Optional[Clock] = None,
    ):
        self._payrolls = payrolls
        self._users = users
        self._attendance = attendance
        self._overtime = overtime
        self._reimbursements = reimbursements
        self._calculator = calculator or StandardPayrollCalculator()
        self._clock = clock or SystemClock()

    def create_payroll(
        self,
        *,
        name: str,
        started_at: datetime,
        ended_at: datetime,
        created_by: int,
        now: Optional[datetime] = None,
    ) -> PayrollPeriod:
        name = require_non_empty(name, "Name")
        if started_at > ended_at:
            raise ValidationError("Payroll start must not be after its end")
        now = now or self._clock.now()

        payroll_id = self._payrolls.create(
            name=name,
            started_at=started_at,
            ended_at=ended_at,
            created_by=int(created_by),
            created_at=now,
        )
        logger.info("Payroll %s (%s) created by user %s", payroll_id, name, created_by)
        return self.get_payroll(payroll_id)

    def get_payroll(self, payroll_id: int) -> PayrollPeriod:
        payroll = self._payrolls.get_by_id(int(payroll_id))
        if not payroll:
            raise NotFoundError("Payroll not found")
        return payroll

    def list_payrolls(self) -> Sequence[PayrollPeriod]:
        return self._payrolls.list_all()

    def roll_payroll(self, payroll_id: int, user_id: int, *, now: Optional[datetime] = None) -> PayrollPeriod:
        now = now or self._clock.now()

        if not self._payrolls.roll(payroll_id=int(payroll_id), rolled_by=int(user_id), rolled_at=now):
            # Raises NotFoundError when the period does not exist.
            self.get_payroll(payroll_id)
            raise AlreadyRolledError()

        logger.info("Payroll %s rolled by user %s", payroll_id, user_id)
        return self.get_payroll(payroll_id)

    def _get_rolled(self, payroll_id: int) -> PayrollPeriod:
        payroll = self.get_payroll(payroll_id)
        if not payroll.is_rolled:
            raise PayrollNotRolledError()
        return payroll

    def generate_payslip(self, payroll_id: int, user_id: int) -> Payslip:
        payroll = self._get_rolled(payroll_id)
        return self._compute_payslip(payroll, int(user_id))

    def _compute_payslip(self, payroll: PayrollPeriod, user_id: int) -> Payslip:
        user = self._users.get_user_by_id(user_id)
        if user.monthly_salary is None:
            raise UserInfoMissingError()

        salary = int(user.monthly_salary)
        pro_rate = self._calculator.pro_rate(salary)
        start, end = payroll.started_at, payroll.ended_at

        attendance = self._attendance_section(payroll, user_id, pro_rate)

        overtime_details = [
            PayslipOvertimeDetail(
                overtime_at=o.overtime_at,
                description=o.description,
                duration_millis=o.duration_millis,
                amount=o.duration_millis * pro_rate,
                created_at=o.created_at,
            )
            for o in self._overtime.list_by_user_in_range(user_id, start, end)
            if o.is_approved
        ]
        overtime = PayslipOvertime(
            details=overtime_details,
            total_duration_millis=sum(d.duration_millis for d in overtime_details),
            total_amount=sum((d.amount for d in overtime_details), 0.0),
        )

        reimburse_details = [
            PayslipReimburseDetail(description=r.description, amount=r.amount, created_at=r.created_at)
            for r in self._reimbursements.list_by_user_in_range(user_id, start, end)
            if r.is_approved
        ]
        reimburse = PayslipReimburse(
            details=reimburse_details,
            total_amount=float(sum(d.amount for d in reimburse_details)),
        )

        return Payslip(
            payroll_id=payroll.payroll_id,
            user_id=user_id,
            salary=salary,
            pro_rate=pro_rate,
            attendance=attendance,
            overtime=overtime,
            reimburse=reimburse,
            take_home_pay=attendance.total_amount + overtime.total_amount + reimburse.total_amount,
        )

    def _attendance_section(self, payroll: PayrollPeriod, user_id: int, pro_rate: float) -> PayslipAttendance:
        details: list[PayslipAttendanceDetail] = []
        for day in self._attendance.group_by_date(user_id, payroll.started_at, payroll.ended_at):
            if day.check_in is None:
                logger.warning("User %s has a check-out without check-in on %s", user_id, day.work_date)

            millis = self._calculator.worked_millis(day, period_end=payroll.ended_at)
            details.append(
                PayslipAttendanceDetail(
                    work_date=day.work_date,
                    checkin_at=self._calculator.checkin_at(day, period_end=payroll.ended_at),
                    checkout_at=day.check_out.occurred_at if day.check_out else None,
                    duration_millis=millis,
                    amount=millis * pro_rate,
                )
            )

        details.sort(key=lambda d: d.work_date)
        return PayslipAttendance(
            details=details,
            total_duration_millis=sum(d.duration_millis for d in details),
            total_amount=sum((d.amount for d in details), 0.0),
        )

    def get_payslip_summaries(self, payroll_id: int) -> list[PayslipSummary]:
        payroll = self._get_rolled(payroll_id)

        summaries: list[PayslipSummary] = []
        for user in self._users.list_employees():
            if user.monthly_salary is None:
                logger.warning("Skipping user %s in payroll %s: no monthly salary", user.user_id, payroll_id)
                continue
            payslip = self._compute_payslip(payroll, user.user_id)
            summaries.append(
                PayslipSummary(
                    payroll_id=payroll.payroll_id,
                    user_id=user.user_id,
                    full_name=user.full_name,
                    take_home_pay=payslip.take_home_pay,
                )
            )
        return summaries

    def get_total_take_home_pay(self, payroll_id: int) -> float:
        return sum(s.take_home_pay for s in self.get_payslip_summaries(payroll_id))

    @staticmethod
    def payroll_to_view(p: PayrollPeriod) -> dict:
        return {
            "id": p.payroll_id,
            "name": p.name,
            "started_at": p.started_at.isoformat(),
            "ended_at": p.ended_at.isoformat(),
            "status": p.status.value,
            "is_rolled": p.is_rolled,
            "rolled_by": p.rolled_by,
            "rolled_at": p.rolled_at.isoformat() if p.rolled_at else None,
            "created_by": p.created_by,
            "created_at": p.created_at.isoformat(),
            "updated_at": p.updated_at.isoformat(),
        }

    @staticmethod
    def payslip_to_view(s: Payslip) -> dict:
        return {
            "payroll_id": s.payroll_id,
            "user_id": s.user_id,
            "salary": s.salary,
            "pro_rate": s.pro_rate,
            "attendance": {
                "details": [
                    {
                        "date": d.work_date.strftime("%Y-%m-%d"),
                        "checkin_at": d.checkin_at.isoformat(),
                        "checkout_at": d.checkout_at.isoformat() if d.checkout_at else None,
                        "duration_millis": d.duration_millis,
                        "amount": d.amount,
                    }
                    for d in s.attendance.details
                ],
                "total_duration_millis": s.attendance.total_duration_millis,
                "total_amount": s.attendance.total_amount,
            },
            "overtime": {
                "details": [
                    {
                        "overtime_at": d.overtime_at.isoformat(),
                        "description": d.description,
                        "duration_millis": d.duration_millis,
                        "amount": d.amount,
                        "created_at": d.created_at.isoformat(),
                    }
                    for d in s.overtime.details
                ],
                "total_duration_millis": s.overtime.total_duration_millis,
                "total_amount": s.overtime.total_amount,
            },
            "reimburse": {
                "details": [
                    {
                        "description": d.description,
                        "amount": d.amount,
                        "created_at": d.created_at.isoformat(),
                    }
                    for d in s.reimburse.details
                ],
                "total_amount": s.reimburse.total_amount,
            },
            "take_home_pay": s.take_home_pay,
        }
