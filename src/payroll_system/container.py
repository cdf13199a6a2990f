from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .common.clock import Clock, SystemClock
from .config import RuleSettings
from .database.connection import DBConfig, DatabaseConnection
from .overtime.mysql_overtime_repository import MySQLOvertimeRepository
from .overtime.repository import OvertimeRepository
from .overtime.service import OvertimeService
from .payroll.calculator.standard_calculator import StandardPayrollCalculator
from .payroll.mysql_payroll_repository import MySQLPayrollRepository
from .payroll.repository import PayrollRepository
from .payroll.service import PayrollService
from .reimbursements.mysql_reimbursement_repository import MySQLReimbursementRepository
from .reimbursements.repository import ReimbursementRepository
from .reimbursements.service import ReimbursementService
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import AuthService, UserService


@dataclass(frozen=True)
class Container:
    users_repo: UserRepository
    attendance_repo: AttendanceRepository
    overtime_repo: OvertimeRepository
    reimbursements_repo: ReimbursementRepository
    payrolls_repo: PayrollRepository

    auth_service: AuthService
    user_service: UserService
    attendance_service: AttendanceService
    overtime_service: OvertimeService
    reimbursement_service: ReimbursementService
    payroll_service: PayrollService


def assemble(
    *,
    users_repo: UserRepository,
    attendance_repo: AttendanceRepository,
    overtime_repo: OvertimeRepository,
    reimbursements_repo: ReimbursementRepository,
    payrolls_repo: PayrollRepository,
    rules: Optional[RuleSettings] = None,
    clock: Optional[Clock] = None,
) -> Container:
    rules = rules or RuleSettings()
    clock = clock or SystemClock()

    auth_service = AuthService(users_repo)
    user_service = UserService(users_repo)
    attendance_service = AttendanceService(attendance_repo, clock=clock)
    overtime_service = OvertimeService(
        overtime_repo,
        attendance_service,
        daily_cap_millis=rules.daily_overtime_cap_millis,
        clock=clock,
    )
    reimbursement_service = ReimbursementService(reimbursements_repo, clock=clock)
    payroll_service = PayrollService(
        payrolls_repo,
        user_service,
        attendance_service,
        overtime_service,
        reimbursement_service,
        calculator=StandardPayrollCalculator(
            days_per_month_prorate=rules.days_per_month_prorate,
            max_working_millis_per_day=rules.max_working_millis_per_day,
        ),
        clock=clock,
    )

    return Container(
        users_repo=users_repo,
        attendance_repo=attendance_repo,
        overtime_repo=overtime_repo,
        reimbursements_repo=reimbursements_repo,
        payrolls_repo=payrolls_repo,
        auth_service=auth_service,
        user_service=user_service,
        attendance_service=attendance_service,
        overtime_service=overtime_service,
        reimbursement_service=reimbursement_service,
        payroll_service=payroll_service,
    )


def build_container(*, db_config: dict, rules: Optional[RuleSettings] = None, clock: Optional[Clock] = None) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    return assemble(
        users_repo=MySQLUserRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        overtime_repo=MySQLOvertimeRepository(conn),
        reimbursements_repo=MySQLReimbursementRepository(conn),
        payrolls_repo=MySQLPayrollRepository(conn),
        rules=rules,
        clock=clock,
    )
