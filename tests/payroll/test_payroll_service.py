from __future__ import annotations

from datetime import date, datetime

import pytest

from fakes import InMemoryAttendance, InMemoryOvertime, InMemoryPayrolls, InMemoryReimbursements, InMemoryUsers

from payroll_system.common.clock import FixedClock
from payroll_system.config import RuleSettings
from payroll_system.container import assemble
from payroll_system.core.constants import MILLIS_PER_HOUR
from payroll_system.core.enums import AttendanceType, PayrollStatus, Role
from payroll_system.core.exceptions import (
    AlreadyRolledError,
    NotFoundError,
    PayrollNotRolledError,
    UserInfoMissingError,
    ValidationError,
)

JAN_START = datetime(2025, 1, 1, 0, 0)
JAN_END = datetime(2025, 1, 31, 23, 59, 59)
SALARY = 4_500_000
DAY_PAY = SALARY / 22


@pytest.fixture
def env():
    users = InMemoryUsers()
    admin = users.add(full_name="Admin", username="admin", role=Role.ADMIN)
    alice = users.add(full_name="Alice", username="alice", monthly_salary=SALARY)
    clock = FixedClock(datetime(2025, 2, 1, 9, 0))
    container = assemble(
        users_repo=users,
        attendance_repo=InMemoryAttendance(),
        overtime_repo=InMemoryOvertime(),
        reimbursements_repo=InMemoryReimbursements(),
        payrolls_repo=InMemoryPayrolls(),
        rules=RuleSettings(),
        clock=clock,
    )
    return container, admin, alice


def _january(container, admin, *, rolled=True):
    svc = container.payroll_service
    p = svc.create_payroll(name="January", started_at=JAN_START, ended_at=JAN_END, created_by=admin.user_id)
    if rolled:
        p = svc.roll_payroll(p.payroll_id, admin.user_id)
    return p


def test_create_payroll_starts_as_draft(env):
    container, admin, _ = env

    p = _january(container, admin, rolled=False)

    assert p.status == PayrollStatus.DRAFT
    assert p.created_by == admin.user_id
    assert p.created_at == datetime(2025, 2, 1, 9, 0)
    assert container.payroll_service.list_payrolls()[0].payroll_id == p.payroll_id


def test_create_payroll_rejects_inverted_range(env):
    container, admin, _ = env

    with pytest.raises(ValidationError):
        container.payroll_service.create_payroll(
            name="bad", started_at=JAN_END, ended_at=JAN_START, created_by=admin.user_id
        )


def test_roll_once_only(env):
    container, admin, _ = env
    p = _january(container, admin)

    assert p.status == PayrollStatus.ROLLED
    assert p.rolled_by == admin.user_id

    with pytest.raises(AlreadyRolledError):
        container.payroll_service.roll_payroll(p.payroll_id, admin.user_id)


def test_roll_unknown_payroll(env):
    container, admin, _ = env

    with pytest.raises(NotFoundError):
        container.payroll_service.roll_payroll(42, admin.user_id)


def test_payslip_requires_rolled_period(env):
    container, admin, alice = env
    p = _january(container, admin, rolled=False)

    with pytest.raises(PayrollNotRolledError):
        container.payroll_service.generate_payslip(p.payroll_id, alice.user_id)


def test_payslip_for_unknown_payroll_or_user(env):
    container, admin, _ = env
    p = _january(container, admin)

    with pytest.raises(NotFoundError):
        container.payroll_service.generate_payslip(999, 1)
    with pytest.raises(NotFoundError):
        container.payroll_service.generate_payslip(p.payroll_id, 999)


def test_payslip_without_salary_is_rejected(env):
    container, admin, _ = env
    bob = container.users_repo.add(full_name="Bob", username="bob")
    p = _january(container, admin)

    with pytest.raises(UserInfoMissingError):
        container.payroll_service.generate_payslip(p.payroll_id, bob.user_id)


def test_full_day_is_paid_at_one_day_of_salary(env):
    container, admin, alice = env
    container.attendance_service.check_in(alice.user_id, now=datetime(2025, 1, 6, 8, 0))
    container.attendance_service.check_out(alice.user_id, now=datetime(2025, 1, 6, 17, 0))
    p = _january(container, admin)

    slip = container.payroll_service.generate_payslip(p.payroll_id, alice.user_id)

    assert slip.salary == SALARY
    [detail] = slip.attendance.details
    assert detail.work_date == date(2025, 1, 6)
    assert detail.duration_millis == 28_800_000
    assert detail.amount == pytest.approx(204_545.4545, rel=1e-9)
    assert slip.take_home_pay == pytest.approx(DAY_PAY)


def test_payslip_counts_only_approved_requests(env):
    container, admin, alice = env
    saturday = datetime(2025, 1, 4, 10, 0)
    ot_ok = container.overtime_service.create_overtime(
        user_id=alice.user_id, description="release", overtime_at=saturday, duration_millis=MILLIS_PER_HOUR, now=saturday
    )
    container.overtime_service.create_overtime(
        user_id=alice.user_id, description="pending", overtime_at=saturday, duration_millis=MILLIS_PER_HOUR, now=saturday
    )
    container.overtime_service.approve_overtime(ot_ok.overtime_id, admin.user_id)

    r_ok = container.reimbursement_service.create_reimbursement(
        user_id=alice.user_id, description="taxi", amount=150_000, now=saturday
    )
    container.reimbursement_service.create_reimbursement(
        user_id=alice.user_id, description="pending", amount=999, now=saturday
    )
    container.reimbursement_service.approve_reimbursement(r_ok.reimbursement_id, admin.user_id)

    p = _january(container, admin)
    slip = container.payroll_service.generate_payslip(p.payroll_id, alice.user_id)

    hourly = SALARY / (22 * 8)
    assert [d.description for d in slip.overtime.details] == ["release"]
    assert slip.overtime.total_duration_millis == MILLIS_PER_HOUR
    assert slip.overtime.total_amount == pytest.approx(hourly)
    assert [d.description for d in slip.reimburse.details] == ["taxi"]
    assert slip.reimburse.total_amount == 150_000
    assert slip.attendance.details == []
    assert slip.take_home_pay == pytest.approx(
        slip.attendance.total_amount + slip.overtime.total_amount + slip.reimburse.total_amount
    )


def test_payslip_ignores_records_outside_the_period(env):
    container, admin, alice = env
    container.attendance_service.check_in(alice.user_id, now=datetime(2025, 2, 3, 8, 0))
    p = _january(container, admin)

    slip = container.payroll_service.generate_payslip(p.payroll_id, alice.user_id)
    assert slip.take_home_pay == 0


def test_incomplete_days_count_full_and_are_sorted(env):
    container, admin, alice = env
    # Wednesday: check-in only
    container.attendance_service.check_in(alice.user_id, now=datetime(2025, 1, 8, 8, 0))
    # Tuesday: stray check-out only
    container.attendance_repo.insert_if_absent(
        user_id=alice.user_id, attendance_type=AttendanceType.CHECK_OUT, occurred_at=datetime(2025, 1, 7, 17, 0)
    )
    p = _january(container, admin)

    slip = container.payroll_service.generate_payslip(p.payroll_id, alice.user_id)

    assert [d.work_date for d in slip.attendance.details] == [date(2025, 1, 7), date(2025, 1, 8)]
    stray, open_day = slip.attendance.details
    assert stray.checkin_at == JAN_END
    assert stray.checkout_at == datetime(2025, 1, 7, 17, 0)
    assert open_day.checkout_at is None
    assert slip.attendance.total_duration_millis == 2 * 28_800_000
    assert slip.take_home_pay == pytest.approx(2 * DAY_PAY)


def test_recomputation_is_stable(env):
    container, admin, alice = env
    container.attendance_service.check_in(alice.user_id, now=datetime(2025, 1, 6, 9, 0))
    container.attendance_service.check_out(alice.user_id, now=datetime(2025, 1, 6, 12, 0))
    p = _january(container, admin)

    first = container.payroll_service.generate_payslip(p.payroll_id, alice.user_id)
    second = container.payroll_service.generate_payslip(p.payroll_id, alice.user_id)
    assert first == second


def test_summaries_cover_salaried_employees_and_total(env):
    container, admin, alice = env
    carol = container.users_repo.add(full_name="Carol", username="carol", monthly_salary=SALARY * 2)
    container.users_repo.add(full_name="NoSalary", username="nosalary")
    container.users_repo.add(full_name="Gone", username="gone", monthly_salary=SALARY, is_active=False)

    for user in (alice, carol):
        container.attendance_service.check_in(user.user_id, now=datetime(2025, 1, 6, 8, 0))
        container.attendance_service.check_out(user.user_id, now=datetime(2025, 1, 6, 17, 0))
    p = _january(container, admin)

    summaries = container.payroll_service.get_payslip_summaries(p.payroll_id)

    assert [(s.user_id, s.full_name) for s in summaries] == [(alice.user_id, "Alice"), (carol.user_id, "Carol")]
    assert summaries[0].take_home_pay == pytest.approx(DAY_PAY)
    assert summaries[1].take_home_pay == pytest.approx(2 * DAY_PAY)
    assert container.payroll_service.get_total_take_home_pay(p.payroll_id) == pytest.approx(3 * DAY_PAY)


def test_summaries_require_rolled_period(env):
    container, admin, _ = env
    p = _january(container, admin, rolled=False)

    with pytest.raises(PayrollNotRolledError):
        container.payroll_service.get_payslip_summaries(p.payroll_id)
