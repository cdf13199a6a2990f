from __future__ import annotations

from datetime import date, datetime

import pytest

from fakes import InMemoryAttendance

from payroll_system.attendance.service import AttendanceService
from payroll_system.common.clock import FixedClock
from payroll_system.core.enums import AttendanceType
from payroll_system.core.exceptions import (
    AlreadyCheckedInError,
    AlreadyCheckedOutError,
    CannotCheckOutError,
    ConflictError,
    WeekendNotAllowedError,
)

MONDAY_8AM = datetime(2025, 1, 6, 8, 0)


def _service(now: datetime = MONDAY_8AM):
    repo = InMemoryAttendance()
    return AttendanceService(repo, clock=FixedClock(now)), repo


def test_check_in_records_a_fact_for_today():
    svc, repo = _service()

    record = svc.check_in(1)

    assert record.type == AttendanceType.CHECK_IN
    assert record.occurred_at == MONDAY_8AM
    assert repo.get_for_user_and_date(1, date(2025, 1, 6), AttendanceType.CHECK_IN) == record


def test_check_in_on_weekend_is_rejected():
    svc, _ = _service(datetime(2025, 1, 4, 9, 0))

    with pytest.raises(WeekendNotAllowedError):
        svc.check_in(1)


def test_second_check_in_same_day_is_rejected():
    svc, _ = _service()
    svc.check_in(1)

    with pytest.raises(AlreadyCheckedInError):
        svc.check_in(1, now=datetime(2025, 1, 6, 9, 30))


def test_check_in_again_next_day_is_allowed():
    svc, _ = _service()
    svc.check_in(1)

    record = svc.check_in(1, now=datetime(2025, 1, 7, 8, 0))
    assert record.work_date == date(2025, 1, 7)


def test_check_out_without_check_in_is_rejected():
    svc, _ = _service()

    with pytest.raises(CannotCheckOutError):
        svc.check_out(1)


def test_second_check_out_is_rejected():
    svc, _ = _service()
    svc.check_in(1)
    svc.check_out(1, now=datetime(2025, 1, 6, 17, 0))

    with pytest.raises(AlreadyCheckedOutError):
        svc.check_out(1, now=datetime(2025, 1, 6, 18, 0))


def test_check_out_on_weekend_is_not_blocked_by_weekend_rule():
    # Saturday check-out still requires a same-day check-in, which is impossible.
    svc, _ = _service(datetime(2025, 1, 4, 17, 0))

    with pytest.raises(CannotCheckOutError):
        svc.check_out(1)


class LosingRaceAttendance(InMemoryAttendance):
    """Lookups say 'absent' but the insert hits the unique key."""

    def get_for_user_and_date(self, user_id, work_date, attendance_type):
        return None

    def insert_if_absent(self, *, user_id, attendance_type, occurred_at):
        return None


def test_concurrent_duplicate_check_in_surfaces_as_conflict():
    svc = AttendanceService(LosingRaceAttendance(), clock=FixedClock(MONDAY_8AM))

    with pytest.raises(AlreadyCheckedInError) as exc:
        svc.check_in(1)
    assert isinstance(exc.value, ConflictError)


def test_is_checked_out_today():
    svc, _ = _service()
    svc.check_in(1)
    assert svc.is_checked_out_today(1) is False

    svc.check_out(1, now=datetime(2025, 1, 6, 17, 0))
    assert svc.is_checked_out_today(1, now=datetime(2025, 1, 6, 17, 5)) is True


def test_group_by_date_keeps_missing_sides_and_sorts_by_day():
    svc, _ = _service()
    # Tuesday: check-in only
    svc.check_in(1, now=datetime(2025, 1, 7, 8, 0))
    # Monday: both
    svc.check_in(1, now=datetime(2025, 1, 6, 8, 0))
    svc.check_out(1, now=datetime(2025, 1, 6, 17, 0))

    days = svc.group_by_date(1, datetime(2025, 1, 1), datetime(2025, 1, 31, 23, 59))

    assert [d.work_date for d in days] == [date(2025, 1, 6), date(2025, 1, 7)]
    assert days[0].check_in is not None and days[0].check_out is not None
    assert days[1].check_in is not None and days[1].check_out is None


def test_list_in_range_excludes_outside_records():
    svc, _ = _service()
    svc.check_in(1, now=datetime(2025, 1, 6, 8, 0))
    svc.check_in(1, now=datetime(2025, 1, 13, 8, 0))
    svc.check_in(2, now=datetime(2025, 1, 6, 8, 0))

    records = svc.list_by_user_in_range(1, datetime(2025, 1, 6), datetime(2025, 1, 10, 23, 59))
    assert [r.work_date for r in records] == [date(2025, 1, 6)]


def test_history_is_newest_first_and_formats_worked_time():
    svc, _ = _service()
    svc.check_in(1, now=datetime(2025, 1, 6, 8, 0))
    svc.check_out(1, now=datetime(2025, 1, 6, 16, 30))
    svc.check_in(1, now=datetime(2025, 1, 7, 8, 0))

    rows = svc.get_history_ui(1, limit=10)

    assert [r["date"] for r in rows] == ["2025-01-07", "2025-01-06"]
    assert rows[0]["check_out"] == "-" and rows[0]["worked"] == "-"
    assert rows[1]["worked"] == "08:30"
    assert svc.get_history_ui(1, limit=1)[0]["date"] == "2025-01-07"
