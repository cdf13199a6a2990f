from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional, Sequence

from ..common.clock import Clock, SystemClock
from ..common.datetime_utils import format_millis, is_weekend, millis_between
from ..core.constants import DEFAULT_HISTORY_LIMIT
from ..core.enums import AttendanceType
from ..core.exceptions import (
    AlreadyCheckedInError,
    AlreadyCheckedOutError,
    CannotCheckOutError,
    WeekendNotAllowedError,
)
from .model import AttendanceDay, AttendanceRecord
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


class AttendanceService:
    """Attendance ledger: per-user, per-day check-in/check-out facts."""

    def __init__(self, attendance: AttendanceRepository, *, clock: Optional[Clock] = None):
        self._attendance = attendance
        self._clock = clock or SystemClock()

    def _now(self, now: Optional[datetime]) -> datetime:
        return now or self._clock.now()

    def check_in(self, user_id: int, *, now: Optional[datetime] = None) -> AttendanceRecord:
        now = self._now(now)
        if is_weekend(now):
            raise WeekendNotAllowedError()

        if self._attendance.get_for_user_and_date(user_id, now.date(), AttendanceType.CHECK_IN):
            raise AlreadyCheckedInError()

        return self._insert(user_id, AttendanceType.CHECK_IN, now, AlreadyCheckedInError)

    def check_out(self, user_id: int, *, now: Optional[datetime] = None) -> AttendanceRecord:
        now = self._now(now)
        today = now.date()

        if not self._attendance.get_for_user_and_date(user_id, today, AttendanceType.CHECK_IN):
            raise CannotCheckOutError()
        if self._attendance.get_for_user_and_date(user_id, today, AttendanceType.CHECK_OUT):
            raise AlreadyCheckedOutError()

        return self._insert(user_id, AttendanceType.CHECK_OUT, now, AlreadyCheckedOutError)

    def _insert(self, user_id: int, attendance_type: AttendanceType, now: datetime, conflict) -> AttendanceRecord:
        # The lookups above only give a friendly early answer; the storage key decides.
        attendance_id = self._attendance.insert_if_absent(
            user_id=int(user_id),
            attendance_type=attendance_type,
            occurred_at=now,
        )
        if attendance_id is None:
            raise conflict()

        logger.info("User %s %s at %s", user_id, attendance_type.value, now.isoformat())
        return AttendanceRecord(
            attendance_id=attendance_id,
            user_id=int(user_id),
            type=attendance_type,
            occurred_at=now,
        )

    def is_checked_out_today(self, user_id: int, *, now: Optional[datetime] = None) -> bool:
        today = self._now(now).date()
        return self._attendance.get_for_user_and_date(user_id, today, AttendanceType.CHECK_OUT) is not None

    def list_by_user(self, user_id: int) -> Sequence[AttendanceRecord]:
        return self._attendance.list_for_user(int(user_id))

    def list_by_user_in_range(
        self, user_id: int, start: Optional[datetime], end: Optional[datetime]
    ) -> Sequence[AttendanceRecord]:
        return self._attendance.list_for_user(int(user_id), start=start, end=end)

    def group_by_date(self, user_id: int, start: datetime, end: datetime) -> list[AttendanceDay]:
        return self._group(self.list_by_user_in_range(user_id, start, end))

    @staticmethod
    def _group(records: Sequence[AttendanceRecord]) -> list[AttendanceDay]:
        days: dict = {}
        for r in records:
            day = days.setdefault(r.work_date, {"check_in": None, "check_out": None})
            if r.type == AttendanceType.CHECK_IN:
                day["check_in"] = r
            else:
                day["check_out"] = r

        return [AttendanceDay(work_date=d, **sides) for d, sides in sorted(days.items())]

    def get_history_ui(self, user_id: int, *, limit: int = DEFAULT_HISTORY_LIMIT) -> list[dict]:
        days = self._group(self.list_by_user(user_id))
        return [self._to_ui(d) for d in reversed(days[-limit:])] if limit > 0 else []

    @staticmethod
    def _to_ui(day: AttendanceDay) -> dict:
        worked = "-"
        if day.check_in and day.check_out:
            worked = format_millis(max(millis_between(day.check_in.occurred_at, day.check_out.occurred_at), 0))

        return {
            "date": day.work_date.strftime("%Y-%m-%d"),
            "check_in": day.check_in.occurred_at.strftime("%H:%M:%S") if day.check_in else "-",
            "check_out": day.check_out.occurred_at.strftime("%H:%M:%S") if day.check_out else "-",
            "worked": worked,
        }
