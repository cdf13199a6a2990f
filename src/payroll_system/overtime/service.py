from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional, Sequence

from ..attendance.service import AttendanceService
from ..common.clock import Clock, SystemClock
from ..common.datetime_utils import end_of_day, format_millis, is_weekend, start_of_day
from ..common.validators import require_non_empty, require_positive_int
from ..core.constants import DEFAULT_DAILY_OVERTIME_CAP_MILLIS
from ..core.exceptions import (
    AlreadyApprovedError,
    NotFoundError,
    OvertimeExceedsLimitError,
    SubmitBeforeCheckoutError,
)
from .model import OvertimeRequest
from .repository import OvertimeRepository

logger = logging.getLogger(__name__)


class OvertimeService:
    """Overtime ledger.

    On working days overtime can only be submitted after the employee has
    checked out. A user's submissions created within one calendar day may not
    exceed ``daily_cap_millis`` in total.
    """

    def __init__(
        self,
        overtime: OvertimeRepository,
        attendance: AttendanceService,
        *,
        daily_cap_millis: int = DEFAULT_DAILY_OVERTIME_CAP_MILLIS,
        clock: Optional[Clock] = None,
    ):
        self._overtime = overtime
        self._attendance = attendance
        self._daily_cap_millis = int(daily_cap_millis)
        self._clock = clock or SystemClock()

    def create_overtime(
        self,
        *,
        user_id: int,
        description: str,
        overtime_at: datetime,
        duration_millis: int,
        now: Optional[datetime] = None,
    ) -> OvertimeRequest:
        description = require_non_empty(description, "Description")
        duration_millis = require_positive_int(duration_millis, "Duration")
        now = now or self._clock.now()

        if not is_weekend(now) and not self._attendance.is_checked_out_today(user_id, now=now):
            raise SubmitBeforeCheckoutError()

        same_day = self._overtime.list_for_user(int(user_id), start=start_of_day(now), end=end_of_day(now))
        used = sum(o.duration_millis for o in same_day)
        if used + duration_millis > self._daily_cap_millis:
            raise OvertimeExceedsLimitError(
                f"Overtime exceeds the daily limit of {format_millis(self._daily_cap_millis)} "
                f"({format_millis(used)} already submitted today)"
            )

        overtime_id = self._overtime.create(
            user_id=int(user_id),
            description=description,
            overtime_at=overtime_at,
            duration_millis=duration_millis,
            created_at=now,
        )
        logger.info("User %s submitted overtime %s (%s ms)", user_id, overtime_id, duration_millis)
        return OvertimeRequest(
            overtime_id=overtime_id,
            user_id=int(user_id),
            description=description,
            overtime_at=overtime_at,
            duration_millis=duration_millis,
            created_at=now,
        )

    def approve_overtime(self, overtime_id: int, approver_id: int, *, now: Optional[datetime] = None) -> OvertimeRequest:
        now = now or self._clock.now()

        if not self._overtime.approve(overtime_id=int(overtime_id), approved_by=int(approver_id), approved_at=now):
            if self._overtime.get_by_id(int(overtime_id)) is None:
                raise NotFoundError("Overtime not found")
            raise AlreadyApprovedError("Overtime already approved")

        logger.info("Overtime %s approved by user %s", overtime_id, approver_id)
        return self.get_overtime(overtime_id)

    def get_overtime(self, overtime_id: int) -> OvertimeRequest:
        overtime = self._overtime.get_by_id(int(overtime_id))
        if not overtime:
            raise NotFoundError("Overtime not found")
        return overtime

    def list_by_user(self, user_id: int) -> Sequence[OvertimeRequest]:
        return self._overtime.list_for_user(int(user_id))

    def list_by_user_in_range(
        self, user_id: int, start: Optional[datetime], end: Optional[datetime]
    ) -> Sequence[OvertimeRequest]:
        return self._overtime.list_for_user(int(user_id), start=start, end=end)

    def list_pending(self) -> Sequence[OvertimeRequest]:
        return self._overtime.list_pending()

    @staticmethod
    def to_view(o: OvertimeRequest) -> dict:
        return {
            "id": o.overtime_id,
            "user_id": o.user_id,
            "description": o.description,
            "overtime_at": o.overtime_at.isoformat(),
            "duration_millis": o.duration_millis,
            "status": o.status.value,
            "approved_by": o.approval.approved_by if o.approval else None,
            "approved_at": o.approval.approved_at.isoformat() if o.approval else None,
            "created_at": o.created_at.isoformat(),
        }
