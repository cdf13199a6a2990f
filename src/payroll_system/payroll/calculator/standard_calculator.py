from __future__ import annotations

from datetime import datetime

from ...attendance.model import AttendanceDay
from ...common.datetime_utils import millis_between
from ...core.constants import DEFAULT_DAYS_PER_MONTH_PRORATE, DEFAULT_MAX_WORKING_MILLIS_PER_DAY
from .base import PayrollCalculator


class StandardPayrollCalculator(PayrollCalculator):
    """Standard rule: (out - in), capped at one working day, not below 0.

    A day without a check-out counts as a full working day. A day with only a
    stray check-out is anchored at the period's end.
    """

    def __init__(
        self,
        *,
        days_per_month_prorate: int = DEFAULT_DAYS_PER_MONTH_PRORATE,
        max_working_millis_per_day: int = DEFAULT_MAX_WORKING_MILLIS_PER_DAY,
    ):
        self.days_per_month_prorate = int(days_per_month_prorate)
        self.max_working_millis_per_day = int(max_working_millis_per_day)

    def pro_rate(self, monthly_salary: int) -> float:
        return monthly_salary / (self.days_per_month_prorate * self.max_working_millis_per_day)

    def checkin_at(self, day: AttendanceDay, *, period_end: datetime) -> datetime:
        return day.check_in.occurred_at if day.check_in else period_end

    def worked_millis(self, day: AttendanceDay, *, period_end: datetime) -> int:
        if day.check_in and day.check_out:
            millis = millis_between(day.check_in.occurred_at, day.check_out.occurred_at)
        else:
            millis = self.max_working_millis_per_day
        return min(max(millis, 0), self.max_working_millis_per_day)
