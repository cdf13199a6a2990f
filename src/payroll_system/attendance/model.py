from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import AttendanceType


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: a single check-in or check-out fact. Never mutated."""

    attendance_id: int
    user_id: int
    type: AttendanceType
    occurred_at: datetime

    @property
    def work_date(self) -> date:
        return self.occurred_at.date()


@dataclass(frozen=True)
class AttendanceDay:
    """Read-model: one calendar day of a user's attendance.

    Either side may be missing (forgotten check-out, stray check-out).
    """

    work_date: date
    check_in: Optional[AttendanceRecord] = None
    check_out: Optional[AttendanceRecord] = None
