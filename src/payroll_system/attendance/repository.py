from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import AttendanceType
from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def get_for_user_and_date(
        self, user_id: int, work_date: date, attendance_type: AttendanceType
    ) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def insert_if_absent(self, *, user_id: int, attendance_type: AttendanceType, occurred_at: datetime) -> Optional[int]:
        """Insert one record unless (user, type, calendar day) already exists.

        Returns the new id, or None when a record for that day is already stored.
        Must be atomic (unique key or equivalent), not a read followed by a write.
        """

        raise NotImplementedError

    def list_for_user(
        self,
        user_id: int,
        *,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> Sequence[AttendanceRecord]:
        """Records ordered by occurred_at ascending; bounds are inclusive."""

        raise NotImplementedError
