from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime

from ...attendance.model import AttendanceDay


class PayrollCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll)."""

    @abstractmethod
    def pro_rate(self, monthly_salary: int) -> float:
        """Wage per millisecond of work."""
        raise NotImplementedError

    @abstractmethod
    def checkin_at(self, day: AttendanceDay, *, period_end: datetime) -> datetime:
        raise NotImplementedError

    @abstractmethod
    def worked_millis(self, day: AttendanceDay, *, period_end: datetime) -> int:
        raise NotImplementedError
