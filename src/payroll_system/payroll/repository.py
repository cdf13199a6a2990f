from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from .model import PayrollPeriod


class PayrollRepository(Protocol):
    def create(
        self,
        *,
        name: str,
        started_at: datetime,
        ended_at: datetime,
        created_by: int,
        created_at: datetime,
    ) -> int:
        raise NotImplementedError

    def get_by_id(self, payroll_id: int) -> Optional[PayrollPeriod]:
        raise NotImplementedError

    def list_all(self) -> Sequence[PayrollPeriod]:
        raise NotImplementedError

    def roll(self, *, payroll_id: int, rolled_by: int, rolled_at: datetime) -> bool:
        """Compare-and-set DRAFT -> ROLLED. True when a row changed."""

        raise NotImplementedError
