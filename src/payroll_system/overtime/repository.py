from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from .model import OvertimeRequest


class OvertimeRepository(Protocol):
    def create(
        self,
        *,
        user_id: int,
        description: str,
        overtime_at: datetime,
        duration_millis: int,
        created_at: datetime,
    ) -> int:
        raise NotImplementedError

    def get_by_id(self, overtime_id: int) -> Optional[OvertimeRequest]:
        raise NotImplementedError

    def approve(self, *, overtime_id: int, approved_by: int, approved_at: datetime) -> bool:
        """Compare-and-set: approve only if still pending. True when a row changed."""

        raise NotImplementedError

    def list_for_user(
        self,
        user_id: int,
        *,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> Sequence[OvertimeRequest]:
        """Filtered on created_at (inclusive), oldest first."""

        raise NotImplementedError

    def list_pending(self, *, limit: int = 200) -> Sequence[OvertimeRequest]:
        raise NotImplementedError
