from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from .model import ReimbursementRequest


class ReimbursementRepository(Protocol):
    def create(self, *, user_id: int, description: str, amount: int, created_at: datetime) -> int:
        raise NotImplementedError

    def get_by_id(self, reimbursement_id: int) -> Optional[ReimbursementRequest]:
        raise NotImplementedError

    def approve(self, *, reimbursement_id: int, approved_by: int, approved_at: datetime) -> bool:
        """Compare-and-set: approve only if still pending. True when a row changed."""

        raise NotImplementedError

    def list_for_user(
        self,
        user_id: int,
        *,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> Sequence[ReimbursementRequest]:
        raise NotImplementedError

    def list_pending(self, *, limit: int = 200) -> Sequence[ReimbursementRequest]:
        raise NotImplementedError
