from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional, Sequence

from ..common.clock import Clock, SystemClock
from ..common.validators import require_non_empty, require_positive_int
from ..core.exceptions import AlreadyApprovedError, NotFoundError
from .model import ReimbursementRequest
from .repository import ReimbursementRepository

logger = logging.getLogger(__name__)


class ReimbursementService:
    def __init__(self, reimbursements: ReimbursementRepository, *, clock: Optional[Clock] = None):
        self._reimbursements = reimbursements
        self._clock = clock or SystemClock()

    def create_reimbursement(
        self,
        *,
        user_id: int,
        description: str,
        amount: int,
        now: Optional[datetime] = None,
    ) -> ReimbursementRequest:
        description = require_non_empty(description, "Description")
        amount = require_positive_int(amount, "Amount")
        now = now or self._clock.now()

        reimbursement_id = self._reimbursements.create(
            user_id=int(user_id),
            description=description,
            amount=amount,
            created_at=now,
        )
        logger.info("User %s submitted reimbursement %s (amount=%s)", user_id, reimbursement_id, amount)
        return ReimbursementRequest(
            reimbursement_id=reimbursement_id,
            user_id=int(user_id),
            description=description,
            amount=amount,
            created_at=now,
        )

    def approve_reimbursement(
        self, reimbursement_id: int, approver_id: int, *, now: Optional[datetime] = None
    ) -> ReimbursementRequest:
        now = now or self._clock.now()

        approved = self._reimbursements.approve(
            reimbursement_id=int(reimbursement_id),
            approved_by=int(approver_id),
            approved_at=now,
        )
        if not approved:
            if self._reimbursements.get_by_id(int(reimbursement_id)) is None:
                raise NotFoundError("Reimbursement not found")
            raise AlreadyApprovedError("Reimbursement already approved")

        logger.info("Reimbursement %s approved by user %s", reimbursement_id, approver_id)
        return self.get_reimbursement(reimbursement_id)

    def get_reimbursement(self, reimbursement_id: int) -> ReimbursementRequest:
        reimbursement = self._reimbursements.get_by_id(int(reimbursement_id))
        if not reimbursement:
            raise NotFoundError("Reimbursement not found")
        return reimbursement

    def list_by_user(self, user_id: int) -> Sequence[ReimbursementRequest]:
        return self._reimbursements.list_for_user(int(user_id))

    def list_by_user_in_range(
        self, user_id: int, start: Optional[datetime], end: Optional[datetime]
    ) -> Sequence[ReimbursementRequest]:
        return self._reimbursements.list_for_user(int(user_id), start=start, end=end)

    def list_pending(self) -> Sequence[ReimbursementRequest]:
        return self._reimbursements.list_pending()

    @staticmethod
    def to_view(r: ReimbursementRequest) -> dict:
        return {
            "id": r.reimbursement_id,
            "user_id": r.user_id,
            "description": r.description,
            "amount": r.amount,
            "status": r.status.value,
            "approved_by": r.approval.approved_by if r.approval else None,
            "approved_at": r.approval.approved_at.isoformat() if r.approval else None,
            "created_at": r.created_at.isoformat(),
        }
