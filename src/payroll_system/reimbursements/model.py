from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..common.approval import Approval, status_of
from ..core.enums import ApprovalStatus


@dataclass(frozen=True)
class ReimbursementRequest:
    reimbursement_id: int
    user_id: int
    description: str
    amount: int
    created_at: datetime
    approval: Optional[Approval] = None

    @property
    def status(self) -> ApprovalStatus:
        return status_of(self.approval)

    @property
    def is_approved(self) -> bool:
        return self.approval is not None
