from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import ApprovalStatus


@dataclass(frozen=True)
class Approval:
    """Who approved a request and when. Absent while the request is pending."""

    approved_by: int
    approved_at: datetime


def approval_from_row(row: dict) -> Optional[Approval]:
    if row.get("approved_by") is None:
        return None
    return Approval(approved_by=int(row["approved_by"]), approved_at=row["approved_at"])


def status_of(approval: Optional[Approval]) -> ApprovalStatus:
    return ApprovalStatus.APPROVED if approval else ApprovalStatus.PENDING
