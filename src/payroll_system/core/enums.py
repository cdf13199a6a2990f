from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User role used for authorization."""

    ADMIN = "ADMIN"
    EMPLOYEE = "EMPLOYEE"


class AttendanceType(str, Enum):
    CHECK_IN = "CHECKIN"
    CHECK_OUT = "CHECKOUT"


class ApprovalStatus(str, Enum):
    """Approval state of an overtime or reimbursement request."""

    PENDING = "PENDING"
    APPROVED = "APPROVED"


class PayrollStatus(str, Enum):
    """DRAFT -> ROLLED, never back."""

    DRAFT = "DRAFT"
    ROLLED = "ROLLED"
