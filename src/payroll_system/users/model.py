from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: User.

    Plain data object; the monthly salary is in the minor currency unit and
    only set for employees.
    """

    user_id: int
    full_name: str
    username: str
    password_hash: str
    role: Role
    monthly_salary: Optional[int] = None
    is_active: bool = True
