from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.validators import require_min_length, require_non_empty, require_positive_int
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, ConflictError, NotFoundError, ValidationError
from .model import User
from .repository import UserRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionUser:
    """What we store into the Flask session after login."""

    user_id: int
    full_name: str
    role: Role


class AuthService:
    """Use case: authenticate user (login)."""

    def __init__(self, users: UserRepository):
        self._users = users

    def authenticate(self, username: str, password: str) -> SessionUser:
        user = self._users.get_by_username((username or "").strip())
        if not user or not user.is_active:
            raise AuthenticationError()

        try:
            ok = check_password_hash(user.password_hash, password or "")
        except ValueError:
            # placeholder hashes like 'CHANGE_ME'
            ok = False

        if not ok:
            raise AuthenticationError()

        return SessionUser(user_id=user.user_id, full_name=user.full_name, role=user.role)


class UserService:
    def __init__(self, users: UserRepository):
        self._users = users

    def get_user_by_id(self, user_id: int) -> User:
        user = self._users.get_by_id(int(user_id))
        if not user:
            raise NotFoundError("User not found")
        return user

    def list_employees(self) -> Sequence[User]:
        return self._users.list_by_role(Role.EMPLOYEE, active_only=True)

    def create_user(
        self,
        *,
        full_name: str,
        username: str,
        password: str,
        role: Role = Role.EMPLOYEE,
        monthly_salary: Optional[int] = None,
    ) -> User:
        full_name = require_non_empty(full_name, "Full name")
        username = require_non_empty(username, "Username")
        password = require_min_length(password, "Password", 6)

        if monthly_salary is not None:
            monthly_salary = require_positive_int(monthly_salary, "Monthly salary")
        elif role == Role.EMPLOYEE:
            raise ValidationError("Monthly salary is required for employees")

        if self._users.get_by_username(username):
            raise ConflictError("Username already exists")

        user_id = self._users.create_user(
            full_name=full_name,
            username=username,
            password_hash=generate_password_hash(password),
            role=role,
            monthly_salary=monthly_salary,
        )
        logger.info("Created %s user %s (id=%s)", role.value, username, user_id)
        return self.get_user_by_id(user_id)

    @staticmethod
    def to_view(user: User) -> dict:
        return {
            "id": user.user_id,
            "full_name": user.full_name,
            "username": user.username,
            "role": user.role.value,
            "monthly_salary": user.monthly_salary,
            "is_active": user.is_active,
        }
