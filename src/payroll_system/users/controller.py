from __future__ import annotations

from flask import Flask, session

from ..common.web import current_role, current_user_id, json_body, login_required, ok, roles_required
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, ValidationError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/login", methods=["POST"], endpoint="login")
    def login():
        body = json_body()
        s_user = container.auth_service.authenticate(body.get("username", ""), body.get("password", ""))

        session.clear()
        session["user_id"] = s_user.user_id
        session["name"] = s_user.full_name
        session["role"] = s_user.role.value

        return ok({"id": s_user.user_id, "full_name": s_user.full_name, "role": s_user.role.value}, "Logged in")

    @app.route("/logout", methods=["POST"], endpoint="logout")
    def logout():
        session.clear()
        return ok(message="Logged out")

    @app.route("/users", methods=["POST"], endpoint="create_user")
    @roles_required(Role.ADMIN)
    def create_user():
        body = json_body()
        try:
            role = Role(str(body.get("role", Role.EMPLOYEE.value)).upper())
        except ValueError:
            raise ValidationError("Invalid role")

        user = container.user_service.create_user(
            full_name=body.get("full_name", ""),
            username=body.get("username", ""),
            password=body.get("password", ""),
            role=role,
            monthly_salary=body.get("monthly_salary"),
        )
        return ok(container.user_service.to_view(user), "User created", 201)

    @app.route("/users/<int:user_id>", methods=["GET"], endpoint="get_user")
    @login_required
    def get_user(user_id: int):
        if current_role() != Role.ADMIN and user_id != current_user_id():
            raise AuthorizationError()
        user = container.user_service.get_user_by_id(user_id)
        return ok(container.user_service.to_view(user))

    @app.route("/me", methods=["GET"], endpoint="me")
    @login_required
    def me():
        user = container.user_service.get_user_by_id(current_user_id())
        return ok(container.user_service.to_view(user))
