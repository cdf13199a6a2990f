from __future__ import annotations

from flask import Flask, request

from ..common.datetime_utils import parse_iso_datetime, parse_optional_range
from ..common.web import current_role, current_user_id, json_body, login_required, ok, roles_required
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, ValidationError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.overtime_service

    @app.route("/overtimes", methods=["POST"], endpoint="submit_overtime")
    @roles_required(Role.EMPLOYEE)
    def submit_overtime():
        body = json_body()
        overtime_at = body.get("overtime_at")
        if not overtime_at:
            raise ValidationError("overtime_at is required")

        overtime = service.create_overtime(
            user_id=current_user_id(),
            description=body.get("description", ""),
            overtime_at=parse_iso_datetime(overtime_at),
            duration_millis=body.get("duration_millis"),
        )
        return ok(service.to_view(overtime), "Overtime submitted", 201)

    @app.route("/overtimes/<int:overtime_id>/approve", methods=["POST"], endpoint="approve_overtime")
    @roles_required(Role.ADMIN)
    def approve_overtime(overtime_id: int):
        overtime = service.approve_overtime(overtime_id, current_user_id())
        return ok(service.to_view(overtime), "Overtime approved")

    @app.route("/overtimes", methods=["GET"], endpoint="list_overtimes")
    @login_required
    def list_overtimes():
        if request.args.get("status") == "pending":
            if current_role() != Role.ADMIN:
                raise AuthorizationError()
            items = service.list_pending()
        else:
            start, end = parse_optional_range(request.args.get("start"), request.args.get("end"))
            items = service.list_by_user_in_range(current_user_id(), start, end)
        return ok([service.to_view(o) for o in items])
