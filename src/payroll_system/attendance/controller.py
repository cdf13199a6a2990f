from __future__ import annotations

from flask import Flask, request

from ..common.datetime_utils import parse_optional_range
from ..common.web import current_user_id, login_required, ok, roles_required
from ..core.constants import DEFAULT_HISTORY_LIMIT
from ..core.enums import Role
from ..container import Container
from .model import AttendanceRecord


def _to_json(r: AttendanceRecord) -> dict:
    return {
        "id": r.attendance_id,
        "user_id": r.user_id,
        "type": r.type.value,
        "date": r.work_date.strftime("%Y-%m-%d"),
        "occurred_at": r.occurred_at.isoformat(),
    }


def register(app: Flask, container: Container) -> None:
    service = container.attendance_service

    @app.route("/attendances/checkin", methods=["POST"], endpoint="checkin")
    @roles_required(Role.EMPLOYEE)
    def checkin():
        record = service.check_in(current_user_id())
        return ok(_to_json(record), "Checked in", 201)

    @app.route("/attendances/checkout", methods=["POST"], endpoint="checkout")
    @roles_required(Role.EMPLOYEE)
    def checkout():
        record = service.check_out(current_user_id())
        return ok(_to_json(record), "Checked out", 201)

    @app.route("/attendances", methods=["GET"], endpoint="my_attendances")
    @login_required
    def my_attendances():
        # ?start=YYYY-MM-DD&end=YYYY-MM-DD, both optional
        start, end = parse_optional_range(request.args.get("start"), request.args.get("end"))
        records = service.list_by_user_in_range(current_user_id(), start, end)
        return ok([_to_json(r) for r in records])

    @app.route("/attendances/history", methods=["GET"], endpoint="attendance_history")
    @login_required
    def attendance_history():
        limit = request.args.get("limit", default=DEFAULT_HISTORY_LIMIT, type=int)
        return ok(service.get_history_ui(current_user_id(), limit=limit))
