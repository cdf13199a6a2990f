from __future__ import annotations

from flask import Flask

from ..common.datetime_utils import parse_iso_datetime, parse_period_end
from ..common.web import current_role, current_user_id, json_body, login_required, ok, roles_required
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, ValidationError
from ..container import Container


def _required(body: dict, key: str) -> str:
    value = body.get(key)
    if not value or not isinstance(value, str):
        raise ValidationError(f"{key} is required")
    return value


def register(app: Flask, container: Container) -> None:
    service = container.payroll_service

    @app.route("/payrolls", methods=["POST"], endpoint="create_payroll")
    @roles_required(Role.ADMIN)
    def create_payroll():
        body = json_body()
        payroll = service.create_payroll(
            name=body.get("name", ""),
            started_at=parse_iso_datetime(_required(body, "started_at")),
            ended_at=parse_period_end(_required(body, "ended_at")),
            created_by=current_user_id(),
        )
        return ok(service.payroll_to_view(payroll), "Payroll created", 201)

    @app.route("/payrolls", methods=["GET"], endpoint="list_payrolls")
    @roles_required(Role.ADMIN)
    def list_payrolls():
        return ok([service.payroll_to_view(p) for p in service.list_payrolls()])

    @app.route("/payrolls/<int:payroll_id>", methods=["GET"], endpoint="get_payroll")
    @login_required
    def get_payroll(payroll_id: int):
        return ok(service.payroll_to_view(service.get_payroll(payroll_id)))

    @app.route("/payrolls/<int:payroll_id>/roll", methods=["POST"], endpoint="roll_payroll")
    @roles_required(Role.ADMIN)
    def roll_payroll(payroll_id: int):
        payroll = service.roll_payroll(payroll_id, current_user_id())
        return ok(service.payroll_to_view(payroll), "Payroll rolled")

    @app.route("/payrolls/<int:payroll_id>/payslips", methods=["GET"], endpoint="list_payslips")
    @roles_required(Role.ADMIN)
    def list_payslips(payroll_id: int):
        summaries = service.get_payslip_summaries(payroll_id)
        return ok(
            {
                "payslips": [
                    {
                        "payroll_id": s.payroll_id,
                        "user_id": s.user_id,
                        "full_name": s.full_name,
                        "take_home_pay": s.take_home_pay,
                    }
                    for s in summaries
                ],
                "total_take_home_pay": sum(s.take_home_pay for s in summaries),
            }
        )

    @app.route("/payrolls/<int:payroll_id>/payslips/<int:user_id>", methods=["GET"], endpoint="get_payslip")
    @login_required
    def get_payslip(payroll_id: int, user_id: int):
        if current_role() != Role.ADMIN and user_id != current_user_id():
            raise AuthorizationError()
        payslip = service.generate_payslip(payroll_id, user_id)
        return ok(service.payslip_to_view(payslip))
