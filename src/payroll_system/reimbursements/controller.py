from __future__ import annotations

from flask import Flask, request

from ..common.datetime_utils import parse_optional_range
from ..common.web import current_role, current_user_id, json_body, login_required, ok, roles_required
from ..core.enums import Role
from ..core.exceptions import AuthorizationError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.reimbursement_service

    @app.route("/reimbursements", methods=["POST"], endpoint="submit_reimbursement")
    @roles_required(Role.EMPLOYEE)
    def submit_reimbursement():
        body = json_body()
        reimbursement = service.create_reimbursement(
            user_id=current_user_id(),
            description=body.get("description", ""),
            amount=body.get("amount"),
        )
        return ok(service.to_view(reimbursement), "Reimbursement submitted", 201)

    @app.route("/reimbursements/<int:reimbursement_id>/approve", methods=["POST"], endpoint="approve_reimbursement")
    @roles_required(Role.ADMIN)
    def approve_reimbursement(reimbursement_id: int):
        reimbursement = service.approve_reimbursement(reimbursement_id, current_user_id())
        return ok(service.to_view(reimbursement), "Reimbursement approved")

    @app.route("/reimbursements", methods=["GET"], endpoint="list_reimbursements")
    @login_required
    def list_reimbursements():
        if request.args.get("status") == "pending":
            if current_role() != Role.ADMIN:
                raise AuthorizationError()
            items = service.list_pending()
        else:
            start, end = parse_optional_range(request.args.get("start"), request.args.get("end"))
            items = service.list_by_user_in_range(current_user_id(), start, end)
        return ok([service.to_view(r) for r in items])
