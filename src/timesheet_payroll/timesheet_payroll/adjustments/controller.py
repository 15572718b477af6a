from __future__ import annotations

from flask import Flask, request

from ..common.datetime_utils import parse_iso_date, parse_iso_datetime
from ..common.http import (
    current_role,
    current_tenant_id,
    current_user_id,
    domain_errors,
    json_body,
    json_ok,
    requires,
)
from ..container import Container
from ..core.enums import RequestStatus
from ..core.exceptions import ValidationError


def _optional_datetime(value):
    return parse_iso_datetime(value) if value else None


def register(app: Flask, container: Container) -> None:
    def authority():
        return requires(container.adjustment_authority, "Adjustments")

    @app.route("/api/time-adjustments", methods=["GET"], endpoint="api_list_adjustments")
    @domain_errors
    def list_adjustments():
        if container.adjustment_authority is None:
            return json_ok([])

        status = None
        if request.args.get("status"):
            try:
                status = RequestStatus(request.args["status"].capitalize())
            except ValueError:
                raise ValidationError("Unknown status")

        rows = container.adjustment_authority.list_requests(
            tenant_id=current_tenant_id(),
            employee_id=request.args.get("userId") or None,
            status=status,
        )
        return json_ok([r.to_dict() for r in rows])

    @app.route("/api/time-adjustments", methods=["POST"], endpoint="api_create_adjustment")
    @domain_errors
    def create_adjustment():
        data = json_body()
        if not data.get("date"):
            raise ValidationError("Missing required fields")

        request_id = authority().create(
            current_role=current_role(),
            tenant_id=current_tenant_id() or "",
            employee_id=str(data.get("userId") or ""),
            work_date=parse_iso_date(data["date"]),
            original_clock_in=_optional_datetime(data.get("originalClockIn")),
            original_clock_out=_optional_datetime(data.get("originalClockOut")),
            requested_clock_in=_optional_datetime(data.get("requestedClockIn")),
            requested_clock_out=_optional_datetime(data.get("requestedClockOut")),
            reason=str(data.get("reason") or ""),
        )
        return json_ok({"id": request_id}, 201)

    @app.route("/api/time-adjustments/<int:request_id>/approve", methods=["POST"], endpoint="api_approve_adjustment")
    @domain_errors
    def approve_adjustment(request_id: int):
        req = authority().approve(current_role=current_role(), approver_id=current_user_id(), request_id=request_id)
        return json_ok(req.to_dict())

    @app.route("/api/time-adjustments/<int:request_id>/reject", methods=["POST"], endpoint="api_reject_adjustment")
    @domain_errors
    def reject_adjustment(request_id: int):
        req = authority().reject(current_role=current_role(), approver_id=current_user_id(), request_id=request_id)
        return json_ok(req.to_dict())

    @app.route("/api/time-adjustments/<int:request_id>", methods=["DELETE"], endpoint="api_cancel_adjustment")
    @domain_errors
    def cancel_adjustment(request_id: int):
        authority().cancel(employee_id=current_user_id(), request_id=request_id)
        return json_ok({"id": request_id})
