from __future__ import annotations

from flask import Flask, request

from ..common.datetime_utils import now_local, parse_iso_date
from ..common.http import domain_errors, json_body, json_ok
from ..container import Container
from .model import OtherDeduction


def _deductions(raw) -> list[OtherDeduction]:
    return [OtherDeduction.of(d.get("description", ""), d.get("amount")) for d in (raw or []) if isinstance(d, dict)]


def register(app: Flask, container: Container) -> None:
    @app.route("/api/payslips/compute", methods=["POST"], endpoint="api_compute_payslip")
    @domain_errors
    def compute_payslip():
        data = json_body()
        payslip = container.payslip_service.compute_payslip(
            employee_id=str(data.get("employee_id") or ""),
            basic_salary=data.get("basic_salary"),
            other_deductions=_deductions(data.get("other_deductions")),
        )
        return json_ok(payslip.to_dict())

    @app.route("/api/payslips/<employee_id>", methods=["GET"], endpoint="api_employee_payslip")
    @domain_errors
    def employee_payslip(employee_id: str):
        pay_date = (
            parse_iso_date(request.args["pay_date"])
            if request.args.get("pay_date")
            else now_local(container.tz).date()
        )
        payslip = container.payslip_service.payslip_for_employee(employee_id=employee_id, pay_date=pay_date)
        return json_ok(payslip.to_dict())
