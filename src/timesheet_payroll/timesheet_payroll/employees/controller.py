from __future__ import annotations

from flask import Flask

from ..common.http import current_role, current_tenant_id, domain_errors, json_body, json_ok, requires
from ..container import Container
from ..core.enums import APPROVER_ROLES, Role
from ..core.exceptions import AuthorizationError, ValidationError


def register(app: Flask, container: Container) -> None:
    def admin_only() -> None:
        if current_role() not in APPROVER_ROLES - {Role.MANAGER}:
            raise AuthorizationError("You are not allowed to manage employees")

    @app.route("/api/employees", methods=["POST"], endpoint="api_register_employee")
    @domain_errors
    def register_employee():
        admin_only()
        data = json_body()
        try:
            role = Role(str(data.get("role") or Role.EMPLOYEE.value).lower())
        except ValueError:
            raise ValidationError("Unknown role")

        employee = requires(container.employee_service, "Employees").register(
            tenant_id=current_tenant_id(),
            name=str(data.get("name") or ""),
            email=str(data.get("email") or ""),
            phone=str(data.get("phone") or ""),
            role=role,
            basic_salary=data.get("basic_salary"),
        )
        return json_ok({"employee_id": employee.employee_id}, 201)

    @app.route("/api/employees/<employee_id>/salary", methods=["PUT"], endpoint="api_set_salary")
    @domain_errors
    def set_salary(employee_id: str):
        admin_only()
        salary = requires(container.employee_service, "Employees").set_basic_salary(
            employee_id=employee_id, basic_salary=json_body().get("basic_salary")
        )
        return json_ok({"employee_id": employee_id, "basic_salary": float(salary)})
