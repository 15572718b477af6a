from __future__ import annotations

import logging
import uuid
from decimal import Decimal, InvalidOperation
from typing import Optional

from ..common.money import to_money
from ..common.validators import require_email, require_non_empty, require_phone, require_uuid
from ..core.enums import Role
from ..core.exceptions import NotFoundError, ValidationError
from .model import Employee
from .repository import EmployeeRepository

logger = logging.getLogger(__name__)


class EmployeeService:
    def __init__(self, employees: EmployeeRepository):
        self._employees = employees

    def register(
        self,
        *,
        tenant_id: Optional[str],
        name: str,
        email: str,
        role: Role = Role.EMPLOYEE,
        phone: str = "",
        basic_salary=0,
        employee_id: Optional[str] = None,
    ) -> Employee:
        employee = Employee(
            employee_id=require_uuid(employee_id, "Employee id") if employee_id else str(uuid.uuid4()),
            tenant_id=require_uuid(tenant_id, "Tenant id") if tenant_id else None,
            name=require_non_empty(name, "Name"),
            email=require_email(email),
            phone=require_phone(phone) if (phone or "").strip() else None,
            role=role,
            basic_salary=self._parse_salary(basic_salary),
        )
        self._employees.create(employee)
        logger.info("Registered employee %s (%s)", employee.employee_id, employee.role.value)
        return employee

    def set_basic_salary(self, *, employee_id: str, basic_salary) -> Decimal:
        salary = self._parse_salary(basic_salary)
        if not self._employees.set_basic_salary(require_uuid(employee_id, "Employee id"), salary):
            raise NotFoundError("Employee not found")
        return salary

    @staticmethod
    def _parse_salary(value) -> Decimal:
        # Reject explicit negatives here; payroll itself only coerces.
        try:
            if value not in (None, "") and Decimal(str(value)) < 0:
                raise ValidationError("Basic salary cannot be negative")
        except InvalidOperation:
            raise ValidationError("Basic salary must be a number")
        return to_money(value)
