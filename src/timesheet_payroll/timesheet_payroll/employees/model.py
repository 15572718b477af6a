from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class Employee:
    employee_id: str
    tenant_id: Optional[str]
    name: str
    email: str
    role: Role
    phone: Optional[str] = None
    is_active: bool = True
    basic_salary: Decimal = Decimal("0")

    @property
    def payroll_profile(self) -> "PayrollProfile":
        return PayrollProfile(employee_id=self.employee_id, basic_salary=self.basic_salary)


@dataclass(frozen=True)
class PayrollProfile:
    """Minimal input to tax computation."""

    employee_id: str
    basic_salary: Decimal
