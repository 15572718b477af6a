from __future__ import annotations

import calendar
import logging
from dataclasses import replace
from datetime import date, timedelta
from typing import Iterable, Optional

from ..core.exceptions import NotFoundError, ValidationError
from ..employees.repository import EmployeeRepository
from .calculator.base import PayrollCalculator
from .calculator.ghana_calculator import GhanaPayrollCalculator
from .model import OtherDeduction, Payslip

logger = logging.getLogger(__name__)


def pay_period_start(pay_date: date) -> date:
    """Day after the same date one month earlier (clamped to month end)."""
    year, month = (pay_date.year, pay_date.month - 1) if pay_date.month > 1 else (pay_date.year - 1, 12)
    day = min(pay_date.day, calendar.monthrange(year, month)[1])
    return date(year, month, day) + timedelta(days=1)


class PayslipService:
    def __init__(
        self,
        employees: Optional[EmployeeRepository] = None,
        *,
        calculator: Optional[PayrollCalculator] = None,
    ):
        self._employees = employees
        self._calculator = calculator or GhanaPayrollCalculator()

    def compute_payslip(
        self,
        *,
        employee_id: str,
        basic_salary,
        other_deductions: Iterable[OtherDeduction] = (),
    ) -> Payslip:
        return self._calculator.compute(
            employee_id=employee_id, basic_salary=basic_salary, other_deductions=other_deductions
        )

    def payslip_for_employee(
        self,
        *,
        employee_id: str,
        pay_date: date,
        other_deductions: Iterable[OtherDeduction] = (),
    ) -> Payslip:
        if self._employees is None:
            raise NotFoundError("Employee directory not configured")

        employee = self._employees.get_by_id(employee_id)
        if not employee:
            raise NotFoundError("Employee not found")

        profile = employee.payroll_profile
        if profile.basic_salary <= 0:
            raise ValidationError(
                "Employee salary not set. Please set a salary for this employee before generating payslip."
            )

        payslip = self.compute_payslip(
            employee_id=profile.employee_id,
            basic_salary=profile.basic_salary,
            other_deductions=other_deductions,
        )
        logger.info("Generated payslip for %s (%s)", employee_id, pay_date)
        return replace(
            payslip,
            payslip_id=f"{employee_id}_{pay_date.isoformat()}",
            pay_date=pay_date,
            pay_period_start=pay_period_start(pay_date),
            pay_period_end=pay_date,
        )
