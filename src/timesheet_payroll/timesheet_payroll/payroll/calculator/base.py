from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Iterable

from ..model import OtherDeduction, Payslip


class PayrollCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll)."""

    @abstractmethod
    def compute(self, *, employee_id: str, basic_salary, other_deductions: Iterable[OtherDeduction] = ()) -> Payslip:
        raise NotImplementedError
