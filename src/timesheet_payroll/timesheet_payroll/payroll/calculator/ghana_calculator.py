from __future__ import annotations

from decimal import Decimal
from typing import Iterable, Optional, Sequence

from ...common.money import ZERO, to_money
from ...core.constants import (
    PAYE_BRACKETS,
    SSNIT_EMPLOYEE_RATE,
    SSNIT_EMPLOYER_RATE,
    SSNIT_SALARY_CAP,
    SSNIT_TIER1_RATE,
    SSNIT_TIER2_RATE,
)
from ..model import BracketTax, OtherDeduction, Payslip, SsnitContribution
from .base import PayrollCalculator

Bracket = tuple[Optional[Decimal], Decimal]


def ssnit_contribution(basic_salary: Decimal, *, cap: Decimal = SSNIT_SALARY_CAP) -> SsnitContribution:
    applicable = min(basic_salary, cap)
    return SsnitContribution(
        applicable_salary=applicable,
        employee=applicable * SSNIT_EMPLOYEE_RATE,
        employer=applicable * SSNIT_EMPLOYER_RATE,
        tier1=applicable * SSNIT_TIER1_RATE,
        tier2=applicable * SSNIT_TIER2_RATE,
    )


def paye_breakdown(taxable_income: Decimal, brackets: Sequence[Bracket] = PAYE_BRACKETS) -> tuple[BracketTax, ...]:
    """Walk the bands in order; each taxes at most its own width."""
    remaining = taxable_income
    out = []
    for width, rate in brackets:
        if remaining <= 0:
            break
        portion = remaining if width is None else min(remaining, width)
        out.append(BracketTax(width=width, rate=rate, taxed_amount=portion, tax=portion * rate))
        remaining -= portion
    return tuple(out)


def paye(taxable_income: Decimal, brackets: Sequence[Bracket] = PAYE_BRACKETS) -> Decimal:
    return sum((b.tax for b in paye_breakdown(taxable_income, brackets)), ZERO)


class GhanaPayrollCalculator(PayrollCalculator):
    """SSNIT (capped) + progressive PAYE on salary net of employee SSNIT."""

    def __init__(self, *, brackets: Sequence[Bracket] = PAYE_BRACKETS, ssnit_cap: Decimal = SSNIT_SALARY_CAP):
        self._brackets = tuple(brackets)
        self._cap = ssnit_cap

    def compute(self, *, employee_id: str, basic_salary, other_deductions: Iterable[OtherDeduction] = ()) -> Payslip:
        salary = to_money(basic_salary)
        others = tuple(OtherDeduction.of(d.description, d.amount) for d in other_deductions)

        ssnit = ssnit_contribution(salary, cap=self._cap)
        taxable = max(ZERO, salary - ssnit.employee)
        breakdown = paye_breakdown(taxable, self._brackets)
        tax = sum((b.tax for b in breakdown), ZERO)

        total = ssnit.employee + tax + sum((d.amount for d in others), ZERO)
        return Payslip(
            employee_id=employee_id,
            basic_salary=salary,
            gross_pay=salary,
            ssnit=ssnit,
            taxable_income=taxable,
            paye=tax,
            paye_breakdown=breakdown,
            other_deductions=others,
            total_deductions=total,
            net_pay=max(ZERO, salary - total),
        )
