from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional

from ..common.money import round_money, to_money


@dataclass(frozen=True)
class OtherDeduction:
    description: str
    amount: Decimal

    @classmethod
    def of(cls, description: str, amount) -> "OtherDeduction":
        # Payroll history stores deductions as negative amounts.
        return cls(description=(description or "").strip() or "Other Deduction", amount=to_money(amount, absolute=True))


@dataclass(frozen=True)
class SsnitContribution:
    applicable_salary: Decimal
    employee: Decimal
    employer: Decimal
    tier1: Decimal
    tier2: Decimal


@dataclass(frozen=True)
class BracketTax:
    width: Optional[Decimal]
    rate: Decimal
    taxed_amount: Decimal
    tax: Decimal


@dataclass(frozen=True)
class Payslip:
    """Immutable snapshot carrying every intermediate figure of the computation."""

    employee_id: str
    basic_salary: Decimal
    gross_pay: Decimal
    ssnit: SsnitContribution
    taxable_income: Decimal
    paye: Decimal
    paye_breakdown: tuple[BracketTax, ...]
    other_deductions: tuple[OtherDeduction, ...]
    total_deductions: Decimal
    net_pay: Decimal
    payslip_id: Optional[str] = None
    pay_date: Optional[date] = None
    pay_period_start: Optional[date] = None
    pay_period_end: Optional[date] = None

    @property
    def ssnit_employee(self) -> Decimal:
        return self.ssnit.employee

    @property
    def ssnit_employer(self) -> Decimal:
        return self.ssnit.employer

    def to_dict(self) -> dict:
        m = lambda v: float(round_money(v))  # noqa: E731
        return {
            "id": self.payslip_id,
            "employee_id": self.employee_id,
            "pay_date": self.pay_date.isoformat() if self.pay_date else None,
            "pay_period_start": self.pay_period_start.isoformat() if self.pay_period_start else None,
            "pay_period_end": self.pay_period_end.isoformat() if self.pay_period_end else None,
            "basic_salary": m(self.basic_salary),
            "gross_pay": m(self.gross_pay),
            "ssnit_employee": m(self.ssnit.employee),
            "ssnit_employer": m(self.ssnit.employer),
            "ssnit_tier1": m(self.ssnit.tier1),
            "ssnit_tier2": m(self.ssnit.tier2),
            "taxable_income": m(self.taxable_income),
            "paye": m(self.paye),
            "other_deductions": [{"description": d.description, "amount": m(d.amount)} for d in self.other_deductions],
            "total_deductions": m(self.total_deductions),
            "net_pay": m(self.net_pay),
        }
