from __future__ import annotations

from decimal import Decimal

import pytest

from src.timesheet_payroll.timesheet_payroll.payroll.calculator.ghana_calculator import (
    GhanaPayrollCalculator,
    paye,
    paye_breakdown,
    ssnit_contribution,
)
from src.timesheet_payroll.timesheet_payroll.payroll.model import OtherDeduction

EMP = "11111111-1111-1111-1111-111111111111"


def test_salary_1000_breakdown():
    slip = GhanaPayrollCalculator().compute(employee_id=EMP, basic_salary=1000)

    assert slip.ssnit_employee == Decimal("55.000")
    assert slip.ssnit_employer == Decimal("130.00")
    assert slip.ssnit.tier1 == Decimal("135.000")
    assert slip.ssnit.tier2 == Decimal("50.00")
    assert slip.taxable_income == Decimal("945")
    assert slip.paye == Decimal("56.125")
    assert slip.total_deductions == Decimal("111.125")
    assert slip.net_pay == Decimal("888.875")
    assert slip.gross_pay == Decimal("1000")


def test_to_dict_rounds_to_cents():
    data = GhanaPayrollCalculator().compute(employee_id=EMP, basic_salary="1000").to_dict()

    assert data["paye"] == 56.13
    assert data["net_pay"] == 888.88
    assert data["ssnit_employee"] == 55.0


def test_ssnit_is_capped():
    ssnit = ssnit_contribution(Decimal("70000"))

    assert ssnit.applicable_salary == Decimal("61000")
    assert ssnit.employee == Decimal("3355")


def test_paye_band_walk():
    bands = paye_breakdown(Decimal("945"))

    assert [b.taxed_amount for b in bands] == [Decimal("490"), Decimal("110"), Decimal("130"), Decimal("215")]
    assert [b.tax for b in bands] == [Decimal("0"), Decimal("5.50"), Decimal("13.00"), Decimal("37.625")]


@pytest.mark.parametrize("taxable", ["0", "100", "490"])
def test_paye_is_zero_in_first_band(taxable):
    assert paye(Decimal(taxable)) == 0


def test_paye_top_band_is_unbounded():
    # Bounded widths sum to 50416.67; everything above is taxed at 35%.
    assert paye(Decimal("60416.67")) - paye(Decimal("50416.67")) == Decimal("3500.00")


def test_paye_is_monotonic():
    values = [paye(Decimal(x)) for x in range(0, 60000, 250)]
    assert values == sorted(values)


@pytest.mark.parametrize("bad", [None, "abc", float("nan"), "NaN", "-100", -5, float("inf")])
def test_malformed_salary_becomes_zero(bad):
    slip = GhanaPayrollCalculator().compute(employee_id=EMP, basic_salary=bad)

    assert slip.basic_salary == 0
    assert slip.paye == 0
    assert slip.net_pay == 0


def test_other_deductions_are_subtracted_as_absolute_values():
    slip = GhanaPayrollCalculator().compute(
        employee_id=EMP,
        basic_salary=1000,
        other_deductions=[OtherDeduction.of("Loan", -100), OtherDeduction.of("", "nan")],
    )

    assert [d.amount for d in slip.other_deductions] == [Decimal("100"), Decimal("0")]
    assert slip.other_deductions[1].description == "Other Deduction"
    assert slip.net_pay == Decimal("788.875")


def test_net_pay_never_negative():
    slip = GhanaPayrollCalculator().compute(
        employee_id=EMP, basic_salary=100, other_deductions=[OtherDeduction.of("Advance", 500)]
    )

    assert slip.net_pay == 0
