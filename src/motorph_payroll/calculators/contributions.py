"""Government-mandated contributions and withholding tax.

All amounts are computed from the employee's monthly basic salary, not
from what was earned in the pay period. Results are rounded to centavos.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from motorph_payroll.calculators.types import (
    ZERO,
    ContributionBracket,
    TaxBracket,
    round_to_cents,
)

SSS_BRACKETS: tuple[ContributionBracket, ...] = tuple(
    ContributionBracket(Decimal(ceiling), Decimal(amount))
    for ceiling, amount in (
        ("4000", "180.00"),
        ("4750", "202.50"),
        ("5500", "225.00"),
        ("6250", "247.50"),
        ("7000", "270.00"),
        ("7750", "292.50"),
        ("8500", "315.00"),
        ("9250", "337.50"),
        ("10000", "360.00"),
        ("15000", "540.00"),
        ("20000", "720.00"),
        ("25000", "900.00"),
    )
)
SSS_MAXIMUM = Decimal("1125.00")

PHILHEALTH_RATE = Decimal("0.05")
PHILHEALTH_MINIMUM = Decimal("500.00")
PHILHEALTH_MAXIMUM = Decimal("5000.00")

PAGIBIG_LOW_INCOME_CEILING = Decimal("1500")
PAGIBIG_LOW_RATE = Decimal("0.01")
PAGIBIG_RATE = Decimal("0.02")
PAGIBIG_MAXIMUM = Decimal("200.00")

INCOME_TAX_BRACKETS: tuple[TaxBracket, ...] = (
    TaxBracket(Decimal("0"), Decimal("250000"), Decimal("0"), Decimal("0")),
    TaxBracket(Decimal("250000"), Decimal("400000"), Decimal("0"), Decimal("0.15")),
    TaxBracket(Decimal("400000"), Decimal("800000"), Decimal("22500"), Decimal("0.20")),
    TaxBracket(Decimal("800000"), Decimal("2000000"), Decimal("102500"), Decimal("0.25")),
    TaxBracket(Decimal("2000000"), Decimal("8000000"), Decimal("402500"), Decimal("0.30")),
    TaxBracket(Decimal("8000000"), None, Decimal("2202500"), Decimal("0.35")),
)


def sss_contribution(monthly_salary: Decimal) -> Decimal:
    """Employee SSS share from the bracket table."""
    for bracket in SSS_BRACKETS:
        if monthly_salary <= bracket.ceiling:
            return bracket.amount
    return SSS_MAXIMUM


def philhealth_contribution(monthly_salary: Decimal) -> Decimal:
    """Employee PhilHealth share: half of 5% of salary, clamped to [500, 5000]."""
    share = monthly_salary * PHILHEALTH_RATE / 2
    share = max(PHILHEALTH_MINIMUM, min(share, PHILHEALTH_MAXIMUM))
    return round_to_cents(share)


def pagibig_contribution(monthly_salary: Decimal) -> Decimal:
    """Employee Pag-IBIG share: 1% up to 1500, otherwise 2% capped at 200."""
    if monthly_salary <= PAGIBIG_LOW_INCOME_CEILING:
        return round_to_cents(monthly_salary * PAGIBIG_LOW_RATE)
    return round_to_cents(min(monthly_salary * PAGIBIG_RATE, PAGIBIG_MAXIMUM))


def annual_income_tax(annual_salary: Decimal) -> Decimal:
    """Progressive tax on annual salary (unrounded)."""
    if annual_salary <= 0:
        return ZERO
    for bracket in INCOME_TAX_BRACKETS:
        if bracket.ceiling is None or annual_salary <= bracket.ceiling:
            return bracket.base_tax + (annual_salary - bracket.floor) * bracket.rate
    raise AssertionError("income tax brackets must end with an open bracket")


def monthly_income_tax(monthly_salary: Decimal) -> Decimal:
    """Monthly withholding: annual tax on ``monthly_salary * 12``, over 12."""
    return round_to_cents(annual_income_tax(monthly_salary * 12) / 12)


@dataclass(frozen=True)
class GovernmentContributions:
    """Monthly statutory deductions for a salary."""

    sss: Decimal
    philhealth: Decimal
    pagibig: Decimal
    tax: Decimal

    @property
    def total(self) -> Decimal:
        return self.sss + self.philhealth + self.pagibig + self.tax

    @classmethod
    def for_salary(cls, monthly_salary: Decimal) -> GovernmentContributions:
        return cls(
            sss=sss_contribution(monthly_salary),
            philhealth=philhealth_contribution(monthly_salary),
            pagibig=pagibig_contribution(monthly_salary),
            tax=monthly_income_tax(monthly_salary),
        )
