"""Type definitions for the payroll calculation pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, time
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

ZERO = Decimal("0")
CENTS = Decimal("0.01")


def round_to_cents(amount: Decimal) -> Decimal:
    """Round amount to 2 decimal places (centavos), half up."""
    return amount.quantize(CENTS, rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class PayrollRules:
    """Company time and pay rules applied by the calculator."""

    standard_working_days_per_month: int = 22
    standard_working_hours_per_day: int = 8
    overtime_rate_multiplier: Decimal = Decimal("1.25")
    standard_login_time: time = time(8, 0)
    late_threshold_time: time = time(8, 15)
    standard_logout_time: time = time(17, 0)


@dataclass(frozen=True)
class ContributionBracket:
    """Fixed contribution owed up to a monthly salary ceiling."""

    ceiling: Decimal
    amount: Decimal


@dataclass(frozen=True)
class TaxBracket:
    """Annual tax bracket: ``base_tax`` plus ``rate`` of the excess over ``floor``."""

    floor: Decimal
    ceiling: Decimal | None  # None = no upper limit
    base_tax: Decimal
    rate: Decimal


@dataclass
class PayrollWorksheet:
    """Mutable working state for a single employee's calculation."""

    employee_id: int
    period_start: date
    period_end: date
    monthly_rate: Decimal
    daily_rate: Decimal
    hourly_rate: Decimal

    days_worked: int = 0
    gross_earnings: Decimal = ZERO
    overtime_hours: Decimal = ZERO
    overtime_pay: Decimal = ZERO
    rice_subsidy: Decimal = ZERO
    phone_allowance: Decimal = ZERO
    clothing_allowance: Decimal = ZERO
    late_deduction: Decimal = ZERO
    undertime_deduction: Decimal = ZERO
    unpaid_leave_days: int = 0
    unpaid_leave_deduction: Decimal = ZERO
    sss: Decimal = ZERO
    philhealth: Decimal = ZERO
    pagibig: Decimal = ZERO
    tax: Decimal = ZERO
    warnings: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class Payroll:
    """Result of calculating one employee's pay for a period."""

    employee_id: int
    period_start: date
    period_end: date
    monthly_rate: Decimal
    daily_rate: Decimal
    hourly_rate: Decimal
    days_worked: int
    gross_earnings: Decimal
    overtime_hours: Decimal
    overtime_pay: Decimal
    rice_subsidy: Decimal
    phone_allowance: Decimal
    clothing_allowance: Decimal
    late_deduction: Decimal
    undertime_deduction: Decimal
    unpaid_leave_days: int
    unpaid_leave_deduction: Decimal
    sss: Decimal
    philhealth: Decimal
    pagibig: Decimal
    tax: Decimal
    gross_pay: Decimal
    total_deductions: Decimal
    net_pay: Decimal
    warnings: tuple[str, ...] = ()

    @property
    def total_allowances(self) -> Decimal:
        return self.rice_subsidy + self.phone_allowance + self.clothing_allowance

    @property
    def government_contributions(self) -> Decimal:
        return self.sss + self.philhealth + self.pagibig

    @property
    def time_deductions(self) -> Decimal:
        return self.late_deduction + self.undertime_deduction + self.unpaid_leave_deduction

    @classmethod
    def from_worksheet(cls, ws: PayrollWorksheet) -> Payroll:
        """Total up a worksheet into a finished payroll."""
        gross_pay = (
            ws.gross_earnings
            + ws.overtime_pay
            + ws.rice_subsidy
            + ws.phone_allowance
            + ws.clothing_allowance
        )
        total_deductions = (
            ws.sss
            + ws.philhealth
            + ws.pagibig
            + ws.tax
            + ws.late_deduction
            + ws.undertime_deduction
            + ws.unpaid_leave_deduction
        )
        return cls(
            employee_id=ws.employee_id,
            period_start=ws.period_start,
            period_end=ws.period_end,
            monthly_rate=ws.monthly_rate,
            daily_rate=round_to_cents(ws.daily_rate),
            hourly_rate=round_to_cents(ws.hourly_rate),
            days_worked=ws.days_worked,
            gross_earnings=ws.gross_earnings,
            overtime_hours=ws.overtime_hours,
            overtime_pay=ws.overtime_pay,
            rice_subsidy=ws.rice_subsidy,
            phone_allowance=ws.phone_allowance,
            clothing_allowance=ws.clothing_allowance,
            late_deduction=ws.late_deduction,
            undertime_deduction=ws.undertime_deduction,
            unpaid_leave_days=ws.unpaid_leave_days,
            unpaid_leave_deduction=ws.unpaid_leave_deduction,
            sss=ws.sss,
            philhealth=ws.philhealth,
            pagibig=ws.pagibig,
            tax=ws.tax,
            gross_pay=gross_pay,
            total_deductions=total_deductions,
            net_pay=gross_pay - total_deductions,
            warnings=tuple(ws.warnings),
        )

    def to_dict(self) -> dict[str, Any]:
        """Return a plain dict with amounts as strings."""
        data: dict[str, Any] = {}
        for name in self.__dataclass_fields__:
            value = getattr(self, name)
            if isinstance(value, Decimal):
                value = str(value)
            elif isinstance(value, date):
                value = value.isoformat()
            elif isinstance(value, tuple):
                value = list(value)
            data[name] = value
        return data
