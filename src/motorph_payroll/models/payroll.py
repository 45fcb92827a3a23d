"""Saved payroll results."""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import CheckConstraint, Date, ForeignKey, Integer, Numeric
from sqlalchemy.orm import Mapped, mapped_column, relationship

from motorph_payroll.models.base import Base, TimestampMixin

if TYPE_CHECKING:
    from motorph_payroll.models.employee import Employee


def _money() -> Mapped[Decimal]:
    return mapped_column(Numeric(14, 2), nullable=False, default=Decimal("0"))


class PayrollRecord(Base, TimestampMixin):
    """One saved payroll calculation for an employee and period."""

    __tablename__ = "payroll"

    payroll_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    employee_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("employee.employee_id", ondelete="CASCADE"),
        nullable=False,
    )
    period_start: Mapped[date] = mapped_column(Date, nullable=False)
    period_end: Mapped[date] = mapped_column(Date, nullable=False)

    monthly_rate: Mapped[Decimal] = _money()
    daily_rate: Mapped[Decimal] = _money()
    hourly_rate: Mapped[Decimal] = _money()
    days_worked: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    gross_earnings: Mapped[Decimal] = _money()

    overtime_hours: Mapped[Decimal] = mapped_column(
        Numeric(8, 2), nullable=False, default=Decimal("0")
    )
    overtime_pay: Mapped[Decimal] = _money()

    rice_subsidy: Mapped[Decimal] = _money()
    phone_allowance: Mapped[Decimal] = _money()
    clothing_allowance: Mapped[Decimal] = _money()

    late_deduction: Mapped[Decimal] = _money()
    undertime_deduction: Mapped[Decimal] = _money()
    unpaid_leave_days: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    unpaid_leave_deduction: Mapped[Decimal] = _money()

    sss: Mapped[Decimal] = _money()
    philhealth: Mapped[Decimal] = _money()
    pagibig: Mapped[Decimal] = _money()
    tax: Mapped[Decimal] = _money()

    gross_pay: Mapped[Decimal] = _money()
    total_deductions: Mapped[Decimal] = _money()
    net_pay: Mapped[Decimal] = _money()

    __table_args__ = (
        CheckConstraint("period_end >= period_start", name="payroll_period_check"),
    )

    employee: Mapped[Employee] = relationship(back_populates="payrolls")
