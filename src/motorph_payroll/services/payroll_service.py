"""Payroll service: wires repositories into the calculator and stores results."""

from __future__ import annotations

import calendar
import logging
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Callable

from sqlalchemy.ext.asyncio import AsyncSession

from motorph_payroll.calculators import (
    Payroll,
    PayrollCalculationError,
    PayrollCalculator,
    PayrollRules,
    UnavailableSource,
)
from motorph_payroll.calculators.sources import LeaveSource, OvertimeSource
from motorph_payroll.repositories import (
    AttendanceRepository,
    EmployeeRepository,
    LeaveRepository,
    OvertimeRepository,
    PayrollRepository,
)

logger = logging.getLogger(__name__)


def month_period(month: date, today: date) -> tuple[date, date]:
    """First and last day of ``month``'s calendar month, end clipped to today."""
    start = month.replace(day=1)
    end = month.replace(day=calendar.monthrange(month.year, month.month)[1])
    if start <= today < end:
        end = today
    return start, end


@dataclass
class BatchResult:
    """Result of calculating payroll for many employees."""

    period_start: date
    period_end: date
    payrolls: list[Payroll] = field(default_factory=list)
    errors: dict[int, str] = field(default_factory=dict)  # employee_id -> message

    @property
    def total_gross(self) -> Decimal:
        return sum((p.gross_pay for p in self.payrolls), Decimal("0"))

    @property
    def total_net(self) -> Decimal:
        return sum((p.net_pay for p in self.payrolls), Decimal("0"))

    @property
    def error_count(self) -> int:
        return len(self.errors)


class PayrollService:
    """Calculates, previews and saves payroll within one database session."""

    def __init__(
        self,
        session: AsyncSession,
        rules: PayrollRules | None = None,
        today: Callable[[], date] = date.today,
        overtime_enabled: bool = True,
        leave_enabled: bool = True,
    ):
        self.session = session
        self.today = today
        self.employees = EmployeeRepository(session)
        self.payrolls = PayrollRepository(session)

        overtime: OvertimeSource = (
            OvertimeRepository(session)
            if overtime_enabled
            else UnavailableSource("overtime records", "disabled by configuration")
        )
        leaves: LeaveSource = (
            LeaveRepository(session)
            if leave_enabled
            else UnavailableSource("leave records", "disabled by configuration")
        )
        self.calculator = PayrollCalculator(
            employees=self.employees,
            attendance=AttendanceRepository(session, today=today),
            overtime=overtime,
            leaves=leaves,
            rules=rules,
            today=today,
        )

    async def preview(
        self, employee_id: int, period_start: date, period_end: date
    ) -> Payroll:
        """Calculate without saving."""
        return await self.calculator.calculate_payroll(employee_id, period_start, period_end)

    async def calculate_and_save(
        self, employee_id: int, period_start: date, period_end: date
    ) -> tuple[int, Payroll]:
        """Calculate and store; returns the new payroll id and the payroll."""
        payroll = await self.calculator.calculate_payroll(employee_id, period_start, period_end)
        record = await self.payrolls.save(payroll)
        return record.payroll_id, payroll

    async def calculate_month(self, month: date) -> BatchResult:
        """Calculate every employee's payroll for the month containing ``month``.

        Employees whose calculation fails are logged and reported in
        ``errors``; they do not stop the batch.
        """
        period_start, period_end = month_period(month, self.today())
        batch = BatchResult(period_start=period_start, period_end=period_end)

        for employee in await self.employees.list_employees():
            try:
                payroll = await self.calculator.calculate_payroll(
                    employee.employee_id, period_start, period_end
                )
            except PayrollCalculationError as e:
                logger.warning(
                    "Skipping employee %s in %s payroll: %s",
                    employee.employee_id,
                    period_start.strftime("%B %Y"),
                    e,
                )
                batch.errors[employee.employee_id] = str(e)
                continue
            batch.payrolls.append(payroll)

        logger.info(
            "Monthly payroll %s to %s: %d calculated, %d failed",
            period_start,
            period_end,
            len(batch.payrolls),
            batch.error_count,
        )
        return batch
