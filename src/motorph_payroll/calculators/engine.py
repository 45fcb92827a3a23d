"""Payroll calculation engine - main orchestrator."""

from __future__ import annotations

import dataclasses
import logging
from datetime import date
from decimal import Decimal
from typing import TYPE_CHECKING, Callable, Sequence

from motorph_payroll.calculators.contributions import GovernmentContributions
from motorph_payroll.calculators.sources import (
    AttendanceSource,
    EmployeeSource,
    LeaveSource,
    OvertimeSource,
)
from motorph_payroll.calculators.types import (
    ZERO,
    Payroll,
    PayrollRules,
    PayrollWorksheet,
    round_to_cents,
)
from motorph_payroll.models.timekeeping import minutes_between

if TYPE_CHECKING:
    from motorph_payroll.models import Attendance, Employee

logger = logging.getLogger(__name__)

MINUTES_PER_HOUR = Decimal(60)


class PayrollCalculationError(Exception):
    """Raised when a payroll cannot be calculated."""

    def __init__(self, message: str, cause: BaseException | None = None):
        self.cause = cause
        super().__init__(message)


class PayrollValidationError(PayrollCalculationError):
    """Raised when the calculation request itself is invalid."""


class EmployeeLookupError(PayrollCalculationError):
    """Raised when the employee is missing or has unusable pay data."""

    def __init__(self, employee_id: int, message: str, cause: BaseException | None = None):
        self.employee_id = employee_id
        super().__init__(message, cause)


class PayrollCalculator:
    """Calculates one employee's pay for a date range.

    Calculation pipeline (stable order):
    1) Validate the request
    2) Load employee, derive daily and hourly rates
    3) Basic pay from attendance (required)
    4) Overtime pay from approved overtime (optional, degrades to zero)
    5) Allowances copied from the employee record (degrade to zero)
    6) Late, undertime and unpaid-leave deductions (leave is optional)
    7) SSS, PhilHealth, Pag-IBIG and withholding tax from monthly salary
    8) Totals and sanity checks
    """

    def __init__(
        self,
        employees: EmployeeSource,
        attendance: AttendanceSource,
        overtime: OvertimeSource,
        leaves: LeaveSource,
        rules: PayrollRules | None = None,
        today: Callable[[], date] = date.today,
    ):
        self.employees = employees
        self.attendance = attendance
        self.overtime = overtime
        self.leaves = leaves
        self.rules = rules or PayrollRules()
        self.today = today

    async def calculate_payroll(
        self,
        employee_id: int,
        period_start: date | None,
        period_end: date | None,
    ) -> Payroll:
        """Calculate payroll for an employee over ``[period_start, period_end]``.

        Raises:
            PayrollValidationError: bad employee id or period
            EmployeeLookupError: employee missing or without a valid salary
            PayrollCalculationError: any other failure, with the cause attached
        """
        try:
            self._validate_inputs(employee_id, period_start, period_end)
            employee = await self._get_employee(employee_id)
            ws = self._create_worksheet(employee, period_start, period_end)

            attendance = await self._calculate_attendance_earnings(ws)
            await self._calculate_overtime_pay(ws)
            self._calculate_allowances(ws, employee)
            self._calculate_time_deductions(ws, attendance)
            await self._calculate_unpaid_leave(ws)
            self._calculate_contributions(ws)

            payroll = self._finalize(ws)
            self._log_summary(payroll, employee)
            return payroll

        except PayrollCalculationError:
            raise
        except Exception as e:
            logger.exception("Unexpected error calculating payroll for employee %s", employee_id)
            raise PayrollCalculationError(
                f"Unexpected error during payroll calculation: {e}", cause=e
            ) from e

    def _validate_inputs(
        self,
        employee_id: int,
        period_start: date | None,
        period_end: date | None,
    ) -> None:
        if employee_id is None or employee_id <= 0:
            raise PayrollValidationError(
                f"Invalid employee ID: {employee_id}. Employee ID must be positive."
            )
        if period_start is None or period_end is None:
            raise PayrollValidationError(
                "Period dates cannot be empty. Please provide valid start and end dates."
            )
        if period_end < period_start:
            raise PayrollValidationError(
                f"Invalid date range: period end ({period_end}) "
                f"cannot be before period start ({period_start})"
            )
        if period_start > self.today():
            raise PayrollValidationError(
                f"Cannot calculate payroll for future periods. Period start: {period_start}"
            )

    async def _get_employee(self, employee_id: int) -> Employee:
        try:
            employee = await self.employees.get_employee(employee_id)
        except Exception as e:
            raise EmployeeLookupError(
                employee_id,
                f"Error retrieving employee data for ID {employee_id}: {e}",
                cause=e,
            ) from e

        if employee is None:
            raise EmployeeLookupError(
                employee_id,
                f"Employee not found with ID: {employee_id}",
            )
        salary = employee.basic_salary
        if salary is None or salary <= 0:
            raise EmployeeLookupError(
                employee_id,
                f"Employee {employee_id} has invalid basic salary ({salary})",
            )
        return employee

    def _create_worksheet(
        self, employee: Employee, period_start: date, period_end: date
    ) -> PayrollWorksheet:
        monthly = Decimal(str(employee.basic_salary))
        daily = monthly / self.rules.standard_working_days_per_month
        hourly = daily / self.rules.standard_working_hours_per_day
        return PayrollWorksheet(
            employee_id=employee.employee_id,
            period_start=period_start,
            period_end=period_end,
            monthly_rate=monthly,
            daily_rate=daily,
            hourly_rate=hourly,
        )

    async def _calculate_attendance_earnings(
        self, ws: PayrollWorksheet
    ) -> list[Attendance]:
        """Basic pay: one daily rate per attended day. Lookup failure is fatal."""
        try:
            records = await self.attendance.get_attendance(
                ws.employee_id, ws.period_start, ws.period_end
            )
        except Exception as e:
            raise PayrollCalculationError(
                f"Failed to retrieve attendance for employee {ws.employee_id}: {e}",
                cause=e,
            ) from e

        in_period = [
            r
            for r in (records or [])
            if r is not None and ws.period_start <= r.work_date <= ws.period_end
        ]
        ws.days_worked = sum(1 for r in in_period if r.log_in is not None)
        ws.gross_earnings = round_to_cents(ws.daily_rate * ws.days_worked)

        if ws.days_worked == 0:
            msg = f"No attendance with log-in between {ws.period_start} and {ws.period_end}"
            logger.warning("Employee %s: %s", ws.employee_id, msg)
            ws.warnings.append(msg)
        else:
            logger.debug(
                "Employee %s: %d days worked, basic pay %s",
                ws.employee_id,
                ws.days_worked,
                ws.gross_earnings,
            )
        return in_period

    async def _calculate_overtime_pay(self, ws: PayrollWorksheet) -> None:
        try:
            records = await self.overtime.get_overtime(
                ws.employee_id, ws.period_start, ws.period_end
            )
            hours = sum(
                (Decimal(str(r.hours)) for r in (records or []) if r is not None and r.approved),
                ZERO,
            )
        except Exception as e:
            msg = f"Overtime not included: {e}"
            logger.warning("Employee %s: %s", ws.employee_id, msg)
            ws.warnings.append(msg)
            ws.overtime_hours = ZERO
            ws.overtime_pay = ZERO
            return

        ws.overtime_hours = round_to_cents(hours)
        ws.overtime_pay = round_to_cents(
            hours * ws.hourly_rate * self.rules.overtime_rate_multiplier
        )

    def _calculate_allowances(self, ws: PayrollWorksheet, employee: Employee) -> None:
        try:
            rice = Decimal(str(employee.rice_subsidy or 0))
            phone = Decimal(str(employee.phone_allowance or 0))
            clothing = Decimal(str(employee.clothing_allowance or 0))
        except Exception as e:
            msg = f"Allowances not included: {e}"
            logger.warning("Employee %s: %s", ws.employee_id, msg)
            ws.warnings.append(msg)
            rice = phone = clothing = ZERO

        ws.rice_subsidy = round_to_cents(rice)
        ws.phone_allowance = round_to_cents(phone)
        ws.clothing_allowance = round_to_cents(clothing)

    def _calculate_time_deductions(
        self, ws: PayrollWorksheet, attendance: Sequence[Attendance]
    ) -> None:
        """Late and undertime deductions.

        Lateness triggers past the threshold but is measured from the
        standard log-in time, so an 08:30 arrival costs 30 minutes.
        """
        rules = self.rules
        late = ZERO
        undertime = ZERO
        for record in attendance:
            if record.log_in is not None and record.log_in > rules.late_threshold_time:
                minutes = minutes_between(rules.standard_login_time, record.log_in)
                late += Decimal(minutes) / MINUTES_PER_HOUR * ws.hourly_rate
            if record.log_out is not None and record.log_out < rules.standard_logout_time:
                minutes = minutes_between(record.log_out, rules.standard_logout_time)
                undertime += Decimal(minutes) / MINUTES_PER_HOUR * ws.hourly_rate

        ws.late_deduction = round_to_cents(late)
        ws.undertime_deduction = round_to_cents(undertime)

    async def _calculate_unpaid_leave(self, ws: PayrollWorksheet) -> None:
        try:
            leaves = await self.leaves.get_approved_leaves(
                ws.employee_id, ws.period_start, ws.period_end
            )
            days = sum(
                leave.leave_days
                for leave in (leaves or [])
                if leave is not None and leave.is_approved and leave.is_unpaid
            )
        except Exception as e:
            msg = f"Unpaid leave not included: {e}"
            logger.warning("Employee %s: %s", ws.employee_id, msg)
            ws.warnings.append(msg)
            ws.unpaid_leave_days = 0
            ws.unpaid_leave_deduction = ZERO
            return

        ws.unpaid_leave_days = days
        ws.unpaid_leave_deduction = round_to_cents(ws.daily_rate * days)
        if days:
            logger.info(
                "Employee %s: %d unpaid leave days, deduction %s",
                ws.employee_id,
                days,
                ws.unpaid_leave_deduction,
            )

    def _calculate_contributions(self, ws: PayrollWorksheet) -> None:
        contributions = GovernmentContributions.for_salary(ws.monthly_rate)
        ws.sss = contributions.sss
        ws.philhealth = contributions.philhealth
        ws.pagibig = contributions.pagibig
        ws.tax = contributions.tax

    def _finalize(self, ws: PayrollWorksheet) -> Payroll:
        payroll = Payroll.from_worksheet(ws)

        if payroll.gross_pay < 0:
            raise PayrollCalculationError(
                f"Invalid calculation: gross pay cannot be negative ({payroll.gross_pay})"
            )
        if payroll.total_deductions < 0:
            raise PayrollCalculationError(
                f"Invalid calculation: total deductions cannot be negative "
                f"({payroll.total_deductions})"
            )
        if payroll.net_pay < 0:
            msg = (
                f"Negative net pay {payroll.net_pay} "
                f"(gross {payroll.gross_pay}, deductions {payroll.total_deductions})"
            )
            logger.warning("Employee %s: %s", payroll.employee_id, msg)
            payroll = dataclasses.replace(payroll, warnings=payroll.warnings + (msg,))
        return payroll

    def _log_summary(self, payroll: Payroll, employee: Employee) -> None:
        logger.info(
            "Payroll for %s (ID %s), %s to %s: days=%d basic=%s overtime=%s "
            "allowances=%s gross=%s deductions=%s net=%s",
            employee.full_name,
            payroll.employee_id,
            payroll.period_start,
            payroll.period_end,
            payroll.days_worked,
            payroll.gross_earnings,
            payroll.overtime_pay,
            payroll.total_allowances,
            payroll.gross_pay,
            payroll.total_deductions,
            payroll.net_pay,
        )
