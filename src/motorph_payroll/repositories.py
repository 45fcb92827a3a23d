"""Database-backed data sources and payroll storage.

Each repository wraps an ``AsyncSession`` owned by the caller; none of
them commits. The lookup methods satisfy the protocols in
``calculators.sources``.
"""

from __future__ import annotations

import logging
from datetime import date, datetime, time, timedelta
from decimal import Decimal
from typing import Callable

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from motorph_payroll.calculators.types import Payroll
from motorph_payroll.models import (
    Attendance,
    Employee,
    LeaveRequest,
    LeaveStatus,
    Overtime,
    PayrollRecord,
)

logger = logging.getLogger(__name__)

# Payroll fields stored column-for-column on PayrollRecord
_PAYROLL_COLUMNS = (
    "employee_id",
    "period_start",
    "period_end",
    "monthly_rate",
    "daily_rate",
    "hourly_rate",
    "days_worked",
    "gross_earnings",
    "overtime_hours",
    "overtime_pay",
    "rice_subsidy",
    "phone_allowance",
    "clothing_allowance",
    "late_deduction",
    "undertime_deduction",
    "unpaid_leave_days",
    "unpaid_leave_deduction",
    "sss",
    "philhealth",
    "pagibig",
    "tax",
    "gross_pay",
    "total_deductions",
    "net_pay",
)


class EmployeeRepository:
    """Employee lookups and inserts."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_employee(self, employee_id: int) -> Employee | None:
        return await self.session.get(Employee, employee_id)

    async def list_employees(self) -> list[Employee]:
        result = await self.session.execute(
            select(Employee).order_by(Employee.last_name, Employee.first_name)
        )
        return list(result.scalars().all())

    async def list_by_status(self, status: str) -> list[Employee]:
        result = await self.session.execute(
            select(Employee)
            .where(Employee.status == status)
            .order_by(Employee.last_name, Employee.first_name)
        )
        return list(result.scalars().all())

    async def list_by_position(self, position: str) -> list[Employee]:
        result = await self.session.execute(
            select(Employee)
            .where(func.lower(Employee.position) == position.strip().lower())
            .order_by(Employee.last_name, Employee.first_name)
        )
        return list(result.scalars().all())

    async def search(self, term: str) -> list[Employee]:
        """Case-insensitive match on first name, last name or position."""
        pattern = f"%{term.strip().lower()}%"
        result = await self.session.execute(
            select(Employee)
            .where(
                or_(
                    func.lower(Employee.first_name).like(pattern),
                    func.lower(Employee.last_name).like(pattern),
                    func.lower(Employee.position).like(pattern),
                )
            )
            .order_by(Employee.last_name, Employee.first_name)
        )
        return list(result.scalars().all())

    async def add(self, employee: Employee) -> Employee:
        if employee.employee_id is not None and await self.get_employee(employee.employee_id):
            raise ValueError(f"Employee {employee.employee_id} already exists")
        self.session.add(employee)
        await self.session.flush()
        return employee


class AttendanceRepository:
    """Attendance lookups and inserts."""

    def __init__(self, session: AsyncSession, today: Callable[[], date] = date.today):
        self.session = session
        self.today = today

    async def get_attendance(
        self, employee_id: int, period_start: date, period_end: date
    ) -> list[Attendance]:
        """Attendance for an employee within the inclusive date range."""
        result = await self.session.execute(
            select(Attendance)
            .where(
                Attendance.employee_id == employee_id,
                Attendance.work_date >= period_start,
                Attendance.work_date <= period_end,
            )
            .order_by(Attendance.work_date)
        )
        return list(result.scalars().all())

    async def get_attendance_on(self, employee_id: int, day: date) -> Attendance | None:
        result = await self.session.execute(
            select(Attendance).where(
                Attendance.employee_id == employee_id,
                Attendance.work_date == day,
            )
        )
        return result.scalars().first()

    async def add(self, attendance: Attendance) -> Attendance:
        """Insert an attendance record after validating it.

        Raises:
            ValueError: missing log-in, future date, or log-out before log-in
        """
        if attendance.log_in is None:
            raise ValueError("Log in time cannot be empty")
        if attendance.work_date > self.today():
            raise ValueError(f"Attendance date cannot be in the future: {attendance.work_date}")
        if attendance.log_out is not None and attendance.log_out < attendance.log_in:
            raise ValueError(
                f"Log out time ({attendance.log_out}) cannot be before "
                f"log in time ({attendance.log_in})"
            )
        self.session.add(attendance)
        await self.session.flush()
        return attendance


class OvertimeRepository:
    """Approved overtime lookups."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_overtime(
        self, employee_id: int, period_start: date, period_end: date
    ) -> list[Overtime]:
        """Approved overtime starting within the inclusive date range."""
        range_start = datetime.combine(period_start, time.min)
        range_end = datetime.combine(period_end + timedelta(days=1), time.min)
        result = await self.session.execute(
            select(Overtime)
            .where(
                Overtime.employee_id == employee_id,
                Overtime.approved.is_(True),
                Overtime.start_datetime >= range_start,
                Overtime.start_datetime < range_end,
            )
            .order_by(Overtime.start_datetime)
        )
        return list(result.scalars().all())


class LeaveRepository:
    """Leave request lookups and status changes."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_approved_leaves(
        self, employee_id: int, period_start: date, period_end: date
    ) -> list[LeaveRequest]:
        """Approved leave overlapping the inclusive date range."""
        result = await self.session.execute(
            select(LeaveRequest)
            .where(
                LeaveRequest.employee_id == employee_id,
                LeaveRequest.status == LeaveStatus.APPROVED,
                LeaveRequest.start_date <= period_end,
                LeaveRequest.end_date >= period_start,
            )
            .order_by(LeaveRequest.start_date)
        )
        return list(result.scalars().all())

    async def set_status(self, leave_id: int, status: str) -> LeaveRequest:
        if status not in (LeaveStatus.PENDING, LeaveStatus.APPROVED, LeaveStatus.REJECTED):
            raise ValueError(f"Unknown leave status: {status}")
        leave = await self.session.get(LeaveRequest, leave_id)
        if leave is None:
            raise ValueError(f"Leave request {leave_id} not found")
        leave.status = status
        await self.session.flush()
        return leave


class PayrollRepository:
    """Storage for calculated payrolls."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def save(self, payroll: Payroll) -> PayrollRecord:
        record = PayrollRecord(**{name: getattr(payroll, name) for name in _PAYROLL_COLUMNS})
        self.session.add(record)
        await self.session.flush()
        logger.info(
            "Saved payroll %s for employee %s (%s to %s)",
            record.payroll_id,
            payroll.employee_id,
            payroll.period_start,
            payroll.period_end,
        )
        return record

    async def list_for_employee(
        self, employee_id: int, period_start: date, period_end: date
    ) -> list[Payroll]:
        """Saved payrolls whose period lies within the given range."""
        result = await self.session.execute(
            select(PayrollRecord)
            .where(
                PayrollRecord.employee_id == employee_id,
                PayrollRecord.period_start >= period_start,
                PayrollRecord.period_end <= period_end,
            )
            .order_by(PayrollRecord.period_start, PayrollRecord.payroll_id)
        )
        return [to_payroll(r) for r in result.scalars().all()]

    async def total_gross_pay(
        self, employee_id: int, period_start: date, period_end: date
    ) -> Decimal:
        total = await self.session.scalar(
            select(func.coalesce(func.sum(PayrollRecord.gross_pay), 0)).where(
                PayrollRecord.employee_id == employee_id,
                PayrollRecord.period_start >= period_start,
                PayrollRecord.period_end <= period_end,
            )
        )
        return Decimal(str(total or 0))


def to_payroll(record: PayrollRecord) -> Payroll:
    """Rebuild a Payroll value from its stored row."""
    return Payroll(**record.to_dict(_PAYROLL_COLUMNS))
