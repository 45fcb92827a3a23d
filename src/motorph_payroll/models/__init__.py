"""ORM models."""

from motorph_payroll.models.base import Base, TimestampMixin
from motorph_payroll.models.employee import Employee, EmploymentStatus
from motorph_payroll.models.payroll import PayrollRecord
from motorph_payroll.models.timekeeping import (
    Attendance,
    LeaveRequest,
    LeaveStatus,
    Overtime,
    minutes_between,
)

__all__ = [
    "Attendance",
    "Base",
    "Employee",
    "EmploymentStatus",
    "LeaveRequest",
    "LeaveStatus",
    "Overtime",
    "PayrollRecord",
    "TimestampMixin",
    "minutes_between",
]
