"""Read-only data sources consumed by the payroll calculator.

Employee and attendance lookups are required. Overtime and leave lookups
are optional features: a deployment without them passes an
``UnavailableSource`` in their place, which fails every call with
``SourceUnavailableError`` so the calculator's degrade-to-zero path
handles absence the same way it handles a lookup failure.
"""

from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING, Protocol, Sequence

if TYPE_CHECKING:
    from motorph_payroll.models import Attendance, Employee, LeaveRequest, Overtime


class SourceUnavailableError(Exception):
    """Raised when an optional data source is not available."""

    def __init__(self, source_name: str, reason: str | None = None):
        self.source_name = source_name
        self.reason = reason
        msg = f"{source_name} is not available"
        if reason:
            msg += f": {reason}"
        super().__init__(msg)


class EmployeeSource(Protocol):
    async def get_employee(self, employee_id: int) -> Employee | None: ...


class AttendanceSource(Protocol):
    async def get_attendance(
        self, employee_id: int, period_start: date, period_end: date
    ) -> Sequence[Attendance]: ...


class OvertimeSource(Protocol):
    async def get_overtime(
        self, employee_id: int, period_start: date, period_end: date
    ) -> Sequence[Overtime]: ...


class LeaveSource(Protocol):
    async def get_approved_leaves(
        self, employee_id: int, period_start: date, period_end: date
    ) -> Sequence[LeaveRequest]: ...


class UnavailableSource:
    """Stand-in for an optional source that is not configured."""

    def __init__(self, source_name: str, reason: str | None = None):
        self.source_name = source_name
        self.reason = reason

    def _fail(self) -> SourceUnavailableError:
        return SourceUnavailableError(self.source_name, self.reason)

    async def get_overtime(
        self, employee_id: int, period_start: date, period_end: date
    ) -> Sequence[Overtime]:
        raise self._fail()

    async def get_approved_leaves(
        self, employee_id: int, period_start: date, period_end: date
    ) -> Sequence[LeaveRequest]:
        raise self._fail()

    def __repr__(self) -> str:
        return f"UnavailableSource({self.source_name!r})"
