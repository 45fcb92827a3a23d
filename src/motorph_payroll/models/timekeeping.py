"""Attendance, overtime and leave models."""

from __future__ import annotations

from datetime import date, datetime, time
from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Date,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
    Time,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from motorph_payroll.models.base import Base, TimestampMixin

if TYPE_CHECKING:
    from motorph_payroll.models.employee import Employee

STANDARD_LOGIN = time(8, 0)
STANDARD_LOGOUT = time(17, 0)


def minutes_between(start: time, end: time) -> int:
    """Whole minutes from ``start`` to ``end`` on the same day.

    Partial minutes are truncated toward zero; negative when ``end`` is
    earlier than ``start``.
    """
    anchor = date(2000, 1, 1)
    seconds = (datetime.combine(anchor, end) - datetime.combine(anchor, start)).total_seconds()
    return int(seconds / 60)


class Attendance(Base, TimestampMixin):
    """One day of log-in/log-out for an employee."""

    __tablename__ = "attendance"

    attendance_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    employee_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("employee.employee_id", ondelete="CASCADE"),
        nullable=False,
    )
    work_date: Mapped[date] = mapped_column("date", Date, nullable=False)
    log_in: Mapped[time | None] = mapped_column(Time, nullable=True)
    log_out: Mapped[time | None] = mapped_column(Time, nullable=True)

    __table_args__ = (
        CheckConstraint(
            "log_in IS NULL OR log_out IS NULL OR log_out >= log_in",
            name="attendance_logout_after_login",
        ),
    )

    employee: Mapped[Employee] = relationship(back_populates="attendance")

    @property
    def is_present(self) -> bool:
        return self.log_in is not None

    @property
    def work_minutes(self) -> int:
        if self.log_in is None or self.log_out is None:
            return 0
        return max(minutes_between(self.log_in, self.log_out), 0)

    @property
    def work_hours(self) -> Decimal:
        """Hours between log-in and log-out; zero if either is missing."""
        return Decimal(self.work_minutes) / Decimal(60)

    @property
    def is_late(self) -> bool:
        """Logged in after the standard start time."""
        return self.log_in is not None and self.log_in > STANDARD_LOGIN

    @property
    def has_undertime(self) -> bool:
        """Logged out before the standard end time."""
        return self.log_out is not None and self.log_out < STANDARD_LOGOUT

    @property
    def late_minutes(self) -> int:
        if not self.is_late:
            return 0
        return minutes_between(STANDARD_LOGIN, self.log_in)

    @property
    def undertime_minutes(self) -> int:
        if not self.has_undertime:
            return 0
        return minutes_between(self.log_out, STANDARD_LOGOUT)


class Overtime(Base, TimestampMixin):
    """Overtime filed by an employee; counts toward pay once approved."""

    __tablename__ = "overtime"

    overtime_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    employee_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("employee.employee_id", ondelete="CASCADE"),
        nullable=False,
    )
    start_datetime: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    end_datetime: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    reason: Mapped[str | None] = mapped_column(Text, nullable=True)
    approved: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    __table_args__ = (
        CheckConstraint("end_datetime >= start_datetime", name="overtime_dates_check"),
    )

    employee: Mapped[Employee] = relationship(back_populates="overtime")

    @property
    def hours(self) -> Decimal:
        seconds = (self.end_datetime - self.start_datetime).total_seconds()
        return Decimal(int(seconds // 60)) / Decimal(60)


class LeaveStatus:
    """Stored leave request status values."""

    PENDING = "Pending"
    APPROVED = "Approved"
    REJECTED = "Rejected"


class LeaveRequest(Base, TimestampMixin):
    """Leave filed by an employee.

    ``leave_type`` is a free label ("Vacation", "Sick", "Unpaid", ...);
    only approved leave of type "Unpaid" affects pay.
    """

    __tablename__ = "leave_request"

    leave_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    employee_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("employee.employee_id", ondelete="CASCADE"),
        nullable=False,
    )
    leave_type: Mapped[str] = mapped_column(String, nullable=False)
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date] = mapped_column(Date, nullable=False)
    status: Mapped[str] = mapped_column(String, nullable=False, default=LeaveStatus.PENDING)
    reason: Mapped[str | None] = mapped_column(Text, nullable=True)

    __table_args__ = (
        CheckConstraint("end_date >= start_date", name="leave_dates_check"),
        CheckConstraint(
            "status IN ('Pending', 'Approved', 'Rejected')",
            name="leave_status_check",
        ),
    )

    employee: Mapped[Employee] = relationship(back_populates="leave_requests")

    @property
    def leave_days(self) -> int:
        """Inclusive number of days covered."""
        return (self.end_date - self.start_date).days + 1

    @property
    def is_approved(self) -> bool:
        return self.status == LeaveStatus.APPROVED

    @property
    def is_unpaid(self) -> bool:
        return (self.leave_type or "").strip().lower() == "unpaid"
