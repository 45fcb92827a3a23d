"""Employee model."""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import CheckConstraint, Date, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from motorph_payroll.models.base import Base, TimestampMixin
from motorph_payroll.roles import UserRole, role_for_position

if TYPE_CHECKING:
    from motorph_payroll.models.payroll import PayrollRecord
    from motorph_payroll.models.timekeeping import Attendance, LeaveRequest, Overtime


class EmploymentStatus:
    """Stored employment status values."""

    REGULAR = "Regular"
    PROBATIONARY = "Probationary"
    CONTRACTUAL = "Contractual"
    PART_TIME = "Part-time"

    ALL = (REGULAR, PROBATIONARY, CONTRACTUAL, PART_TIME)


class Employee(Base, TimestampMixin):
    """Employee record with compensation and allowance fields."""

    __tablename__ = "employee"

    employee_id: Mapped[int] = mapped_column(Integer, primary_key=True)
    first_name: Mapped[str] = mapped_column(String, nullable=False)
    last_name: Mapped[str] = mapped_column(String, nullable=False)
    birthday: Mapped[date | None] = mapped_column(Date, nullable=True)
    address: Mapped[str | None] = mapped_column(String, nullable=True)
    phone_number: Mapped[str | None] = mapped_column(String, nullable=True)
    status: Mapped[str] = mapped_column(
        String, nullable=False, default=EmploymentStatus.PROBATIONARY
    )
    position: Mapped[str | None] = mapped_column(String, nullable=True)
    immediate_supervisor: Mapped[str | None] = mapped_column(String, nullable=True)

    # Government IDs
    sss_number: Mapped[str | None] = mapped_column(String, nullable=True)
    philhealth_number: Mapped[str | None] = mapped_column(String, nullable=True)
    tin_number: Mapped[str | None] = mapped_column(String, nullable=True)
    pagibig_number: Mapped[str | None] = mapped_column(String, nullable=True)

    # Compensation
    basic_salary: Mapped[Decimal] = mapped_column(
        Numeric(14, 2), nullable=False, default=Decimal("0")
    )
    rice_subsidy: Mapped[Decimal] = mapped_column(
        Numeric(14, 2), nullable=False, default=Decimal("0")
    )
    phone_allowance: Mapped[Decimal] = mapped_column(
        Numeric(14, 2), nullable=False, default=Decimal("0")
    )
    clothing_allowance: Mapped[Decimal] = mapped_column(
        Numeric(14, 2), nullable=False, default=Decimal("0")
    )

    __table_args__ = (
        CheckConstraint("employee_id > 0", name="employee_id_positive"),
        CheckConstraint("basic_salary >= 0", name="employee_salary_nonnegative"),
        CheckConstraint(
            "rice_subsidy >= 0 AND phone_allowance >= 0 AND clothing_allowance >= 0",
            name="employee_allowances_nonnegative",
        ),
    )

    # Relationships
    attendance: Mapped[list[Attendance]] = relationship(back_populates="employee")
    overtime: Mapped[list[Overtime]] = relationship(back_populates="employee")
    leave_requests: Mapped[list[LeaveRequest]] = relationship(back_populates="employee")
    payrolls: Mapped[list[PayrollRecord]] = relationship(back_populates="employee")

    @validates("employee_id")
    def _validate_id(self, key: str, value: int) -> int:
        if value is not None and value <= 0:
            raise ValueError(f"Employee ID must be positive, got {value}")
        return value

    @validates("first_name", "last_name")
    def _validate_name(self, key: str, value: str) -> str:
        if value is None or not value.strip():
            raise ValueError(f"{key} must not be blank")
        return value.strip()

    @validates("basic_salary", "rice_subsidy", "phone_allowance", "clothing_allowance")
    def _validate_amount(self, key: str, value: Decimal | None) -> Decimal:
        amount = Decimal(str(value)) if value is not None else Decimal("0")
        if amount < 0:
            raise ValueError(f"{key} must not be negative, got {amount}")
        return amount

    @property
    def full_name(self) -> str:
        """Get full name."""
        return f"{self.first_name} {self.last_name}"

    @property
    def role(self) -> UserRole:
        """Access role derived from the position."""
        return role_for_position(self.position)

    @property
    def total_allowances(self) -> Decimal:
        return (
            (self.rice_subsidy or Decimal("0"))
            + (self.phone_allowance or Decimal("0"))
            + (self.clothing_allowance or Decimal("0"))
        )

    @property
    def is_active(self) -> bool:
        return self.status != EmploymentStatus.CONTRACTUAL
