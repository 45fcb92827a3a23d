"""Pydantic schemas for API request/response models."""

from datetime import date, time
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from motorph_payroll.roles import UserRole
from motorph_payroll.services.report_service import ReportType


# ============================================================================
# Employee schemas
# ============================================================================


class EmployeeCreate(BaseModel):
    """Schema for adding an employee."""

    employee_id: int = Field(gt=0)
    first_name: str = Field(min_length=1)
    last_name: str = Field(min_length=1)
    birthday: date | None = None
    address: str | None = None
    phone_number: str | None = None
    status: str = "Probationary"
    position: str | None = None
    immediate_supervisor: str | None = None
    sss_number: str | None = None
    philhealth_number: str | None = None
    tin_number: str | None = None
    pagibig_number: str | None = None
    basic_salary: Decimal = Field(ge=0)
    rice_subsidy: Decimal = Field(default=Decimal("0"), ge=0)
    phone_allowance: Decimal = Field(default=Decimal("0"), ge=0)
    clothing_allowance: Decimal = Field(default=Decimal("0"), ge=0)


class EmployeeResponse(BaseModel):
    """Schema for employee response."""

    model_config = ConfigDict(from_attributes=True)

    employee_id: int
    first_name: str
    last_name: str
    full_name: str
    birthday: date | None = None
    status: str
    position: str | None = None
    role: UserRole
    basic_salary: Decimal
    rice_subsidy: Decimal
    phone_allowance: Decimal
    clothing_allowance: Decimal


# ============================================================================
# Attendance schemas
# ============================================================================


class AttendanceCreate(BaseModel):
    """Schema for recording one day of attendance."""

    work_date: date
    log_in: time
    log_out: time | None = None


class AttendanceResponse(BaseModel):
    """Schema for attendance response."""

    model_config = ConfigDict(from_attributes=True)

    attendance_id: int
    employee_id: int
    work_date: date
    log_in: time | None = None
    log_out: time | None = None
    work_hours: Decimal
    is_late: bool


# ============================================================================
# Payroll schemas
# ============================================================================


class PayrollRequest(BaseModel):
    """Schema for calculating and saving a payroll."""

    period_start: date
    period_end: date


class PayrollResponse(BaseModel):
    """Schema for a calculated or saved payroll."""

    model_config = ConfigDict(from_attributes=True)

    payroll_id: int | None = None
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
    warnings: list[str] = Field(default_factory=list)


# ============================================================================
# Report schemas
# ============================================================================


class ReportSummaryResponse(BaseModel):
    """Schema for report totals."""

    model_config = ConfigDict(from_attributes=True)

    total_employees: int
    total_gross_pay: Decimal
    total_deductions: Decimal
    total_net_pay: Decimal
    total_sss: Decimal
    total_philhealth: Decimal
    total_pagibig: Decimal
    total_tax: Decimal


class ReportResponse(BaseModel):
    """Schema for a payroll report."""

    model_config = ConfigDict(from_attributes=True)

    title: str
    report_type: ReportType
    generated_by: str
    generated_date: date
    period_start: date
    period_end: date
    payrolls: list[PayrollResponse]
    summary: ReportSummaryResponse
    skipped: dict[int, str] = Field(default_factory=dict)


# ============================================================================
# Error schemas
# ============================================================================


class ErrorResponse(BaseModel):
    """Schema for error response."""

    detail: str
    code: str | None = None
