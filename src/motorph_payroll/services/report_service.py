"""Payroll and attendance reports, with CSV, HTML and plain-text renderers."""

from __future__ import annotations

import csv
import html
import io
import logging
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Callable, Iterable, Mapping

from sqlalchemy.ext.asyncio import AsyncSession

from motorph_payroll.calculators import EmployeeLookupError, Payroll
from motorph_payroll.models import Employee
from motorph_payroll.repositories import AttendanceRepository, EmployeeRepository
from motorph_payroll.services.payroll_service import PayrollService

logger = logging.getLogger(__name__)

ZERO = Decimal("0")
CSV_HEADER = [
    "Employee ID",
    "Name",
    "Period",
    "Gross Pay",
    "Deductions",
    "Net Pay",
    "SSS",
    "PhilHealth",
    "Pag-IBIG",
    "Tax",
]


class ReportType(str, Enum):
    MONTHLY_PAYROLL = "MONTHLY_PAYROLL"
    EMPLOYEE_PAYROLL = "EMPLOYEE_PAYROLL"
    GOVERNMENT_CONTRIBUTIONS = "GOVERNMENT_CONTRIBUTIONS"


@dataclass(frozen=True)
class ReportSummary:
    """Totals across the payrolls in a report."""

    total_employees: int = 0
    total_gross_pay: Decimal = ZERO
    total_deductions: Decimal = ZERO
    total_net_pay: Decimal = ZERO
    total_sss: Decimal = ZERO
    total_philhealth: Decimal = ZERO
    total_pagibig: Decimal = ZERO
    total_tax: Decimal = ZERO

    @classmethod
    def from_payrolls(cls, payrolls: Iterable[Payroll]) -> ReportSummary:
        payrolls = list(payrolls)
        return cls(
            total_employees=len(payrolls),
            total_gross_pay=sum((p.gross_pay for p in payrolls), ZERO),
            total_deductions=sum((p.total_deductions for p in payrolls), ZERO),
            total_net_pay=sum((p.net_pay for p in payrolls), ZERO),
            total_sss=sum((p.sss for p in payrolls), ZERO),
            total_philhealth=sum((p.philhealth for p in payrolls), ZERO),
            total_pagibig=sum((p.pagibig for p in payrolls), ZERO),
            total_tax=sum((p.tax for p in payrolls), ZERO),
        )


@dataclass
class PayrollReport:
    title: str
    report_type: ReportType
    generated_by: str
    period_start: date
    period_end: date
    payrolls: list[Payroll] = field(default_factory=list)
    skipped: dict[int, str] = field(default_factory=dict)  # employee_id -> reason
    generated_date: date = field(default_factory=date.today)

    @property
    def summary(self) -> ReportSummary:
        return ReportSummary.from_payrolls(self.payrolls)

    @property
    def formatted_period(self) -> str:
        return f"{self.period_start:%m/%d/%Y} - {self.period_end:%m/%d/%Y}"


class ReportService:
    """Builds payroll reports from saved or freshly calculated payrolls."""

    def __init__(
        self,
        session: AsyncSession,
        payroll_service: PayrollService | None = None,
        today: Callable[[], date] = date.today,
    ):
        self.session = session
        self.today = today
        self.payroll_service = payroll_service or PayrollService(session, today=today)
        self.employees = EmployeeRepository(session)
        self.attendance = AttendanceRepository(session, today=today)

    async def monthly_payroll_report(self, month: date, generated_by: str) -> PayrollReport:
        """Payroll for every employee in the month containing ``month``."""
        batch = await self.payroll_service.calculate_month(month)
        return PayrollReport(
            title=f"Monthly Payroll Report - {month:%B %Y}",
            report_type=ReportType.MONTHLY_PAYROLL,
            generated_by=generated_by,
            period_start=batch.period_start,
            period_end=batch.period_end,
            payrolls=batch.payrolls,
            skipped=batch.errors,
            generated_date=self.today(),
        )

    async def government_contributions_report(
        self, month: date, generated_by: str
    ) -> PayrollReport:
        report = await self.monthly_payroll_report(month, generated_by)
        report.report_type = ReportType.GOVERNMENT_CONTRIBUTIONS
        report.title = f"Government Contributions Report - {month:%B %Y}"
        return report

    async def employee_payroll_report(
        self,
        employee_id: int,
        period_start: date,
        period_end: date,
        generated_by: str,
    ) -> PayrollReport:
        """One employee's payroll, using saved results when there are any."""
        employee = await self.employees.get_employee(employee_id)
        if employee is None:
            raise EmployeeLookupError(employee_id, f"Employee not found with ID: {employee_id}")

        payrolls = await self.payroll_service.payrolls.list_for_employee(
            employee_id, period_start, period_end
        )
        if not payrolls:
            payrolls = [
                await self.payroll_service.preview(employee_id, period_start, period_end)
            ]

        return PayrollReport(
            title=f"Employee Payroll Report - {employee.full_name}",
            report_type=ReportType.EMPLOYEE_PAYROLL,
            generated_by=generated_by,
            period_start=period_start,
            period_end=period_end,
            payrolls=payrolls,
            generated_date=self.today(),
        )

    async def employee_names(self, report: PayrollReport) -> dict[int, str]:
        names: dict[int, str] = {}
        for payroll in report.payrolls:
            employee = await self.employees.get_employee(payroll.employee_id)
            if employee is not None:
                names[payroll.employee_id] = employee.full_name
        return names

    async def daily_attendance_report(self, day: date) -> str:
        """Fixed-width attendance sheet for one day across all employees."""
        employees = await self.employees.list_employees()
        lines = [
            "DAILY ATTENDANCE REPORT",
            f"Date: {day:%B %d, %Y}",
            "=" * 80,
            f"{'ID':<6} {'Name':<20} {'Log In':<10} {'Log Out':<10} {'Work Hours':<12} {'Status':<10}",
            "-" * 80,
        ]
        present = late = absent = 0

        for employee in employees:
            name = _truncate(employee.full_name, 20)
            record = await self.attendance.get_attendance_on(employee.employee_id, day)
            if record is None:
                absent += 1
                lines.append(
                    f"{employee.employee_id:<6} {name:<20} {'ABSENT':<10} {'ABSENT':<10} "
                    f"{'0.00':<12} {'Absent':<10}"
                )
                continue

            present += 1
            status = "Present"
            if record.is_late:
                late += 1
                status = "Late"
            log_in = record.log_in.strftime("%H:%M:%S") if record.log_in else "N/A"
            log_out = record.log_out.strftime("%H:%M:%S") if record.log_out else "N/A"
            lines.append(
                f"{employee.employee_id:<6} {name:<20} {log_in:<10} {log_out:<10} "
                f"{record.work_hours:<12.2f} {status:<10}"
            )

        rate = (present / len(employees) * 100) if employees else 0.0
        lines.extend([
            "-" * 80,
            "SUMMARY:",
            f"Total Employees: {len(employees)}",
            f"Present: {present}",
            f"Late: {late}",
            f"Absent: {absent}",
            f"Attendance Rate: {rate:.2f}%",
        ])
        return "\n".join(lines) + "\n"


def _truncate(value: str, width: int) -> str:
    return value if len(value) <= width else value[: width - 3] + "..."


def export_csv(report: PayrollReport, names: Mapping[int, str]) -> str:
    """Render a report as CSV text, followed by a summary block."""
    output = io.StringIO()
    writer = csv.writer(output, lineterminator="\n")
    writer.writerow(CSV_HEADER)

    for p in report.payrolls:
        writer.writerow([
            p.employee_id,
            names.get(p.employee_id, "Unknown"),
            report.formatted_period,
            f"{p.gross_pay:.2f}",
            f"{p.total_deductions:.2f}",
            f"{p.net_pay:.2f}",
            f"{p.sss:.2f}",
            f"{p.philhealth:.2f}",
            f"{p.pagibig:.2f}",
            f"{p.tax:.2f}",
        ])

    summary = report.summary
    writer.writerow([])
    writer.writerow(["SUMMARY"])
    writer.writerow(["Total Employees", summary.total_employees])
    writer.writerow(["Total Gross Pay", f"{summary.total_gross_pay:.2f}"])
    writer.writerow(["Total Deductions", f"{summary.total_deductions:.2f}"])
    writer.writerow(["Total Net Pay", f"{summary.total_net_pay:.2f}"])
    return output.getvalue()


def export_html(report: PayrollReport, names: Mapping[int, str]) -> str:
    """Render a report as a standalone HTML page."""
    esc = html.escape
    summary = report.summary
    rows = "".join(
        "<tr>"
        f"<td>{p.employee_id}</td>"
        f"<td>{esc(names.get(p.employee_id, 'Unknown'))}</td>"
        f"<td>&#8369;{p.gross_pay:.2f}</td>"
        f"<td>&#8369;{p.total_deductions:.2f}</td>"
        f"<td>&#8369;{p.net_pay:.2f}</td>"
        "</tr>"
        for p in report.payrolls
    )
    return (
        "<!DOCTYPE html><html><head>"
        f"<title>{esc(report.title)}</title>"
        "<style>"
        "body { font-family: Arial, sans-serif; margin: 20px; }"
        "table { border-collapse: collapse; width: 100%; }"
        "th, td { border: 1px solid #ddd; padding: 8px; text-align: left; }"
        "th { background-color: #f2f2f2; }"
        ".summary { margin-top: 20px; background-color: #f9f9f9; padding: 15px; }"
        "</style></head><body>"
        f"<h1>{esc(report.title)}</h1>"
        f"<p>Generated on: {report.generated_date.isoformat()}</p>"
        f"<p>Period: {report.formatted_period}</p>"
        f"<p>Generated by: {esc(report.generated_by)}</p>"
        "<table>"
        "<tr><th>Employee ID</th><th>Name</th><th>Gross Pay</th>"
        "<th>Deductions</th><th>Net Pay</th></tr>"
        f"{rows}"
        "</table>"
        "<div class='summary'><h3>Summary</h3>"
        f"<p>Total Employees: {summary.total_employees}</p>"
        f"<p>Total Gross Pay: &#8369;{summary.total_gross_pay:.2f}</p>"
        f"<p>Total Deductions: &#8369;{summary.total_deductions:.2f}</p>"
        f"<p>Total Net Pay: &#8369;{summary.total_net_pay:.2f}</p>"
        "</div></body></html>"
    )


def render_payslip(payroll: Payroll, employee: Employee) -> str:
    """Plain-text payslip for one payroll."""

    def row(label: str, amount: Decimal) -> str:
        return f"  {label:<28}{amount:>14,.2f}"

    lines = [
        "MOTORPH PAYSLIP",
        "=" * 44,
        f"Employee:  {employee.full_name} (ID: {employee.employee_id})",
        f"Position:  {employee.position or 'N/A'}",
        f"Period:    {payroll.period_start:%m/%d/%Y} - {payroll.period_end:%m/%d/%Y}",
        f"Days worked: {payroll.days_worked}   Daily rate: {payroll.daily_rate:,.2f}",
        "-" * 44,
        "EARNINGS",
        row("Basic pay", payroll.gross_earnings),
        row(f"Overtime ({payroll.overtime_hours:.2f} h)", payroll.overtime_pay),
        row("Rice subsidy", payroll.rice_subsidy),
        row("Phone allowance", payroll.phone_allowance),
        row("Clothing allowance", payroll.clothing_allowance),
        row("GROSS PAY", payroll.gross_pay),
        "-" * 44,
        "DEDUCTIONS",
        row("SSS", payroll.sss),
        row("PhilHealth", payroll.philhealth),
        row("Pag-IBIG", payroll.pagibig),
        row("Withholding tax", payroll.tax),
        row("Late", payroll.late_deduction),
        row("Undertime", payroll.undertime_deduction),
        row(f"Unpaid leave ({payroll.unpaid_leave_days} d)", payroll.unpaid_leave_deduction),
        row("TOTAL DEDUCTIONS", payroll.total_deductions),
        "=" * 44,
        row("NET PAY", payroll.net_pay),
    ]
    for warning in payroll.warnings:
        lines.append(f"Note: {warning}")
    return "\n".join(lines) + "\n"
