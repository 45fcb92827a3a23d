"""Business logic services."""

from motorph_payroll.services.payroll_service import BatchResult, PayrollService, month_period
from motorph_payroll.services.report_service import (
    PayrollReport,
    ReportService,
    ReportSummary,
    ReportType,
    export_csv,
    export_html,
    render_payslip,
)

__all__ = [
    "BatchResult",
    "PayrollReport",
    "PayrollService",
    "ReportService",
    "ReportSummary",
    "ReportType",
    "export_csv",
    "export_html",
    "month_period",
    "render_payslip",
]
