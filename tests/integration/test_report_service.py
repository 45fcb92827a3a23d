"""Report service integration tests."""

from datetime import date
from decimal import Decimal

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from motorph_payroll.calculators import EmployeeLookupError
from motorph_payroll.repositories import EmployeeRepository
from motorph_payroll.services import (
    PayrollService,
    ReportService,
    ReportType,
    export_csv,
    export_html,
    render_payslip,
)
from motorph_payroll.services.report_service import CSV_HEADER

from tests.conftest import TODAY, make_employee
from tests.integration.conftest import RANK_AND_FILE_ID

pytestmark = pytest.mark.asyncio

JUNE = date(2024, 6, 1)
JUNE_END = date(2024, 6, 30)


def report_service(session: AsyncSession) -> ReportService:
    return ReportService(session, today=lambda: TODAY)


class TestMonthlyReport:
    """Test monthly payroll reports."""

    async def test_monthly_report(self, db_session: AsyncSession):
        """The monthly report should carry title, period and summary."""
        report = await report_service(db_session).monthly_payroll_report(JUNE, "Antonio Lim")

        assert report.report_type is ReportType.MONTHLY_PAYROLL
        assert report.title == "Monthly Payroll Report - June 2024"
        assert report.formatted_period == "06/01/2024 - 06/30/2024"
        assert report.generated_date == TODAY
        assert report.summary.total_employees == 3
        assert report.summary.total_net_pay == sum(p.net_pay for p in report.payrolls)
        assert report.summary.total_sss == Decimal("3375.00")

    async def test_contributions_report(self, db_session: AsyncSession):
        """The contributions report should use its own type and title."""
        report = await report_service(db_session).government_contributions_report(
            JUNE, "Antonio Lim"
        )
        assert report.report_type is ReportType.GOVERNMENT_CONTRIBUTIONS
        assert report.title.startswith("Government Contributions Report")

    async def test_skipped_employees_are_reported(self, db_session: AsyncSession):
        """Employees that fail should be listed as skipped."""
        db_session.add(make_employee(employee_id=10050, last_name="Zero", basic_salary=0))
        await db_session.flush()

        report = await report_service(db_session).monthly_payroll_report(JUNE, "Antonio Lim")
        assert report.summary.total_employees == 3
        assert 10050 in report.skipped


class TestEmployeeReport:
    """Test single-employee reports."""

    async def test_calculates_when_nothing_saved(self, db_session: AsyncSession):
        """Without saved payrolls the report should calculate one."""
        report = await report_service(db_session).employee_payroll_report(
            RANK_AND_FILE_ID, JUNE, JUNE_END, "Antonio Lim"
        )
        assert report.report_type is ReportType.EMPLOYEE_PAYROLL
        assert report.title == "Employee Payroll Report - Bianca Sofia Aquino"
        assert len(report.payrolls) == 1

    async def test_uses_saved_payrolls(self, db_session: AsyncSession):
        """Saved payrolls in the range should be reported."""
        payroll_service = PayrollService(db_session, today=lambda: TODAY)
        await payroll_service.calculate_and_save(RANK_AND_FILE_ID, JUNE, date(2024, 6, 15))
        await payroll_service.calculate_and_save(RANK_AND_FILE_ID, date(2024, 6, 16), JUNE_END)

        report = await report_service(db_session).employee_payroll_report(
            RANK_AND_FILE_ID, JUNE, JUNE_END, "Antonio Lim"
        )
        assert [p.period_start for p in report.payrolls] == [JUNE, date(2024, 6, 16)]

    async def test_unknown_employee(self, db_session: AsyncSession):
        """An unknown employee should raise a lookup error."""
        with pytest.raises(EmployeeLookupError):
            await report_service(db_session).employee_payroll_report(
                99999, JUNE, JUNE_END, "Antonio Lim"
            )


class TestExports:
    """Test CSV, HTML and payslip rendering."""

    async def test_csv(self, db_session: AsyncSession):
        """CSV export should have rows followed by a summary."""
        service = report_service(db_session)
        report = await service.monthly_payroll_report(JUNE, "Antonio Lim")
        names = await service.employee_names(report)

        lines = export_csv(report, names).splitlines()

        assert lines[0] == ",".join(CSV_HEADER)
        assert lines[0] == (
            "Employee ID,Name,Period,Gross Pay,Deductions,Net Pay,SSS,PhilHealth,Pag-IBIG,Tax"
        )
        rows = lines[1:4]
        aquino = next(row for row in rows if row.startswith(f"{RANK_AND_FILE_ID},"))
        assert aquino == (
            "10003,Bianca Sofia Aquino,06/01/2024 - 06/30/2024,"
            "10125.00,8683.33,1441.67,1125.00,1100.00,200.00,4008.33"
        )
        assert lines[4] == ""
        assert lines[5] == "SUMMARY"
        assert lines[6] == "Total Employees,3"
        assert lines[7].startswith("Total Gross Pay,")

    async def test_csv_unknown_name(self, db_session: AsyncSession):
        """Missing names should be written as Unknown."""
        report = await report_service(db_session).monthly_payroll_report(JUNE, "Antonio Lim")
        text = export_csv(report, {})
        assert ",Unknown," in text

    async def test_html_escapes_values(self, db_session: AsyncSession):
        """HTML export should escape names and generator."""
        service = report_service(db_session)
        report = await service.monthly_payroll_report(JUNE, "<script>alert(1)</script>")
        names = {RANK_AND_FILE_ID: "Ana <b>& Co</b>"}

        html = export_html(report, names)

        assert "<table>" in html
        assert "Ana &lt;b&gt;&amp; Co&lt;/b&gt;" in html
        assert "<script>" not in html
        assert "Total Employees: 3" in html

    async def test_payslip(self, db_session: AsyncSession):
        """The payslip should show the employee, period and amounts."""
        payroll = await PayrollService(db_session, today=lambda: TODAY).preview(
            RANK_AND_FILE_ID, JUNE, JUNE_END
        )
        employee = await EmployeeRepository(db_session).get_employee(RANK_AND_FILE_ID)

        text = render_payslip(payroll, employee)

        assert "MOTORPH PAYSLIP" in text
        assert "Bianca Sofia Aquino (ID: 10003)" in text
        assert "06/01/2024 - 06/30/2024" in text
        assert "10,125.00" in text
        assert "1,441.67" in text


class TestDailyAttendanceReport:
    """Test the daily attendance sheet."""

    async def test_daily_report(self, db_session: AsyncSession):
        """The daily sheet should list each employee and a summary."""
        text = await report_service(db_session).daily_attendance_report(date(2024, 6, 3))
        lines = text.splitlines()

        assert lines[0] == "DAILY ATTENDANCE REPORT"
        assert lines[1] == "Date: June 03, 2024"
        aquino = next(line for line in lines if line.startswith("10003"))
        assert "08:30:00" in aquino
        assert aquino.rstrip().endswith("Late")
        garcia = next(line for line in lines if line.startswith("10001"))
        assert "ABSENT" in garcia
        assert "Total Employees: 3" in lines
        assert "Present: 2" in lines
        assert "Late: 1" in lines
        assert "Absent: 1" in lines
        assert "Attendance Rate: 66.67%" in lines

    async def test_long_names_are_truncated(self, db_session: AsyncSession):
        """Long names should be truncated to fit the column."""
        db_session.add(
            make_employee(
                employee_id=10060,
                first_name="Maria Concepcion",
                last_name="Villanueva-Santos",
            )
        )
        await db_session.flush()

        text = await report_service(db_session).daily_attendance_report(date(2024, 6, 3))
        line = next(line for line in text.splitlines() if line.startswith("10060"))
        assert "Maria Concepcion ..." in line
