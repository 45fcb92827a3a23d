"""MotorPH payroll command line interface.

Usage:
    python -m motorph_payroll.cli init-db
    python -m motorph_payroll.cli payslip --employee-id 10001 --start 2024-06-01 --end 2024-06-30
    python -m motorph_payroll.cli report --month 2024-06 --format csv --output june.csv
    python -m motorph_payroll.cli attendance --date 2024-06-03
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from datetime import date, datetime
from pathlib import Path
from typing import Any, Callable, Coroutine

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from motorph_payroll.calculators import PayrollCalculationError
from motorph_payroll.config import Settings, configure_logging
from motorph_payroll.database import (
    create_engine,
    create_session_factory,
    init_schema,
    session_scope,
)
from motorph_payroll.repositories import EmployeeRepository
from motorph_payroll.services import (
    PayrollService,
    ReportService,
    export_csv,
    export_html,
    render_payslip,
)


def parse_date(s: str) -> date:
    """Parse ISO date string."""
    return date.fromisoformat(s)


def parse_month(s: str) -> date:
    """Parse YYYY-MM into the first day of the month."""
    try:
        return datetime.strptime(s, "%Y-%m").date()
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"invalid month {s!r}, expected YYYY-MM") from e


class PayrollCli:
    """Payroll Command Line Interface."""

    def __init__(
        self,
        settings: Settings | None = None,
        session_factory: async_sessionmaker[AsyncSession] | None = None,
    ) -> None:
        self.settings = settings
        self.session_factory = session_factory
        self.parser = self._build_parser()

    def _build_parser(self) -> argparse.ArgumentParser:
        """Build argument parser."""
        parser = argparse.ArgumentParser(
            prog="python -m motorph_payroll.cli",
            description="MotorPH payroll tools",
        )
        subparsers = parser.add_subparsers(dest="command", help="Commands")

        subparsers.add_parser("init-db", help="Create database tables")

        # payslip command
        payslip = subparsers.add_parser(
            "payslip",
            help="Calculate and print an employee payslip",
        )
        payslip.add_argument(
            "--employee-id",
            type=int,
            required=True,
            help="Employee ID",
        )
        payslip.add_argument(
            "--start",
            type=parse_date,
            required=True,
            help="Period start (YYYY-MM-DD)",
        )
        payslip.add_argument(
            "--end",
            type=parse_date,
            required=True,
            help="Period end (YYYY-MM-DD)",
        )
        payslip.add_argument(
            "--save",
            action="store_true",
            help="Store the calculated payroll",
        )
        payslip.add_argument(
            "--json",
            action="store_true",
            help="Print the payroll as JSON instead of a payslip",
        )

        # report command
        report = subparsers.add_parser(
            "report",
            help="Write a monthly payroll report",
        )
        report.add_argument(
            "--month",
            type=parse_month,
            required=True,
            help="Report month (YYYY-MM)",
        )
        report.add_argument(
            "--type",
            choices=["payroll", "contributions"],
            default="payroll",
            help="Report type (default: payroll)",
        )
        report.add_argument(
            "--format",
            choices=["csv", "html"],
            default="csv",
            help="Output format (default: csv)",
        )
        report.add_argument(
            "--output",
            type=Path,
            help="Output file (default: stdout)",
        )
        report.add_argument(
            "--generated-by",
            default="Payroll CLI",
            help="Name recorded on the report",
        )

        # attendance command
        attendance = subparsers.add_parser(
            "attendance",
            help="Print the daily attendance report",
        )
        attendance.add_argument(
            "--date",
            type=parse_date,
            default=date.today(),
            help="Report date (default: today)",
        )

        return parser

    def run(self, args: list[str] | None = None) -> int:
        """Run the CLI with given arguments."""
        parsed = self.parser.parse_args(args)

        if not parsed.command:
            self.parser.print_help()
            return 1

        if self.settings is None:
            self.settings = Settings.from_env()
            configure_logging(self.settings)

        handlers: dict[str, Callable[[argparse.Namespace], Coroutine[Any, Any, int]]] = {
            "init-db": self._cmd_init_db,
            "payslip": self._cmd_payslip,
            "report": self._cmd_report,
            "attendance": self._cmd_attendance,
        }

        handler = handlers.get(parsed.command)
        if handler is None:
            print(f"Unknown command: {parsed.command}", file=sys.stderr)
            return 1

        try:
            return asyncio.run(self._with_database(handler, parsed))
        except PayrollCalculationError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1

    async def _with_database(
        self,
        handler: Callable[[argparse.Namespace], Coroutine[Any, Any, int]],
        args: argparse.Namespace,
    ) -> int:
        if self.session_factory is not None:
            return await handler(args)

        engine = create_engine(self.settings.database_url, echo=self.settings.debug)
        try:
            await init_schema(engine)
            self.session_factory = create_session_factory(engine)
            return await handler(args)
        finally:
            self.session_factory = None
            await engine.dispose()

    async def _cmd_init_db(self, args: argparse.Namespace) -> int:
        """Create tables (done on connect); report where."""
        print(f"Database ready: {self.settings.database_url}")
        return 0

    async def _cmd_payslip(self, args: argparse.Namespace) -> int:
        """Calculate one payroll and print it."""
        async with session_scope(self.session_factory) as session:
            employee = await EmployeeRepository(session).get_employee(args.employee_id)
            service = PayrollService(session)
            if args.save:
                payroll_id, payroll = await service.calculate_and_save(
                    args.employee_id, args.start, args.end
                )
                print(f"Saved payroll {payroll_id}", file=sys.stderr)
            else:
                payroll = await service.preview(args.employee_id, args.start, args.end)

        if args.json:
            print(json.dumps(payroll.to_dict(), indent=2))
        else:
            print(render_payslip(payroll, employee), end="")
        return 0

    async def _cmd_report(self, args: argparse.Namespace) -> int:
        """Write a monthly report as CSV or HTML."""
        async with session_scope(self.session_factory) as session:
            service = ReportService(session)
            if args.type == "contributions":
                report = await service.government_contributions_report(
                    args.month, args.generated_by
                )
            else:
                report = await service.monthly_payroll_report(args.month, args.generated_by)
            names = await service.employee_names(report)

        content = export_csv(report, names) if args.format == "csv" else export_html(report, names)
        if args.output:
            args.output.write_text(content, encoding="utf-8")
            print(
                f"Wrote {report.summary.total_employees} payrolls to {args.output}",
                file=sys.stderr,
            )
        else:
            print(content, end="")

        for employee_id, reason in report.skipped.items():
            print(f"Skipped employee {employee_id}: {reason}", file=sys.stderr)
        return 0

    async def _cmd_attendance(self, args: argparse.Namespace) -> int:
        """Print the daily attendance report."""
        async with session_scope(self.session_factory) as session:
            text = await ReportService(session).daily_attendance_report(args.date)
        print(text, end="")
        return 0


def main() -> int:
    """CLI entry point."""
    cli = PayrollCli()
    return cli.run()


if __name__ == "__main__":
    sys.exit(main())
