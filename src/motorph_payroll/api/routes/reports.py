"""Report API endpoints."""

from datetime import date, datetime
from typing import Annotated, Literal

from fastapi import APIRouter, HTTPException, Query, status
from fastapi.responses import HTMLResponse, PlainTextResponse, Response

from motorph_payroll.api.dependencies import DbSession, PayrollRole, ReportRole
from motorph_payroll.api.schemas import ErrorResponse, ReportResponse
from motorph_payroll.services import PayrollReport, ReportService, export_csv, export_html

router = APIRouter(prefix="/reports", tags=["reports"])

_ERRORS = {400: {"model": ErrorResponse}, 403: {"model": ErrorResponse}}

MonthParam = Annotated[str, Query(pattern=r"^\d{4}-\d{2}$", description="YYYY-MM")]


def parse_month(value: str) -> date:
    """Parse ``YYYY-MM`` into the first day of that month."""
    try:
        return datetime.strptime(value, "%Y-%m").date()
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid month {value!r}, expected YYYY-MM",
        ) from e


async def _render(
    service: ReportService,
    report: PayrollReport,
    fmt: str,
    filename: str,
) -> Response:
    if fmt == "json":
        return Response(
            content=ReportResponse.model_validate(report).model_dump_json(),
            media_type="application/json",
        )
    names = await service.employee_names(report)
    if fmt == "csv":
        return Response(
            content=export_csv(report, names),
            media_type="text/csv",
            headers={"Content-Disposition": f'attachment; filename="{filename}.csv"'},
        )
    return HTMLResponse(content=export_html(report, names))


@router.get("/monthly", response_model=ReportResponse, responses=_ERRORS)
async def monthly_payroll_report(
    db: DbSession,
    role: PayrollRole,
    month: MonthParam,
    fmt: Annotated[Literal["json", "csv", "html"], Query(alias="format")] = "json",
) -> Response:
    """Payroll for all employees for a month, as JSON, CSV or HTML."""
    service = ReportService(db)
    report = await service.monthly_payroll_report(parse_month(month), role.display_name)
    return await _render(service, report, fmt, f"payroll_{month}")


@router.get("/contributions", response_model=ReportResponse, responses=_ERRORS)
async def government_contributions_report(
    db: DbSession,
    role: PayrollRole,
    month: MonthParam,
    fmt: Annotated[Literal["json", "csv", "html"], Query(alias="format")] = "json",
) -> Response:
    """SSS, PhilHealth, Pag-IBIG and tax withheld for a month."""
    service = ReportService(db)
    report = await service.government_contributions_report(
        parse_month(month), role.display_name
    )
    return await _render(service, report, fmt, f"contributions_{month}")


@router.get("/attendance", response_class=PlainTextResponse, responses=_ERRORS)
async def daily_attendance_report(
    db: DbSession,
    role: ReportRole,
    day: Annotated[date, Query()],
) -> PlainTextResponse:
    """Fixed-width attendance sheet for one day."""
    return PlainTextResponse(await ReportService(db).daily_attendance_report(day))
