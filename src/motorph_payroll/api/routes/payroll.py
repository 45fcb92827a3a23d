"""Payroll API endpoints."""

from datetime import date
from typing import Annotated

from fastapi import APIRouter, Path, Query, status

from motorph_payroll.api.dependencies import DbSession, PayrollRole
from motorph_payroll.api.schemas import ErrorResponse, PayrollRequest, PayrollResponse
from motorph_payroll.calculators import Payroll
from motorph_payroll.services import PayrollService

router = APIRouter(prefix="/payroll", tags=["payroll"])

_ERRORS = {
    400: {"model": ErrorResponse},
    403: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
}


def _to_response(payroll: Payroll, payroll_id: int | None = None) -> PayrollResponse:
    return PayrollResponse.model_validate({**payroll.to_dict(), "payroll_id": payroll_id})


@router.get(
    "/{employee_id}/preview",
    response_model=PayrollResponse,
    responses=_ERRORS,
)
async def preview_payroll(
    db: DbSession,
    role: PayrollRole,
    employee_id: Annotated[int, Path()],
    period_start: Annotated[date, Query()],
    period_end: Annotated[date, Query()],
) -> PayrollResponse:
    """Calculate an employee's payroll without saving it."""
    payroll = await PayrollService(db).preview(employee_id, period_start, period_end)
    return _to_response(payroll)


@router.post(
    "/{employee_id}",
    response_model=PayrollResponse,
    status_code=status.HTTP_201_CREATED,
    responses=_ERRORS,
)
async def save_payroll(
    db: DbSession,
    role: PayrollRole,
    employee_id: Annotated[int, Path()],
    payload: PayrollRequest,
) -> PayrollResponse:
    """Calculate an employee's payroll and store the result."""
    payroll_id, payroll = await PayrollService(db).calculate_and_save(
        employee_id, payload.period_start, payload.period_end
    )
    await db.commit()
    return _to_response(payroll, payroll_id)


@router.get(
    "/{employee_id}",
    response_model=list[PayrollResponse],
    responses=_ERRORS,
)
async def list_saved_payrolls(
    db: DbSession,
    role: PayrollRole,
    employee_id: Annotated[int, Path()],
    period_start: Annotated[date, Query()],
    period_end: Annotated[date, Query()],
) -> list[PayrollResponse]:
    """Saved payrolls for an employee whose period lies in the given range."""
    service = PayrollService(db)
    payrolls = await service.payrolls.list_for_employee(employee_id, period_start, period_end)
    return [_to_response(p) for p in payrolls]
