"""Employee and attendance API endpoints."""

from datetime import date
from typing import Annotated

from fastapi import APIRouter, HTTPException, Path, Query, status

from motorph_payroll.api.dependencies import DbSession
from motorph_payroll.api.schemas import (
    AttendanceCreate,
    AttendanceResponse,
    EmployeeCreate,
    EmployeeResponse,
    ErrorResponse,
)
from motorph_payroll.models import Attendance, Employee
from motorph_payroll.repositories import AttendanceRepository, EmployeeRepository

router = APIRouter(prefix="/employees", tags=["employees"])


async def _get_employee_or_404(repo: EmployeeRepository, employee_id: int) -> Employee:
    employee = await repo.get_employee(employee_id)
    if employee is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Employee not found with ID: {employee_id}",
        )
    return employee


# ============================================================================
# Employees
# ============================================================================


@router.get("", response_model=list[EmployeeResponse])
async def list_employees(
    db: DbSession,
    search: Annotated[str | None, Query()] = None,
    status_filter: Annotated[str | None, Query(alias="status")] = None,
    position: Annotated[str | None, Query()] = None,
) -> list[EmployeeResponse]:
    """List employees, optionally filtered by name search, status or position."""
    repo = EmployeeRepository(db)
    if search:
        employees = await repo.search(search)
    elif status_filter:
        employees = await repo.list_by_status(status_filter)
    elif position:
        employees = await repo.list_by_position(position)
    else:
        employees = await repo.list_employees()
    return [EmployeeResponse.model_validate(e) for e in employees]


@router.get(
    "/{employee_id}",
    response_model=EmployeeResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_employee(
    db: DbSession,
    employee_id: Annotated[int, Path(gt=0)],
) -> EmployeeResponse:
    """Get a single employee."""
    employee = await _get_employee_or_404(EmployeeRepository(db), employee_id)
    return EmployeeResponse.model_validate(employee)


@router.post(
    "",
    response_model=EmployeeResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}},
)
async def create_employee(db: DbSession, payload: EmployeeCreate) -> EmployeeResponse:
    """Add an employee."""
    try:
        employee = await EmployeeRepository(db).add(Employee(**payload.model_dump()))
    except ValueError as e:
        await db.rollback()
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
    await db.commit()
    return EmployeeResponse.model_validate(employee)


# ============================================================================
# Attendance
# ============================================================================


@router.get(
    "/{employee_id}/attendance",
    response_model=list[AttendanceResponse],
    responses={404: {"model": ErrorResponse}},
)
async def list_attendance(
    db: DbSession,
    employee_id: Annotated[int, Path(gt=0)],
    start: date | None = None,
    end: date | None = None,
) -> list[AttendanceResponse]:
    """Attendance for an employee; defaults to the current month to date."""
    await _get_employee_or_404(EmployeeRepository(db), employee_id)
    today = date.today()
    start = start or today.replace(day=1)
    end = end or today
    if end < start:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid date range: end ({end}) is before start ({start})",
        )
    records = await AttendanceRepository(db).get_attendance(employee_id, start, end)
    return [AttendanceResponse.model_validate(r) for r in records]


@router.post(
    "/{employee_id}/attendance",
    response_model=AttendanceResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def record_attendance(
    db: DbSession,
    employee_id: Annotated[int, Path(gt=0)],
    payload: AttendanceCreate,
) -> AttendanceResponse:
    """Record one day of attendance."""
    await _get_employee_or_404(EmployeeRepository(db), employee_id)
    repo = AttendanceRepository(db)
    if await repo.get_attendance_on(employee_id, payload.work_date) is not None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Attendance already recorded for {payload.work_date}",
        )
    try:
        record = await repo.add(Attendance(employee_id=employee_id, **payload.model_dump()))
    except ValueError as e:
        await db.rollback()
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
    await db.commit()
    return AttendanceResponse.model_validate(record)
