"""Pytest fixtures for MotorPH payroll tests."""

from __future__ import annotations

from datetime import date, datetime, time
from decimal import Decimal
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from motorph_payroll.database import create_engine, create_session_factory, init_schema
from motorph_payroll.models import Attendance, Employee, LeaveRequest, LeaveStatus, Overtime

# In-memory SQLite shared by every session of one engine
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

# Fixed "today" so June 2024 is always a past period
TODAY = date(2024, 7, 15)


# ============================================================================
# Factories
# ============================================================================


def make_employee(**overrides) -> Employee:
    """Build an unsaved employee; defaults to a 44,000/month rank-and-file."""
    fields = {
        "employee_id": 10003,
        "first_name": "Bianca Sofia",
        "last_name": "Aquino",
        "status": "Regular",
        "position": "Account Rank and File",
        "basic_salary": Decimal("44000"),
        "rice_subsidy": Decimal("1500"),
        "phone_allowance": Decimal("1000"),
        "clothing_allowance": Decimal("1000"),
    }
    fields.update(overrides)
    return Employee(**fields)


def make_attendance(
    day: date,
    log_in: time | None = time(8, 0),
    log_out: time | None = time(17, 0),
    employee_id: int = 10003,
) -> Attendance:
    return Attendance(employee_id=employee_id, work_date=day, log_in=log_in, log_out=log_out)


def make_overtime(
    start: datetime,
    end: datetime,
    approved: bool = True,
    employee_id: int = 10003,
) -> Overtime:
    return Overtime(
        employee_id=employee_id,
        start_datetime=start,
        end_datetime=end,
        approved=approved,
    )


def make_leave(
    start: date,
    end: date,
    leave_type: str = "Unpaid",
    status: str = LeaveStatus.APPROVED,
    employee_id: int = 10003,
) -> LeaveRequest:
    return LeaveRequest(
        employee_id=employee_id,
        leave_type=leave_type,
        start_date=start,
        end_date=end,
        status=status,
    )


# ============================================================================
# In-memory sources for calculator tests
# ============================================================================


class FakeEmployees:
    def __init__(self, *employees: Employee):
        self.employees = {e.employee_id: e for e in employees}

    async def get_employee(self, employee_id: int) -> Employee | None:
        return self.employees.get(employee_id)


class FakeAttendance:
    def __init__(self, *records: Attendance):
        self.records = list(records)

    async def get_attendance(self, employee_id, period_start, period_end):
        return [r for r in self.records if r.employee_id == employee_id]


class FakeOvertime:
    def __init__(self, *records: Overtime):
        self.records = list(records)

    async def get_overtime(self, employee_id, period_start, period_end):
        return [r for r in self.records if r.employee_id == employee_id]


class FakeLeaves:
    def __init__(self, *leaves: LeaveRequest):
        self.leaves = list(leaves)

    async def get_approved_leaves(self, employee_id, period_start, period_end):
        return [leave for leave in self.leaves if leave.employee_id == employee_id]


class BrokenSource:
    """Fails every lookup with the given exception."""

    def __init__(self, error: Exception):
        self.error = error

    async def get_employee(self, *args):
        raise self.error

    async def get_attendance(self, *args):
        raise self.error

    async def get_overtime(self, *args):
        raise self.error

    async def get_approved_leaves(self, *args):
        raise self.error


# ============================================================================
# Database fixtures
# ============================================================================


@pytest_asyncio.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """Create a fresh in-memory database per test."""
    engine = create_engine(TEST_DATABASE_URL)
    await init_schema(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return create_session_factory(engine)


@pytest_asyncio.fixture
async def session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    """Create a database session for each test."""
    async with session_factory() as session:
        yield session
        await session.rollback()
