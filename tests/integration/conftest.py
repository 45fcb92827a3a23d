"""Integration test fixtures with a real (in-memory SQLite) database."""

from collections.abc import AsyncGenerator
from datetime import date, datetime, time
from decimal import Decimal

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from motorph_payroll.api.app import create_app
from motorph_payroll.config import Settings
from motorph_payroll.database import session_scope

from tests.conftest import make_attendance, make_employee, make_leave, make_overtime

CEO_ID = 10001
PAYROLL_MANAGER_ID = 10002
RANK_AND_FILE_ID = 10003

PAYROLL_HEADERS = {"X-User-Position": "Payroll Manager"}

APP_SETTINGS = Settings(
    database_url="sqlite+aiosqlite:///:memory:",
    app_name="MotorPH Payroll System",
    app_version="test",
    host="127.0.0.1",
    port=8000,
    debug=False,
    log_level="INFO",
)


def seed_records() -> list:
    """Three employees and a week of June 2024 activity for the rank-and-file one."""
    return [
        make_employee(
            employee_id=CEO_ID,
            first_name="Manuel III",
            last_name="Garcia",
            position="Chief Executive Officer",
            basic_salary=Decimal("90500"),
            rice_subsidy=Decimal("1500"),
            phone_allowance=Decimal("2000"),
            clothing_allowance=Decimal("1000"),
        ),
        make_employee(
            employee_id=PAYROLL_MANAGER_ID,
            first_name="Antonio",
            last_name="Lim",
            position="Payroll Manager",
            basic_salary=Decimal("60000"),
        ),
        make_employee(),
        make_attendance(date(2024, 6, 3), log_in=time(8, 30)),
        make_attendance(date(2024, 6, 4), log_out=time(16, 30)),
        make_attendance(date(2024, 6, 5)),
        make_attendance(date(2024, 6, 3), employee_id=PAYROLL_MANAGER_ID),
        make_overtime(datetime(2024, 6, 5, 17, 0), datetime(2024, 6, 5, 19, 0)),
        make_overtime(
            datetime(2024, 6, 6, 17, 0), datetime(2024, 6, 6, 19, 0), approved=False
        ),
        make_leave(date(2024, 6, 10), date(2024, 6, 10)),
    ]


@pytest_asyncio.fixture
async def seeded_db(
    session_factory: async_sessionmaker[AsyncSession],
) -> async_sessionmaker[AsyncSession]:
    """Commit the seed data and hand back the session factory."""
    async with session_scope(session_factory) as session:
        session.add_all(seed_records())
    return session_factory


@pytest_asyncio.fixture
async def db_session(
    seeded_db: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    """Session over seeded data, rolled back after the test."""
    async with seeded_db() as session:
        yield session
        await session.rollback()


@pytest_asyncio.fixture
async def client(
    seeded_db: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client for the app bound to the seeded database."""
    app = create_app(APP_SETTINGS, session_factory=seeded_db)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client
