"""FastAPI application factory."""

from __future__ import annotations

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from motorph_payroll.api.routes import (
    employees_router,
    health_router,
    payroll_router,
    reports_router,
)
from motorph_payroll.calculators import (
    EmployeeLookupError,
    PayrollCalculationError,
    PayrollValidationError,
)
from motorph_payroll.config import Settings
from motorph_payroll.database import create_engine, create_session_factory, init_schema

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler."""
    # Startup
    engine = app.state.engine
    if engine is not None:
        await init_schema(engine)
    yield
    # Shutdown
    if engine is not None:
        await engine.dispose()


def _error(status_code: int, detail: str, code: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"detail": detail, "code": code})


def create_app(
    settings: Settings,
    session_factory: async_sessionmaker[AsyncSession] | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    When ``session_factory`` is omitted an engine is created from
    ``settings.database_url`` and its schema is created on startup.
    """
    app = FastAPI(
        title=settings.app_name,
        description="MotorPH payroll, attendance and reporting API",
        version=settings.app_version,
        debug=settings.debug,
        lifespan=lifespan,
    )

    engine = None
    if session_factory is None:
        engine = create_engine(settings.database_url, echo=settings.debug)
        session_factory = create_session_factory(engine)
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = session_factory

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Exception handlers
    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        """Report malformed requests as 400."""
        messages = "; ".join(
            f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in exc.errors()
        )
        return _error(status.HTTP_400_BAD_REQUEST, messages, "INVALID_REQUEST")

    @app.exception_handler(PayrollValidationError)
    async def payroll_validation_handler(
        request: Request, exc: PayrollValidationError
    ) -> JSONResponse:
        return _error(status.HTTP_400_BAD_REQUEST, str(exc), "INVALID_PAYROLL_REQUEST")

    @app.exception_handler(EmployeeLookupError)
    async def employee_lookup_handler(
        request: Request, exc: EmployeeLookupError
    ) -> JSONResponse:
        return _error(status.HTTP_404_NOT_FOUND, str(exc), "EMPLOYEE_NOT_FOUND")

    @app.exception_handler(PayrollCalculationError)
    async def payroll_calculation_handler(
        request: Request, exc: PayrollCalculationError
    ) -> JSONResponse:
        return _error(422, str(exc), "CALCULATION_FAILED")

    @app.exception_handler(Exception)
    async def general_exception_handler(
        request: Request, exc: Exception
    ) -> JSONResponse:
        """Handle unexpected exceptions."""
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return _error(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "An unexpected error occurred",
            "INTERNAL_ERROR",
        )

    # Include routers
    app.include_router(health_router)
    app.include_router(employees_router, prefix="/api/v1")
    app.include_router(payroll_router, prefix="/api/v1")
    app.include_router(reports_router, prefix="/api/v1")

    return app
