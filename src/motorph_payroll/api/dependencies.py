"""FastAPI dependencies for dependency injection."""

from collections.abc import AsyncGenerator
from typing import Annotated

from fastapi import Depends, Header, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from motorph_payroll.roles import UserRole, role_for_position


async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """Get database session dependency."""
    async with request.app.state.session_factory() as session:
        try:
            yield session
        finally:
            await session.close()


async def get_user_role(
    x_user_position: Annotated[str | None, Header()] = None
) -> UserRole:
    """Resolve the caller's role from the position header."""
    if not x_user_position or not x_user_position.strip():
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="X-User-Position header is required",
        )
    return role_for_position(x_user_position)


async def require_payroll_access(
    role: Annotated[UserRole, Depends(get_user_role)]
) -> UserRole:
    """Allow only roles that may see payroll data."""
    if not role.can_access_payroll:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=f"{role.display_name} role cannot access payroll",
        )
    return role


async def require_report_access(
    role: Annotated[UserRole, Depends(get_user_role)]
) -> UserRole:
    """Allow only roles that may read attendance reports."""
    if not role.can_access_reports:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=f"{role.display_name} role cannot access reports",
        )
    return role


# Type aliases for cleaner dependency injection
DbSession = Annotated[AsyncSession, Depends(get_db_session)]
PayrollRole = Annotated[UserRole, Depends(require_payroll_access)]
ReportRole = Annotated[UserRole, Depends(require_report_access)]
