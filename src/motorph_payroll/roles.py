"""User roles and the position-to-role mapping used for access control."""

from __future__ import annotations

import logging
from enum import Enum

logger = logging.getLogger(__name__)


class UserRole(str, Enum):
    """Access roles, each with a display name and an access level (1-10)."""

    CEO = "CEO"
    VP = "VP"
    DIRECTOR = "DIRECTOR"
    MANAGER = "MANAGER"
    SUPERVISOR = "SUPERVISOR"
    TEAM_LEADER = "TEAM_LEADER"
    HR_MANAGER = "HR_MANAGER"
    HR_SPECIALIST = "HR_SPECIALIST"
    HR_ASSISTANT = "HR_ASSISTANT"
    PAYROLL_ADMIN = "PAYROLL_ADMIN"
    ACCOUNTANT = "ACCOUNTANT"
    IT_ADMIN = "IT_ADMIN"
    SENIOR_EMPLOYEE = "SENIOR_EMPLOYEE"
    EMPLOYEE = "EMPLOYEE"
    CONTRACTOR = "CONTRACTOR"
    INTERN = "INTERN"

    @property
    def display_name(self) -> str:
        return _ROLE_INFO[self][0]

    @property
    def access_level(self) -> int:
        return _ROLE_INFO[self][1]

    @property
    def can_access_payroll(self) -> bool:
        return self.access_level >= 6

    @property
    def can_access_hr(self) -> bool:
        return self in _HR_ROLES or self.access_level >= 8

    @property
    def can_access_reports(self) -> bool:
        return self.access_level >= 5

    @property
    def can_access_financial_data(self) -> bool:
        return self in (UserRole.PAYROLL_ADMIN, UserRole.ACCOUNTANT) or self.access_level >= 8

    @property
    def can_access_system_settings(self) -> bool:
        return self is UserRole.IT_ADMIN or self.access_level >= 9

    @property
    def is_executive(self) -> bool:
        return self.access_level >= 8

    @property
    def is_management(self) -> bool:
        return 5 <= self.access_level < 8


_ROLE_INFO: dict[UserRole, tuple[str, int]] = {
    UserRole.CEO: ("Chief Executive Officer", 10),
    UserRole.VP: ("Vice President", 9),
    UserRole.DIRECTOR: ("Director", 8),
    UserRole.MANAGER: ("Manager", 7),
    UserRole.SUPERVISOR: ("Supervisor", 6),
    UserRole.TEAM_LEADER: ("Team Leader", 5),
    UserRole.HR_MANAGER: ("HR Manager", 7),
    UserRole.HR_SPECIALIST: ("HR Specialist", 6),
    UserRole.HR_ASSISTANT: ("HR Assistant", 4),
    UserRole.PAYROLL_ADMIN: ("Payroll Administrator", 6),
    UserRole.ACCOUNTANT: ("Accountant", 5),
    UserRole.IT_ADMIN: ("IT Administrator", 7),
    UserRole.SENIOR_EMPLOYEE: ("Senior Employee", 3),
    UserRole.EMPLOYEE: ("Employee", 2),
    UserRole.CONTRACTOR: ("Contractor", 1),
    UserRole.INTERN: ("Intern", 1),
}

_HR_ROLES = frozenset({UserRole.HR_MANAGER, UserRole.HR_SPECIALIST, UserRole.HR_ASSISTANT})


class Position(str, Enum):
    """Known position tags, as stored (case-insensitively) on employees."""

    CHIEF_EXECUTIVE_OFFICER = "chief executive officer"
    CHIEF_OPERATING_OFFICER = "chief operating officer"
    CHIEF_FINANCE_OFFICER = "chief finance officer"
    CHIEF_MARKETING_OFFICER = "chief marketing officer"
    IT_OPERATIONS = "it operations and systems"
    HR_MANAGER = "hr manager"
    HR_TEAM_LEADER = "hr team leader"
    HR_RANK_AND_FILE = "hr rank and file"
    ACCOUNTING_HEAD = "accounting head"
    PAYROLL_MANAGER = "payroll manager"
    PAYROLL_TEAM_LEADER = "payroll team leader"
    PAYROLL_RANK_AND_FILE = "payroll rank and file"
    ACCOUNT_MANAGER = "account manager"
    ACCOUNT_TEAM_LEADER = "account team leader"
    ACCOUNT_RANK_AND_FILE = "account rank and file"
    SALES_AND_MARKETING = "sales & marketing"
    SUPPLY_CHAIN = "supply chain and logistics"
    CUSTOMER_SERVICE = "customer service and relations"

    @classmethod
    def parse(cls, value: str | None) -> Position | None:
        """Return the position for a stored tag, or None if unknown."""
        if not value:
            return None
        try:
            return cls(value.strip().lower())
        except ValueError:
            return None


POSITION_ROLES: dict[Position, UserRole] = {
    Position.CHIEF_EXECUTIVE_OFFICER: UserRole.CEO,
    Position.CHIEF_OPERATING_OFFICER: UserRole.VP,
    Position.CHIEF_FINANCE_OFFICER: UserRole.VP,
    Position.CHIEF_MARKETING_OFFICER: UserRole.VP,
    Position.IT_OPERATIONS: UserRole.IT_ADMIN,
    Position.HR_MANAGER: UserRole.HR_MANAGER,
    Position.HR_TEAM_LEADER: UserRole.HR_SPECIALIST,
    Position.HR_RANK_AND_FILE: UserRole.HR_ASSISTANT,
    Position.ACCOUNTING_HEAD: UserRole.MANAGER,
    Position.PAYROLL_MANAGER: UserRole.PAYROLL_ADMIN,
    Position.PAYROLL_TEAM_LEADER: UserRole.PAYROLL_ADMIN,
    Position.PAYROLL_RANK_AND_FILE: UserRole.ACCOUNTANT,
    Position.ACCOUNT_MANAGER: UserRole.MANAGER,
    Position.ACCOUNT_TEAM_LEADER: UserRole.TEAM_LEADER,
    Position.ACCOUNT_RANK_AND_FILE: UserRole.EMPLOYEE,
    Position.SALES_AND_MARKETING: UserRole.EMPLOYEE,
    Position.SUPPLY_CHAIN: UserRole.EMPLOYEE,
    Position.CUSTOMER_SERVICE: UserRole.EMPLOYEE,
}


def role_for_position(position: Position | str | None) -> UserRole:
    """Map a position to its role.

    Total over all inputs: blank or unrecognised positions get
    ``UserRole.EMPLOYEE``.
    """
    if not isinstance(position, Position):
        parsed = Position.parse(position)
        if parsed is None:
            if position and position.strip():
                logger.warning("Unknown position %r, defaulting to EMPLOYEE role", position)
            return UserRole.EMPLOYEE
        position = parsed
    return POSITION_ROLES.get(position, UserRole.EMPLOYEE)


def dashboard_for_role(role: UserRole) -> str:
    """Name of the landing view for a role."""
    if role.is_executive:
        return "Executive Dashboard"
    if role.can_access_hr:
        return "HR Dashboard"
    if role.can_access_payroll:
        return "Payroll Dashboard"
    if role.is_management:
        return "Management Dashboard"
    return "Employee Dashboard"
