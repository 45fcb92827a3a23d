"""Unit tests for roles and the position mapping."""

import logging

import pytest

from motorph_payroll.roles import (
    POSITION_ROLES,
    Position,
    UserRole,
    dashboard_for_role,
    role_for_position,
)


class TestPositionMapping:
    """Test position to role resolution."""

    def test_every_position_has_a_role(self):
        """Every known position should map to a role."""
        assert set(POSITION_ROLES) == set(Position)

    @pytest.mark.parametrize(
        "position,role",
        [
            ("Chief Executive Officer", UserRole.CEO),
            ("Chief Finance Officer", UserRole.VP),
            ("HR Manager", UserRole.HR_MANAGER),
            ("Payroll Manager", UserRole.PAYROLL_ADMIN),
            ("Payroll Rank and File", UserRole.ACCOUNTANT),
            ("IT Operations and Systems", UserRole.IT_ADMIN),
            ("Account Team Leader", UserRole.TEAM_LEADER),
            ("Customer Service and Relations", UserRole.EMPLOYEE),
        ],
    )
    def test_known_positions(self, position, role):
        """Known positions should map to their roles."""
        assert role_for_position(position) is role

    def test_matching_ignores_case_and_whitespace(self):
        """Position matching should ignore case and whitespace."""
        assert role_for_position("  payroll MANAGER ") is UserRole.PAYROLL_ADMIN
        assert Position.parse(" HR Manager") is Position.HR_MANAGER

    def test_accepts_position_enum(self):
        """Position members should be accepted directly."""
        assert role_for_position(Position.ACCOUNTING_HEAD) is UserRole.MANAGER

    @pytest.mark.parametrize("position", [None, "", "   "])
    def test_blank_position_is_employee(self, position):
        """Blank positions should map to EMPLOYEE."""
        assert role_for_position(position) is UserRole.EMPLOYEE

    def test_unknown_position_is_employee_and_logged(self, caplog):
        """Unknown positions should map to EMPLOYEE and log a warning."""
        with caplog.at_level(logging.WARNING, logger="motorph_payroll.roles"):
            assert role_for_position("Astronaut") is UserRole.EMPLOYEE
        assert "Unknown position 'Astronaut'" in caplog.text


class TestRolePermissions:
    """Test access checks derived from access levels."""

    def test_payroll_access(self):
        """Payroll access should need access level 6."""
        assert UserRole.PAYROLL_ADMIN.can_access_payroll
        assert UserRole.CEO.can_access_payroll
        assert UserRole.SUPERVISOR.can_access_payroll
        assert not UserRole.ACCOUNTANT.can_access_payroll
        assert not UserRole.EMPLOYEE.can_access_payroll

    def test_financial_data(self):
        """Financial data should be open to finance roles and executives."""
        assert UserRole.ACCOUNTANT.can_access_financial_data
        assert UserRole.DIRECTOR.can_access_financial_data
        assert not UserRole.MANAGER.can_access_financial_data

    def test_hr_access(self):
        """HR access should be open to HR roles and executives."""
        assert UserRole.HR_ASSISTANT.can_access_hr
        assert UserRole.VP.can_access_hr
        assert not UserRole.IT_ADMIN.can_access_hr

    def test_report_access(self):
        """Report access should need access level 5."""
        assert UserRole.TEAM_LEADER.can_access_reports
        assert UserRole.ACCOUNTANT.can_access_reports
        assert not UserRole.HR_ASSISTANT.can_access_reports
        assert not UserRole.EMPLOYEE.can_access_reports

    def test_system_settings(self):
        """System settings should be open to IT and level 9 and above."""
        assert UserRole.IT_ADMIN.can_access_system_settings
        assert UserRole.VP.can_access_system_settings
        assert not UserRole.DIRECTOR.can_access_system_settings

    def test_display_name_and_level(self):
        """Roles should carry a display name and access level."""
        assert UserRole.PAYROLL_ADMIN.display_name == "Payroll Administrator"
        assert UserRole.CEO.access_level == 10
        assert UserRole.INTERN.access_level == 1


class TestDashboards:
    """Test landing view selection."""

    @pytest.mark.parametrize(
        "role,dashboard",
        [
            (UserRole.CEO, "Executive Dashboard"),
            (UserRole.HR_MANAGER, "HR Dashboard"),
            (UserRole.PAYROLL_ADMIN, "Payroll Dashboard"),
            (UserRole.TEAM_LEADER, "Management Dashboard"),
            (UserRole.EMPLOYEE, "Employee Dashboard"),
        ],
    )
    def test_dashboard_for_role(self, role, dashboard):
        """Each role should land on its dashboard."""
        assert dashboard_for_role(role) == dashboard
