"""Unit tests for government contributions and withholding tax."""

from decimal import Decimal

import pytest

from motorph_payroll.calculators.contributions import (
    GovernmentContributions,
    annual_income_tax,
    monthly_income_tax,
    pagibig_contribution,
    philhealth_contribution,
    sss_contribution,
)


class TestSSSContribution:
    """Test the SSS bracket table."""

    @pytest.mark.parametrize(
        "salary,expected",
        [
            ("0", "180.00"),
            ("4000", "180.00"),
            ("4000.01", "202.50"),
            ("4750", "202.50"),
            ("10000", "360.00"),
            ("10000.01", "540.00"),
            ("25000", "900.00"),
        ],
    )
    def test_bracket_edges(self, salary, expected):
        """A salary exactly on a ceiling belongs to that bracket."""
        assert sss_contribution(Decimal(salary)) == Decimal(expected)

    def test_above_last_bracket_pays_maximum(self):
        """Salaries past the last bracket should pay the maximum SSS share."""
        assert sss_contribution(Decimal("25000.01")) == Decimal("1125.00")
        assert sss_contribution(Decimal("90500")) == Decimal("1125.00")


class TestPhilHealthContribution:
    """Test PhilHealth premium share clamping."""

    def test_low_salary_pays_minimum(self):
        """Salaries at or below the floor should pay the minimum premium."""
        assert philhealth_contribution(Decimal("10000")) == Decimal("500.00")

    def test_mid_salary_pays_half_of_five_percent(self):
        """Mid-range salaries should pay half of the 5% premium."""
        assert philhealth_contribution(Decimal("30000")) == Decimal("750.00")

    def test_high_salary_pays_maximum(self):
        """Salaries at or above the ceiling should pay the maximum premium."""
        assert philhealth_contribution(Decimal("250000")) == Decimal("5000.00")

    def test_result_is_rounded_to_cents(self):
        """PhilHealth share should be rounded to centavos."""
        # 33333.33 * 0.025 = 833.33325
        assert philhealth_contribution(Decimal("33333.33")) == Decimal("833.33")


class TestPagIbigContribution:
    """Test Pag-IBIG contribution tiers."""

    def test_low_income_rate_up_to_ceiling(self):
        """Salaries up to the ceiling should use the low-income rate."""
        assert pagibig_contribution(Decimal("1500")) == Decimal("15.00")

    def test_standard_rate_just_above_ceiling(self):
        """Salaries just above the ceiling should use the standard rate."""
        assert pagibig_contribution(Decimal("1501")) == Decimal("30.02")

    def test_capped_at_maximum(self):
        """Pag-IBIG should never exceed the monthly cap."""
        assert pagibig_contribution(Decimal("10000")) == Decimal("200.00")
        assert pagibig_contribution(Decimal("44000")) == Decimal("200.00")


class TestIncomeTax:
    """Test progressive annual and monthly withholding tax."""

    def test_exempt_up_to_250000(self):
        """Annual income up to 250,000 should owe no tax."""
        assert annual_income_tax(Decimal("250000")) == Decimal("0")
        assert monthly_income_tax(Decimal("20833.33")) == Decimal("0.00")

    def test_just_above_exemption(self):
        """Income just above the exemption should be taxed on the excess only."""
        assert annual_income_tax(Decimal("250100")) == Decimal("15.00")

    def test_bracket_boundaries(self):
        """Each bracket floor should yield that bracket's base amount."""
        assert annual_income_tax(Decimal("400000")) == Decimal("22500")
        assert annual_income_tax(Decimal("800000")) == Decimal("102500")
        assert annual_income_tax(Decimal("2000000")) == Decimal("402500")
        assert annual_income_tax(Decimal("8000000")) == Decimal("2202500")

    def test_top_bracket_is_open_ended(self):
        """The top bracket should apply to any income above its floor."""
        assert annual_income_tax(Decimal("9000000")) == Decimal("2552500")

    def test_zero_or_negative_salary_owes_nothing(self):
        """Non-positive salaries should owe no tax."""
        assert annual_income_tax(Decimal("0")) == Decimal("0")
        assert annual_income_tax(Decimal("-100")) == Decimal("0")

    def test_monthly_is_annual_over_twelve_rounded(self):
        """Monthly tax should be the annual tax over twelve, rounded."""
        # 30000 * 12 = 360000 -> (360000 - 250000) * 0.15 = 16500 / 12
        assert monthly_income_tax(Decimal("30000")) == Decimal("1375.00")
        # 44000 * 12 = 528000 -> 22500 + 128000 * 0.20 = 48100 / 12
        assert monthly_income_tax(Decimal("44000")) == Decimal("4008.33")


class TestGovernmentContributions:
    """Test the combined contribution value."""

    def test_for_salary(self):
        """All four contributions should be computed from the monthly salary."""
        c = GovernmentContributions.for_salary(Decimal("44000"))

        assert c.sss == Decimal("1125.00")
        assert c.philhealth == Decimal("1100.00")
        assert c.pagibig == Decimal("200.00")
        assert c.tax == Decimal("4008.33")
        assert c.total == Decimal("6433.33")
