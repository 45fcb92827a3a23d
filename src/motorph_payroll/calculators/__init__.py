"""Payroll calculation engine."""

from motorph_payroll.calculators.contributions import GovernmentContributions
from motorph_payroll.calculators.engine import (
    EmployeeLookupError,
    PayrollCalculationError,
    PayrollCalculator,
    PayrollValidationError,
)
from motorph_payroll.calculators.sources import SourceUnavailableError, UnavailableSource
from motorph_payroll.calculators.types import Payroll, PayrollRules

__all__ = [
    "EmployeeLookupError",
    "GovernmentContributions",
    "Payroll",
    "PayrollCalculationError",
    "PayrollCalculator",
    "PayrollRules",
    "PayrollValidationError",
    "SourceUnavailableError",
    "UnavailableSource",
]
