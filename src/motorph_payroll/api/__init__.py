"""HTTP API."""

from motorph_payroll.api.app import create_app

__all__ = ["create_app"]
