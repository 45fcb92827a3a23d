"""Configuration management for the payroll application."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from dotenv import load_dotenv


@dataclass(frozen=True)
class Settings:
    """Application settings loaded from environment.

    Built once by the entry point (API server or CLI) and passed to
    whatever needs it; nothing in the package reads the environment on
    its own.
    """

    database_url: str
    app_name: str
    app_version: str
    host: str
    port: int
    debug: bool
    log_level: str

    @classmethod
    def from_env(cls) -> Settings:
        """Load settings from environment variables."""
        load_dotenv()

        return cls(
            database_url=os.getenv(
                "DATABASE_URL",
                "sqlite+aiosqlite:///./motorph_payroll.db",
            ),
            app_name=os.getenv("APP_NAME", "MotorPH Payroll System"),
            app_version=os.getenv("APP_VERSION", "1.0.0"),
            host=os.getenv("HOST", "127.0.0.1"),
            port=int(os.getenv("PORT", "8000")),
            debug=os.getenv("DEBUG", "false").lower() == "true",
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )


def configure_logging(settings: Settings) -> None:
    """Configure root logging for an entry point."""
    logging.basicConfig(
        level=logging.DEBUG if settings.debug else getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
