"""Entry point for running the API server with uvicorn."""

import uvicorn

from motorph_payroll.api import create_app
from motorph_payroll.config import Settings, configure_logging


def main() -> None:
    """Run the application."""
    settings = Settings.from_env()
    configure_logging(settings)
    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
