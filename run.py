"""
Holiday Planner API: runner.

Starts the FastAPI app under uvicorn with host, port and log level taken
from settings (HOLIDAYS_HOST, HOLIDAYS_PORT, HOLIDAYS_LOG_LEVEL).

Usage:
    python run.py
    HOLIDAYS_PORT=9000 python run.py
"""

from __future__ import annotations

import logging
import sys

import structlog
import uvicorn

from config.settings import settings

# ── Logging setup ──────────────────────────────────────────────────────────────
structlog.configure(
    processors=[
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.dev.ConsoleRenderer(),
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s  %(levelname)-8s  %(name)s  %(message)s",
    stream=sys.stdout,
)

log = structlog.get_logger("holidays.run")


def main() -> None:
    from api.app import app

    log.info(
        "holiday planner api starting",
        host=settings.host,
        port=settings.port,
        upstream=settings.available_countries_url,
    )
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
