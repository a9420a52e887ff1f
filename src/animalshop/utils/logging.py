"""Logging setup: stdlib handlers underneath, structlog on top.

The environment name (``ENV``, ``ENVIRONMENT`` or ``PROTEAN_ENV``) picks both
the default level and the renderer: JSON lines in production and staging,
coloured console output with rich tracebacks everywhere else.
"""

import logging
import logging.handlers
import os
import sys
from pathlib import Path

import structlog

DEFAULT_LEVELS = {
    "production": "INFO",
    "staging": "INFO",
    "development": "DEBUG",
    "test": "WARNING",
}

LOG_FILE = "animalshop.log"


def current_environment() -> str:
    return (os.getenv("ENV") or os.getenv("ENVIRONMENT") or os.getenv("PROTEAN_ENV") or "development").lower()


def _handlers(log_dir: str | None) -> list[logging.Handler]:
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_dir:
        directory = Path(log_dir)
        directory.mkdir(parents=True, exist_ok=True)
        handlers.append(
            logging.handlers.RotatingFileHandler(
                filename=directory / LOG_FILE,
                maxBytes=10 * 1024 * 1024,
                backupCount=5,
                encoding="utf-8",
            )
        )
    return handlers


def configure_logging(level: str | None = None, log_dir: str | None = None) -> None:
    """Configure stdlib logging and structlog once for the process.

    Log files go to ``LOG_DIR`` (default ``logs``) except under the test
    environment, which logs to stdout only.
    """
    env = current_environment()
    level = (level or os.getenv("LOG_LEVEL") or DEFAULT_LEVELS.get(env, "INFO")).upper()
    if log_dir is None and env != "test":
        log_dir = os.getenv("LOG_DIR", "logs")

    logging.basicConfig(level=level, format="%(message)s", handlers=_handlers(log_dir), force=True)
    logging.getLogger("protean").setLevel(logging.WARNING)

    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]
    if env in ("production", "staging"):
        processors += [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    else:
        processors.append(
            structlog.dev.ConsoleRenderer(
                colors=sys.stdout.isatty(),
                exception_formatter=structlog.dev.RichTracebackFormatter(max_frames=2),
            )
        )

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
