"""Logging configuration for the Escape Log.

structlog renders on top of standard library handlers: console output plus
rotating files (``<prefix>.log`` and ``<prefix>_error.log``) under a log
directory. Production and staging emit JSON lines; every other environment
gets the Rich console renderer.

The environment is read from ``ENV``, ``ENVIRONMENT`` or ``PROTEAN_ENV`` (in
that order). ``LOG_LEVEL`` overrides the level the environment implies.
"""

import logging
import logging.handlers
import os
import sys
from pathlib import Path

import structlog

_ENV_LEVELS = {
    "production": "INFO",
    "staging": "INFO",
    "development": "DEBUG",
    "test": "WARNING",
}

_JSON_ENVIRONMENTS = ("production", "staging")

# Libraries that are chatty at DEBUG
_QUIET_LOGGERS = ("protean", "asyncio", "httpx", "sqlalchemy.engine")

_MAX_BYTES = 10 * 1024 * 1024
_BACKUP_COUNT = 5


def current_environment() -> str:
    return (os.getenv("ENV") or os.getenv("ENVIRONMENT") or os.getenv("PROTEAN_ENV") or "development").lower()


def get_log_level() -> str:
    """Log level for the current environment, unless ``LOG_LEVEL`` says otherwise."""
    return os.getenv("LOG_LEVEL", _ENV_LEVELS.get(current_environment(), "INFO")).upper()


def _rotating_handler(filename: Path, level) -> logging.Handler:
    handler = logging.handlers.RotatingFileHandler(
        filename=filename,
        maxBytes=_MAX_BYTES,
        backupCount=_BACKUP_COUNT,
        encoding="utf-8",
    )
    handler.setLevel(level)
    return handler


def setup_stdlib_logging(level: str | None = None, log_dir: str = "logs", log_file_prefix: str = "escapelog") -> None:
    """Route the root logger to stdout and to rotating files in ``log_dir``."""
    log_level = level or get_log_level()

    log_path = Path(log_dir)
    log_path.mkdir(parents=True, exist_ok=True)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers = [
        console_handler,
        _rotating_handler(log_path / f"{log_file_prefix}.log", log_level),
        _rotating_handler(log_path / f"{log_file_prefix}_error.log", logging.ERROR),
    ]

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def _renderer(env: str):
    if env in _JSON_ENVIRONMENTS:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(
        colors=True,
        exception_formatter=structlog.dev.RichTracebackFormatter(show_locals=True, max_frames=2),
    )


def setup_structlog(env: str | None = None) -> None:
    """Configure structlog processors and the final renderer for ``env``."""
    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.CallsiteParameterAdder(
            parameters=[
                structlog.processors.CallsiteParameter.MODULE,
                structlog.processors.CallsiteParameter.FUNC_NAME,
                structlog.processors.CallsiteParameter.LINENO,
            ]
        ),
        _renderer(env or current_environment()),
    ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def configure_logging(level: str | None = None, log_dir: str = "logs", log_file_prefix: str = "escapelog") -> None:
    """Configure all logging for the application."""
    setup_stdlib_logging(level=level, log_dir=log_dir, log_file_prefix=log_file_prefix)
    setup_structlog()


def bind_request_context(method: str, path: str) -> None:
    """Tag every log line emitted while handling this request."""
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(method=method, path=path)


def clear_request_context() -> None:
    structlog.contextvars.clear_contextvars()
