"""Logging configuration for the storefront.

stdlib logging owns the handlers: stdout, a rotating application log and a
rotating error log under ``LOG_DIR``. structlog wraps it, rendering JSON in
production and staging and colored console output everywhere else.
"""

import logging
import logging.handlers
import os
import sys
from pathlib import Path
from typing import Any

import structlog

_LEVELS_BY_ENV = {
    "production": "INFO",
    "staging": "INFO",
    "development": "DEBUG",
    "test": "WARNING",
}

_JSON_ENVS = frozenset({"production", "staging"})

_QUIET_LOGGERS = ("protean", "urllib3", "asyncio", "stripe", "httpx")

_MAX_LOG_BYTES = 10 * 1024 * 1024
_LOG_BACKUPS = 5


def current_env() -> str:
    return (os.getenv("PROTEAN_ENV") or os.getenv("ENVIRONMENT") or "development").lower()


def get_log_level() -> str:
    """Level for the current environment; ``LOG_LEVEL`` wins when set."""
    default = _LEVELS_BY_ENV.get(current_env(), "INFO")
    return os.getenv("LOG_LEVEL", default).upper()


def _rotating(path: Path, level: int | str) -> logging.Handler:
    handler = logging.handlers.RotatingFileHandler(
        filename=path, maxBytes=_MAX_LOG_BYTES, backupCount=_LOG_BACKUPS, encoding="utf-8"
    )
    handler.setLevel(level)
    return handler


def _handlers(level: str) -> list[logging.Handler]:
    log_dir = Path(os.getenv("LOG_DIR", "logs"))
    log_dir.mkdir(parents=True, exist_ok=True)

    console = logging.StreamHandler(sys.stdout)
    console.setLevel(level)
    return [
        console,
        _rotating(log_dir / "storefront.log", level),
        _rotating(log_dir / "storefront_error.log", logging.ERROR),
    ]


def _renderer(env: str) -> structlog.types.Processor:
    if env in _JSON_ENVS:
        return structlog.processors.JSONRenderer()
    traceback = structlog.dev.RichTracebackFormatter(show_locals=False, max_frames=3)
    return structlog.dev.ConsoleRenderer(colors=True, exception_formatter=traceback)


def _processors(env: str) -> list[structlog.types.Processor]:
    callsite = structlog.processors.CallsiteParameterAdder(
        parameters=[
            structlog.processors.CallsiteParameter.MODULE,
            structlog.processors.CallsiteParameter.FUNC_NAME,
            structlog.processors.CallsiteParameter.LINENO,
        ]
    )
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        callsite,
        _renderer(env),
    ]


def configure_logging() -> None:
    """Install handlers on the root logger and point structlog at it.

    Safe to call more than once; existing root handlers are replaced.
    """
    env = current_env()
    level = get_log_level()

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers = _handlers(level)
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    structlog.configure(
        processors=_processors(env),
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


def add_context(**kwargs: Any) -> None:
    """Bind key-values that every later log line in this context carries."""
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    structlog.contextvars.clear_contextvars()
