"""Loguru setup with per-request correlation ids."""

from __future__ import annotations

import logging
import os
import sys
from contextvars import ContextVar
from typing import Any

from loguru import logger as _logger

from .sensitive_filter import sanitize_record

_FMT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<lvl>{level:<8}</lvl> | "
    "<magenta>{extra[correlation_id]}</magenta> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "<lvl>{message}</lvl>"
)
_NO_CORRELATION = "-"
_QUIET_LIBRARIES = {"sqlalchemy": logging.WARNING, "werkzeug": logging.INFO}

_CORRELATION_ID: ContextVar[str] = ContextVar("correlation_id", default=_NO_CORRELATION)

_logger.configure(extra={"correlation_id": _NO_CORRELATION})


class _StdlibBridge(logging.Handler):
    """Forwards stdlib records (werkzeug, sqlalchemy) into loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = _logger.level(record.levelname).name
        except ValueError:
            level = record.levelno
        _logger.bind(correlation_id=_CORRELATION_ID.get()).opt(
            depth=6, exception=record.exc_info
        ).log(level, record.getMessage())


class ContextualLogger:
    """Loguru proxy; every call is bound to the current correlation id."""

    def __getattr__(self, name: str) -> Any:  # pragma: no cover
        return getattr(_logger.bind(correlation_id=_CORRELATION_ID.get()), name)


def set_correlation_id(value: str | None) -> None:
    _CORRELATION_ID.set(value or _NO_CORRELATION)


def get_correlation_id() -> str:
    return _CORRELATION_ID.get()


def clear_correlation_id() -> None:
    _CORRELATION_ID.set(_NO_CORRELATION)


def setup_logging(
    level: str | None = None,
    log_file: str | None = None,
    *,
    serialize: bool = False,
) -> None:
    """(Re)install sinks. Safe to call more than once.

    ``serialize`` switches both sinks to loguru JSON lines.
    """
    level = (level or os.getenv("LOG_LEVEL") or "INFO").upper()
    sink_options: dict[str, Any] = {
        "level": level,
        "backtrace": False,
        "diagnose": False,
        "filter": sanitize_record,
        "serialize": serialize,
    }
    if not serialize:
        sink_options["format"] = _FMT

    _logger.remove()
    _logger.add(sys.stderr, colorize=not serialize, **sink_options)

    if log_file:
        os.makedirs(os.path.dirname(os.path.abspath(log_file)), exist_ok=True)
        _logger.add(
            log_file,
            colorize=False,
            enqueue=True,
            rotation="20 MB",
            retention=5,
            encoding="utf-8",
            **sink_options,
        )

    logging.basicConfig(handlers=[_StdlibBridge()], level=0, force=True)
    for name, lib_level in _QUIET_LIBRARIES.items():
        logging.getLogger(name).setLevel(lib_level)


logger = ContextualLogger()

__all__ = [
    "clear_correlation_id",
    "get_correlation_id",
    "logger",
    "set_correlation_id",
    "setup_logging",
]
