from __future__ import annotations

"""Logging
----------
Rich console output on stderr, plus an optional rotating JSON log file when
LOG_TO_FILE is set. Context bound with ``bind`` (e.g. the page being resolved)
is attached to every record and lands as extra keys in the JSON lines.
"""

import json
import logging
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from typing import Any, Dict, Optional

from rich.console import Console
from rich.logging import RichHandler

from pagepath.utils.config import get_settings, LogLevel


__all__ = [
    "get_logger",
    "set_log_level",
    "bind",
    "unbind",
    "log_with_context",
]


_configured = False
_context: Dict[str, Any] = {}


class JsonFormatter(logging.Formatter):
    """One JSON object per line; bound context is merged into the object."""

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(timespec="seconds"),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        context = getattr(record, "context", None)
        if isinstance(context, dict):
            payload.update(context)
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False, default=str)


def _configure() -> None:
    global _configured
    if _configured:
        return

    settings = get_settings()
    level = logging.getLevelName(settings.LOG_LEVEL.value)

    root = logging.getLogger()
    root.setLevel(level)
    for handler in list(root.handlers):
        root.removeHandler(handler)

    console = RichHandler(
        console=Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
        markup=settings.COLORIZED_OUTPUT,
    )
    console.setFormatter(logging.Formatter("%(message)s"))
    root.addHandler(console)

    if settings.LOG_TO_FILE:
        settings.LOG_FILE.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            settings.LOG_FILE,
            maxBytes=2 * 1024 * 1024,
            backupCount=3,
            encoding="utf-8",
            delay=True,
        )
        file_handler.setFormatter(JsonFormatter())
        root.addHandler(file_handler)

    # playwright's own debug output drowns the per-hop lines
    logging.getLogger("playwright").setLevel(max(level, logging.WARNING))
    _configured = True


def get_logger(name: Optional[str] = None) -> logging.LoggerAdapter:
    """Logger whose records carry the globally bound context."""
    _configure()
    return logging.LoggerAdapter(logging.getLogger(name or "pagepath"), {"context": _context})


def set_log_level(level: LogLevel | str) -> None:
    _configure()
    name = level.value if isinstance(level, LogLevel) else str(level).upper()
    logging.getLogger().setLevel(logging.getLevelName(name))


def bind(**kwargs: Any) -> None:
    """Attach ``kwargs`` to every following record, e.g. ``bind(page="Shop")``."""
    _context.update(kwargs)


def unbind(*keys: str) -> None:
    for key in keys:
        _context.pop(key, None)


def log_with_context(logger: logging.LoggerAdapter, **kwargs: Any) -> logging.LoggerAdapter:
    """
    Adapter for a scoped section: the bound context plus ``kwargs``.

        scoped = log_with_context(log, path="Header > #2 of Links")
        scoped.debug("resolving")
    """
    return logging.LoggerAdapter(logger.logger, {"context": {**_context, **kwargs}})
