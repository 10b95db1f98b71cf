"""Logging utilities for grantree.

This module provides:
- Logging configuration from GrantsConfig
- Safe preview utility for grant strings and other values
- Structured (JSON) or plain-text formatting
- Automatic user/path context on grant decisions
"""

from __future__ import annotations

import json
import logging
from typing import Any, Optional

from .config import GrantsConfig, LogLevel

# LogRecord attributes that are not "extra" fields.
_RECORD_ATTRS = frozenset(
    {
        "name", "msg", "args", "created", "filename", "funcName",
        "levelname", "levelno", "lineno", "module", "msecs",
        "message", "pathname", "process", "processName", "relativeCreated",
        "thread", "threadName", "exc_info", "exc_text", "stack_info",
        "taskName", "user", "path",
    }
)


def safe_preview(value: Any, limit: int = 240) -> str:
    """Create a length-bounded, single-line preview of a value for logging.

    Args:
        value: The value to preview (any type)
        limit: Maximum length of the preview (default: 240)

    Returns:
        A truncated string representation
    """
    if value is None:
        return ""

    if isinstance(value, str):
        s = value
    elif isinstance(value, (dict, list, tuple)):
        try:
            s = json.dumps(value, default=str, ensure_ascii=False)
        except (TypeError, ValueError):
            s = str(value)
    else:
        s = str(value)

    s = " ".join(s.split())

    if len(s) > limit:
        return s[: limit - 1] + "…"

    return s


class GrantsFormatter(logging.Formatter):
    """Formatter that includes grant context and optional JSON output.

    Records carrying ``user`` / ``path`` attributes (set by
    :class:`GrantsLoggerAdapter`) get them as top-level fields.
    """

    def __init__(self, json_format: bool = True, *args: Any, **kwargs: Any):
        super().__init__(*args, **kwargs)
        self.json_format = json_format

    def format(self, record: logging.LogRecord) -> str:
        user = getattr(record, "user", None)
        path = getattr(record, "path", None)

        log_data: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if user is not None:
            log_data["user"] = user
        if path is not None:
            log_data["path"] = path

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        for key, value in record.__dict__.items():
            if key not in _RECORD_ATTRS:
                log_data[key] = safe_preview(value)

        if self.json_format:
            return json.dumps(log_data, default=str, ensure_ascii=False)

        parts = [
            f"[{log_data['timestamp']}]",
            log_data["level"],
            log_data["logger"],
        ]
        if user is not None:
            parts.append(f"user={user}")
        if path is not None:
            parts.append(f"path={path}")
        parts.append(f": {log_data['message']}")
        return " ".join(parts)


class GrantsLoggerAdapter(logging.LoggerAdapter):
    """Logger adapter that adds the bound user and tree path to log records.

    Usage:
        logger = get_grants_logger(__name__, user="alice", path="/a/")
        logger.debug("granted %s", "read")
    """

    def __init__(
        self,
        logger: logging.Logger,
        user: Optional[str] = None,
        path: Optional[str] = None,
    ):
        super().__init__(logger, {})
        self.user = user
        self.path = path

    def process(self, msg: str, kwargs: dict[str, Any]) -> tuple[str, dict[str, Any]]:
        user = kwargs.pop("user", self.user)
        path = kwargs.pop("path", self.path)

        extra = kwargs.get("extra", {})
        if user is not None:
            extra["user"] = user
        if path is not None:
            extra["path"] = path
        kwargs["extra"] = extra

        return msg, kwargs


def setup_logging(
    config: Optional[GrantsConfig] = None,
    json_format: Optional[bool] = None,
    service_name: Optional[str] = None,
) -> None:
    """Configure the root logger.

    Args:
        config: GrantsConfig instance (if None, loads from environment)
        json_format: Override ``config.log_json``
        service_name: Override ``config.service_name``
    """
    if config is None:
        from .config import load_config_from_env

        config = load_config_from_env()

    level_map = {
        LogLevel.DEBUG: logging.DEBUG,
        LogLevel.INFO: logging.INFO,
        LogLevel.WARNING: logging.WARNING,
        LogLevel.ERROR: logging.ERROR,
        LogLevel.CRITICAL: logging.CRITICAL,
    }
    log_level = level_map.get(config.log_level, logging.INFO)
    if json_format is None:
        json_format = config.log_json
    service_name = service_name or config.service_name

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    # Remove existing handlers to avoid duplicates
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(log_level)
    console_handler.setFormatter(GrantsFormatter(json_format=json_format))
    root_logger.addHandler(console_handler)

    if service_name:
        logging.getLogger(service_name).setLevel(log_level)


def get_grants_logger(
    name: str,
    user: Optional[str] = None,
    path: Optional[str] = None,
) -> GrantsLoggerAdapter:
    """Get a logger adapter carrying grant context.

    Args:
        name: Logger name (typically __name__)
        user: Optional user id to include in all records
        path: Optional tree path to include in all records

    Returns:
        GrantsLoggerAdapter instance
    """
    return GrantsLoggerAdapter(logging.getLogger(name), user=user, path=path)


__all__ = [
    "safe_preview",
    "GrantsFormatter",
    "GrantsLoggerAdapter",
    "setup_logging",
    "get_grants_logger",
]
