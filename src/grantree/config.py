"""Configuration contract for grantree.

Pydantic-validated settings for logging and for the reference tree backend.
Applications embedding the engine may extend ``GrantsConfig`` with their own
fields. Direct os.environ/os.getenv usage is limited to
``load_config_from_env``.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator


class LogLevel(str, Enum):
    """Standard log levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class GrantsConfig(BaseModel):
    """Settings shared by the grant engine and its reference backend.

    Environment variables:
        LOG_LEVEL             logging level
        LOG_JSON              JSON log format (true/false)
        GRANTS_LOG_DECISIONS  log every check() decision at DEBUG
        GRANTS_TREE_ROOT      root path of the in-memory tree
        SERVICE_NAME          logger name to configure alongside root
    """

    # Logging
    log_level: LogLevel = Field(
        default=LogLevel.INFO,
        description="Logging level",
    )
    log_json: bool = Field(
        default=False,
        description="Use JSON log format (default: plain text)",
    )
    log_decisions: bool = Field(
        default=False,
        description="Log each grant decision at DEBUG level",
    )

    # Tree
    tree_root: str = Field(
        default="/",
        description="Root path of the tree; no node above it is visited",
    )

    service_name: Optional[str] = Field(
        default=None,
        description="Service name for logger identification",
    )

    @field_validator("tree_root")
    @classmethod
    def validate_tree_root(cls, v: str) -> str:
        """Tree root must be an absolute directory-style path."""
        if not v.startswith("/") or not v.endswith("/"):
            raise ValueError("Tree root must start and end with '/'")
        return v

    @field_validator("log_level", mode="before")
    @classmethod
    def validate_log_level(cls, v: str | LogLevel) -> LogLevel:
        """Convert string to LogLevel enum."""
        if isinstance(v, LogLevel):
            return v
        if isinstance(v, str):
            try:
                return LogLevel[v.upper()]
            except KeyError:
                raise ValueError(f"Invalid log level: {v}. Must be one of {[e.value for e in LogLevel]}")
        raise ValueError(f"Log level must be string or LogLevel enum, got {type(v)}")

    model_config = {
        "use_enum_values": True,
        "extra": "forbid",
    }


def _env_flag(value: str) -> bool:
    return value.lower() in ("true", "1", "yes", "on")


def load_config_from_env() -> GrantsConfig:
    """Load configuration from environment variables.

    Environment variables:
    - LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    - LOG_JSON: Use JSON log format (true/false, default: false)
    - GRANTS_LOG_DECISIONS: Log grant decisions (true/false, default: false)
    - GRANTS_TREE_ROOT: Tree root path (default: /)
    - SERVICE_NAME: Service name

    Returns:
        GrantsConfig instance with values from environment or defaults.
    """
    import os

    return GrantsConfig(
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        log_json=_env_flag(os.getenv("LOG_JSON", "false")),
        log_decisions=_env_flag(os.getenv("GRANTS_LOG_DECISIONS", "false")),
        tree_root=os.getenv("GRANTS_TREE_ROOT", "/"),
        service_name=os.getenv("SERVICE_NAME"),
    )


__all__ = [
    "GrantsConfig",
    "LogLevel",
    "load_config_from_env",
]
