"""Exception hierarchy for grantree.

Grant resolution itself never raises: absent grants, unknown identities and
malformed tokens all degrade to "not granted". Errors surface from the
configuration layer and from the tree backend, and they propagate unchanged
through the resolver.

Usage:
    from grantree.exceptions import ConfigurationError, InvalidPathError

Backends may subclass ``TreeError`` with their own stable ``code``.
"""

from __future__ import annotations

from typing import Any

__all__ = [
    "GrantsError",
    "ConfigurationError",
    "TreeError",
    "InvalidPathError",
]


class GrantsError(Exception):
    """Base exception for grantree.

    Attributes:
        code: Stable error code string (e.g. "INVALID_PATH").
        message: Human-readable error description.
        details: Additional context as keyword arguments.
    """

    code: str = "INTERNAL_ERROR"
    message: str = "An internal error occurred"

    def __init__(self, message: str | None = None, code: str | None = None, **kwargs: Any) -> None:
        self.message = message or self.message
        self.code = code or self.code
        self.details = kwargs
        super().__init__(self.message)


class ConfigurationError(GrantsError):
    """Invalid or missing configuration."""

    code: str = "CONFIGURATION_ERROR"
    message: str = "Invalid configuration"


class TreeError(GrantsError):
    """Tree backend failure."""

    code: str = "TREE_ERROR"
    message: str = "Tree backend failure"


class InvalidPathError(TreeError):
    """Path cannot be resolved inside the tree."""

    code: str = "INVALID_PATH"
    message: str = "Invalid tree path"
