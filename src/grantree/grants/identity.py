"""Requesting identity: a user plus an ordered set of groups."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field, field_validator

USER_PREFIX = "user."
GROUP_PREFIX = "group."


def user_key(user: Optional[str | int]) -> str:
    """Storage key for a user's grants. Anonymous maps to ``user.``."""
    return USER_PREFIX + ("" if user is None else str(user))


def group_key(group: str | int) -> str:
    """Storage key for a group's grants."""
    return GROUP_PREFIX + str(group)


class Identity(BaseModel):
    """Who is asking.

    Numeric ids are accepted and stored as strings, so ``42`` and ``"42"``
    name the same user. ``groups`` keeps the caller's order; duplicates are
    dropped keeping the first occurrence.
    """

    model_config = {"frozen": True}

    user: Optional[str] = None
    groups: tuple[str, ...] = Field(default_factory=tuple)

    @field_validator("user", mode="before")
    @classmethod
    def coerce_user(cls, v: object) -> Optional[str]:
        if v is None or isinstance(v, str):
            return v
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        raise ValueError(f"User id must be a string or integer, got {type(v).__name__}")

    @field_validator("groups", mode="before")
    @classmethod
    def dedupe_groups(cls, v: object) -> tuple[str, ...]:
        if v is None:
            return ()
        if isinstance(v, (str, int)):
            v = (v,)
        return tuple(dict.fromkeys(str(group) for group in v))  # type: ignore[union-attr]

    @property
    def user_key(self) -> str:
        return user_key(self.user)

    @property
    def group_keys(self) -> tuple[str, ...]:
        return tuple(group_key(group) for group in self.groups)


__all__ = [
    "GROUP_PREFIX",
    "USER_PREFIX",
    "Identity",
    "group_key",
    "user_key",
]
