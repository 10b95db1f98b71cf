"""Grant tokens and the space-padded grant string format.

Stored format: tokens separated by single spaces, padded with one leading
and one trailing space (``" read =write >admin "``). The padding lets a
substring search use token boundaries.

Token variants:
- ``read``: plain, inherited by descendants.
- ``=read``: exact, dropped once the grants are inherited below the node
  where the user entry was found.
- ``>read``: propagating, inert until inherited, then plain.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Iterator, Optional

logger = logging.getLogger(__name__)

EXACT_MARKER = "="
PROPAGATING_MARKER = ">"
_MARKERS = (EXACT_MARKER, PROPAGATING_MARKER)


class GrantKind(str, Enum):
    """Token variant."""

    PLAIN = "plain"
    EXACT = "exact"
    PROPAGATING = "propagating"


_PREFIX = {
    GrantKind.PLAIN: "",
    GrantKind.EXACT: EXACT_MARKER,
    GrantKind.PROPAGATING: PROPAGATING_MARKER,
}


@dataclass(frozen=True)
class GrantToken:
    """A single grant: a capability name tagged with its variant."""

    name: str
    kind: GrantKind = GrantKind.PLAIN

    @property
    def surface(self) -> str:
        """Stored form of the token (``read``, ``=read``, ``>read``)."""
        return _PREFIX[self.kind] + self.name

    @property
    def checkable(self) -> bool:
        """Whether this token satisfies a check for its name."""
        return self.kind is not GrantKind.PROPAGATING

    def inherited(self) -> Optional["GrantToken"]:
        """The token as seen after being inherited one level down.

        Exact tokens vanish, propagating tokens turn plain.
        """
        if self.kind is GrantKind.EXACT:
            return None
        if self.kind is GrantKind.PROPAGATING:
            return GrantToken(self.name)
        return self

    @classmethod
    def parse(cls, piece: str) -> Optional["GrantToken"]:
        """Parse one space-separated piece; None if malformed.

        A piece holding any other whitespace (tab, newline, NBSP) is
        malformed, since no check can ever match it.
        """
        if any(ch.isspace() for ch in piece):
            return None
        kind = GrantKind.PLAIN
        name = piece
        if piece[:1] == EXACT_MARKER:
            kind, name = GrantKind.EXACT, piece[1:]
        elif piece[:1] == PROPAGATING_MARKER:
            kind, name = GrantKind.PROPAGATING, piece[1:]
        if not name or name.startswith(_MARKERS):
            return None
        return cls(name, kind)

    def __str__(self) -> str:
        return self.surface


def parse_grants(text: Optional[str]) -> tuple[GrantToken, ...]:
    """Parse a stored grant string into tokens.

    Splits on the space character only; malformed pieces are skipped.
    """
    if not text:
        return ()
    tokens = []
    for piece in text.split(" "):
        if not piece:
            continue
        token = GrantToken.parse(piece)
        if token is None:
            logger.debug("Skipping malformed grant token %r", piece)
            continue
        tokens.append(token)
    return tuple(tokens)


def serialize_grants(tokens: Iterable[GrantToken]) -> str:
    """Space-padded grant string for ``tokens``; empty for no tokens."""
    surfaces = [token.surface for token in tokens]
    if not surfaces:
        return ""
    return " " + " ".join(surfaces) + " "


def pad_grants(grants: Optional[str]) -> Optional[str]:
    """Normalize a grant string for storage.

    Returns None when the key should be removed (no grants or only
    whitespace). Token well-formedness is not checked here.
    """
    if grants is None:
        return None
    trimmed = grants.strip()
    if not trimmed:
        return None
    return " " + trimmed + " "


class EffectiveGrants:
    """Composed grants for one identity at one position."""

    __slots__ = ("tokens", "_text")

    def __init__(self, tokens: Iterable[GrantToken] = ()) -> None:
        self.tokens: tuple[GrantToken, ...] = tuple(tokens)
        self._text = serialize_grants(self.tokens)

    def allows(self, capability: str) -> bool:
        """Whether ``capability`` is granted.

        A quick substring test rejects most misses; a token-bounded match
        on ``capability`` or ``=capability`` confirms.
        """
        if not capability or any(ch.isspace() for ch in capability):
            return False
        text = self._text
        if capability + " " not in text:
            return False
        return " " + capability + " " in text or " " + EXACT_MARKER + capability + " " in text

    def names(self) -> frozenset[str]:
        """Names of all checkable grants."""
        return frozenset(token.name for token in self.tokens if token.checkable)

    def __iter__(self) -> Iterator[GrantToken]:
        return iter(self.tokens)

    def __len__(self) -> int:
        return len(self.tokens)

    def __bool__(self) -> bool:
        return bool(self.tokens)

    def __str__(self) -> str:
        return self._text

    def __repr__(self) -> str:
        return f"EffectiveGrants({self._text!r})"


__all__ = [
    "EXACT_MARKER",
    "PROPAGATING_MARKER",
    "EffectiveGrants",
    "GrantKind",
    "GrantToken",
    "pad_grants",
    "parse_grants",
    "serialize_grants",
]
