"""Hierarchical grants: token format, identities, storage and resolution.

Defines:
- GrantToken / GrantKind: plain, exact (``=x``) and propagating (``>x``) grants
- EffectiveGrants: composed grants with the capability check
- Identity: user plus ordered groups
- GrantStore: writes user/group grants on one node
- GrantResolver / bind(): inherited grant resolution along the tree
"""

from .identity import Identity, group_key, user_key
from .resolver import GrantResolver, bind, compose_grants
from .store import GrantStore
from .tokens import (
    EXACT_MARKER,
    PROPAGATING_MARKER,
    EffectiveGrants,
    GrantKind,
    GrantToken,
    pad_grants,
    parse_grants,
    serialize_grants,
)

__all__ = [
    "EXACT_MARKER",
    "PROPAGATING_MARKER",
    "EffectiveGrants",
    "GrantKind",
    "GrantResolver",
    "GrantStore",
    "GrantToken",
    "Identity",
    "bind",
    "compose_grants",
    "group_key",
    "pad_grants",
    "parse_grants",
    "serialize_grants",
    "user_key",
]
