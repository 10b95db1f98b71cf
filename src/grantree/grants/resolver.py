"""Grant Resolver: composes inherited grants and answers capability checks.

Composition for an identity at a position:

1. Take the lineage of the position (root first, target last).
2. Walking up from the target, the first node with an entry for the user
   is the seed node; its entry seeds the grants. Without one, the seed node
   is the root and the seed is empty.
3. The seed node and every node below it add their group entries, in the
   identity's group order.
4. When the walk first moves below the seed node, the grants gathered so
   far are inherited once: exact grants (``=x``) are dropped and
   propagating grants (``>x``) become plain. Group grants added further
   down are never rewritten.

Group entries above the seed node do not contribute. Nothing is cached:
every ``check`` recomposes from the tree.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Iterable, Optional, Sequence

from ..logging import get_grants_logger
from ..tree import GrantTree, NodeView
from .identity import Identity
from .store import GrantStore
from .tokens import EffectiveGrants, GrantToken, parse_grants

if TYPE_CHECKING:
    from ..config import GrantsConfig

logger = logging.getLogger(__name__)


def _inherit(tokens: Iterable[GrantToken]) -> list[GrantToken]:
    result = []
    for token in tokens:
        inherited = token.inherited()
        if inherited is not None:
            result.append(inherited)
    return result


def _group_grants(node: NodeView, identity: Identity) -> list[GrantToken]:
    local: list[GrantToken] = []
    for key in identity.group_keys:
        local.extend(parse_grants(node.get(key)))
    return local


def compose_grants(lineage: Sequence[NodeView], identity: Identity) -> EffectiveGrants:
    """Effective grants of ``identity`` for the last node of ``lineage``.

    Args:
        lineage: Node views ordered from the tree root to the target.
        identity: The requesting identity.
    """
    if not lineage:
        return EffectiveGrants()

    user_key = identity.user_key
    seed_index = 0
    grants: list[GrantToken] = []
    for index in range(len(lineage) - 1, -1, -1):
        seed = lineage[index].get(user_key)
        if seed is not None:
            seed_index = index
            grants = list(parse_grants(seed))
            break

    inherited = False
    for depth, node in enumerate(lineage[seed_index:]):
        if depth and not inherited:
            grants = _inherit(grants)
            inherited = True
        grants.extend(_group_grants(node, identity))

    return EffectiveGrants(grants)


class GrantResolver:
    """Capability checks for one identity at one tree position.

    Resolvers are immutable: :meth:`bind_to_path` and :meth:`with_identity`
    return new resolvers and leave this one untouched.

    Example::

        tree = MemoryTree()
        grants = bind(tree.cd("/"), user="alice", groups=["staff"])
        grants.bind_to_path("/docs/").set_user_grants(">read")
        grants.check("read")                            # False
        grants.bind_to_path("/docs/manual/").check("read")  # True
    """

    __slots__ = ("position", "identity", "log_decisions")

    def __init__(
        self,
        position: GrantTree,
        identity: Optional[Identity] = None,
        *,
        log_decisions: bool = False,
    ) -> None:
        self.position = position
        self.identity = identity or Identity()
        self.log_decisions = log_decisions

    @property
    def path(self) -> str:
        return self.position.path

    @property
    def user(self) -> Optional[str]:
        return self.identity.user

    @property
    def groups(self) -> tuple[str, ...]:
        return self.identity.groups

    @property
    def store(self) -> GrantStore:
        """Grant Store Accessor for the bound node."""
        return GrantStore(self.position)

    def bind_to_path(self, path: str) -> "GrantResolver":
        """Resolver at ``path`` (relative to this position) for the same identity.

        Raises:
            InvalidPathError: propagated from the tree backend.
        """
        return GrantResolver(
            self.position.descend(path),
            self.identity,
            log_decisions=self.log_decisions,
        )

    def with_identity(self, user: Optional[str | int] = None, groups: Sequence[str | int] = ()) -> "GrantResolver":
        """Resolver at the same position for another identity."""
        return GrantResolver(
            self.position,
            Identity(user=user, groups=groups),
            log_decisions=self.log_decisions,
        )

    def set_user_grants(self, grants: Optional[str] = None) -> None:
        """Set (or with None, clear) the bound user's grants on this node."""
        self.store.set_user_grants(self.identity.user, grants)

    def set_group_grants(self, group: str, grants: Optional[str] = None) -> None:
        """Set (or with None, clear) a group's grants on this node."""
        self.store.set_group_grants(group, grants)

    def effective_grants(self) -> EffectiveGrants:
        return compose_grants(self.position.lineage(), self.identity)

    def check(self, capability: str) -> bool:
        """Whether the bound identity holds ``capability`` here."""
        effective = self.effective_grants()
        allowed = effective.allows(capability)
        if self.log_decisions:
            get_grants_logger(__name__, user=self.identity.user, path=self.path).debug(
                "%s %s",
                "granted" if allowed else "denied",
                capability,
                extra={"grants": str(effective)},
            )
        return allowed

    def __repr__(self) -> str:
        return f"GrantResolver(path={self.path!r}, user={self.user!r}, groups={self.groups!r})"


def bind(
    position: GrantTree,
    user: Optional[str | int] = None,
    groups: Sequence[str | int] = (),
    config: Optional["GrantsConfig"] = None,
) -> GrantResolver:
    """Resolver for ``user`` and ``groups`` at ``position``."""
    log_decisions = config.log_decisions if config is not None else False
    logger.debug("Binding resolver at %s for user=%r groups=%r", position.path, user, list(groups))
    return GrantResolver(
        position,
        Identity(user=user, groups=groups),
        log_decisions=log_decisions,
    )


__all__ = [
    "GrantResolver",
    "bind",
    "compose_grants",
]
