"""Grant Store Accessor: writes grant declarations on one tree node."""

from __future__ import annotations

import logging
from typing import Optional

from ..tree import GrantTree
from .identity import group_key, user_key
from .tokens import pad_grants

logger = logging.getLogger(__name__)


class GrantStore:
    """Write access to the grants declared on the node at ``position``.

    Only the bound node is touched. Passing ``None`` (or a blank string)
    removes the entry instead of storing an empty grant string. Tokens are
    not validated on write; malformed ones are inert when checked.

    Example::

        store = GrantStore(tree.cd("/projects/"))
        store.set_user_grants("alice", "read =write")
        store.set_group_grants("editors", "read write")
        store.set_group_grants("editors", None)  # removes group.editors
    """

    __slots__ = ("position",)

    def __init__(self, position: GrantTree) -> None:
        self.position = position

    def set_user_grants(self, user: Optional[str | int], grants: Optional[str] = None) -> None:
        self._write(user_key(user), grants)

    def set_group_grants(self, group: str | int, grants: Optional[str] = None) -> None:
        self._write(group_key(group), grants)

    def _write(self, key: str, grants: Optional[str]) -> None:
        node = self.position.node
        value = pad_grants(grants)
        if value is None:
            node.delete(key)
            logger.debug("Cleared %s at %s", key, node.path)
        else:
            node.set(key, value)
            logger.debug("Set %s at %s to %r", key, node.path, value)

    def __repr__(self) -> str:
        return f"GrantStore(path={self.position.path!r})"


__all__ = ["GrantStore"]
