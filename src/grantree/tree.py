"""Tree backend contract and the in-memory reference backend.

The grant engine needs three things from a tree:

- ``descend(path)``: a position for a (relative or absolute) sub-path.
- ``lineage()``: the node views from the tree root down to the position.
- per-node string storage (``get`` / ``set`` / ``delete``).

Any object satisfying :class:`GrantTree` can back a resolver.
:class:`MemoryTree` is a thread-safe implementation keeping node data in a
dict keyed by collapsed path.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterator, Optional, Protocol, Sequence, runtime_checkable

from . import path as treepath
from .exceptions import ConfigurationError, InvalidPathError

if TYPE_CHECKING:
    from .config import GrantsConfig

logger = logging.getLogger(__name__)


@runtime_checkable
class NodeView(Protocol):
    """Key/value storage of a single tree node."""

    path: str

    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...

    def delete(self, key: str) -> None: ...

    def keys(self) -> list[str]: ...


@runtime_checkable
class GrantTree(Protocol):
    """A position in a tree: the node at ``path`` and everything above it."""

    path: str

    @property
    def node(self) -> NodeView: ...

    def descend(self, path: str) -> "GrantTree": ...

    def lineage(self) -> Sequence[NodeView]: ...


class MemoryTree:
    """In-memory tree of string-keyed node data.

    Nodes materialize on first write and are pruned when their last key is
    deleted; reading an unknown node yields no entries. Writes are
    serialized by an internal lock.

    Example::

        tree = MemoryTree()
        pos = tree.cd("/projects/alpha/")
        pos.node.set("user.alice", " read ")
        [n.path for n in pos.lineage()]  # ['/', '/projects/', '/projects/alpha/']
    """

    def __init__(self, root: str = "/") -> None:
        if not isinstance(root, str) or not root.startswith("/") or not root.endswith("/"):
            raise ConfigurationError(f"Tree root must start and end with '/': {root!r}", root=root)
        self.root = treepath.collapse(root)
        self._nodes: dict[str, dict[str, str]] = {}
        self._lock = threading.RLock()

    @classmethod
    def from_config(cls, config: "GrantsConfig") -> "MemoryTree":
        """Tree rooted at ``config.tree_root``; raises ConfigurationError if invalid."""
        return cls(root=config.tree_root)

    def cd(self, path: str = "") -> "TreePosition":
        """Position for ``path``, resolved relative to the tree root."""
        return TreePosition(self, self.resolve(path, self.root))

    def resolve(self, path: str, cwd: str) -> str:
        """Collapse ``path`` against ``cwd`` and check it stays inside the tree.

        Raises:
            InvalidPathError: non-string path, NUL character, or a result
                outside the tree root.
        """
        if not isinstance(path, str):
            raise InvalidPathError(f"Path must be a string, got {type(path).__name__}", path=path)
        if "\x00" in path:
            raise InvalidPathError("Path contains a NUL character", path=path)
        resolved = treepath.collapse(path, cwd) if path else cwd
        if not treepath.is_child(resolved, self.root):
            raise InvalidPathError(f"Path {resolved!r} is outside tree root {self.root!r}", path=resolved)
        return resolved

    def paths(self) -> list[str]:
        """Paths of all nodes that currently hold data."""
        with self._lock:
            return sorted(self._nodes)

    def __len__(self) -> int:
        return len(self._nodes)

    def __iter__(self) -> Iterator[str]:
        return iter(self.paths())

    # ---- node storage --------------------------------------------------

    def _get(self, path: str, key: str) -> Optional[str]:
        with self._lock:
            data = self._nodes.get(path)
            return data.get(key) if data else None

    def _set(self, path: str, key: str, value: str) -> None:
        with self._lock:
            data = self._nodes.get(path)
            if data is None:
                data = self._nodes[path] = {}
                logger.debug("Node %s materialized", path)
            data[key] = value

    def _delete(self, path: str, key: str) -> None:
        with self._lock:
            data = self._nodes.get(path)
            if not data:
                return
            data.pop(key, None)
            if not data:
                del self._nodes[path]
                logger.debug("Node %s pruned", path)

    def _keys(self, path: str) -> list[str]:
        with self._lock:
            return list(self._nodes.get(path, ()))


@dataclass(frozen=True)
class MemoryNode:
    """Storage view of one :class:`MemoryTree` node."""

    tree: MemoryTree
    path: str

    def get(self, key: str) -> Optional[str]:
        return self.tree._get(self.path, key)

    def set(self, key: str, value: str) -> None:
        self.tree._set(self.path, key, value)

    def delete(self, key: str) -> None:
        self.tree._delete(self.path, key)

    def keys(self) -> list[str]:
        return self.tree._keys(self.path)


@dataclass(frozen=True)
class TreePosition:
    """Immutable position in a :class:`MemoryTree`."""

    tree: MemoryTree
    path: str

    @property
    def node(self) -> MemoryNode:
        return MemoryNode(self.tree, self.path)

    def descend(self, path: str) -> "TreePosition":
        """Position for ``path``; relative paths resolve against this one."""
        return TreePosition(self.tree, self.tree.resolve(path, self.path))

    def lineage(self) -> list[MemoryNode]:
        """Node views from the tree root down to this position."""
        return [MemoryNode(self.tree, p) for p in treepath.parents(self.path, self.tree.root)]


__all__ = [
    "GrantTree",
    "MemoryNode",
    "MemoryTree",
    "NodeView",
    "TreePosition",
]
