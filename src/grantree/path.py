"""Path helpers for tree positions.

Paths are absolute, ``/``-separated and always end with ``/``
(``/``, ``/foo/``, ``/foo/bar/``).
"""

from __future__ import annotations

import functools
from typing import Callable, Optional, TypeVar
from urllib.parse import quote

T = TypeVar("T")


def _segments(path: str) -> list[str]:
    return [entry for entry in path.split("/") if entry]


def collapse(path: str, cwd: str = "/") -> str:
    """Resolve ``.``, ``..``, ``//`` and ``\\`` into an absolute path.

    Relative paths are resolved against ``cwd``. ``..`` never climbs above
    ``/``.

    Example::

        >>> collapse("../", "/foo/bar/")
        '/foo/'
        >>> collapse("\\\\foo\\\\.\\\\bar/doh/../")
        '/foo/bar/'
    """
    if not path:
        return cwd
    if path[0] not in ("/", "\\"):
        path = cwd + "/" + path
    return _collapse_absolute(path)


@functools.lru_cache(maxsize=4096)
def _collapse_absolute(path: str) -> str:
    stack: list[str] = []
    for entry in _segments(path.replace("\\", "/")):
        if entry == "..":
            if stack:
                stack.pop()
        elif entry != ".":
            stack.append(entry)
    if not stack:
        return "/"
    return "/" + "/".join(stack) + "/"


def parents(path: str, root: str = "/") -> list[str]:
    """All parents of ``path`` from ``root`` down, including ``path`` itself.

    Example::

        >>> parents("/foo/bar/doh/", "/foo/")
        ['/foo/', '/foo/bar/', '/foo/bar/doh/']
    """
    result = [root]
    current = "/"
    for entry in _segments(path):
        current += entry + "/"
        if current.startswith(root) and current != root:
            result.append(current)
    return result


def parent(path: str, root: str = "/") -> Optional[str]:
    """Immediate parent of ``path``, or None at or above ``root``."""
    if path == root:
        return None
    segments = _segments(path)
    if not segments:
        return None
    result = "/" + "".join(entry + "/" for entry in segments[:-1])
    if not result.startswith(root):
        return None
    return result


def is_child(path: str, parent: str) -> bool:
    """True when ``path`` equals ``parent`` or lies below it."""
    return path.startswith(parent)


def is_absolute(path: str) -> bool:
    return path[:1] == "/"


def walk(
    path: str,
    callback: Callable[[str], Optional[T]],
    start_at_root: bool = True,
    root: str = "/",
) -> Optional[T]:
    """Call ``callback`` on each parent of ``path`` until it returns non-None.

    Parents run from ``root`` down, or from ``path`` up when
    ``start_at_root`` is false. Nothing above ``root`` is visited.

    Example::

        >>> walk("/foo/bar/", lambda p: p if p.endswith("foo/") else None)
        '/foo/'
    """
    candidates = parents(path, root)
    if not start_at_root:
        candidates.reverse()
    for candidate in candidates:
        result = callback(candidate)
        if result is not None:
            return result
    return None


def reduce(path: str, fn: Callable[[T, str], T], initial: Optional[T] = None) -> Optional[T]:
    """Fold ``fn`` over the segments of ``path``.

    Example::

        >>> reduce("/foo/bar/", lambda acc, entry: acc + [entry], [])
        ['foo', 'bar']
    """
    return functools.reduce(fn, _segments(path), initial)  # type: ignore[arg-type]


def relative_path(target: str, source: str) -> str:
    """Relative path that leads from ``source`` to ``target``.

    Example::

        >>> relative_path("/a/c/", "/a/b/")
        '../c/'
    """
    steps: list[str] = []

    def common_parent(candidate: str) -> Optional[str]:
        if is_child(target, candidate):
            return candidate
        steps.append("../")
        return None

    common = walk(source, common_parent, start_at_root=False) or ""
    return "".join(steps) + target[len(common):]


def map_path(path: str, fn: Callable[[str], str]) -> str:
    """Apply ``fn`` to every segment of ``path``."""
    segments = _segments(path)
    if not segments:
        return "/"
    return "/" + "/".join(fn(entry) for entry in segments) + "/"


def clean(path: str, fn: Optional[Callable[[str], str]] = None) -> str:
    """URL-encode each segment of ``path`` (or apply a custom ``fn``).

    Example::

        >>> clean("/a path/to somewhere/")
        '/a%20path/to%20somewhere/'
    """
    if fn is None:
        fn = _quote_segment
    return map_path(path, fn)


def _quote_segment(entry: str) -> str:
    return quote(entry, safe="")


__all__ = [
    "clean",
    "collapse",
    "is_absolute",
    "is_child",
    "map_path",
    "parent",
    "parents",
    "reduce",
    "relative_path",
    "walk",
]
