"""Tests for path helpers."""

from __future__ import annotations

import pytest

from grantree import path


class TestCollapse:
    """collapse()"""

    @pytest.mark.parametrize(
        ("value", "cwd", "expected"),
        [
            ("/", "/", "/"),
            ("/foo/bar", "/", "/foo/bar/"),
            ("../", "/foo/bar/", "/foo/"),
            ("\\foo\\.\\bar/doh/../", "/", "/foo/bar/"),
            ("//a///b//", "/", "/a/b/"),
            ("../../..", "/a/", "/"),
            ("b/c", "/a/", "/a/b/c/"),
            ("./", "/a/", "/a/"),
        ],
    )
    def test_collapse(self, value: str, cwd: str, expected: str) -> None:
        assert path.collapse(value, cwd) == expected

    def test_empty_returns_cwd(self) -> None:
        """An empty path stays where it is."""
        assert path.collapse("", "/a/b/") == "/a/b/"


class TestParents:
    """parents() / parent()"""

    def test_parents(self) -> None:
        assert path.parents("/foo/bar/doh/") == ["/", "/foo/", "/foo/bar/", "/foo/bar/doh/"]
        assert path.parents("/foo/bar/doh/", "/foo/") == ["/foo/", "/foo/bar/", "/foo/bar/doh/"]
        assert path.parents("/") == ["/"]

    def test_parent(self) -> None:
        assert path.parent("/foo/bar/") == "/foo/"
        assert path.parent("/foo/") == "/"
        assert path.parent("/") is None
        assert path.parent("/foo/", "/foo/") is None
        assert path.parent("/x/", "/foo/") is None


class TestRelations:
    """is_child() / relative_path()"""

    def test_is_child(self) -> None:
        assert path.is_child("/a/b/", "/a/")
        assert path.is_child("/a/", "/a/")
        assert not path.is_child("/ab/", "/a/")

    def test_relative_path(self) -> None:
        assert path.relative_path("/a/c/", "/a/b/") == "../c/"
        assert path.relative_path("/a/b/c/", "/a/") == "b/c/"
        assert path.relative_path("/x/", "/a/b/") == "../../x/"
        assert path.relative_path("/a/", "/a/") == ""


class TestMapping:
    """map_path() / clean()"""

    def test_clean(self) -> None:
        assert path.clean("/a path/to somewhere/") == "/a%20path/to%20somewhere/"
        assert path.clean("/") == "/"

    def test_custom_fn(self) -> None:
        assert path.clean("/foo/bar/", str.upper) == "/FOO/BAR/"
        assert path.map_path("/foo/bar/", lambda s: s[::-1]) == "/oof/rab/"


class TestWalk:
    """walk() / reduce() / is_absolute()"""

    def test_walk_from_root(self) -> None:
        """Parents are visited root first; the first non-None result wins."""
        seen: list[str] = []

        def visit(parent: str) -> str | None:
            seen.append(parent)
            return parent if parent == "/foo/" else None

        assert path.walk("/foo/bar/", visit) == "/foo/"
        assert seen == ["/", "/foo/"]

    def test_walk_from_leaf(self) -> None:
        seen: list[str] = []
        assert path.walk("/foo/bar/", seen.append, start_at_root=False) is None
        assert seen == ["/foo/bar/", "/foo/", "/"]

    def test_walk_stops_at_root(self) -> None:
        """Nothing above the given root is visited."""
        seen: list[str] = []
        path.walk("/foo/bar/doh/", seen.append, root="/foo/")
        assert seen == ["/foo/", "/foo/bar/", "/foo/bar/doh/"]

    def test_walk_false_is_a_result(self) -> None:
        """Only None continues the walk."""
        assert path.walk("/a/b/", lambda parent: False) is False

    def test_reduce(self) -> None:
        assert path.reduce("/foo/bar/", lambda acc, entry: acc + [entry], []) == ["foo", "bar"]
        assert path.reduce("/foo/bar/", lambda acc, entry: acc + len(entry), 0) == 6
        assert path.reduce("/", lambda acc, entry: acc + entry, "x") == "x"
        assert path.reduce("/", lambda acc, entry: entry) is None

    def test_is_absolute(self) -> None:
        assert path.is_absolute("/foo/")
        assert path.is_absolute("/")
        assert not path.is_absolute("foo/")
        assert not path.is_absolute("../foo/")
        assert not path.is_absolute("")
