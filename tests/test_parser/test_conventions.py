"""Tests for routegen.parser.conventions: routes from file names.

Covers:
- create_route_path for literal, dynamic, splat, escaped, index and
  pathless layout segments
- find_parent_route_id longest-prefix matching
- scan_routes end to end, including resolving the scanned tree
"""

from __future__ import annotations

from pathlib import Path

import pytest

from routegen.exceptions import RouteSourceError
from routegen.parser import resolve
from routegen.parser.conventions import (
    create_route_path,
    find_parent_route_id,
    scan_routes,
)


# ------------------------------------------------------------------ #
# create_route_path
# ------------------------------------------------------------------ #


class TestCreateRoutePath:
    @pytest.mark.parametrize(
        ("partial", "expected"),
        [
            ("about", "about"),
            ("users/$id", "users/:id"),
            ("users.$id", "users/:id"),
            ("users.$id.edit", "users/:id/edit"),
            ("$lang.$page", ":lang/:page"),
            ("$", "*"),
            ("files/$", "files/*"),
            ("[sitemap.xml]", "sitemap.xml"),
            ("docs.[v1.2]", "docs/v1.2"),
            ("__auth/login", "login"),
            ("__auth.login", "login"),
            ("users/index", "users"),
            ("users.index", "users"),
        ],
    )
    def test_paths(self, partial: str, expected: str) -> None:
        assert create_route_path(partial) == expected

    def test_index_has_no_path(self) -> None:
        assert create_route_path("index") is None

    def test_pathless_layout_has_no_path(self) -> None:
        assert create_route_path("__auth") is None

    def test_dollar_inside_segment_is_dynamic(self) -> None:
        assert create_route_path("user-$id") == "user-:id"

    def test_single_underscore_is_literal(self) -> None:
        assert create_route_path("_private") == "_private"

    def test_index_inside_name_is_literal(self) -> None:
        assert create_route_path("reindex") == "reindex"


# ------------------------------------------------------------------ #
# find_parent_route_id
# ------------------------------------------------------------------ #


class TestFindParentRouteId:
    def test_longest_prefix_wins(self) -> None:
        ids = ["routes/a", "routes/a/b", "routes/a/b/c"]
        assert find_parent_route_id(ids, "routes/a/b/c") == "routes/a/b"

    def test_requires_directory_boundary(self) -> None:
        assert find_parent_route_id(["routes/users"], "routes/users.$id") is None

    def test_no_parent(self) -> None:
        assert find_parent_route_id(["routes/a"], "routes/b") is None


# ------------------------------------------------------------------ #
# scan_routes
# ------------------------------------------------------------------ #


class TestScanRoutes:
    def test_conventional_project(self, project: Path) -> None:
        tree = scan_routes(project / "app")
        assert list(tree.nodes) == [
            "root",
            "routes/about",
            "routes/index",
            "routes/users",
            "routes/users/$id",
        ]
        root = tree.nodes["root"]
        assert root.parent_id is None
        assert root.segment is None
        assert root.file == "root.tsx"

        user = tree.nodes["routes/users/$id"]
        assert user.parent_id == "routes/users"
        assert user.path == ":id"
        assert user.file == "routes/users/$id.tsx"

        index = tree.nodes["routes/index"]
        assert index.index is True
        assert index.path is None

    def test_resolves_to_expected_table(self, project: Path) -> None:
        table = resolve(scan_routes(project / "app"))
        assert table == {"about": [], "users": [], "users/:id": ["id"]}

    def test_layouts_and_dot_routes(self, write_files, tmp_path: Path) -> None:
        app = tmp_path / "app"
        write_files(
            app,
            {
                "root.jsx": "",
                "routes/__auth.tsx": "",
                "routes/__auth/login.tsx": "",
                "routes/users.$id.edit.tsx": "",
                "routes/files/$.tsx": "",
                "routes/notes.md": "",
                "routes/README.txt": "",
            },
        )
        tree = scan_routes(app)
        assert tree.nodes["root"].file == "root.jsx"
        assert "routes/README" not in tree.nodes
        assert tree.nodes["routes/__auth/login"].parent_id == "routes/__auth"
        assert tree.nodes["routes/users.$id.edit"].parent_id == "root"
        assert resolve(tree) == {
            "login": [],
            "files/*": [],
            "notes": [],
            "users/:id/edit": ["id"],
        }

    def test_missing_root_module(self, write_files, tmp_path: Path) -> None:
        write_files(tmp_path / "app", {"routes/a.tsx": ""})
        tree = scan_routes(tmp_path / "app")
        assert tree.nodes["root"].file is None
        assert resolve(tree) == {"a": []}

    def test_no_routes_directory(self, write_files, tmp_path: Path) -> None:
        write_files(tmp_path / "app", {"root.tsx": ""})
        tree = scan_routes(tmp_path / "app")
        assert list(tree.nodes) == ["root"]
        assert resolve(tree) == {}

    def test_missing_app_directory(self, tmp_path: Path) -> None:
        with pytest.raises(RouteSourceError, match="App directory not found"):
            scan_routes(tmp_path / "app")

    def test_duplicate_route_modules(self, write_files, tmp_path: Path) -> None:
        write_files(tmp_path / "app", {"routes/a.tsx": "", "routes/a.jsx": ""})
        with pytest.raises(RouteSourceError, match="routes/a"):
            scan_routes(tmp_path / "app")
