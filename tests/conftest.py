"""Shared test fixtures for routegen.

Provides reusable fixtures for building route trees, loading manifest
fixtures, laying out throwaway projects on disk, and managing the global
output state. These fixtures are automatically discovered by pytest and
available to all test modules without explicit imports.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable, Optional

import pytest

from routegen.models import RouteNode, RouteTree
from routegen.output import OutputManager, reset_output, set_output


FIXTURES_DIR = Path(__file__).parent / "fixtures"


# ---------------------------------------------------------------------------
# Auto-reset global output state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager after every test.

    The OutputManager's Rich console holds on to the ``sys.stderr`` it was
    created with. When Typer's CliRunner swaps the streams for a test, the
    cached reference goes stale once the test ends.
    """
    yield
    reset_output()


@pytest.fixture(autouse=True)
def _clear_routegen_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep ROUTEGEN_* variables from the developer's shell out of tests."""
    for var in ["ROUTEGEN_ROOT", "ROUTEGEN_OUTPUT_DIR", "NO_COLOR"]:
        monkeypatch.delenv(var, raising=False)


# ---------------------------------------------------------------------------
# Route tree fixtures
# ---------------------------------------------------------------------------


def _make_tree(*nodes: tuple[str, Optional[str], Optional[str]]) -> RouteTree:
    """Build a RouteTree from ``(id, parent_id, path)`` tuples, in order."""
    return RouteTree.from_nodes(
        RouteNode(id=node_id, parent_id=parent_id, path=path)
        for node_id, parent_id, path in nodes
    )


@pytest.fixture
def make_tree() -> Callable[..., RouteTree]:
    """Return a builder that turns ``(id, parent_id, path)`` tuples into a RouteTree."""
    return _make_tree


@pytest.fixture
def fixtures_dir() -> Path:
    """Directory holding the JSON manifest fixtures."""
    return FIXTURES_DIR


@pytest.fixture
def remix_manifest_raw() -> dict[str, Any]:
    """Load the raw flat route manifest fixture."""
    with open(FIXTURES_DIR / "remix_routes.json") as f:
        return json.load(f)


# ---------------------------------------------------------------------------
# Project layout fixtures
# ---------------------------------------------------------------------------


def _write_files(root: Path, files: dict[str, str]) -> None:
    """Create every ``relative path -> content`` entry under *root*."""
    for relative, content in files.items():
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")


@pytest.fixture
def write_files() -> Callable[[Path, dict[str, str]], None]:
    """Return a helper that lays out ``relative path -> content`` files under a root."""
    return _write_files


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """A small conventional project with ``app/routes`` and ``node_modules``.

    Layout::

        <tmp>/web/app/root.tsx
        <tmp>/web/app/routes/index.tsx
        <tmp>/web/app/routes/about.tsx
        <tmp>/web/app/routes/users.tsx
        <tmp>/web/app/routes/users/$id.tsx
        <tmp>/web/node_modules/

    Returns:
        The project root (``<tmp>/web``).
    """
    root = tmp_path / "web"
    _write_files(
        root,
        {
            "app/root.tsx": "export default function App() {}\n",
            "app/routes/index.tsx": "",
            "app/routes/about.tsx": "",
            "app/routes/users.tsx": "",
            "app/routes/users/$id.tsx": "",
        },
    )
    (root / "node_modules").mkdir()
    return root


@pytest.fixture
def quiet_output() -> OutputManager:
    """Install a quiet, colourless OutputManager for tests that don't check output."""
    output = OutputManager(no_color=True, quiet=True)
    set_output(output)
    yield output
    reset_output()
