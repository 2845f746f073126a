"""Build a route tree from route module files under ``<app>/routes``.

Projects that follow the conventional file layout do not need a manifest:
the route tree is derived from file names.

* ``app/root.tsx`` is the ``root`` route and contributes no segment.
* ``app/routes/users.tsx`` is route ``routes/users`` with path ``users``.
* ``app/routes/users/$id.tsx`` nests under ``routes/users`` with path ``:id``.
* ``app/routes/users.$id.edit.tsx`` has no file parent, so it hangs off
  ``root`` with path ``users/:id/edit``.
* ``app/routes/users/index.tsx`` is an index route without a segment.
* ``app/routes/__auth.tsx`` is a pathless layout; ``app/routes/__auth/login.tsx``
  nests under it with path ``login``.
* ``app/routes/files/$.tsx`` is a splat route: path ``*`` under a
  ``routes/files`` route, ``files/*`` when there is none.
* ``app/routes/[sitemap.xml].tsx`` escapes the dot: path ``sitemap.xml``.

A route's parent is the longest other route id that prefixes it followed by
``/``; routes without one are children of ``root``. Nodes are emitted in
sorted id order so the generated files do not depend on directory listing
order.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Optional

from routegen.exceptions import RouteSourceError
from routegen.models import ROUTE_MODULE_EXTENSIONS, RouteNode, RouteTree

logger = logging.getLogger(__name__)

ROOT_ROUTE_ID = "root"

_INDEX_SUFFIX_RE = re.compile(r"/?index$")


def scan_routes(app_dir: Path) -> RouteTree:
    """Scan *app_dir* for route modules and build the route tree.

    Args:
        app_dir: The application directory containing ``root.*`` and
            ``routes/``.

    Returns:
        A tree with a ``root`` node followed by one node per route module.

    Raises:
        RouteSourceError: If *app_dir* does not exist or two files map to the
            same route id (e.g. ``users.tsx`` and ``users.jsx``).
    """
    if not app_dir.is_dir():
        raise RouteSourceError(f"App directory not found: {app_dir}")

    nodes = [RouteNode(id=ROOT_ROUTE_ID, path="", file=_find_root_module(app_dir))]

    files = _route_files(app_dir)
    route_ids = sorted(files)
    for route_id in route_ids:
        parent_id = find_parent_route_id(route_ids, route_id)
        partial_id = route_id[len(parent_id or "routes") + 1:]
        nodes.append(
            RouteNode(
                id=route_id,
                parent_id=parent_id or ROOT_ROUTE_ID,
                path=create_route_path(partial_id),
                file=files[route_id],
                index=route_id.endswith("/index"),
            )
        )

    logger.debug("Found %d route modules under %s", len(files), app_dir)
    return RouteTree.from_nodes(nodes)


def find_parent_route_id(route_ids: list[str], child_id: str) -> Optional[str]:
    """Return the longest id in *route_ids* that is a directory prefix of *child_id*.

    Example::

        >>> find_parent_route_id(["routes/a", "routes/a/b"], "routes/a/b/c")
        'routes/a/b'
        >>> find_parent_route_id(["routes/a"], "routes/ab") is None
        True
    """
    candidates = [
        route_id for route_id in route_ids if child_id.startswith(route_id + "/")
    ]
    if not candidates:
        return None
    return max(candidates, key=len)


def create_route_path(partial_route_id: str) -> Optional[str]:
    """Convert a route id (relative to its parent) into a URL path.

    Returns ``None`` when the route contributes no segment (index routes and
    pathless layouts).

    Example::

        >>> create_route_path("users.$id")
        'users/:id'
        >>> create_route_path("__auth/login")
        'login'
        >>> create_route_path("index") is None
        True
    """
    result = ""
    raw_segment = ""
    escape_depth = 0
    skip_segment = False
    last = len(partial_route_id) - 1

    for i, char in enumerate(partial_route_id):
        prev_char = partial_route_id[i - 1] if i > 0 else None
        next_char = partial_route_id[i + 1] if i < last else None

        if skip_segment:
            if char in "/.":
                skip_segment = False
            continue

        if not escape_depth and char == "[" and prev_char != "[":
            escape_depth += 1
            continue
        if escape_depth and char == "]" and next_char != "]":
            escape_depth -= 1
            continue
        if escape_depth:
            result += char
            continue

        if char in "/.":
            if raw_segment == "index" and result.endswith("index"):
                result = _INDEX_SUFFIX_RE.sub("", result)
            else:
                result += "/"
            raw_segment = ""
            continue

        # "__name" is a pathless layout segment
        if char == "_" and next_char == "_" and not raw_segment:
            skip_segment = True
            continue

        raw_segment += char
        if char == "$":
            result += "*" if next_char is None else ":"
            continue
        result += char

    if raw_segment == "index" and result.endswith("index"):
        result = _INDEX_SUFFIX_RE.sub("", result)

    return result or None


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _find_root_module(app_dir: Path) -> Optional[str]:
    for ext in ROUTE_MODULE_EXTENSIONS:
        if (app_dir / f"root{ext}").is_file():
            return f"root{ext}"
    return None


def _route_files(app_dir: Path) -> dict[str, str]:
    """Map route id (``routes/...`` without extension) to its file path relative to *app_dir*."""
    routes_dir = app_dir / "routes"
    files: dict[str, str] = {}
    if not routes_dir.is_dir():
        return files

    for path in sorted(routes_dir.rglob("*")):
        if not path.is_file() or path.suffix not in ROUTE_MODULE_EXTENSIONS:
            continue
        relative = path.relative_to(app_dir)
        route_id = relative.with_suffix("").as_posix()
        if route_id in files:
            raise RouteSourceError(
                f"Route '{route_id}' is defined by both {files[route_id]} "
                f"and {relative.as_posix()}"
            )
        files[route_id] = relative.as_posix()
    return files
