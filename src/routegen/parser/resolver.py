"""Resolve a route tree into a flat table of full paths and parameter names.

The resolver walks a :class:`~routegen.models.RouteTree` depth-first from its
root-level nodes. Along the way it keeps the *chain* of ancestors that
contribute a URL segment; every time the chain grows, the chain's segments
are joined with ``/`` into a full path and scanned for parameter names.

Example::

    tree = RouteTree.from_nodes([
        RouteNode(id="users", path="users"),
        RouteNode(id="user", parent_id="users", path=":id"),
    ])
    resolve(tree)
    # {"users": [], "users/:id": ["id"]}

Layout-only nodes (no ``path``) never appear in the chain and never produce
an entry, but their children are still visited. The root path ``/`` is not
produced here; :mod:`routegen.generator.declarations` seeds it.

The two public functions are :func:`resolve` and :func:`extract_params`.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Optional, Sequence

from routegen.exceptions import DuplicateRouteError
from routegen.models import RouteNode, RoutesTable, RouteTree

logger = logging.getLogger(__name__)


def resolve(tree: RouteTree, marker: str = ":", strict: bool = False) -> RoutesTable:
    """Flatten *tree* into a mapping of full path to parameter names.

    Entries are inserted in traversal order (depth-first, siblings in
    source-tree order), which the generator preserves verbatim.

    Args:
        tree: The route tree to walk. Not modified.
        marker: Prefix identifying a dynamic segment.
        strict: Raise instead of overwriting when two chains produce the
            same full path.

    Returns:
        A new dict mapping each full path to its ordered parameter names.

    Raises:
        DuplicateRouteError: If *strict* is set and a full path repeats.
    """
    children = _index_children(tree)
    table: RoutesTable = {}
    owners: dict[str, str] = {}

    def _walk(parent_id: Optional[str], chain: list[RouteNode]) -> None:
        for node in children.get(parent_id, ()):
            current = chain
            if node.segment is not None:
                current = [*chain, node]
                full_path = "/".join(n.segment for n in current)  # type: ignore[misc]
                if full_path in table:
                    _on_collision(full_path, owners[full_path], node.id, strict)
                table[full_path] = extract_params(current, marker)
                owners[full_path] = node.id
            _walk(node.id, current)

    _walk(None, [])
    logger.debug("Resolved %d route nodes into %d paths", len(tree), len(table))
    return table


def extract_params(chain: Sequence[RouteNode], marker: str = ":") -> list[str]:
    """Return the parameter names found along *chain*, root to leaf.

    A segment that itself starts with *marker* is treated as a run of
    parameter sub-segments: every ``/``-separated token is appended with its
    leading marker stripped. Otherwise only the tokens after the first one
    that start with *marker* are appended.

    Duplicate names are kept. Malformed segments are passed through as-is.

    Args:
        chain: Nodes that all carry a segment, ordered root to leaf.
        marker: Prefix identifying a dynamic segment.

    Returns:
        Parameter names in encounter order.

    Example::

        >>> extract_params([RouteNode(id="a", path="posts/:slug/edit")])
        ['slug']
        >>> extract_params([RouteNode(id="a", path=":lang/:page")])
        ['lang', 'page']
    """
    names: list[str] = []
    for node in chain:
        segment = node.path or ""
        tokens = segment.split("/")
        if segment.startswith(marker):
            names.extend(_strip_marker(token, marker) for token in tokens)
            continue
        names.extend(
            _strip_marker(token, marker)
            for token in tokens[1:]
            if token.startswith(marker)
        )
    return names


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _index_children(tree: RouteTree) -> dict[Optional[str], list[RouteNode]]:
    """Group nodes by ``parent_id`` once, keeping source order within each group."""
    index: dict[Optional[str], list[RouteNode]] = defaultdict(list)
    for node in tree.nodes.values():
        index[node.parent_id].append(node)
    return index


def _strip_marker(token: str, marker: str) -> str:
    if token.startswith(marker):
        return token[len(marker):]
    return token


def _on_collision(path: str, first_id: str, second_id: str, strict: bool) -> None:
    if strict:
        raise DuplicateRouteError(path, first_id, second_id)
    logger.warning(
        "Routes %r and %r both resolve to %r; keeping the last one",
        first_id,
        second_id,
        path,
    )
