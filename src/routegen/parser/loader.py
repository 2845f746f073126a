"""Load a route manifest from a URL, local file, or stdin.

A route manifest describes the application's route tree explicitly, for
projects whose routes are not laid out under ``app/routes`` or whose
framework can dump its resolved route configuration. JSON and YAML are both
accepted, with format detection from the file extension, the response
content type, or the content itself.

Three manifest shapes are understood:

* A mapping of route id to node, as a framework's route config holds it::

      {"root": {"id": "root", "path": ""},
       "routes/users": {"id": "routes/users", "parentId": "root", "path": "users"}}

* The same mapping wrapped in a top-level ``routes`` key.
* A list of nested nodes with ``children``; parents are taken from the
  nesting::

      [{"id": "root", "path": "", "children": [{"id": "users", "path": "users"}]}]

The public functions are :func:`load_route_tree`, :func:`load_manifest` and
:func:`parse_route_manifest`.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any, Iterator, Optional

import httpx
import yaml
from pydantic import ValidationError

from routegen.exceptions import RouteSourceError
from routegen.models import RouteNode, RouteTree


def load_route_tree(source: str, base_dir: Optional[Path] = None) -> RouteTree:
    """Load a manifest from *source* and build a :class:`~routegen.models.RouteTree`.

    Args:
        source: A URL (http/https), file path, or ``-`` for stdin.
        base_dir: Directory that relative file paths are resolved against.

    Returns:
        The route tree described by the manifest.

    Raises:
        RouteSourceError: If the manifest cannot be loaded or is malformed.
    """
    return parse_route_manifest(load_manifest(source, base_dir))


def load_manifest(source: str, base_dir: Optional[Path] = None) -> Any:
    """Load a route manifest from URL, file path, or stdin ('-').

    Args:
        source: A URL (http/https), file path, or '-' for stdin.
        base_dir: Directory that relative file paths are resolved against.

    Returns:
        The parsed document (a dict or a list).

    Raises:
        RouteSourceError: If the source cannot be loaded or parsed.
    """
    if source == "-":
        return _load_from_stdin()
    elif source.startswith(("http://", "https://")):
        return _load_from_url(source)
    else:
        path = Path(source)
        if base_dir is not None and not path.is_absolute():
            path = base_dir / path
        return _load_from_file(path)


def parse_route_manifest(data: Any) -> RouteTree:
    """Build a route tree from an already-parsed manifest document.

    Args:
        data: A mapping of id to node, a ``{"routes": ...}`` wrapper, or a
            list of nested nodes.

    Returns:
        The route tree, with nodes in manifest order.

    Raises:
        RouteSourceError: If the document has an unknown shape or a node is
            invalid.
    """
    if _is_routes_wrapper(data):
        data = data["routes"]

    if isinstance(data, dict):
        raw_nodes = list(_flat_nodes(data))
    elif isinstance(data, list):
        raw_nodes = list(_nested_nodes(data, parent_id=None))
    else:
        raise RouteSourceError(
            "Route manifest must be an object or a list (got "
            f"{type(data).__name__})"
        )

    nodes: list[RouteNode] = []
    for raw in raw_nodes:
        try:
            nodes.append(RouteNode.model_validate(raw))
        except ValidationError as exc:
            raise RouteSourceError(
                f"Invalid route '{raw.get('id', '?')}': {exc}"
            ) from exc
    return RouteTree.from_nodes(nodes)


# ---------------------------------------------------------------------------
# Manifest shapes
# ---------------------------------------------------------------------------


def _is_routes_wrapper(data: Any) -> bool:
    """True for ``{"routes": {id: node, ...}}``, not for a lone route with id ``routes``."""
    if not isinstance(data, dict) or set(data) != {"routes"}:
        return False
    routes = data["routes"]
    return isinstance(routes, dict) and all(
        isinstance(node, dict) for node in routes.values()
    )


def _flat_nodes(data: dict[str, Any]) -> Iterator[dict[str, Any]]:
    """Yield node dicts from an id-keyed mapping; ``id`` defaults to the key."""
    for key, value in data.items():
        if not isinstance(value, dict):
            raise RouteSourceError(
                f"Route '{key}' must be an object (got {type(value).__name__})"
            )
        yield {"id": key, **value}


def _nested_nodes(
    items: list[Any], parent_id: Optional[str]
) -> Iterator[dict[str, Any]]:
    """Yield node dicts depth-first from nested ``children`` lists."""
    for item in items:
        if not isinstance(item, dict):
            raise RouteSourceError(
                f"Route entries must be objects (got {type(item).__name__})"
            )
        node = {k: v for k, v in item.items() if k != "children"}
        node["parentId"] = parent_id
        node.pop("parent_id", None)
        yield node
        children = item.get("children") or []
        if not isinstance(children, list):
            raise RouteSourceError(
                f"'children' of route '{item.get('id', '?')}' must be a list"
            )
        yield from _nested_nodes(children, parent_id=item.get("id"))


# ---------------------------------------------------------------------------
# Sources
# ---------------------------------------------------------------------------


def _load_from_stdin() -> Any:
    """Read a manifest from stdin.

    Raises:
        RouteSourceError: If stdin is empty or content cannot be parsed.
    """
    try:
        content = sys.stdin.read()
    except Exception as exc:
        raise RouteSourceError(f"Failed to read from stdin: {exc}") from exc

    if not content.strip():
        raise RouteSourceError("No input received from stdin")

    return _parse_content(content, hint="stdin")


def _load_from_url(url: str) -> Any:
    """Fetch a manifest from *url*, typically a dev server's route dump.

    Raises:
        RouteSourceError: If the URL cannot be fetched or content cannot be parsed.
    """
    try:
        response = httpx.get(url, timeout=30.0, follow_redirects=True)
        response.raise_for_status()
    except httpx.HTTPStatusError as exc:
        raise RouteSourceError(
            f"HTTP {exc.response.status_code} fetching routes from {url}"
        ) from exc
    except httpx.RequestError as exc:
        raise RouteSourceError(f"Failed to fetch routes from {url}: {exc}") from exc

    content_type = response.headers.get("content-type", "")
    hint = ""
    if "json" in content_type:
        hint = "json"
    elif "yaml" in content_type or "yml" in content_type:
        hint = "yaml"

    return _parse_content(response.text, hint=hint)


def _load_from_file(path: Path) -> Any:
    """Load a manifest from a local ``.json``, ``.yaml`` or ``.yml`` file.

    Raises:
        RouteSourceError: If the file cannot be read or content cannot be parsed.
    """
    if not path.is_file():
        raise RouteSourceError(f"Route manifest not found: {path}")

    try:
        content = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise RouteSourceError(f"Failed to read route manifest {path}: {exc}") from exc

    if not content.strip():
        raise RouteSourceError(f"Route manifest is empty: {path}")

    suffix = path.suffix.lower()
    hint = ""
    if suffix == ".json":
        hint = "json"
    elif suffix in (".yaml", ".yml"):
        hint = "yaml"

    return _parse_content(content, hint=hint)


def _parse_content(content: str, hint: str = "") -> Any:
    """Parse content as JSON or YAML.

    Tries JSON first (unless hint is 'yaml'), then falls back to YAML.

    Raises:
        RouteSourceError: If the content cannot be parsed as either format.
    """
    json_error: Exception | None = None
    yaml_error: Exception | None = None

    if hint != "yaml":
        try:
            return json.loads(content)
        except json.JSONDecodeError as exc:
            json_error = exc
            if hint == "json":
                raise RouteSourceError(f"Invalid JSON: {exc}") from exc

    try:
        result = yaml.safe_load(content)
        if result is None:
            raise RouteSourceError("Route manifest is an empty document")
        return result
    except yaml.YAMLError as exc:
        yaml_error = exc

    msg = "Failed to parse route manifest as JSON or YAML"
    if json_error:
        msg += f"\n  JSON error: {json_error}"
    if yaml_error:
        msg += f"\n  YAML error: {yaml_error}"
    raise RouteSourceError(msg)
