"""Canonical Pydantic models shared across all routegen modules.

The models fall into two groups:

**Configuration models** -- read from ``routegen.json`` at the project root:
    :class:`ProjectConfig`.

**Pipeline models** -- produced by the route source loaders and consumed by
the resolver and generator:
    :class:`RouteNode`, :class:`RouteTree`, :class:`GeneratedModules`, and the
    :data:`RoutesTable` alias.

All models use Pydantic v2. Route manifests use the camelCase ``parentId``
key, so :class:`RouteNode` accepts both the alias and the field name.
"""

from __future__ import annotations

from typing import Iterable, Optional

from pydantic import BaseModel, ConfigDict, Field


RoutesTable = dict[str, list[str]]
"""Full path (segments joined with ``/``) -> ordered parameter names."""

ROUTE_MODULE_EXTENSIONS: tuple[str, ...] = (".js", ".jsx", ".ts", ".tsx", ".md", ".mdx")
"""File extensions recognised as route modules by the conventions scanner."""


# --- Configuration ---


class ProjectConfig(BaseModel):
    """Per-project settings loaded from ``routegen.json``.

    Every field has a default, so a project without a config file behaves
    like a conventional ``app/routes`` layout with output placed under the
    nearest ``node_modules``. CLI flags and environment variables override
    these values; see :func:`~routegen.config.resolve_config`.

    Example::

        ProjectConfig(
            routes_manifest="build/routes.json",
            package_name=".routes",
            strict=True,
        )
    """

    model_config = ConfigDict(extra="forbid")

    routes_manifest: Optional[str] = Field(
        default=None,
        description="Route manifest source: path relative to the root, URL, or '-'",
    )
    app_directory: str = Field(
        default="app", description="Directory holding root.* and routes/"
    )
    output_dir: Optional[str] = Field(
        default=None, description="Explicit output directory (skips node_modules lookup)"
    )
    package_name: str = Field(
        default=".routegen", description="Generated package name and directory name"
    )
    param_marker: str = Field(
        default=":", min_length=1, description="Prefix marking a dynamic segment"
    )
    strict: bool = Field(
        default=False, description="Fail when two routes resolve to the same path"
    )
    watch_patterns: list[str] = Field(
        default_factory=list,
        description="Gitignore-style patterns that trigger a rebuild in watch mode",
    )

    def effective_watch_patterns(self) -> list[str]:
        """Return the configured watch patterns, or the defaults when none are set.

        The defaults cover every route module under ``<app_directory>/routes``,
        the root route module, ``routegen.json`` and a local manifest file.
        """
        if self.watch_patterns:
            return list(self.watch_patterns)
        app_dir = self.app_directory.strip("/")
        patterns = [f"/{app_dir}/routes/**/*{ext}" for ext in ROUTE_MODULE_EXTENSIONS]
        patterns += [f"/{app_dir}/root{ext}" for ext in ROUTE_MODULE_EXTENSIONS]
        patterns.append("/routegen.json")
        manifest = self.routes_manifest
        if manifest and manifest != "-" and not manifest.startswith(("http://", "https://")):
            patterns.append("/" + manifest.removeprefix("./"))
        return patterns


# --- Route tree ---


class RouteNode(BaseModel):
    """One node of the route tree.

    A node whose ``path`` is ``None`` or empty is a layout-only route: it
    contributes no URL segment, but its children still compose through it.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str
    parent_id: Optional[str] = Field(default=None, alias="parentId")
    path: Optional[str] = None
    file: Optional[str] = None
    index: bool = False

    @property
    def segment(self) -> Optional[str]:
        """The URL segment this node contributes, or ``None`` for layout-only nodes."""
        return self.path or None


class RouteTree(BaseModel):
    """All route nodes keyed by id, in source order.

    Only parent references are stored. Children are discovered by matching
    ``parent_id``; see :func:`~routegen.parser.resolver.resolve`.
    """

    nodes: dict[str, RouteNode] = Field(default_factory=dict)

    @classmethod
    def from_nodes(cls, nodes: Iterable[RouteNode]) -> RouteTree:
        """Build a tree from *nodes*, keeping their iteration order."""
        return cls(nodes={node.id: node for node in nodes})

    def __len__(self) -> int:
        return len(self.nodes)


# --- Generator output ---


class GeneratedModules(BaseModel):
    """Text of the two generated modules, produced in one pure step.

    ``runtime_module`` becomes ``index.js`` and ``type_module`` becomes
    ``types.d.ts``; see :func:`~routegen.generator.writer.write_modules`.
    """

    runtime_module: str
    type_module: str
