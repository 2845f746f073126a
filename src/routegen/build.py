"""One complete routegen pass: route source -> routes table -> generated package.

:func:`build` is the unit both trigger paths run: the CLI calls it once, and
:func:`~routegen.watch.watch_routes` calls it again on every file change.
Each pass reads a fresh route tree and allocates its own routes table;
nothing is shared between passes.

Both modules are rendered before the output directory is even looked up, so
a pass either writes a complete package or writes nothing it generated.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field

from routegen.config import resolve_output_dir
from routegen.generator import generate, write_modules
from routegen.models import GeneratedModules, ProjectConfig, RoutesTable, RouteTree
from routegen.parser import load_route_tree, resolve, scan_routes

logger = logging.getLogger(__name__)


class BuildResult(BaseModel):
    """Everything one pass produced, for reporting by the caller."""

    table: RoutesTable
    modules: GeneratedModules
    output_dir: Optional[Path] = None
    written: list[Path] = Field(default_factory=list)

    @property
    def route_count(self) -> int:
        return len(self.table)


def load_tree(root: Path, config: ProjectConfig) -> RouteTree:
    """Load the route tree for *root* from the manifest, or scan the app directory."""
    if config.routes_manifest:
        logger.debug("Loading route manifest: %s", config.routes_manifest)
        return load_route_tree(config.routes_manifest, base_dir=root)
    app_dir = root / config.app_directory
    logger.debug("Scanning route modules under %s", app_dir)
    return scan_routes(app_dir)


def build(root: Path, config: ProjectConfig, dry_run: bool = False) -> BuildResult:
    """Run one resolve-then-generate pass for the project at *root*.

    Args:
        root: Project root directory.
        config: Effective configuration from :func:`~routegen.config.resolve_config`.
        dry_run: Render the modules but do not locate or write the output.

    Returns:
        A :class:`BuildResult` with the routes table, the rendered modules,
        and (unless *dry_run*) the output directory and written files.

    Raises:
        RouteSourceError: If the route tree cannot be loaded.
        DuplicateRouteError: If ``config.strict`` is set and paths collide.
        OutputLocationError: If no output directory can be found.
        OutputWriteError: If a file cannot be written.
    """
    tree = load_tree(root, config)
    table = resolve(tree, marker=config.param_marker, strict=config.strict)
    modules = generate(table)
    result = BuildResult(table=table, modules=modules)
    if dry_run:
        return result

    output_dir = resolve_output_dir(root, config)
    result.output_dir = output_dir
    result.written = write_modules(modules, output_dir, config.package_name)
    logger.debug("Wrote %d files to %s", len(result.written), output_dir)
    return result
