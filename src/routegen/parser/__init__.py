"""Route tree sources and the route resolver.

This sub-package is responsible for the first half of the routegen
pipeline: obtaining a :class:`~routegen.models.RouteTree` and flattening it
into a :data:`~routegen.models.RoutesTable` that the generator can consume.

Typical usage::

    from routegen.parser import load_route_tree, resolve, scan_routes

    tree = scan_routes(Path("app"))           # or load_route_tree("routes.json")
    table = resolve(tree)

Sub-modules:

* :mod:`~routegen.parser.loader` -- I/O layer (URL, file, stdin) for route
  manifests in JSON or YAML.
* :mod:`~routegen.parser.conventions` -- Derive the tree from route module
  file names under ``app/routes``.
* :mod:`~routegen.parser.resolver` -- Depth-first traversal producing full
  paths and their parameter names.
"""

from routegen.parser.conventions import scan_routes
from routegen.parser.loader import load_route_tree, parse_route_manifest
from routegen.parser.resolver import extract_params, resolve

__all__ = [
    "extract_params",
    "load_route_tree",
    "parse_route_manifest",
    "resolve",
    "scan_routes",
]
