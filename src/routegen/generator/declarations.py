"""Render the runtime table and TypeScript declarations for a routes table.

Everything here is a pure string transformation of a
:data:`~routegen.models.RoutesTable`; nothing touches the filesystem.
:func:`generate` produces both modules in one step so that a failure leaves
no half-rendered output behind.

Two declaration sets are rendered into the type module:

* ``$path`` overloads -- one per route plus a synthetic ``"/"`` route, each
  taking the literal route, its ``params`` (only when the route has any) and
  optional ``query`` values, and returning a string.
* ``$params`` overloads -- one per route that has parameters, mapping an
  untyped parameter bag to a record of required string fields.

Ordering follows the table's insertion order so that regenerated files only
change where the routes changed.
"""

from __future__ import annotations

import json

from routegen.models import GeneratedModules, RoutesTable

ROOT_PATH = "/"


def generate(table: RoutesTable) -> GeneratedModules:
    """Render the runtime module and the type module for *table*.

    Args:
        table: Routes table produced by :func:`~routegen.parser.resolver.resolve`.

    Returns:
        A :class:`~routegen.models.GeneratedModules` holding both texts.
    """
    return GeneratedModules(
        runtime_module=render_runtime_module(table),
        type_module=render_type_module(table),
    )


def routes_with_params(table: RoutesTable) -> RoutesTable:
    """Return the entries of *table* that have at least one parameter, in order."""
    return {route: params for route, params in table.items() if params}


def render_runtime_module(table: RoutesTable) -> str:
    """Render the CommonJS module exporting parameterised routes as ``routes``."""
    routes = json.dumps(routes_with_params(table), indent=2, ensure_ascii=False)
    return f"\nconst routes = {routes};\n\nmodule.exports = {{ routes }}\n"


def render_type_module(table: RoutesTable) -> str:
    """Render ``$path`` declarations, a blank line, then ``$params`` declarations."""
    return (
        "\n\n".join(
            [render_path_declarations(table), render_params_declarations(table)]
        )
        + "\n\n"
    )


def render_path_declarations(table: RoutesTable) -> str:
    """Render one ``$path`` declaration per route, the root route first."""
    routes: RoutesTable = {ROOT_PATH: []}
    routes.update(table)
    return "\n".join(
        _path_declaration(route, params) for route, params in routes.items()
    )


def render_params_declarations(table: RoutesTable) -> str:
    """Render one ``$params`` declaration per route that has parameters."""
    return "\n".join(
        _params_declaration(route, params)
        for route, params in routes_with_params(table).items()
    )


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _route_literal(route: str) -> str:
    return json.dumps(route, ensure_ascii=False)


def _path_declaration(route: str, params: list[str]) -> str:
    lines = ["export declare function $path("]
    lines.append(f"  route: {_route_literal(route)},")
    if params:
        fields = "; ".join(f"{name}: string | number" for name in params)
        lines.append(f"  params: {{ {fields} }},")
    lines.append("  query?: Record<string, string | number>")
    lines.append("): string;")
    return "\n".join(lines)


def _params_declaration(route: str, params: list[str]) -> str:
    lines = [
        "export declare function $params(",
        f"  route: {_route_literal(route)},",
        "  params: { readonly [key: string]: string | undefined }",
        "): {",
        ",\n".join(f"  {name}: string" for name in params),
        "};",
    ]
    return "\n".join(lines)
