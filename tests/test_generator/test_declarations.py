"""Tests for routegen.generator.declarations: runtime table and .d.ts rendering."""

from __future__ import annotations

import json
import re

from routegen.generator.declarations import (
    generate,
    render_params_declarations,
    render_path_declarations,
    render_runtime_module,
    render_type_module,
    routes_with_params,
)
from routegen.parser import parse_route_manifest, resolve


ROOT_DECLARATION = (
    "export declare function $path(\n"
    '  route: "/",\n'
    "  query?: Record<string, string | number>\n"
    "): string;"
)


def _runtime_routes(text: str) -> dict:
    """Pull the JSON object out of the rendered runtime module."""
    match = re.search(r"const routes = (.*);\n", text, re.DOTALL)
    assert match is not None
    return json.loads(match.group(1))


# ------------------------------------------------------------------ #
# Runtime module
# ------------------------------------------------------------------ #


class TestRuntimeModule:
    def test_exact_text(self) -> None:
        text = render_runtime_module({"users/:id": ["id"]})
        assert text == (
            "\n"
            "const routes = {\n"
            '  "users/:id": [\n'
            '    "id"\n'
            "  ]\n"
            "};\n"
            "\n"
            "module.exports = { routes }\n"
        )

    def test_empty_table(self) -> None:
        assert render_runtime_module({}) == (
            "\nconst routes = {};\n\nmodule.exports = { routes }\n"
        )

    def test_parameterless_routes_omitted(self) -> None:
        table = {"about": [], "users": [], "users/:id": ["id"], "a/:b/:c": ["b", "c"]}
        assert _runtime_routes(render_runtime_module(table)) == {
            "users/:id": ["id"],
            "a/:b/:c": ["b", "c"],
        }

    def test_order_preserved(self) -> None:
        table = {"z/:a": ["a"], "a/:z": ["z"]}
        assert list(_runtime_routes(render_runtime_module(table))) == ["z/:a", "a/:z"]

    def test_non_ascii_kept(self) -> None:
        text = render_runtime_module({"café/:id": ["id"]})
        assert '"café/:id"' in text


# ------------------------------------------------------------------ #
# $path declarations
# ------------------------------------------------------------------ #


class TestPathDeclarations:
    def test_empty_table_only_root(self) -> None:
        assert render_path_declarations({}) == ROOT_DECLARATION

    def test_root_first(self) -> None:
        text = render_path_declarations({"about": []})
        assert text.startswith(ROOT_DECLARATION + "\n")

    def test_parameterless_route_has_no_params_field(self) -> None:
        text = render_path_declarations({"about": []})
        assert text == (
            ROOT_DECLARATION
            + "\n"
            + "export declare function $path(\n"
            + '  route: "about",\n'
            + "  query?: Record<string, string | number>\n"
            + "): string;"
        )

    def test_params_field(self) -> None:
        text = render_path_declarations({"users/:id": ["id"]})
        assert "  params: { id: string | number },\n" in text

    def test_multiple_params_joined_with_semicolons(self) -> None:
        text = render_path_declarations({"a/:x/:y": ["x", "y"]})
        assert "  params: { x: string | number; y: string | number },\n" in text

    def test_one_declaration_per_route(self) -> None:
        table = {"a": [], "b/:id": ["id"], "c": []}
        text = render_path_declarations(table)
        assert text.count("export declare function $path(") == 4

    def test_order_follows_table(self) -> None:
        table = {"zebra": [], "apple": []}
        routes = re.findall(r'route: "([^"]*)"', render_path_declarations(table))
        assert routes == ["/", "zebra", "apple"]

    def test_table_root_entry_not_duplicated(self) -> None:
        text = render_path_declarations({"/": []})
        assert text == ROOT_DECLARATION

    def test_route_is_json_escaped(self) -> None:
        text = render_path_declarations({'say/"hi"': []})
        assert r'route: "say/\"hi\"",' in text


# ------------------------------------------------------------------ #
# $params declarations
# ------------------------------------------------------------------ #


class TestParamsDeclarations:
    def test_single_param(self) -> None:
        assert render_params_declarations({"users/:id": ["id"]}) == (
            "export declare function $params(\n"
            '  route: "users/:id",\n'
            "  params: { readonly [key: string]: string | undefined }\n"
            "): {\n"
            "  id: string\n"
            "};"
        )

    def test_multiple_params_joined_with_commas(self) -> None:
        text = render_params_declarations({"a/:x/:y": ["x", "y"]})
        assert "): {\n  x: string,\n  y: string\n};" in text

    def test_parameterless_routes_excluded(self) -> None:
        assert render_params_declarations({"about": [], "users": []}) == ""

    def test_subset_matches_runtime_table(self) -> None:
        table = {"a": [], "b/:id": ["id"], "c/:x/d/:y": ["x", "y"], "e": []}
        declared = re.findall(r'route: "([^"]*)"', render_params_declarations(table))
        runtime = list(_runtime_routes(render_runtime_module(table)))
        assert declared == runtime == ["b/:id", "c/:x/d/:y"]

    def test_duplicate_names_kept(self) -> None:
        text = render_params_declarations({":id/children/:id": ["id", "id"]})
        assert text.count("  id: string") == 2


# ------------------------------------------------------------------ #
# Type module and generate()
# ------------------------------------------------------------------ #


class TestTypeModule:
    def test_empty_table(self) -> None:
        assert render_type_module({}) == ROOT_DECLARATION + "\n\n\n\n"

    def test_sections_separated_by_blank_line(self) -> None:
        table = {"users/:id": ["id"]}
        text = render_type_module(table)
        assert text == (
            render_path_declarations(table)
            + "\n\n"
            + render_params_declarations(table)
            + "\n\n"
        )

    def test_users_id_example(self) -> None:
        text = render_type_module({"users/:id": ["id"]})
        assert "params: { id: string | number }" in text
        assert "): {\n  id: string\n};" in text

    def test_about_example(self) -> None:
        text = render_type_module({"about": []})
        assert 'route: "about"' in text
        assert "params: {" not in text
        assert "$params" not in text


class TestGenerate:
    def test_returns_both_modules(self) -> None:
        table = {"about": [], "users/:id": ["id"]}
        modules = generate(table)
        assert modules.runtime_module == render_runtime_module(table)
        assert modules.type_module == render_type_module(table)

    def test_deterministic(self) -> None:
        table = {"about": [], "users/:id": ["id"], ":lang/:page": ["lang", "page"]}
        assert generate(dict(table)) == generate(dict(table))

    def test_same_tree_gives_identical_text(self, remix_manifest_raw) -> None:
        tree = parse_route_manifest(remix_manifest_raw)
        first = generate(resolve(tree))
        second = generate(resolve(tree))
        assert first.runtime_module == second.runtime_module
        assert first.type_module == second.type_module
        assert "users/:id/posts/:postId" in first.type_module

    def test_does_not_mutate_table(self) -> None:
        table = {"about": [], "users/:id": ["id"]}
        generate(table)
        assert table == {"about": [], "users/:id": ["id"]}


class TestRoutesWithParams:
    def test_filters_and_keeps_order(self) -> None:
        table = {"b/:x": ["x"], "a": [], "c/:y": ["y"]}
        assert list(routes_with_params(table)) == ["b/:x", "c/:y"]
