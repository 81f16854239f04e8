"""Tests for compiler/render.py module."""

from __future__ import annotations

from pgzod.compiler.render import (
    HEADER,
    Arr,
    Call,
    Obj,
    chain,
    js_string,
    render,
    render_document,
    z_enum,
    z_object,
    z_union,
)


class TestPrimitives:
    """Tests for string helpers."""

    def test_js_string_escapes_quotes(self) -> None:
        assert js_string('say "hi"') == '"say \\"hi\\""'

    def test_js_string_keeps_unicode(self) -> None:
        assert js_string("café") == '"café"'

    def test_chain(self) -> None:
        assert chain("z.string()", ["nullable()", "optional()"]) == "z.string().nullable().optional()"

    def test_chain_no_methods(self) -> None:
        assert chain("z.number()", []) == "z.number()"

    def test_z_enum(self) -> None:
        assert z_enum(["b", "a"]) == 'z.enum(["b", "a"])'


class TestRender:
    """Tests for render."""

    def test_string_passes_through(self) -> None:
        assert render("z.string()") == "z.string()"

    def test_empty_containers(self) -> None:
        assert render(Obj()) == "{}"
        assert render(Arr()) == "[]"
        assert render(z_object([])) == "z.object({})"

    def test_object(self) -> None:
        node = z_object([("id", "z.number()"), ("name", "z.string()")])
        assert render(node) == 'z.object({\n  "id": z.number(),\n  "name": z.string(),\n})'

    def test_nested_indentation(self) -> None:
        node = Obj((("users", Obj((("row", z_object([("id", "z.number()")])),))),))
        expected = (
            "{\n"
            '  "users": {\n'
            '    "row": z.object({\n'
            '      "id": z.number(),\n'
            "    }),\n"
            "  },\n"
            "}"
        )
        assert render(node) == expected

    def test_union(self) -> None:
        node = z_union([z_object([("a", "z.number()")]), z_object([("a", "z.string()")])])
        expected = (
            "z.union([\n"
            "  z.object({\n"
            '    "a": z.number(),\n'
            "  }),\n"
            "  z.object({\n"
            '    "a": z.string(),\n'
            "  }),\n"
            "])"
        )
        assert render(node) == expected

    def test_keys_are_quoted(self) -> None:
        assert render(Obj((("weird key", "z.string()"),))) == '{\n  "weird key": z.string(),\n}'

    def test_call(self) -> None:
        assert render(Call("z.tuple", Arr(("z.string()",)))) == "z.tuple([\n  z.string(),\n])"


class TestRenderDocument:
    """Tests for render_document."""

    def test_layout(self) -> None:
        document = render_document(Obj())

        assert document.startswith(HEADER + "\n\n")
        assert 'import { z } from "zod"' in document
        assert document.endswith("export const schema = {}\n")

    def test_json_definition_declared_once(self) -> None:
        document = render_document(Obj())
        assert document.count("const jsonSchema") == 1
        assert "z.lazy(" in document
