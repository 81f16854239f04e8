"""Zod document rendering.

Expressions are plain strings (``z.string().nullable()``). Only the nested
containers that span lines are nodes: ``Obj`` for object literals, ``Arr``
for array literals and ``Call`` for ``z.object(...)`` / ``z.union(...)``.
Rendering is deterministic: two-space indent, one entry per line, trailing
commas, quoted keys.
"""

from __future__ import annotations

import json
from collections.abc import Sequence
from dataclasses import dataclass

INDENT = "  "

HEADER = "// Generated by pgzod. Do not edit by hand."

# Declared once per document and referenced as ``jsonSchema``.
JSON_DEFINITION = """\
const literalSchema = z.union([z.string(), z.number(), z.boolean(), z.null()])
type Literal = z.infer<typeof literalSchema>
type Json = Literal | { [key: string]: Json } | Json[]
const jsonSchema: z.ZodType<Json> = z.lazy(() =>
  z.union([literalSchema, z.record(jsonSchema), z.array(jsonSchema)]),
)"""


@dataclass(frozen=True, slots=True)
class Obj:
    entries: tuple[tuple[str, Node], ...] = ()


@dataclass(frozen=True, slots=True)
class Arr:
    items: tuple[Node, ...] = ()


@dataclass(frozen=True, slots=True)
class Call:
    callee: str
    arg: Node


Node = str | Obj | Arr | Call


def js_string(value: str) -> str:
    """Quote a value as a JavaScript string literal."""
    return json.dumps(value, ensure_ascii=False)


def chain(base: str, methods: Sequence[str]) -> str:
    """Append method calls: chain("z.string()", ["nullable()"]) -> "z.string().nullable()"."""
    return base + "".join(f".{method}" for method in methods)


def z_object(fields: Sequence[tuple[str, Node]]) -> Call:
    return Call("z.object", Obj(tuple(fields)))


def z_union(options: Sequence[Node]) -> Call:
    return Call("z.union", Arr(tuple(options)))


def z_enum(values: Sequence[str]) -> str:
    return f"z.enum([{', '.join(js_string(v) for v in values)}])"


def render(node: Node, depth: int = 0) -> str:
    if isinstance(node, str):
        return node
    if isinstance(node, Call):
        return f"{node.callee}({render(node.arg, depth)})"

    pad = INDENT * (depth + 1)
    if isinstance(node, Obj):
        if not node.entries:
            return "{}"
        lines = [f"{pad}{js_string(key)}: {render(value, depth + 1)}," for key, value in node.entries]
        return "{\n" + "\n".join(lines) + "\n" + INDENT * depth + "}"

    if not node.items:
        return "[]"
    lines = [f"{pad}{render(item, depth + 1)}," for item in node.items]
    return "[\n" + "\n".join(lines) + "\n" + INDENT * depth + "]"


def render_document(schemas: Obj) -> str:
    """Render the full module: header, import, JSON definition, export."""
    parts = [
        HEADER,
        'import { z } from "zod"',
        JSON_DEFINITION,
        f"export const schema = {render(schemas)}",
    ]
    return "\n\n".join(parts) + "\n"
