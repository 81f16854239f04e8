"""Function argument and return schemas.

Functions are grouped by exact name. A name with one overload becomes a
``z.object`` of its ``in`` arguments; a name with several becomes a
``z.union`` of one object per overload, in input order and never merged,
even when two overloads have the same shape.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence

from pgzod.compiler.diagnostics import (
    ENUM_FALLBACK,
    UNKNOWN_TYPE,
    UNKNOWN_TYPE_ID,
    Diagnostic,
    DiagnosticSink,
)
from pgzod.compiler.modifiers import OPTIONAL
from pgzod.compiler.render import Node, chain, z_enum, z_object, z_union
from pgzod.compiler.types import Z_UNKNOWN, Z_VOID, array_of, map_type
from pgzod.metadata.models import ArrayTypeRef, Function, PgType, ScalarTypeRef, TypeRef


def is_admissible(function: Function) -> bool:
    """Whether the call signature can be written as a named-field object.

    True when every input argument (in, inout, variadic) is named, or when
    there is exactly one input argument.
    """
    inputs = function.input_args
    return len(inputs) == 1 or all(arg.name for arg in inputs)


def group_functions(functions: Iterable[Function]) -> dict[str, list[Function]]:
    """Admissible functions grouped by name, names ascending, overloads in input order."""
    groups: dict[str, list[Function]] = {}
    for function in functions:
        if is_admissible(function):
            groups.setdefault(function.name, []).append(function)
    return {name: groups[name] for name in sorted(groups)}


def _enum_fallback(pg_type: PgType | None) -> tuple[str, str]:
    """Fallback expression and diagnostic kind for an unclassified type."""
    if pg_type is not None and pg_type.enums:
        return z_enum(pg_type.enums), ENUM_FALLBACK
    return Z_UNKNOWN, UNKNOWN_TYPE


def resolve_type_id(
    type_id: int | None,
    type_refs: Mapping[int, TypeRef],
    *,
    sink: DiagnosticSink,
    site: str,
) -> str:
    """Zod expression for a type referenced by id.

    Array references map their element and wrap it; scalar references map
    directly; ids missing from the snapshot degrade to ``z.unknown()``.
    """
    ref = type_refs.get(type_id) if type_id is not None else None
    match ref:
        case ArrayTypeRef(element_name=element_name, element=element):
            fallback, kind = _enum_fallback(element)
            inner = map_type(
                element_name, fallback, Z_UNKNOWN, sink=sink, site=site, fallback_kind=kind
            )
            return array_of(inner)
        case ScalarTypeRef(type=pg_type):
            fallback, kind = _enum_fallback(pg_type)
            return map_type(
                pg_type.name, fallback, Z_UNKNOWN, sink=sink, site=site, fallback_kind=kind
            )
        case _:
            sink.emit(Diagnostic(UNKNOWN_TYPE_ID, str(type_id), site))
            return Z_UNKNOWN


def build_args_object(
    function: Function,
    type_refs: Mapping[int, TypeRef],
    *,
    sink: DiagnosticSink,
) -> Node:
    qualified = f"{function.schema_name}.{function.name}"
    fields: list[tuple[str, Node]] = []
    for arg in function.args:
        if arg.mode != "in":
            continue
        expression = resolve_type_id(
            arg.type_id, type_refs, sink=sink, site=f"argument {qualified}({arg.name})"
        )
        if arg.has_default:
            expression = chain(expression, [OPTIONAL])
        fields.append((arg.name, expression))
    return z_object(fields)


def _one_or_union(options: Sequence[Node]) -> Node:
    return options[0] if len(options) == 1 else z_union(options)


def resolve_functions(
    groups: Mapping[str, Sequence[Function]],
    type_refs: Mapping[int, TypeRef],
    *,
    sink: DiagnosticSink,
) -> dict[str, Node]:
    """Function name -> argument schema (object, or union across overloads)."""
    return {
        name: _one_or_union([build_args_object(f, type_refs, sink=sink) for f in overloads])
        for name, overloads in groups.items()
    }


def resolve_return_type(
    function: Function,
    type_refs: Mapping[int, TypeRef],
    *,
    sink: DiagnosticSink,
) -> str:
    ref = type_refs.get(function.return_type_id) if function.return_type_id is not None else None
    if isinstance(ref, ScalarTypeRef) and ref.type.name == "void":
        return Z_VOID
    return resolve_type_id(
        function.return_type_id,
        type_refs,
        sink=sink,
        site=f"return {function.schema_name}.{function.name}",
    )


def resolve_returns(
    groups: Mapping[str, Sequence[Function]],
    type_refs: Mapping[int, TypeRef],
    *,
    sink: DiagnosticSink,
) -> dict[str, Node]:
    """Function name -> return schema, unioned across overloads like arguments."""
    return {
        name: _one_or_union([resolve_return_type(f, type_refs, sink=sink) for f in overloads])
        for name, overloads in groups.items()
    }
