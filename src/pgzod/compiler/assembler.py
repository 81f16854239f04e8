"""Schema assembly: metadata snapshot -> Zod document.

Single pass over the snapshot:

1. Schemas in the order the caller supplied.
2. Tables by name, each with ``row`` / ``insert`` / ``update`` objects.
3. Enum types of the schema by name, values in declared order.
4. Functions by name (see ``pgzod.compiler.functions``).
5. Views and materialized views together by name, updatable columns only.
6. Optionally, return types of the functions under ``returns`` (off by
   default; ``include_returns=True`` adds the section after ``views``).

The only fatal condition is a column whose ``table_id`` names no table,
view or materialized view. Unknown types never stop the pass.

Usage::

    from pgzod.compiler import CollectingSink, compile_schema

    sink = CollectingSink()
    document = compile_schema(snapshot, sink=sink)
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence

import structlog

from pgzod.compiler.diagnostics import (
    ENUM_FALLBACK,
    UNKNOWN_TYPE,
    DiagnosticSink,
    LoggingSink,
)
from pgzod.compiler.functions import group_functions, resolve_functions, resolve_returns
from pgzod.compiler.modifiers import Context, compose_modifiers, has_enum, include_column
from pgzod.compiler.render import Node, Obj, chain, render_document, z_enum, z_object
from pgzod.compiler.types import Z_STRING, Z_UNKNOWN, array_of, map_type
from pgzod.core.errors import SnapshotError
from pgzod.metadata.models import (
    Column,
    MetadataSnapshot,
    PgType,
    Schema,
    Table,
    TypeRef,
    group_columns_by_table,
)

log = structlog.get_logger()

TABLE_VARIANTS = (Context.ROW, Context.INSERT, Context.UPDATE)


def column_expression(
    column: Column,
    context: Context,
    *,
    sink: DiagnosticSink,
    site: str,
) -> str:
    if has_enum(column):
        enum_fallback, kind = Z_STRING, ENUM_FALLBACK
    else:
        enum_fallback, kind = Z_UNKNOWN, UNKNOWN_TYPE
    base = map_type(
        column.format,
        enum_fallback,
        array_of(Z_UNKNOWN),
        sink=sink,
        site=site,
        fallback_kind=kind,
    )
    return chain(base, compose_modifiers(column, context))


def fields_object(
    relation: Table,
    columns: Sequence[Column],
    context: Context,
    *,
    sink: DiagnosticSink,
) -> Node:
    prefix = f"column {relation.schema_name}.{relation.name}"
    return z_object(
        [
            (
                column.name,
                column_expression(column, context, sink=sink, site=f"{prefix}.{column.name}"),
            )
            for column in columns
            if include_column(column, context)
        ]
    )


def _by_name[T: (Table, PgType)](items: Sequence[T], schema: Schema) -> list[T]:
    return sorted(
        (item for item in items if item.schema_name == schema.name),
        key=lambda item: item.name,
    )


def _check_topology(
    snapshot: MetadataSnapshot,
    columns_by_table: Mapping[int, Sequence[Column]],
) -> None:
    known = {
        relation.id
        for relation in (*snapshot.tables, *snapshot.views, *snapshot.materialized_views)
    }
    for table_id, columns in columns_by_table.items():
        if table_id not in known:
            raise SnapshotError.unknown_table(table_id, columns[0].name)


class _Assembler:
    """Per-pass state: the column grouping and type index, built once."""

    def __init__(
        self,
        snapshot: MetadataSnapshot,
        sink: DiagnosticSink,
        *,
        include_returns: bool = False,
    ) -> None:
        self._snapshot = snapshot
        self._sink = sink
        self._include_returns = include_returns
        self._columns = group_columns_by_table(snapshot.columns)
        _check_topology(snapshot, self._columns)
        self._type_refs: dict[int, TypeRef] = snapshot.type_refs()

    def columns_of(self, relation: Table) -> tuple[Column, ...]:
        return self._columns.get(relation.id, ())

    def tables(self, schema: Schema) -> Obj:
        entries: list[tuple[str, Node]] = []
        for table in _by_name(self._snapshot.tables, schema):
            columns = self.columns_of(table)
            variants = Obj(
                tuple(
                    (context.value, fields_object(table, columns, context, sink=self._sink))
                    for context in TABLE_VARIANTS
                )
            )
            entries.append((table.name, variants))
        return Obj(tuple(entries))

    def enums(self, schema: Schema) -> Obj:
        return Obj(
            tuple(
                (pg_type.name, z_enum(pg_type.enums))
                for pg_type in _by_name(self._snapshot.types, schema)
                if pg_type.enums
            )
        )

    def views(self, schema: Schema) -> Obj:
        relations = _by_name([*self._snapshot.views, *self._snapshot.materialized_views], schema)
        return Obj(
            tuple(
                (
                    view.name,
                    fields_object(view, self.columns_of(view), Context.VIEW, sink=self._sink),
                )
                for view in relations
            )
        )

    def schema(self, schema: Schema) -> Obj:
        groups = group_functions(
            f for f in self._snapshot.functions if f.schema_name == schema.name
        )
        functions = resolve_functions(groups, self._type_refs, sink=self._sink)
        sections: list[tuple[str, Node]] = [
            ("tables", self.tables(schema)),
            ("enums", self.enums(schema)),
            ("functions", Obj(tuple(functions.items()))),
            ("views", self.views(schema)),
        ]
        if self._include_returns:
            returns = resolve_returns(groups, self._type_refs, sink=self._sink)
            sections.append(("returns", Obj(tuple(returns.items()))))
        return Obj(tuple(sections))

    def document(self) -> str:
        body = Obj(tuple((schema.name, self.schema(schema)) for schema in self._snapshot.schemas))
        return render_document(body)


def compile_schema(
    snapshot: MetadataSnapshot,
    *,
    sink: DiagnosticSink | None = None,
    include_returns: bool = False,
) -> str:
    """Compile a snapshot into a Zod TypeScript module.

    Args:
        snapshot: Catalog metadata, already filtered by the caller
        sink: Receives non-fatal diagnostics (default: structlog at INFO)
        include_returns: Add a ``returns`` section per schema with each
            function's return schema

    Returns:
        The document text, ending in a newline. Identical snapshots give
        identical text.

    Raises:
        SnapshotError: If a column references an unknown relation id.
    """
    log.debug(
        "compile_started",
        schemas=len(snapshot.schemas),
        relationships=len(snapshot.relationships),
        detect_one_to_one_relationships=snapshot.detect_one_to_one_relationships,
    )
    document = _Assembler(
        snapshot, sink or LoggingSink(), include_returns=include_returns
    ).document()
    log.debug("compile_finished", size=len(document))
    return document


def summarize(snapshot: MetadataSnapshot) -> dict[str, dict[str, int]]:
    """Per-schema counts of what ``compile_schema`` emits."""
    summary: dict[str, dict[str, int]] = {}
    for schema in snapshot.schemas:
        summary[schema.name] = {
            "tables": len(_by_name(snapshot.tables, schema)),
            "views": len(
                _by_name([*snapshot.views, *snapshot.materialized_views], schema)
            ),
            "enums": sum(1 for t in _by_name(snapshot.types, schema) if t.enums),
            "functions": len(
                group_functions(f for f in snapshot.functions if f.schema_name == schema.name)
            ),
        }
    return summary
