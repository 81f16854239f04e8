"""Catalog metadata model.

Entities mirror the listings a pg-meta style introspection returns. They
are frozen pydantic models so a snapshot can be validated straight from a
JSON/YAML dump and is never mutated once built. Unknown keys are ignored:
dumps carry many catalog fields the compiler has no use for.

``TypeRef`` is the one piece of derived data. Array types are recognised
once, when the snapshot is built, instead of re-parsing the ``_`` sigil at
every use site.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

ARRAY_SIGIL = "_"

ArgMode = Literal["in", "out", "inout", "variadic", "table"]
IdentityGeneration = Literal["ALWAYS", "BY DEFAULT"]
INPUT_ARG_MODES: frozenset[str] = frozenset({"in", "inout", "variadic"})


class _Entity(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)


class Schema(_Entity):
    id: int = 0
    name: str


class Table(_Entity):
    id: int
    schema_name: str = Field(alias="schema")
    name: str
    comment: str | None = None


class View(Table):
    """A plain view. Its columns carry ``is_updatable``."""


class MaterializedView(Table):
    """A materialized view. Never updatable in practice, kept for completeness."""


class Column(_Entity):
    table_id: int
    name: str
    format: str
    data_type: str = ""
    is_nullable: bool = False
    is_identity: bool = False
    identity_generation: IdentityGeneration | None = None
    default_value: Any = None
    enums: tuple[str, ...] = ()
    comment: str | None = None
    is_updatable: bool = False


class Relationship(_Entity):
    foreign_key_name: str
    schema_name: str = Field(alias="schema")
    relation: str
    columns: tuple[str, ...] = ()
    referenced_schema: str
    referenced_relation: str
    referenced_columns: tuple[str, ...] = ()
    is_one_to_one: bool = False


class FunctionArg(_Entity):
    name: str = ""
    mode: ArgMode = "in"
    type_id: int
    has_default: bool = False


class Function(_Entity):
    id: int = 0
    schema_name: str = Field(alias="schema")
    name: str
    args: tuple[FunctionArg, ...] = ()
    return_type_id: int | None = None
    return_type: str | None = None

    @property
    def input_args(self) -> tuple[FunctionArg, ...]:
        """Arguments a caller supplies (in, inout and variadic)."""
        return tuple(arg for arg in self.args if arg.mode in INPUT_ARG_MODES)


class PgType(_Entity):
    id: int
    schema_name: str = Field(alias="schema")
    name: str
    format: str = ""
    enums: tuple[str, ...] = ()

    @property
    def is_array(self) -> bool:
        return self.name.startswith(ARRAY_SIGIL)


# =============================================================================
# Resolved type references
# =============================================================================


@dataclass(frozen=True, slots=True)
class ScalarTypeRef:
    """Reference to a non-array type."""

    type: PgType


@dataclass(frozen=True, slots=True)
class ArrayTypeRef:
    """Reference to an array type.

    ``element`` is the element's own type record when the snapshot has one
    with the element name, which is how enum arrays keep their values.
    """

    type: PgType
    element_name: str
    element: PgType | None = None


TypeRef = ScalarTypeRef | ArrayTypeRef


def resolve_type_refs(
    types: Iterable[PgType],
    array_types: Iterable[PgType],
) -> dict[int, TypeRef]:
    """Build the type id -> TypeRef index for a snapshot.

    Array types have the sigil stripped once here. When several scalar types
    share the element name, the one in the array type's own schema wins.
    """
    refs: dict[int, TypeRef] = {}
    by_name: dict[str, list[PgType]] = {}
    for pg_type in types:
        refs[pg_type.id] = ScalarTypeRef(pg_type)
        by_name.setdefault(pg_type.name, []).append(pg_type)

    for pg_type in array_types:
        element_name = pg_type.name[len(ARRAY_SIGIL) :]
        candidates = by_name.get(element_name, [])
        element = next(
            (c for c in candidates if c.schema_name == pg_type.schema_name),
            candidates[0] if candidates else None,
        )
        refs[pg_type.id] = ArrayTypeRef(pg_type, element_name, element)
    return refs


# =============================================================================
# Snapshot
# =============================================================================


@dataclass(frozen=True)
class MetadataSnapshot:
    """Everything one compilation pass reads.

    Built by the snapshot loader (or directly by tests). Schema order is the
    caller's order and is never re-sorted by the compiler.
    """

    schemas: tuple[Schema, ...] = ()
    tables: tuple[Table, ...] = ()
    views: tuple[View, ...] = ()
    materialized_views: tuple[MaterializedView, ...] = ()
    columns: tuple[Column, ...] = ()
    relationships: tuple[Relationship, ...] = ()
    functions: tuple[Function, ...] = ()
    types: tuple[PgType, ...] = ()
    array_types: tuple[PgType, ...] = ()
    detect_one_to_one_relationships: bool = False

    def type_refs(self) -> dict[int, TypeRef]:
        return resolve_type_refs(self.types, self.array_types)


def group_columns_by_table(columns: Iterable[Column]) -> Mapping[int, tuple[Column, ...]]:
    """Group columns by owning relation id, each group ordered by name.

    Input order does not matter: any permutation yields the same grouping.
    """
    grouped: dict[int, list[Column]] = {}
    for column in sorted(columns, key=lambda c: (c.table_id, c.name)):
        grouped.setdefault(column.table_id, []).append(column)
    return {table_id: tuple(group) for table_id, group in grouped.items()}
