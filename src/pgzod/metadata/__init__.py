"""Metadata module exports."""

from pgzod.metadata.loader import build_snapshot, load_snapshot, read_dump
from pgzod.metadata.models import (
    ArrayTypeRef,
    Column,
    Function,
    FunctionArg,
    MaterializedView,
    MetadataSnapshot,
    PgType,
    Relationship,
    ScalarTypeRef,
    Schema,
    Table,
    TypeRef,
    View,
    group_columns_by_table,
)

__all__ = [
    "build_snapshot",
    "load_snapshot",
    "read_dump",
    "ArrayTypeRef",
    "Column",
    "Function",
    "FunctionArg",
    "MaterializedView",
    "MetadataSnapshot",
    "PgType",
    "Relationship",
    "ScalarTypeRef",
    "Schema",
    "Table",
    "TypeRef",
    "View",
    "group_columns_by_table",
]
