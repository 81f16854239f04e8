"""Tests for metadata/models.py module."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from pgzod.metadata.models import (
    ArrayTypeRef,
    Column,
    Function,
    FunctionArg,
    MetadataSnapshot,
    PgType,
    ScalarTypeRef,
    Table,
    group_columns_by_table,
    resolve_type_refs,
)


class TestEntities:
    """Validation of catalog entries."""

    def test_table_accepts_schema_key(self) -> None:
        table = Table.model_validate({"id": 1, "schema": "public", "name": "users"})
        assert table.schema_name == "public"

    def test_table_accepts_field_name(self) -> None:
        table = Table(id=1, schema_name="public", name="users")
        assert table.schema_name == "public"

    def test_unknown_keys_ignored(self) -> None:
        column = Column.model_validate(
            {"table_id": 1, "name": "id", "format": "int8", "ordinal_position": 1}
        )
        assert column.name == "id"

    def test_entities_are_frozen(self) -> None:
        table = Table(id=1, schema_name="public", name="users")
        with pytest.raises(ValidationError):
            table.name = "accounts"  # type: ignore[misc]

    def test_column_defaults(self) -> None:
        column = Column(table_id=1, name="id", format="int8")
        assert column.is_nullable is False
        assert column.is_identity is False
        assert column.identity_generation is None
        assert column.default_value is None
        assert column.enums == ()
        assert column.is_updatable is False

    def test_invalid_identity_generation_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Column(table_id=1, name="id", format="int8", identity_generation="SOMETIMES")

    def test_function_arg_mode_validated(self) -> None:
        with pytest.raises(ValidationError):
            FunctionArg(name="x", mode="sideways", type_id=23)


class TestFunction:
    """Tests for Function.input_args."""

    def test_input_args_exclude_out_and_table(self) -> None:
        function = Function(
            schema_name="public",
            name="f",
            args=(
                FunctionArg(name="a", mode="in", type_id=23),
                FunctionArg(name="b", mode="out", type_id=23),
                FunctionArg(name="c", mode="inout", type_id=23),
                FunctionArg(name="d", mode="variadic", type_id=23),
                FunctionArg(name="e", mode="table", type_id=23),
            ),
        )
        assert [arg.name for arg in function.input_args] == ["a", "c", "d"]


class TestResolveTypeRefs:
    """Tests for resolve_type_refs."""

    def test_scalar_types(self) -> None:
        int4 = PgType(id=23, schema_name="pg_catalog", name="int4")
        refs = resolve_type_refs([int4], [])
        assert refs == {23: ScalarTypeRef(int4)}

    def test_array_type_strips_sigil(self) -> None:
        arr = PgType(id=1007, schema_name="pg_catalog", name="_int4")
        ref = resolve_type_refs([], [arr])[1007]
        assert isinstance(ref, ArrayTypeRef)
        assert ref.element_name == "int4"
        assert ref.element is None

    def test_array_element_prefers_same_schema(self) -> None:
        other = PgType(id=10, schema_name="other", name="mood", enums=("x",))
        mine = PgType(id=11, schema_name="public", name="mood", enums=("sad", "happy"))
        arr = PgType(id=12, schema_name="public", name="_mood")

        ref = resolve_type_refs([other, mine], [arr])[12]
        assert isinstance(ref, ArrayTypeRef)
        assert ref.element is mine

    def test_array_element_falls_back_to_any_schema(self) -> None:
        other = PgType(id=10, schema_name="other", name="mood", enums=("x",))
        arr = PgType(id=12, schema_name="public", name="_mood")

        ref = resolve_type_refs([other], [arr])[12]
        assert isinstance(ref, ArrayTypeRef)
        assert ref.element is other

    def test_is_array(self) -> None:
        assert PgType(id=1, schema_name="s", name="_text").is_array
        assert not PgType(id=2, schema_name="s", name="text").is_array


class TestGroupColumnsByTable:
    """Tests for group_columns_by_table."""

    def test_groups_and_sorts_by_name(self) -> None:
        columns = [
            Column(table_id=2, name="b", format="text"),
            Column(table_id=1, name="z", format="text"),
            Column(table_id=1, name="a", format="text"),
        ]
        grouped = group_columns_by_table(columns)
        assert [c.name for c in grouped[1]] == ["a", "z"]
        assert [c.name for c in grouped[2]] == ["b"]

    def test_order_independent(self) -> None:
        columns = [Column(table_id=1, name=name, format="text") for name in ("c", "a", "b")]
        assert group_columns_by_table(columns) == group_columns_by_table(reversed(columns))

    def test_empty(self) -> None:
        assert group_columns_by_table([]) == {}


class TestMetadataSnapshot:
    """Tests for MetadataSnapshot."""

    def test_defaults_are_empty(self) -> None:
        snapshot = MetadataSnapshot()
        assert snapshot.schemas == ()
        assert snapshot.detect_one_to_one_relationships is False
        assert snapshot.type_refs() == {}

    def test_type_refs_cover_both_listings(self) -> None:
        text = PgType(id=25, schema_name="pg_catalog", name="text")
        text_arr = PgType(id=1009, schema_name="pg_catalog", name="_text")
        snapshot = MetadataSnapshot(types=(text,), array_types=(text_arr,))

        refs = snapshot.type_refs()
        assert isinstance(refs[25], ScalarTypeRef)
        assert isinstance(refs[1009], ArrayTypeRef)
