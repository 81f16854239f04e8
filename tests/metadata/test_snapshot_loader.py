"""Tests for metadata/loader.py module.

Covers:
- read_dump() for JSON, YAML and broken files
- build_snapshot() filtering and validation
- load_snapshot() end to end
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from pgzod.core.errors import ErrorCode, SnapshotError
from pgzod.metadata.loader import build_snapshot, load_snapshot, read_dump


def _dump() -> dict[str, Any]:
    return {
        "schemas": [
            {"id": 1, "name": "public"},
            {"id": 2, "name": "auth"},
            {"id": 3, "name": "internal"},
        ],
        "tables": [
            {"id": 10, "schema": "public", "name": "users"},
            {"id": 11, "schema": "auth", "name": "sessions"},
            {"id": 12, "schema": "internal", "name": "jobs"},
        ],
        "views": [{"id": 20, "schema": "public", "name": "active_users"}],
        "materialized_views": [{"id": 30, "schema": "public", "name": "stats"}],
        "columns": [
            {"table_id": 10, "schema": "public", "name": "id", "format": "int8"},
            {"table_id": 11, "schema": "auth", "name": "token", "format": "text"},
            {"table_id": 12, "schema": "internal", "name": "id", "format": "int8"},
        ],
        "relationships": [],
        "functions": [
            {
                "id": 100,
                "schema": "public",
                "name": "add",
                "args": [{"name": "a", "type_id": 23}],
                "return_type_id": 23,
                "return_type": "int4",
            },
            {
                "id": 101,
                "schema": "public",
                "name": "audit",
                "args": [],
                "return_type_id": 2279,
                "return_type": "trigger",
            },
            {
                "id": 102,
                "schema": "internal",
                "name": "tick",
                "args": [],
                "return_type_id": 2278,
                "return_type": "void",
            },
        ],
        "types": [
            {"id": 23, "schema": "pg_catalog", "name": "int4", "format": "int4"},
            {"id": 1007, "schema": "pg_catalog", "name": "_int4", "format": "_int4"},
        ],
    }


class TestReadDump:
    """Tests for read_dump."""

    def test_reads_json(self, tmp_path: Path) -> None:
        path = tmp_path / "dump.json"
        path.write_text(json.dumps({"schemas": []}))
        assert read_dump(path) == {"schemas": []}

    def test_reads_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "dump.yaml"
        path.write_text("schemas:\n  - name: public\n")
        assert read_dump(path) == {"schemas": [{"name": "public"}]}

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(SnapshotError) as exc_info:
            read_dump(tmp_path / "missing.json")
        assert exc_info.value.code == ErrorCode.SNAPSHOT_PARSE_ERROR

    def test_invalid_json(self, tmp_path: Path) -> None:
        path = tmp_path / "dump.json"
        path.write_text("{not json")
        with pytest.raises(SnapshotError) as exc_info:
            read_dump(path)
        assert exc_info.value.code == ErrorCode.SNAPSHOT_PARSE_ERROR

    def test_non_mapping(self, tmp_path: Path) -> None:
        path = tmp_path / "dump.json"
        path.write_text("[1, 2]")
        with pytest.raises(SnapshotError) as exc_info:
            read_dump(path)
        assert "mapping" in exc_info.value.message


class TestBuildSnapshot:
    """Tests for build_snapshot."""

    def test_keeps_everything_without_allow_list(self) -> None:
        snapshot = build_snapshot(_dump())
        assert [s.name for s in snapshot.schemas] == ["public", "auth", "internal"]
        assert len(snapshot.tables) == 3
        assert len(snapshot.columns) == 3

    def test_allow_list_filters_and_orders(self) -> None:
        snapshot = build_snapshot(_dump(), included_schemas=["auth", "public"])

        assert [s.name for s in snapshot.schemas] == ["auth", "public"]
        assert {t.name for t in snapshot.tables} == {"users", "sessions"}
        assert {c.table_id for c in snapshot.columns} == {10, 11}
        assert [f.name for f in snapshot.functions] == ["add"]

    def test_repeated_allowed_schema_emitted_once(self) -> None:
        snapshot = build_snapshot(_dump(), included_schemas=["auth", "public", "auth"])
        assert [s.name for s in snapshot.schemas] == ["auth", "public"]

    def test_missing_allowed_schema_is_skipped(self) -> None:
        snapshot = build_snapshot(_dump(), included_schemas=["public", "nope"])
        assert [s.name for s in snapshot.schemas] == ["public"]

    def test_trigger_functions_dropped(self) -> None:
        snapshot = build_snapshot(_dump())
        assert "audit" not in {f.name for f in snapshot.functions}
        assert "tick" in {f.name for f in snapshot.functions}

    def test_custom_excluded_return_types(self) -> None:
        snapshot = build_snapshot(_dump(), excluded_return_types=["void"])
        names = {f.name for f in snapshot.functions}
        assert "tick" not in names
        assert "audit" in names

    def test_types_split_by_sigil(self) -> None:
        snapshot = build_snapshot(_dump())
        assert [t.name for t in snapshot.types] == ["int4"]
        assert [t.name for t in snapshot.array_types] == ["_int4"]

    def test_types_not_schema_filtered(self) -> None:
        snapshot = build_snapshot(_dump(), included_schemas=["public"])
        assert len(snapshot.types) == 1

    def test_views_and_materialized_views(self) -> None:
        snapshot = build_snapshot(_dump())
        assert [v.name for v in snapshot.views] == ["active_users"]
        assert [m.name for m in snapshot.materialized_views] == ["stats"]

    def test_detect_flag_carried(self) -> None:
        snapshot = build_snapshot(_dump(), detect_one_to_one_relationships=True)
        assert snapshot.detect_one_to_one_relationships is True

    def test_missing_listings_are_empty(self) -> None:
        snapshot = build_snapshot({"schemas": [{"name": "public"}]})
        assert snapshot.tables == ()
        assert snapshot.functions == ()

    def test_invalid_entry_reports_location(self) -> None:
        raw = _dump()
        raw["columns"][1] = {"table_id": 11, "name": "token"}

        with pytest.raises(SnapshotError) as exc_info:
            build_snapshot(raw)
        assert exc_info.value.code == ErrorCode.SNAPSHOT_INVALID
        assert exc_info.value.details["location"] == "columns[1].format"

    def test_listing_must_be_list(self) -> None:
        with pytest.raises(SnapshotError) as exc_info:
            build_snapshot({"tables": {"id": 1}})
        assert exc_info.value.code == ErrorCode.SNAPSHOT_INVALID


class TestLoadSnapshot:
    """Tests for load_snapshot."""

    def test_loads_from_file(self, tmp_path: Path) -> None:
        path = tmp_path / "dump.json"
        path.write_text(json.dumps(_dump()))

        snapshot = load_snapshot(path, included_schemas=["public"])
        assert [s.name for s in snapshot.schemas] == ["public"]
        assert [t.name for t in snapshot.tables] == ["users"]
