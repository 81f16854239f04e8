"""Shared fixtures for CLI tests."""

import json
import logging
from collections.abc import Generator
from pathlib import Path
from typing import Any
from unittest.mock import patch

import pytest


@pytest.fixture(autouse=True)
def isolated_cli(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Generator[Path, None, None]:
    """Run each command in an empty directory with no global config.

    Root logging handlers installed by the command are removed afterwards so
    later tests do not write to the runner's closed streams.
    """
    monkeypatch.chdir(tmp_path)
    root = logging.getLogger()
    saved = root.handlers[:]
    with patch("pgzod.config.loader.GLOBAL_CONFIG_PATH", tmp_path / "no-global.yaml"):
        yield tmp_path
    root.handlers = saved


def _dump() -> dict[str, Any]:
    return {
        "schemas": [{"id": 1, "name": "public"}, {"id": 2, "name": "auth"}],
        "tables": [
            {"id": 10, "schema": "public", "name": "users"},
            {"id": 11, "schema": "auth", "name": "sessions"},
        ],
        "columns": [
            {
                "table_id": 10,
                "schema": "public",
                "name": "id",
                "format": "uuid",
                "is_identity": True,
                "identity_generation": "ALWAYS",
            },
            {"table_id": 10, "schema": "public", "name": "email", "format": "text"},
            {"table_id": 11, "schema": "auth", "name": "token", "format": "text"},
        ],
        "functions": [
            {
                "id": 100,
                "schema": "public",
                "name": "audit",
                "args": [],
                "return_type_id": 2279,
                "return_type": "trigger",
            }
        ],
        "types": [{"id": 25, "schema": "pg_catalog", "name": "text", "format": "text"}],
    }


@pytest.fixture
def dump_path(tmp_path: Path) -> Path:
    """A small catalog dump with two schemas."""
    path = tmp_path / "catalog.json"
    path.write_text(json.dumps(_dump()))
    return path


@pytest.fixture
def geometry_dump_path(tmp_path: Path) -> Path:
    """A dump with one column whose type cannot be mapped."""
    raw = _dump()
    raw["columns"].append(
        {"table_id": 10, "schema": "public", "name": "home", "format": "geometry"}
    )
    path = tmp_path / "geometry.json"
    path.write_text(json.dumps(raw))
    return path


@pytest.fixture
def enum_dump_path(tmp_path: Path) -> Path:
    """A dump whose only non-primitive type is an enum."""
    raw: dict[str, Any] = {
        "schemas": [{"id": 1, "name": "public"}],
        "tables": [{"id": 10, "schema": "public", "name": "people"}],
        "columns": [
            {
                "table_id": 10,
                "schema": "public",
                "name": "mood",
                "format": "mood",
                "data_type": "USER-DEFINED",
                "enums": ["sad", "ok", "happy"],
            }
        ],
        "functions": [
            {
                "id": 100,
                "schema": "public",
                "name": "current_mood",
                "args": [],
                "return_type_id": 500,
                "return_type": "mood",
            }
        ],
        "types": [
            {"id": 500, "schema": "public", "name": "mood", "enums": ["sad", "ok", "happy"]}
        ],
    }
    path = tmp_path / "enum.json"
    path.write_text(json.dumps(raw))
    return path
