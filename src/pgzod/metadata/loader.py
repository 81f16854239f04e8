"""Snapshot loading from pg-meta style catalog dumps.

A dump is a JSON or YAML mapping with one list per catalog listing::

    schemas, tables, views, materialized_views, columns,
    relationships, functions, types

This module does the caller-side work the compiler relies on:
- schema allow-list (which also fixes the output order of schemas)
- dropping trigger / event trigger functions
- splitting ``types`` into scalar and array types by the ``_`` sigil
"""

from __future__ import annotations

import json
from collections.abc import Iterable, Sequence
from pathlib import Path
from typing import Any

import structlog
import yaml
from pydantic import BaseModel, ValidationError

from pgzod.core.errors import SnapshotError
from pgzod.metadata.models import (
    Column,
    Function,
    MaterializedView,
    MetadataSnapshot,
    PgType,
    Relationship,
    Schema,
    Table,
    View,
)

log = structlog.get_logger()

DEFAULT_EXCLUDED_RETURN_TYPES: tuple[str, ...] = ("trigger", "event_trigger")

_LISTINGS = (
    "schemas",
    "tables",
    "views",
    "materialized_views",
    "columns",
    "relationships",
    "functions",
    "types",
)


def read_dump(path: Path) -> dict[str, Any]:
    """Read a catalog dump from disk.

    ``.yaml`` / ``.yml`` files are parsed as YAML, everything else as JSON.

    Raises:
        SnapshotError: If the file is missing, unparsable or not a mapping.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise SnapshotError.parse_error(str(path), e.strerror or str(e)) from e

    try:
        if path.suffix.lower() in (".yaml", ".yml"):
            data = yaml.safe_load(text)
        else:
            data = json.loads(text)
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise SnapshotError.parse_error(str(path), str(e)) from e

    if not isinstance(data, dict):
        raise SnapshotError.parse_error(str(path), "top level must be a mapping")
    return data


def _validate_all[M: BaseModel](
    model: type[M], listing: str, entries: Iterable[dict[str, Any]]
) -> tuple[M, ...]:
    items: list[M] = []
    for index, entry in enumerate(entries):
        try:
            items.append(model.model_validate(entry))
        except ValidationError as e:
            err = e.errors()[0]
            loc = ".".join(str(part) for part in err["loc"])
            raise SnapshotError.invalid(f"{listing}[{index}].{loc}", err["msg"]) from e
    return tuple(items)


def _listing(raw: dict[str, Any], key: str) -> list[dict[str, Any]]:
    entries = raw.get(key) or []
    if not isinstance(entries, list):
        raise SnapshotError.invalid(key, "expected a list")
    for index, entry in enumerate(entries):
        if not isinstance(entry, dict):
            raise SnapshotError.invalid(f"{key}[{index}]", "expected a mapping")
    return entries


def _in_schemas(entries: list[dict[str, Any]], allowed: set[str] | None) -> list[dict[str, Any]]:
    if allowed is None:
        return entries
    # Entries without a schema key cannot be attributed and are kept
    return [e for e in entries if "schema" not in e or e["schema"] in allowed]


def build_snapshot(
    raw: dict[str, Any],
    *,
    included_schemas: Sequence[str] = (),
    excluded_return_types: Sequence[str] = DEFAULT_EXCLUDED_RETURN_TYPES,
    detect_one_to_one_relationships: bool = False,
) -> MetadataSnapshot:
    """Build a validated snapshot from a raw dump mapping.

    Args:
        raw: Parsed dump (see module docstring for the layout)
        included_schemas: Allow-list in output order; empty keeps every schema
            in dump order. Repeated names are emitted once.
        excluded_return_types: Functions returning these types are dropped
        detect_one_to_one_relationships: Carried through to the compiler

    Raises:
        SnapshotError: If an entry does not match the metadata model.
    """
    unknown = sorted(set(raw) - set(_LISTINGS))
    if unknown:
        log.debug("dump_keys_ignored", keys=unknown)

    schemas = _validate_all(Schema, "schemas", _listing(raw, "schemas"))
    allowed: set[str] | None = None
    if included_schemas:
        # Repeated names keep their first position
        wanted = list(dict.fromkeys(included_schemas))
        allowed = set(wanted)
        by_name = {schema.name: schema for schema in schemas}
        missing = [name for name in wanted if name not in by_name]
        if missing:
            log.warning("included_schemas_missing", schemas=missing)
        schemas = tuple(by_name[name] for name in wanted if name in by_name)

    functions = _validate_all(
        Function, "functions", _in_schemas(_listing(raw, "functions"), allowed)
    )
    excluded = set(excluded_return_types)
    kept_functions = tuple(f for f in functions if f.return_type not in excluded)

    # Types are never schema-filtered: columns and arguments reference
    # pg_catalog and extension types from outside the allow-list.
    all_types = _validate_all(PgType, "types", _listing(raw, "types"))

    snapshot = MetadataSnapshot(
        schemas=schemas,
        tables=_validate_all(Table, "tables", _in_schemas(_listing(raw, "tables"), allowed)),
        views=_validate_all(View, "views", _in_schemas(_listing(raw, "views"), allowed)),
        materialized_views=_validate_all(
            MaterializedView,
            "materialized_views",
            _in_schemas(_listing(raw, "materialized_views"), allowed),
        ),
        columns=_validate_all(Column, "columns", _in_schemas(_listing(raw, "columns"), allowed)),
        relationships=_validate_all(
            Relationship, "relationships", _listing(raw, "relationships")
        ),
        functions=kept_functions,
        types=tuple(t for t in all_types if not t.is_array),
        array_types=tuple(t for t in all_types if t.is_array),
        detect_one_to_one_relationships=detect_one_to_one_relationships,
    )

    log.info(
        "snapshot_built",
        schemas=len(snapshot.schemas),
        tables=len(snapshot.tables),
        views=len(snapshot.views) + len(snapshot.materialized_views),
        columns=len(snapshot.columns),
        functions=len(snapshot.functions),
        functions_excluded=len(functions) - len(kept_functions),
        types=len(snapshot.types),
        array_types=len(snapshot.array_types),
    )
    return snapshot


def load_snapshot(
    path: Path,
    *,
    included_schemas: Sequence[str] = (),
    excluded_return_types: Sequence[str] = DEFAULT_EXCLUDED_RETURN_TYPES,
    detect_one_to_one_relationships: bool = False,
) -> MetadataSnapshot:
    """Read a dump file and build its snapshot."""
    return build_snapshot(
        read_dump(path),
        included_schemas=included_schemas,
        excluded_return_types=excluded_return_types,
        detect_one_to_one_relationships=detect_one_to_one_relationships,
    )
