"""Storage type -> Zod expression mapping.

``map_type`` is total: any string yields an expression. Names it cannot
classify produce an ``unknown_type`` diagnostic and the caller-supplied
fallback, so enum columns can get their real constraint from a modifier
and everything else degrades to ``z.unknown()``.
"""

from __future__ import annotations

from pgzod.compiler.diagnostics import UNKNOWN_TYPE, Diagnostic, DiagnosticSink, LoggingSink
from pgzod.metadata.models import ARRAY_SIGIL

Z_BOOLEAN = "z.boolean()"
Z_NUMBER = "z.number()"
Z_STRING = "z.string()"
Z_UNKNOWN = "z.unknown()"
Z_VOID = "z.void()"
JSON_REF = "jsonSchema"

BOOLEAN_TYPES = frozenset({"bool", "boolean"})

NUMERIC_TYPES = frozenset(
    {
        "int2",
        "int4",
        "int8",
        "smallint",
        "integer",
        "bigint",
        "float4",
        "float8",
        "real",
        "double precision",
        "numeric",
        "decimal",
        "money",
        "oid",
    }
)

STRING_TYPES = frozenset(
    {
        "bytea",
        "bpchar",
        "char",
        "varchar",
        "character varying",
        "text",
        "citext",
        "name",
        "uuid",
        "vector",
        "inet",
        "cidr",
        "macaddr",
        "macaddr8",
        "xml",
        "tsvector",
        "interval",
    }
)

# Sent over the wire as ISO 8601 text; modifiers add the format check.
TEMPORAL_TYPES = frozenset({"date", "time", "timetz", "timestamp", "timestamptz"})

JSON_TYPES = frozenset({"json", "jsonb"})

_default_sink = LoggingSink()


def array_of(expression: str) -> str:
    return f"z.array({expression})"


def classify(format_name: str) -> str | None:
    """Return the primitive expression for a non-array name, or None."""
    if format_name in BOOLEAN_TYPES:
        return Z_BOOLEAN
    if format_name in NUMERIC_TYPES:
        return Z_NUMBER
    if format_name in STRING_TYPES or format_name in TEMPORAL_TYPES:
        return Z_STRING
    if format_name in JSON_TYPES:
        return JSON_REF
    return None


def _map_primitive(format_name: str) -> str | None:
    if format_name.startswith(ARRAY_SIGIL):
        inner = _map_primitive(format_name[len(ARRAY_SIGIL) :])
        return array_of(inner) if inner is not None else None
    return classify(format_name)


def map_type(
    format_name: str,
    enum_fallback: str,
    hard_fallback: str,
    *,
    sink: DiagnosticSink | None = None,
    site: str = "",
    fallback_kind: str = UNKNOWN_TYPE,
) -> str:
    """Map a storage type name to a Zod expression.

    Args:
        format_name: Storage type name; a leading ``_`` marks an array
        enum_fallback: Returned for an unclassified non-array name
        hard_fallback: Returned for an array whose element is unclassified
        sink: Receives a diagnostic on either fallback
        site: Where the type is referenced, carried on the diagnostic
        fallback_kind: Diagnostic kind when ``enum_fallback`` is returned;
            callers that know the name is an enum pass ``ENUM_FALLBACK``

    Examples:
        "int4" -> "z.number()"
        "_text" -> "z.array(z.string())"
        "jsonb" -> "jsonSchema"
    """
    expression = _map_primitive(format_name)
    if expression is not None:
        return expression

    target = sink or _default_sink
    if format_name.startswith(ARRAY_SIGIL):
        target.emit(Diagnostic(UNKNOWN_TYPE, format_name, site))
        return hard_fallback
    target.emit(Diagnostic(fallback_kind, format_name, site))
    return enum_fallback
