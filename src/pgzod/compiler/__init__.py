"""Compiler module exports."""

from pgzod.compiler.assembler import compile_schema, summarize
from pgzod.compiler.diagnostics import (
    CollectingSink,
    Diagnostic,
    DiagnosticSink,
    LoggingSink,
    TeeSink,
)
from pgzod.compiler.modifiers import Context, compose_modifiers, include_column
from pgzod.compiler.types import map_type

__all__ = [
    "compile_schema",
    "summarize",
    "CollectingSink",
    "Diagnostic",
    "DiagnosticSink",
    "LoggingSink",
    "TeeSink",
    "Context",
    "compose_modifiers",
    "include_column",
    "map_type",
]
