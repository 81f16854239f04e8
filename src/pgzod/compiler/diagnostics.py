"""Non-fatal compiler diagnostics.

The compiler never prints. Every recoverable problem (storage types it
cannot map, including enum names that only their values constrain) is
handed to a ``DiagnosticSink`` passed in by the caller. ``LoggingSink``
forwards to structlog; ``CollectingSink`` keeps events in memory for
tests and strict callers.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

import structlog

UNKNOWN_TYPE = "unknown_type"
UNKNOWN_TYPE_ID = "unknown_type_id"
# Unmapped storage name that is an enum; the enum values still constrain it
ENUM_FALLBACK = "enum_fallback"


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """One non-fatal event raised during compilation.

    ``site`` names where the type was referenced, e.g.
    ``column public.users.mood``, ``argument public.f(x)`` or
    ``return public.f``. For ``unknown_type_id`` events ``type_name``
    holds the dangling type id.
    """

    kind: str
    type_name: str
    site: str

    @property
    def message(self) -> str:
        if self.kind == UNKNOWN_TYPE_ID:
            return f"unknown type id: {self.type_name}"
        if self.kind == ENUM_FALLBACK:
            return f"enum type constrained by its values: {self.type_name}"
        return f"unknown storage type: {self.type_name}"


class DiagnosticSink(Protocol):
    def emit(self, diagnostic: Diagnostic) -> None: ...


class LoggingSink:
    """Forward diagnostics to structlog at INFO."""

    def __init__(self, logger: structlog.stdlib.BoundLogger | None = None) -> None:
        self._log = logger or structlog.get_logger()

    def emit(self, diagnostic: Diagnostic) -> None:
        self._log.info(
            diagnostic.kind,
            type_name=diagnostic.type_name,
            site=diagnostic.site,
        )


class CollectingSink:
    """Keep diagnostics in emission order."""

    def __init__(self) -> None:
        self.diagnostics: list[Diagnostic] = []

    def emit(self, diagnostic: Diagnostic) -> None:
        self.diagnostics.append(diagnostic)

    def __len__(self) -> int:
        return len(self.diagnostics)

    @property
    def type_names(self) -> list[str]:
        return [d.type_name for d in self.diagnostics]

    @property
    def unmapped(self) -> list[Diagnostic]:
        """Diagnostics whose site fell back to an unconstrained schema."""
        return [d for d in self.diagnostics if d.kind != ENUM_FALLBACK]


class TeeSink:
    """Emit to several sinks in order."""

    def __init__(self, *sinks: DiagnosticSink) -> None:
        self._sinks = sinks

    def emit(self, diagnostic: Diagnostic) -> None:
        for sink in self._sinks:
            sink.emit(diagnostic)

