"""pgzod - compile Postgres catalog metadata into Zod schemas."""

from pgzod.compiler import compile_schema
from pgzod.metadata import MetadataSnapshot, load_snapshot

__version__ = "0.1.0"

__all__ = ["__version__", "compile_schema", "load_snapshot", "MetadataSnapshot"]
