"""Config module exports."""

from pgzod.config.loader import load_config
from pgzod.config.models import (
    GenerateConfig,
    LoggingConfig,
    LogOutputConfig,
    PgZodConfig,
)

__all__ = [
    "load_config",
    "GenerateConfig",
    "LoggingConfig",
    "LogOutputConfig",
    "PgZodConfig",
]
