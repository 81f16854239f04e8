"""Pydantic configuration models with env var support.

Configuration Hierarchy (highest to lowest precedence):
1. Direct kwargs to load_config()
2. Environment variables (PGZOD__SECTION__KEY)
3. Project YAML (./pgzod.yaml)
4. Global YAML (~/.config/pgzod/config.yaml)
5. Built-in defaults (this file)

Environment Variable Format:
    PGZOD__<SECTION>__<KEY>=<VALUE>

Examples:
    PGZOD__LOGGING__LEVEL=DEBUG
    PGZOD__GENERATE__INCLUDED_SCHEMAS='["public", "auth"]'
    PGZOD__GENERATE__DETECT_ONE_TO_ONE_RELATIONSHIPS=true
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class LogOutputConfig(BaseModel):
    """Single logging output configuration.

    Env vars: Not directly configurable via env (use YAML for multi-output).
    """

    format: Literal["json", "console"] = "console"
    destination: str = "stderr"  # stderr, stdout, or absolute file path
    level: LogLevel | None = None  # Inherits from parent if None

    @field_validator("destination")
    @classmethod
    def validate_destination(cls, v: str) -> str:
        if v in ("stderr", "stdout"):
            return v
        path = Path(v).expanduser()
        if not path.is_absolute():
            raise ValueError(f"File destination must be absolute path: {v}")
        return str(path)


class LoggingConfig(BaseModel):
    """Logging configuration.

    Env vars:
        PGZOD__LOGGING__LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """

    level: LogLevel = Field(
        default="WARNING",
        description="Root log level. INFO also reports every unknown storage type.",
    )
    outputs: list[LogOutputConfig] = Field(default_factory=lambda: [LogOutputConfig()])


class GenerateConfig(BaseModel):
    """Generation options applied by the snapshot loader.

    Env vars:
        PGZOD__GENERATE__INCLUDED_SCHEMAS: JSON list of schema names (empty = all)
        PGZOD__GENERATE__DETECT_ONE_TO_ONE_RELATIONSHIPS: Carried to the compiler
        PGZOD__GENERATE__OUTPUT: Default output path for `pgzod generate`
        PGZOD__GENERATE__INCLUDE_RETURNS: Emit function return schemas
    """

    included_schemas: list[str] = Field(
        default_factory=list,
        description="Schema allow-list, in output order. Empty means every schema "
        "in the order the snapshot lists them.",
    )
    excluded_return_types: list[str] = Field(
        default_factory=lambda: ["trigger", "event_trigger"],
        description="Functions returning one of these types are never emitted.",
    )
    detect_one_to_one_relationships: bool = Field(
        default=False,
        description="Passed through to the compiler. Currently has no effect on output.",
    )
    output: str | None = Field(
        default=None,
        description="Default output file. None writes to stdout.",
    )
    include_returns: bool = Field(
        default=False,
        description="Add a 'returns' section with each function's return schema.",
    )

    @field_validator("included_schemas")
    @classmethod
    def validate_included_schemas(cls, v: list[str]) -> list[str]:
        if len(set(v)) != len(v):
            raise ValueError("Schema names must be unique")
        return v


class PgZodConfig(BaseModel):
    """Root configuration for pgzod.

    All settings can be configured via:
    1. Environment variables: PGZOD__SECTION__KEY
    2. YAML config files (project or global)
    3. Direct kwargs to load_config()
    """

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    generate: GenerateConfig = Field(default_factory=GenerateConfig)
