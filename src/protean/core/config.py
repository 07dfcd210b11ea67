# src/protean/core/config.py
"""
Settings for protean.

Uses Pydantic for validation and Dynaconf for multi-source loading.
Settings are frozen (immutable) after construction.
"""

from functools import lru_cache
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator

_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})

# Keys Dynaconf adds to as_dict() that are not settings
_DYNACONF_INTERNAL_KEYS = frozenset({"LOAD_DOTENV", "ENVIRONMENTS", "SETTINGS_FILES"})


class ProteanSettings(BaseModel):
    """Settings that shape how types are augmented and configured.

    Example YAML:
        required_marker: "!"
        anonymous_label: Resource
        log_level: INFO
        json_logs: false
    """

    model_config = {"frozen": True}

    required_marker: str = Field(default="!", description="Prefix marking a declared property as required")
    anonymous_label: str = Field(
        default="Resource",
        description="Type name used in errors when a configured type has no name",
    )
    log_level: str = Field(default="INFO", description="Log level for the CLI (DEBUG, INFO, WARNING, ERROR)")
    json_logs: bool = Field(default=False, description="Emit JSON log lines instead of console output")

    @field_validator("required_marker")
    @classmethod
    def validate_required_marker(cls, v: str) -> str:
        if not v or v != v.strip():
            raise ValueError("required_marker must be non-empty and contain no surrounding whitespace")
        return v

    @field_validator("anonymous_label")
    @classmethod
    def validate_anonymous_label(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("anonymous_label must not be empty")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {sorted(_LOG_LEVELS)}, got {v!r}")
        return level


def _load_raw(settings_files: list[str]) -> dict[str, Any]:
    from dynaconf import Dynaconf

    dynaconf_settings = Dynaconf(
        envvar_prefix="PROTEAN",
        settings_files=settings_files,
        environments=False,  # No [default]/[production] sections
        load_dotenv=False,
    )

    # Dynaconf returns uppercase keys; Pydantic fields are lowercase
    return {k.lower(): v for k, v in dynaconf_settings.as_dict().items() if k not in _DYNACONF_INTERNAL_KEYS}


def load_settings(config_path: Path) -> ProteanSettings:
    """Load settings from a YAML file with environment variable overrides.

    Precedence:
    1. Environment variables (PROTEAN_*) - highest priority
    2. Config file
    3. Defaults from the Pydantic schema - lowest priority

    Args:
        config_path: Path to YAML configuration file

    Returns:
        Validated ProteanSettings instance

    Raises:
        ValidationError: If configuration fails Pydantic validation
        FileNotFoundError: If config file doesn't exist
    """
    # Dynaconf silently accepts missing files
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    return ProteanSettings(**_load_raw([str(config_path)]))


@lru_cache(maxsize=1)
def get_settings() -> ProteanSettings:
    """Process-wide default settings (environment overrides only).

    Cached; call get_settings.cache_clear() after changing PROTEAN_* variables.
    """
    return ProteanSettings(**_load_raw([]))
