"""
Settings for the run-log package.

Values are resolved from several layers, lowest precedence first:

    1. defaults declared on RunLogSettings
    2. the ``runlog:`` section of runlog.yaml in the config directory
    3. .env.<TEST_ENV> in the config directory (when TEST_ENV is not "local")
    4. .env in the config directory
    5. the process environment

Environment keys use the RUNLOG_ prefix followed by the field name in upper
case, for example RUNLOG_LOG_DIR=/tmp/logs or RUNLOG_LEVEL=info. Blank values
are treated as unset.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml  # type: ignore[import-untyped]
from dotenv import dotenv_values
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .constants import RunLogConstants
from .exceptions import ConfigError

# Maximum runlog.yaml size (1MB)
MAX_CONFIG_SIZE_BYTES = 1024 * 1024


class RunLogSettings(BaseModel):
    """Resolved run-log settings."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    log_dir: Path = Field(
        default=Path(RunLogConstants.DEFAULT_LOG_DIR),
        description="Directory holding run and error logs",
    )
    level: str = Field(default="debug", description="Minimum level logged")
    console: bool = Field(default=True, description="Mirror log lines to stdout")
    retained_runs: int = Field(
        default=RunLogConstants.DEFAULT_RETAINED_RUNS,
        ge=0,
        description="Historical run files kept besides the current one",
    )
    env: str = Field(
        default=RunLogConstants.DEFAULT_ENV, description="Test environment name"
    )

    @field_validator("level", mode="before")
    @classmethod
    def validate_level(cls, v: Any) -> str:
        """Validate level is a recognized level name."""
        name = str(v).strip().lower()
        if name not in RunLogConstants.LEVEL_NAMES:
            raise ValueError(f"Invalid log level: {v}")
        return name

    @field_validator("env", mode="before")
    @classmethod
    def normalize_env(cls, v: Any) -> str:
        return str(v).strip().lower() or RunLogConstants.DEFAULT_ENV

    @property
    def level_no(self) -> int:
        """Numeric logging level for ``level``."""
        return RunLogConstants.LEVEL_NAMES[self.level]


def _clean(value: str | None) -> str | None:
    """Strip a raw value; blank strings count as unset."""
    if value is None:
        return None
    value = value.strip()
    return value or None


def _collect_prefixed(mapping: Mapping[str, str | None]) -> dict[str, str]:
    """
    Collect RUNLOG_* keys that name a settings field.

    Args:
        mapping: Environment-like mapping (os.environ or a parsed .env file)

    Returns:
        dict: Field name -> raw string value
    """
    prefix = RunLogConstants.ENV_PREFIX
    values = {}
    for key, raw in mapping.items():
        if not key.startswith(prefix):
            continue
        field = key[len(prefix) :].lower()
        if field == "env" or field not in RunLogSettings.model_fields:
            continue
        value = _clean(raw)
        if value is not None:
            values[field] = value
    return values


def _load_dotenv(path: Path) -> dict[str, str]:
    if not path.is_file():
        return {}
    return _collect_prefixed(dotenv_values(path))


def _load_yaml(path: Path) -> dict[str, Any]:
    """Load the ``runlog:`` section of a YAML file, if the file exists."""
    if not path.is_file():
        return {}

    size = path.stat().st_size
    if size > MAX_CONFIG_SIZE_BYTES:
        raise ConfigError("Configuration file too large", path=str(path), size=size)

    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"Cannot load configuration: {e}", path=str(path)) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError("Configuration root must be a mapping", path=str(path))

    section = data.get(RunLogConstants.YAML_SECTION)
    if section is None:
        return {}
    if not isinstance(section, dict):
        raise ConfigError(
            f"'{RunLogConstants.YAML_SECTION}' section must be a mapping",
            path=str(path),
        )
    return {k: v for k, v in section.items() if k != "env"}


def load_settings(
    config_dir: str | Path | None = None,
    environ: Mapping[str, str] | None = None,
    **overrides: Any,
) -> RunLogSettings:
    """
    Resolve settings from defaults, files and the environment.

    Args:
        config_dir: Directory holding runlog.yaml and .env files (defaults to cwd)
        environ: Environment mapping (defaults to os.environ)
        **overrides: Explicit values applied last; None values are ignored

    Returns:
        RunLogSettings: Settings with log_dir made absolute

    Raises:
        ConfigError: If a file cannot be parsed or a value is invalid
    """
    base = Path(config_dir).absolute() if config_dir is not None else Path.cwd()
    environ = os.environ if environ is None else environ
    env_name = (
        _clean(environ.get(RunLogConstants.ENV_NAME_VAR)) or RunLogConstants.DEFAULT_ENV
    ).lower()

    values: dict[str, Any] = {}
    values.update(_load_yaml(base / RunLogConstants.YAML_CONFIG_NAME))
    if env_name != RunLogConstants.DEFAULT_ENV:
        values.update(_load_dotenv(base / f"{RunLogConstants.DOTENV_NAME}.{env_name}"))
    values.update(_load_dotenv(base / RunLogConstants.DOTENV_NAME))
    values.update(_collect_prefixed(environ))
    values.update({k: v for k, v in overrides.items() if v is not None})
    values["env"] = env_name

    try:
        settings = RunLogSettings(**values)
    except ValidationError as e:
        raise ConfigError(
            f"Invalid runlog configuration: {e.errors()[0]['msg']}",
            errors=e.error_count(),
        ) from e

    if not settings.log_dir.is_absolute():
        settings = settings.model_copy(update={"log_dir": base / settings.log_dir})
    return settings
