from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

"""Config loader.

Responsibilities:
- Load YAML config (default ``config/report.yml``)
- Validate it against the JSON schema shipped next to this module
- Apply defaults for missing keys; a missing file means all defaults
- Let ``EDU_REPORT_MAX_MESSAGE_LENGTH`` override the chunk size
"""

SCHEMA_PATH = Path(__file__).parent / "config_schema.json"
DEFAULT_CONFIG_PATH = Path("config/report.yml")
MAX_LENGTH_ENV = "EDU_REPORT_MAX_MESSAGE_LENGTH"

DEFAULT_MAX_MESSAGE_LENGTH = 4000
DEFAULT_EXTENSIONS = (".xlsx", ".xls")


class ConfigError(Exception):
    pass


@dataclass(frozen=True)
class ReportConfig:
    max_message_length: int = DEFAULT_MAX_MESSAGE_LENGTH  # transport payload limit
    allowed_extensions: tuple[str, ...] = DEFAULT_EXTENSIONS
    source_directory: str | None = None  # scanned when the CLI gets no paths
    error_log_directory: str = "./logs"


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Validate config data against the JSON schema.

    Raises:
        ConfigError: schema file missing or not JSON, or the data violates it
    """
    if not SCHEMA_PATH.exists():
        raise ConfigError(f"config schema not found: {SCHEMA_PATH}")

    try:
        schema = json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))
        jsonschema.validate(data, schema)
    except json.JSONDecodeError as e:
        raise ConfigError(f"invalid schema file: {e}") from e
    except ValidationError as e:
        raise ConfigError(f"config validation failed: {e.message}") from e


def _env_max_length(default: int) -> int:
    raw = os.getenv(MAX_LENGTH_ENV)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError as e:
        raise ConfigError(f"{MAX_LENGTH_ENV} must be an integer, got {raw!r}") from e
    if value < 1:
        raise ConfigError(f"{MAX_LENGTH_ENV} must be >= 1, got {value}")
    return value


def load_config(path: Path = DEFAULT_CONFIG_PATH) -> ReportConfig:
    if path.exists():
        try:
            data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"invalid yaml: {e}") from e
        if not isinstance(data, dict):
            raise ConfigError(f"config root must be a mapping: {path}")
        _validate_config_schema(data)
    else:
        data = {}

    extensions = tuple(e.lower() for e in data.get("allowed_extensions", DEFAULT_EXTENSIONS))
    return ReportConfig(
        max_message_length=_env_max_length(data.get("max_message_length", DEFAULT_MAX_MESSAGE_LENGTH)),
        allowed_extensions=extensions,
        source_directory=data.get("source_directory"),
        error_log_directory=data.get("error_log_directory", "./logs"),
    )
