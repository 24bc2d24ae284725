from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from whx_manifest.models.config_models import (
    ColumnNames,
    ConverterConfig,
    ManifestConstants,
    ServerConfig,
)

"""Config loader.

Responsibilities:
- Load YAML config (config/manifest.yml by default)
- Validate against the bundled JSON schema (config_schema.json)
- Apply defaults for every key the file leaves out
- Apply the WHX_SKU_MAP environment override for the mapping table path
"""

__all__ = [
    "ConfigError",
    "DEFAULT_CONFIG_PATH",
    "MAPPING_ENV_VAR",
    "SCHEMA_PATH",
    "load_config",
]

SCHEMA_PATH = Path(__file__).with_name("config_schema.json")
DEFAULT_CONFIG_PATH = Path("config/manifest.yml")
MAPPING_ENV_VAR = "WHX_SKU_MAP"


class ConfigError(Exception):
    pass


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Validate config data against the bundled JSON schema.

    Raises:
        ConfigError: If the schema file is missing or not valid JSON, or the
            config data fails schema validation (unknown keys, wrong types).
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


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"config root must be a mapping: {path}")
    return data


def load_config(path: Path | None = None) -> ConverterConfig:
    """Load configuration from ``path``.

    ``path=None`` means "no explicit file": config/manifest.yml is used when it
    exists, otherwise built-in defaults apply. An explicit path that does not
    exist is an error.
    """
    if path is None:
        data = _read_yaml(DEFAULT_CONFIG_PATH) if DEFAULT_CONFIG_PATH.exists() else {}
    else:
        if not path.exists():
            raise ConfigError(f"config file not found: {path}")
        data = _read_yaml(path)

    _validate_config_schema(data)

    mapping_path = os.getenv(MAPPING_ENV_VAR) or data.get("mapping_path")
    return ConverterConfig(
        mapping_path=mapping_path,
        output_prefix=data.get("output_prefix", "Warehouse_"),
        columns=ColumnNames(**data.get("columns", {})),
        constants=ManifestConstants(**data.get("constants", {})),
        server=ServerConfig(**data.get("server", {})),
    )
