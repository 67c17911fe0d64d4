from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from ..models.config_models import DEFAULT_HEADER_SCAN_ROWS, FunnelConfig, SalesPersonSheet

"""Config loader.

Responsibilities:
- Load the YAML config (default config/funnel.yml)
- Validate it against config_schema.json (bundled next to this module)
- Apply defaults and environment overrides
"""

SCHEMA_PATH = Path(__file__).with_name("config_schema.json")

DEFAULT_CONFIG_PATH = Path("config/funnel.yml")
ENV_CONFIG_PATH = "OFFER_FUNNEL_CONFIG"
ENV_WORKBOOK = "OFFER_FUNNEL_WORKBOOK"


class ConfigError(Exception):
    pass


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Validate config data against the JSON schema.

    Raises:
        ConfigError: if the schema file is missing or invalid, or the data
            fails validation (missing keys, wrong types, unknown keys, bad zone).
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


def resolve_config_path(explicit: str | Path | None = None) -> Path:
    """--config > $OFFER_FUNNEL_CONFIG > config/funnel.yml"""
    if explicit:
        return Path(explicit)
    env = os.getenv(ENV_CONFIG_PATH)
    if env:
        return Path(env)
    return DEFAULT_CONFIG_PATH


def load_config(path: Path) -> FunnelConfig:
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"config root must be a mapping: {path}")

    _validate_config_schema(data)

    sheets = [
        SalesPersonSheet(name=s["name"], zone=s["zone"], reference_key=s.get("reference_key"))
        for s in data["sheets"]
    ]
    names = [s.name for s in sheets]
    dupes = sorted({n for n in names if names.count(n) > 1})
    if dupes:
        raise ConfigError(f"duplicate sheet names in config: {dupes}")

    # 環境変数でワークブックのパスを上書き可能
    workbook = os.getenv(ENV_WORKBOOK) or data["workbook"]
    return FunnelConfig(
        workbook=workbook,
        sheets=sheets,
        output_json=data.get("output_json", "./data/offers-export.json"),
        header_scan_rows=data.get("header_scan_rows", DEFAULT_HEADER_SCAN_ROWS),
        anomaly_log_dir=data.get("anomaly_log_dir", "./logs"),
    )
