from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

"""Upload configuration loader.

- Load YAML (default ``config/upload.yml``)
- Validate against the packaged ``upload_schema.json``
- Apply defaults and environment overrides (``NE_ATTEND_API_URL``)

The API token itself never lives in the YAML file; ``api.token_env`` names
the environment variable (usually set through ``.env``) that holds it.
"""

__all__ = [
    "ConfigError",
    "ApiConfig",
    "UploadConfig",
    "load_config",
    "DEFAULT_CONFIG_PATH",
    "SCHEMA_PATH",
]

SCHEMA_PATH = Path(__file__).with_name("upload_schema.json")
DEFAULT_CONFIG_PATH = Path("config/upload.yml")

API_URL_ENV = "NE_ATTEND_API_URL"
DEFAULT_TOKEN_ENV = "NE_ATTEND_API_TOKEN"


class ConfigError(Exception):
    pass


@dataclass(frozen=True)
class ApiConfig:
    base_url: str
    timeout_seconds: float = 30.0
    token_env: str = DEFAULT_TOKEN_ENV

    @property
    def token(self) -> str | None:
        return os.getenv(self.token_env) or None


@dataclass(frozen=True)
class UploadConfig:
    api: ApiConfig
    error_log_directory: str = "./logs"


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Validate config data against the JSON schema.

    Raises:
        ConfigError: schema file missing / invalid, or config violates it
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


def load_config(path: Path = DEFAULT_CONFIG_PATH) -> UploadConfig:
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError("config root must be a mapping")

    _validate_config_schema(data)

    api_raw = data["api"]
    api = ApiConfig(
        base_url=os.getenv(API_URL_ENV) or api_raw["base_url"],
        timeout_seconds=float(api_raw.get("timeout_seconds", 30)),
        token_env=api_raw.get("token_env", DEFAULT_TOKEN_ENV),
    )
    return UploadConfig(
        api=api,
        error_log_directory=data.get("error_log_directory", "./logs"),
    )
