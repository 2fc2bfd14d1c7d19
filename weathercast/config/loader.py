"""YAML config loader and API key lookup."""

import logging
import os
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

from weathercast.config.schema import AppConfig

logger = logging.getLogger(__name__)


class MissingApiKeyError(Exception):
    """The configured API key environment variable is not set."""


def load_config(path: str | Path | None = None) -> AppConfig:
    """Load and validate config from a YAML file.

    A missing path or an empty file yields the defaults.
    """
    if path is None:
        return AppConfig()
    path = Path(path)
    if not path.exists():
        logger.info("Config %s not found, using defaults", path)
        return AppConfig()
    with open(path) as f:
        raw = yaml.safe_load(f) or {}
    return AppConfig.model_validate(raw)


def load_api_key(config: AppConfig, dotenv_path: str | Path | None = None) -> str:
    """Read the provider API key from the environment, loading ``.env`` first."""
    load_dotenv(dotenv_path)
    key = os.getenv(config.api_key_env, "").strip()
    if not key:
        raise MissingApiKeyError(f"{config.api_key_env} not set")
    return key


def get_config_value(config: AppConfig, dotted_key: str) -> Any:
    """Get a config value by dotted key path. E.g. 'http.timeout_seconds'."""
    obj: Any = config
    for part in dotted_key.split("."):
        if hasattr(obj, part):
            obj = getattr(obj, part)
        elif isinstance(obj, dict):
            obj = obj[part]
        else:
            raise KeyError(f"Config key not found: {dotted_key}")
    return obj
