"""Helpers for reading the YAML content files shipped with the game."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict

import yaml

from .errors import ConfigError

logger = logging.getLogger(__name__)


def load_yaml(path: str | Path) -> Dict[str, Any]:
    """Load a YAML mapping. A missing file yields an empty mapping."""

    path = Path(path)
    if not path.exists():
        logger.info("Content file %s not found, using defaults", path)
        return {}
    try:
        with open(path, "r", encoding="utf-8") as fp:
            data = yaml.safe_load(fp) or {}
    except yaml.YAMLError as exc:
        raise ConfigError(f"Could not parse {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"{path} must contain a mapping at the top level")
    return data


def as_float(data: Dict[str, Any], key: str, default: float) -> float:
    value = data.get(key, default)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigError(f'"{key}" must be a number, got {value!r}')
    return float(value)


def as_int(data: Dict[str, Any], key: str, default: int) -> int:
    value = data.get(key, default)
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigError(f'"{key}" must be an integer, got {value!r}')
    return value


def as_pair(data: Dict[str, Any], key: str, default: tuple[float, float]) -> tuple[float, float]:
    value = data.get(key, default)
    if not (isinstance(value, (list, tuple)) and len(value) == 2):
        raise ConfigError(f'"{key}" must be a [low, high] pair, got {value!r}')
    low, high = value
    if any(isinstance(v, bool) or not isinstance(v, (int, float)) for v in (low, high)):
        raise ConfigError(f'"{key}" must contain numbers, got {value!r}')
    return float(low), float(high)
