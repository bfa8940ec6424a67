"""YAML configuration loader with ${VAR} / ${VAR:default} interpolation."""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Any

import yaml

from syscallsym.config.defaults import CONFIG_FILE_NAMES, CONFIG_SEARCH_PATHS
from syscallsym.config.models import SyscallSymConfig

_ENV_VAR_PATTERN = re.compile(r"\$\{(\w+)(?::([^}]*))?\}")


def _interpolate_env(value: str) -> str:
    def _replace(match: re.Match[str]) -> str:
        default = match.group(2)
        return os.environ.get(match.group(1), default if default is not None else "")

    return _ENV_VAR_PATTERN.sub(_replace, value)


def _interpolate(obj: Any) -> Any:
    if isinstance(obj, str):
        return _interpolate_env(obj)
    if isinstance(obj, dict):
        return {key: _interpolate(value) for key, value in obj.items()}
    if isinstance(obj, list):
        return [_interpolate(item) for item in obj]
    return obj


def find_config_file(explicit_path: str | Path | None = None) -> Path | None:
    """Return the config file to use, or None when running on defaults.

    A missing ``explicit_path`` raises FileNotFoundError; only the implicit
    search falls back to defaults.
    """
    if explicit_path is not None:
        path = Path(explicit_path).expanduser()
        if not path.is_file():
            raise FileNotFoundError(f"Config file not found: {path}")
        return path

    for directory in CONFIG_SEARCH_PATHS:
        for name in CONFIG_FILE_NAMES:
            candidate = directory / name
            if candidate.is_file():
                return candidate
    return None


def load_config(path: str | Path | None = None) -> SyscallSymConfig:
    """Load and validate configuration, falling back to defaults."""
    config_path = find_config_file(path)
    if config_path is None:
        return SyscallSymConfig()

    raw = yaml.safe_load(config_path.read_text()) or {}
    if not isinstance(raw, dict):
        raise ValueError(f"{config_path}: top level of the config must be a mapping")
    return SyscallSymConfig.model_validate(_interpolate(raw))
