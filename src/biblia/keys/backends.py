"""Credential backend loaders for environment variables and JSON files."""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

from ..errors import ConfigurationError


def load_from_env(var_name: str) -> str:
    """Load API key from environment variable."""
    value = os.environ.get(var_name)

    if not value or not value.strip():
        raise ConfigurationError(
            f"Environment variable '{var_name}' not set.\n"
            f"Set it with:\n"
            f"  Unix/macOS:  export {var_name}=your-api-key\n"
            f"  Windows CMD: set {var_name}=your-api-key\n"
            f"  PowerShell:  $env:{var_name} = 'your-api-key'"
        )

    return value.strip()


def load_from_json(file_path: str, key_name: str) -> str:
    """Load API key from JSON file.

    ``key_name`` may use dot notation for nested objects.
    """
    path = Path(file_path).expanduser()

    if not path.exists():
        raise ConfigurationError(f"API key file not found: {file_path}")

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Invalid JSON in {file_path}: {e}")

    if not isinstance(data, dict):
        raise ConfigurationError(f"API key file {file_path} must contain an object")

    value: Any = data
    for part in key_name.split("."):
        if isinstance(value, dict) and part in value:
            value = value[part]
        else:
            raise ConfigurationError(
                f"Key '{key_name}' not found in {file_path}\n"
                f"Available keys: {', '.join(data.keys())}"
            )

    if not isinstance(value, str) or not value.strip():
        raise ConfigurationError(f"Key '{key_name}' in {file_path} is not a non-empty string")

    return value.strip()
