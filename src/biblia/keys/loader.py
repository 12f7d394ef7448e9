"""Unified API key loading interface for Biblia."""

from typing import Required, TypedDict, cast

from ..errors import ConfigurationError


class KeyConfig(TypedDict, total=False):
    """Typed configuration for API key loading.

    Discriminated by ``type`` field. Additional fields depend on the type:
      env     → key
      json    → path, key
      direct  → value (testing only)
    """

    type: Required[str]
    key: str
    value: str
    path: str


def load_api_key(config: KeyConfig) -> str:
    """Load API key based on configuration.

    Raises:
        ConfigurationError: If the key cannot be loaded

    Example configs:
        {"type": "env", "key": "API_KEY"}
        {"type": "json", "path": "~/.secrets/keys.json", "key": "gemini"}
        {"type": "direct", "value": "AIza..."} (testing only)
    """
    key_type = config.get("type")

    if key_type == "direct":
        value = config.get("value", "")
        if not value:
            raise ConfigurationError("Direct API key value is empty")
        return cast(str, value)

    elif key_type == "env":
        from .backends import load_from_env

        return load_from_env(cast(str, config["key"]))

    elif key_type == "json":
        from .backends import load_from_json

        return load_from_json(cast(str, config["path"]), cast(str, config["key"]))

    else:
        raise ConfigurationError(f"Unknown key type '{key_type}'")
