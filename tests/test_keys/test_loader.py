"""Tests for the unified key loader."""

import pytest

from biblia.errors import ConfigurationError
from biblia.keys.loader import load_api_key


def test_direct_key():
    assert load_api_key({"type": "direct", "value": "test-key"}) == "test-key"


def test_direct_key_empty():
    with pytest.raises(ConfigurationError):
        load_api_key({"type": "direct", "value": ""})


def test_env_key(monkeypatch):
    monkeypatch.setenv("API_KEY", "from-env")
    assert load_api_key({"type": "env", "key": "API_KEY"}) == "from-env"


def test_json_key(tmp_path):
    path = tmp_path / "keys.json"
    path.write_text('{"gemini": "from-json"}', encoding="utf-8")
    assert load_api_key({"type": "json", "path": str(path), "key": "gemini"}) == "from-json"


def test_unknown_type():
    with pytest.raises(ConfigurationError, match="Unknown key type 'vault'"):
        load_api_key({"type": "vault"})
