"""Tests for JSON file key loading."""

import json

import pytest

from biblia.errors import ConfigurationError
from biblia.keys.backends import load_from_json


def _write(tmp_path, payload) -> str:
    path = tmp_path / "keys.json"
    path.write_text(json.dumps(payload), encoding="utf-8")
    return str(path)


def test_load_top_level_key(tmp_path):
    path = _write(tmp_path, {"gemini": " secret-value "})
    assert load_from_json(path, "gemini") == "secret-value"


def test_load_nested_key(tmp_path):
    path = _write(tmp_path, {"google": {"gemini": "nested"}})
    assert load_from_json(path, "google.gemini") == "nested"


def test_missing_file(tmp_path):
    with pytest.raises(ConfigurationError, match="API key file not found"):
        load_from_json(str(tmp_path / "absent.json"), "gemini")


def test_invalid_json(tmp_path):
    path = tmp_path / "keys.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(ConfigurationError, match="Invalid JSON"):
        load_from_json(str(path), "gemini")


def test_missing_key_lists_available(tmp_path):
    path = _write(tmp_path, {"openai": "x"})
    with pytest.raises(ConfigurationError, match="Available keys: openai"):
        load_from_json(path, "gemini")


@pytest.mark.parametrize("value", [123, "", {"a": "b"}])
def test_non_string_or_empty_value(tmp_path, value):
    path = _write(tmp_path, {"gemini": value})
    with pytest.raises(ConfigurationError, match="not a non-empty string"):
        load_from_json(path, "gemini")
