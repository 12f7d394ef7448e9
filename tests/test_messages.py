"""Tests for message and translation models."""

import pytest

from biblia.domain.messages import Message, MessageStatus, TranslationPreference


def test_from_raw_accepts_camel_case_streaming_flag():
    msg = Message.from_raw(
        {"role": "assistant", "content": "Hi", "isStreaming": True, "status": "sent"}
    )
    assert msg == Message(role="assistant", content="Hi", is_streaming=True, status="sent")


def test_from_raw_defaults():
    msg = Message.from_raw({"role": "user", "content": "Hello"})
    assert msg.is_streaming is False
    assert msg.status == MessageStatus.SENT


def test_from_raw_keeps_unknown_status():
    msg = Message.from_raw({"role": "user", "content": "x", "status": "delivered"})
    assert msg.status == "delivered"


@pytest.mark.parametrize(
    "raw, match",
    [
        ("not a dict", "expected object"),
        ({"role": "system", "content": "x"}, "unknown role 'system'"),
        ({"role": "user", "content": ["x"]}, "content must be a string"),
    ],
)
def test_from_raw_rejects_invalid_payloads(raw, match):
    with pytest.raises(ValueError, match=match):
        Message.from_raw(raw, index=2)


def test_from_raw_error_mentions_index():
    with pytest.raises(ValueError, match="at index 4"):
        Message.from_raw(None, index=4)


def test_translation_default_is_esv():
    assert TranslationPreference.default() is TranslationPreference.ESV


@pytest.mark.parametrize("code", ["niv", " NIV ", "Niv"])
def test_translation_parse_is_case_insensitive(code):
    assert TranslationPreference.parse(code) is TranslationPreference.NIV


def test_translation_parse_rejects_unknown_code():
    with pytest.raises(ValueError, match="Unknown translation 'XYZ'"):
        TranslationPreference.parse("XYZ")


def test_translation_str_is_code():
    assert str(TranslationPreference.NKJV) == "NKJV"
