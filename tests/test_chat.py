"""Tests for the chat client: session factory, dispatcher and session slot."""

from unittest.mock import patch

import pytest

from biblia.ai.retry import RetryPolicy
from biblia.config import ChatSettings
from biblia.domain.messages import Message, MessageStatus, TranslationPreference
from fakes import FakeAPIError, FakeProvider, FakeSession


def test_initialize_chat_builds_config_from_translation_and_history(make_client):
    client, providers = make_client()
    history = [
        Message.user("Who wrote Romans?"),
        Message.assistant("Paul wrote Romans."),
        Message.assistant("partial", is_streaming=True),
        Message.user("queued", status=MessageStatus.PENDING),
    ]

    session = client.initialize_chat(TranslationPreference.KJV, history)

    assert client.session is session
    config, model = providers[0].created[0]
    assert model == "gemini-2.5-flash"
    assert config["temperature"] == 0.3
    assert "Use the KJV translation" in config["system_instruction"]
    assert config["history"] == [
        {"role": "user", "content": "Who wrote Romans?"},
        {"role": "assistant", "content": "Paul wrote Romans."},
    ]


def test_initialize_chat_replaces_existing_session(make_client):
    client, _ = make_client()
    first = client.initialize_chat()
    second = client.initialize_chat(TranslationPreference.NIV)

    assert first is not second
    assert client.session is second


def test_initialize_chat_propagates_provider_error(make_client):
    class BrokenProvider(FakeProvider):
        def create_session(self, config, *, model):
            raise FakeAPIError("403 PERMISSION_DENIED", code=403)

    client, _ = make_client(BrokenProvider())

    with pytest.raises(FakeAPIError, match="PERMISSION_DENIED"):
        client.initialize_chat()
    assert client.session is None


@pytest.mark.asyncio
async def test_send_creates_default_session_when_absent(make_client):
    client, providers = make_client()
    chunks: list[str] = []

    await client.send_message_stream("What is grace?", chunks.append)

    assert len(providers[0].created) == 1
    config, _ = providers[0].created[0]
    assert "Use the ESV translation" in config["system_instruction"]
    assert config["history"] == []
    assert chunks == ["ok"]


@pytest.mark.asyncio
async def test_send_delivers_non_empty_fragments_in_order(make_client, sleep_recorder):
    session = FakeSession([["Here ", "", None, "is ", "John 3:16"]])
    client, _ = make_client(FakeProvider(sessions=[session]))
    chunks: list[str] = []

    await client.send_message_stream("Topic: love", chunks.append)

    assert chunks == ["Here ", "is ", "John 3:16"]
    assert session.sent == ["Topic: love"]
    assert sleep_recorder.delays == []


@pytest.mark.asyncio
async def test_send_retries_twice_on_503_then_succeeds(make_client, sleep_recorder):
    session = FakeSession(
        [
            FakeAPIError("Service busy", code=503),
            FakeAPIError("Service busy", code=503),
            ["Blessed ", "are the meek"],
        ]
    )
    client, _ = make_client(FakeProvider(sessions=[session]))
    chunks: list[str] = []

    await client.send_message_stream("Matthew 5", chunks.append)

    assert chunks == ["Blessed ", "are the meek"]
    assert len(session.sent) == 3
    assert sleep_recorder.delays == [2.0, 4.0]


@pytest.mark.asyncio
async def test_send_fatal_error_propagates_without_retry(make_client, sleep_recorder):
    session = FakeSession([FakeAPIError("Unauthorized", code=401)])
    client, _ = make_client(FakeProvider(sessions=[session]))

    with pytest.raises(FakeAPIError, match="Unauthorized"):
        await client.send_message_stream("hi", lambda _: None)

    assert len(session.sent) == 1
    assert sleep_recorder.delays == []


@pytest.mark.asyncio
async def test_send_exhausts_retries_with_exponential_delays(make_client, sleep_recorder):
    errors = [FakeAPIError(f"model overloaded #{i}") for i in range(4)]
    session = FakeSession(errors)
    client, _ = make_client(FakeProvider(sessions=[session]))

    with pytest.raises(FakeAPIError) as exc_info:
        await client.send_message_stream("hi", lambda _: None)

    assert exc_info.value is errors[-1]
    assert len(session.sent) == 4
    assert sleep_recorder.delays == [2.0, 4.0, 8.0]


@pytest.mark.asyncio
async def test_mid_stream_failure_reissues_send_and_keeps_delivered_text(make_client, sleep_recorder):
    session = FakeSession(
        [
            ["In the ", FakeAPIError("500 INTERNAL")],
            ["In the beginning"],
        ]
    )
    client, _ = make_client(FakeProvider(sessions=[session]))
    chunks: list[str] = []
    restarts: list[int] = []

    await client.send_message_stream("Genesis 1:1", chunks.append, restarts.append)

    assert chunks == ["In the ", "In the beginning"]
    assert restarts == [2]
    assert session.sent == ["Genesis 1:1", "Genesis 1:1"]
    assert sleep_recorder.delays == [2.0]


@pytest.mark.asyncio
async def test_restart_not_signalled_when_failed_attempt_delivered_nothing(make_client):
    session = FakeSession([FakeAPIError("503 UNAVAILABLE"), ["ok"]])
    client, _ = make_client(FakeProvider(sessions=[session]))
    restarts: list[int] = []

    await client.send_message_stream("hi", lambda _: None, restarts.append)

    assert restarts == []


@pytest.mark.asyncio
async def test_mid_stream_fatal_error_is_not_retried(make_client, sleep_recorder):
    session = FakeSession([["partial", FakeAPIError("400 INVALID_ARGUMENT", code=400)]])
    client, _ = make_client(FakeProvider(sessions=[session]))
    chunks: list[str] = []

    with pytest.raises(FakeAPIError, match="INVALID_ARGUMENT"):
        await client.send_message_stream("hi", chunks.append)

    assert chunks == ["partial"]
    assert sleep_recorder.delays == []


@pytest.mark.asyncio
async def test_custom_predicate_and_settings_drive_retry(make_client, sleep_recorder):
    session = FakeSession([FakeAPIError("quota", code=429), ["ok"]])
    settings = ChatSettings(max_retries=1, retry_base_delay_ms=500)
    client, _ = make_client(FakeProvider(sessions=[session]), settings)
    client.retry_policy = RetryPolicy(
        max_retries=settings.max_retries,
        base_delay_sec=settings.retry_base_delay_sec,
        is_retryable=lambda error: getattr(error, "code", None) == 429,
    )
    chunks: list[str] = []

    await client.send_message_stream("hi", chunks.append)

    assert chunks == ["ok"]
    assert sleep_recorder.delays == [0.5]


@pytest.mark.asyncio
async def test_zero_retries_means_single_attempt(make_client, sleep_recorder):
    session = FakeSession([FakeAPIError("503 UNAVAILABLE")])
    client, _ = make_client(
        FakeProvider(sessions=[session]),
        ChatSettings(max_retries=0),
    )

    with pytest.raises(FakeAPIError):
        await client.send_message_stream("hi", lambda _: None)

    assert len(session.sent) == 1
    assert sleep_recorder.delays == []


@pytest.mark.asyncio
async def test_reset_then_send_creates_fresh_session(make_client):
    client, providers = make_client()
    original = client.initialize_chat()

    client.reset_chat()
    assert client.session is None

    await client.send_message_stream("hi", lambda _: None)

    assert client.session is not None
    assert client.session is not original
    assert len(providers[0].created) == 2


@pytest.mark.asyncio
async def test_send_logs_retry_and_final_failure(make_client):
    session = FakeSession([FakeAPIError("overloaded")] * 4)
    client, _ = make_client(FakeProvider(sessions=[session]))

    with patch("biblia.logging.events.log_event") as mock_retry_log:
        with patch("biblia.chat.log_event") as mock_chat_log:
            with pytest.raises(FakeAPIError):
                await client.send_message_stream("hi", lambda _: None)

    retry_calls = [c for c in mock_retry_log.call_args_list if c.args[0] == "chat_retry"]
    assert [c.kwargs["attempt"] for c in retry_calls] == [1, 2, 3]
    assert [c.kwargs["delay_ms"] for c in retry_calls] == [2000, 4000, 8000]
    assert all(c.kwargs["max_attempts"] == 4 for c in retry_calls)

    error_calls = [c for c in mock_chat_log.call_args_list if c.args[0] == "chat_error"]
    assert len(error_calls) == 1
    assert error_calls[0].kwargs["attempts"] == 4
    assert error_calls[0].kwargs["retryable"] is True
    assert error_calls[0].kwargs["error_type"] == "FakeAPIError"


@pytest.mark.asyncio
async def test_send_logs_response_summary(make_client):
    session = FakeSession([["ab", "cde"]])
    client, _ = make_client(FakeProvider(sessions=[session]))

    with patch("biblia.chat.log_event") as mock_log_event:
        await client.send_message_stream("hi", lambda _: None)

    response_calls = [c for c in mock_log_event.call_args_list if c.args[0] == "chat_response"]
    assert len(response_calls) == 1
    assert response_calls[0].kwargs["attempts"] == 1
    assert response_calls[0].kwargs["fragments"] == 2
    assert response_calls[0].kwargs["output_chars"] == 5


@pytest.mark.asyncio
async def test_summary_does_not_touch_session(make_client):
    client, providers = make_client(FakeProvider(summary_text="- Grace"))
    session = client.initialize_chat()
    assert isinstance(session, FakeSession)

    summary = await client.generate_chat_summary(
        [Message.user("What is grace?"), Message.assistant("Ephesians 2:8")]
    )

    assert summary == "- Grace"
    assert client.session is session
    assert session.sent == []
    assert len(providers) == 2
    assert providers[0].prompts == []
    assert len(providers[1].prompts) == 1
