"""Shared fixtures for Biblia tests."""

from __future__ import annotations

import pytest

from biblia.chat import ChatClient
from biblia.config import ChatSettings
from fakes import FakeProvider, SleepRecorder


@pytest.fixture
def sleep_recorder() -> SleepRecorder:
    return SleepRecorder()


@pytest.fixture
def make_client(sleep_recorder):
    """Build a ChatClient over FakeProvider instances.

    Returns ``(client, providers)`` where ``providers`` lists every provider
    the factory produced, in creation order. Providers after the first copy
    its summary behavior.
    """

    def _make(provider: FakeProvider | None = None, settings: ChatSettings | None = None):
        providers: list[FakeProvider] = []
        first = provider or FakeProvider()

        def factory() -> FakeProvider:
            instance = first if not providers else FakeProvider(
                summary_text=first.summary_text,
                summary_error=first.summary_error,
            )
            providers.append(instance)
            return instance

        client = ChatClient(factory, settings, sleep=sleep_recorder)
        return client, providers

    return _make
