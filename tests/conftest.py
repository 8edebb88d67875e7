from __future__ import annotations

from typing import Callable

import pytest
from fastapi.testclient import TestClient

from fakes import LOOKUP_REPLY, FakeInvoker, FakeSpeechEngine
from swasthya.llm.gemini import StructuredResponseClient
from swasthya.storage.history_store import HistoryLog


@pytest.fixture
def engine() -> FakeSpeechEngine:
    return FakeSpeechEngine()


@pytest.fixture
def make_client() -> Callable[..., tuple[StructuredResponseClient, FakeInvoker]]:
    def _make(*replies, api_key: str = "test-key", **kwargs):
        invoker = FakeInvoker(*replies)
        return StructuredResponseClient(invoker=invoker, api_key=api_key, **kwargs), invoker

    return _make


@pytest.fixture
def history() -> HistoryLog:
    return HistoryLog(path=None)


@pytest.fixture
def sleeps(monkeypatch: pytest.MonkeyPatch) -> list[float]:
    from swasthya.llm import gemini

    recorded: list[float] = []

    async def _record_sleep(seconds: float) -> None:
        recorded.append(seconds)

    monkeypatch.setattr(gemini.asyncio, "sleep", _record_sleep)
    return recorded


@pytest.fixture
def api_script() -> dict:
    return {"replies": (LOOKUP_REPLY,), "client_kwargs": {}}


@pytest.fixture
def api(make_client, history, api_script):
    import main
    from swasthya.api import deps

    state = api_script

    def _client():
        client, _ = make_client(*state["replies"], **state["client_kwargs"])
        return client

    main.app.dependency_overrides[deps.get_client] = _client
    main.app.dependency_overrides[deps.get_history] = lambda: history
    main.app.dependency_overrides[deps.get_speech_engine] = lambda: FakeSpeechEngine(end_on_stop=True)

    with TestClient(main.app) as test_client:
        yield test_client

    main.app.dependency_overrides.clear()
