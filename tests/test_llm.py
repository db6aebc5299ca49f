from types import SimpleNamespace

import httpx
import pytest
from openai import APIConnectionError, APIStatusError

from aitripplan.api import llm
from aitripplan.api.config import ConfigurationError, GenerationConfig
from aitripplan.api.llm import UpstreamError, fetch_completion_text

REQUEST = httpx.Request("POST", "https://api.openai.com/v1/chat/completions")
MESSAGES = [{"role": "user", "content": "Oslo"}]


class FakeCompletions:
    def __init__(self, outcome):
        self.outcome = outcome
        self.kwargs = None

    def create(self, **kwargs):
        self.kwargs = kwargs
        if isinstance(self.outcome, Exception):
            raise self.outcome
        return SimpleNamespace(http_response=httpx.Response(200, text=self.outcome, request=REQUEST))


def install_fake(monkeypatch, outcome):
    completions = FakeCompletions(outcome)
    client = SimpleNamespace(chat=SimpleNamespace(completions=SimpleNamespace(with_raw_response=completions)))
    monkeypatch.setattr(llm, "_get_client", lambda config: client)
    return completions


def test_returns_raw_body_text(monkeypatch):
    completions = install_fake(monkeypatch, '{"choices": []}')
    config = GenerationConfig(model="m", temperature=0.3, max_tokens=123)

    assert fetch_completion_text(MESSAGES, config) == '{"choices": []}'
    assert completions.kwargs == {
        "model": "m",
        "messages": MESSAGES,
        "temperature": 0.3,
        "max_tokens": 123,
    }


def test_status_error_keeps_status_and_body(monkeypatch):
    response = httpx.Response(429, text='{"error": "slow down"}', request=REQUEST)
    install_fake(monkeypatch, APIStatusError("rate limited", response=response, body=None))

    with pytest.raises(UpstreamError) as info:
        fetch_completion_text(MESSAGES, GenerationConfig())

    assert info.value.status == 429
    assert info.value.body == '{"error": "slow down"}'
    assert not info.value.unavailable


def test_connection_error_is_unavailable(monkeypatch):
    install_fake(monkeypatch, APIConnectionError(request=REQUEST))

    with pytest.raises(UpstreamError) as info:
        fetch_completion_text(MESSAGES, GenerationConfig())

    assert info.value.unavailable


def test_client_needs_api_key(monkeypatch):
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)

    with pytest.raises(ConfigurationError):
        llm._get_client(GenerationConfig())


def test_client_is_reused_until_settings_change(monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
    monkeypatch.setattr(llm, "_client", None)
    monkeypatch.setattr(llm, "_client_key", None)

    first = llm._get_client(GenerationConfig())
    assert llm._get_client(GenerationConfig()) is first
    assert first.max_retries == 0

    other = llm._get_client(GenerationConfig(timeout_seconds=5))
    assert other is not first
