import json

import pytest

from aitripplan.api.config import GenerationConfig


def make_envelope(content) -> str:
    """Wrap model content in a chat-completion response body."""
    return json.dumps({"choices": [{"message": {"role": "assistant", "content": content}}]})


def make_content(*suggestions) -> str:
    return json.dumps({"suggestions": list(suggestions)})


@pytest.fixture
def config():
    return GenerationConfig(model="test-model", max_prompt_chars=50)


@pytest.fixture
def app(config):
    from main import create_app

    app = create_app(config)
    app.config.update(TESTING=True)
    return app


@pytest.fixture
def client(app, monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
    return app.test_client()
