import pytest

from aitripplan.api.config import (
    ConfigurationError,
    GenerationConfig,
    get_generation_config,
    get_openai_api_key,
    get_port,
)

ENV_VARS = [
    "OPENAI_CHAT_MODEL",
    "OPENAI_BASE_URL",
    "TRIP_TEMPERATURE",
    "TRIP_MAX_TOKENS",
    "TRIP_TIMEOUT_SECONDS",
    "TRIP_MAX_PROMPT_CHARS",
    "TRIP_DEFAULT_DAYS",
    "TRIP_MAX_DAYS",
    "TRIP_DEFAULT_PROMPT",
    "PORT",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults_when_nothing_is_set():
    assert get_generation_config() == GenerationConfig()
    assert get_port() == 5000


def test_values_come_from_environment(monkeypatch):
    monkeypatch.setenv("OPENAI_CHAT_MODEL", "gpt-4o-mini")
    monkeypatch.setenv("TRIP_TEMPERATURE", "0.8")
    monkeypatch.setenv("TRIP_MAX_TOKENS", "900")
    monkeypatch.setenv("TRIP_MAX_PROMPT_CHARS", "100")
    monkeypatch.setenv("TRIP_DEFAULT_PROMPT", "  Plan a 1-day highlight trip for a popular city.  ")
    monkeypatch.setenv("OPENAI_BASE_URL", "http://localhost:8080/v1")

    cfg = get_generation_config()

    assert cfg.model == "gpt-4o-mini"
    assert cfg.temperature == 0.8
    assert cfg.max_tokens == 900
    assert cfg.max_prompt_chars == 100
    assert cfg.default_prompt == "Plan a 1-day highlight trip for a popular city."
    assert cfg.base_url == "http://localhost:8080/v1"


def test_blank_default_prompt_means_none(monkeypatch):
    monkeypatch.setenv("TRIP_DEFAULT_PROMPT", "   ")

    assert get_generation_config().default_prompt is None


@pytest.mark.parametrize("name", ["TRIP_MAX_TOKENS", "TRIP_TEMPERATURE", "TRIP_MAX_DAYS"])
def test_malformed_numbers_name_the_variable(monkeypatch, name):
    monkeypatch.setenv(name, "lots")

    with pytest.raises(ValueError, match=name):
        get_generation_config()


def test_missing_api_key(monkeypatch):
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)

    with pytest.raises(ConfigurationError):
        get_openai_api_key()


def test_api_key(monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "sk-abc")

    assert get_openai_api_key() == "sk-abc"
