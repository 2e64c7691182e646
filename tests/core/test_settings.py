from __future__ import annotations

import pytest
from pydantic import ValidationError

from relay.core.llm.deps import build_openai_client
from relay.core.settings import Settings


def test_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("OPENAI_API_KEY", "sk-abc")

    settings = Settings(_env_file=None)

    assert settings.openai_api_key.get_secret_value() == "sk-abc"
    assert settings.openai_model == "gpt-4.1"
    assert settings.openai_base_url == "https://api.openai.com/v1"
    assert settings.openai_timeout_seconds == 30.0


def test_missing_api_key_fails_fast(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)

    with pytest.raises(ValidationError):
        Settings(_env_file=None)


def test_api_key_is_not_exposed_in_repr(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("OPENAI_API_KEY", "sk-very-secret")

    settings = Settings(_env_file=None)

    assert "sk-very-secret" not in repr(settings)
    assert "sk-very-secret" not in str(settings.model_dump())


def test_timeout_lower_bound(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("OPENAI_API_KEY", "sk-abc")
    monkeypatch.setenv("OPENAI_TIMEOUT_SECONDS", "0.1")

    with pytest.raises(ValidationError):
        Settings(_env_file=None)


def test_build_openai_client_uses_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("OPENAI_API_KEY", "sk-abc")
    monkeypatch.setenv("OPENAI_MODEL", "gpt-4o-mini")

    client = build_openai_client(settings=Settings(_env_file=None))

    assert client.model == "gpt-4o-mini"
