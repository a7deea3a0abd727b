from __future__ import annotations

import pytest
from pydantic import ValidationError

from astarte_pairing.config import Settings, get_settings


def test_settings_read_prefixed_environment(monkeypatch):
    monkeypatch.setenv("ASTARTE_PAIRING_URL", "https://api.astarte.example/pairing")
    monkeypatch.setenv("ASTARTE_REQUEST_TIMEOUT", "2.5")

    settings = Settings(_env_file=None)

    assert settings.pairing_url == "https://api.astarte.example/pairing"
    assert settings.request_timeout == 2.5
    assert settings.log_level == "INFO"
    assert settings.user_agent.startswith("astarte-pairing/")


def test_settings_require_pairing_url():
    with pytest.raises(ValidationError):
        Settings(_env_file=None)


def test_get_settings_accepts_env_file_override(tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text("ASTARTE_PAIRING_URL=http://localhost:4003\nASTARTE_LOG_LEVEL=debug\n", encoding="utf-8")

    settings = get_settings(env_file)

    assert settings.pairing_url == "http://localhost:4003"
    assert settings.log_level == "debug"
    assert get_settings(env_file) is settings
