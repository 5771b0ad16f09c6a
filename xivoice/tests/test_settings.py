from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from xivoice.settings import Settings, get_settings


def test_defaults():
    settings = get_settings()
    assert settings.api_key is None
    assert settings.max_retries == 3
    assert settings.retry_delay_ms == 1000
    assert settings.output_dir == "."
    assert settings.log_level == "INFO"


def test_reads_environment(monkeypatch):
    monkeypatch.setenv("ELEVENLABS_API_KEY", "sk-test")
    monkeypatch.setenv("MAX_RETRIES", "0")
    monkeypatch.setenv("RETRY_DELAY_MS", "50")
    monkeypatch.setenv("OUTPUT_DIR", "/tmp/audio")

    settings = get_settings()
    assert settings.api_key == "sk-test"
    assert settings.max_retries == 0
    assert settings.retry_delay_ms == 50
    assert settings.output_dir == "/tmp/audio"


def test_get_settings_is_fresh(monkeypatch):
    assert get_settings().api_key is None
    monkeypatch.setenv("ELEVENLABS_API_KEY", "later")
    assert get_settings().api_key == "later"


@pytest.mark.parametrize(("name", "value"), [("MAX_RETRIES", "-1"), ("RETRY_DELAY_MS", "soon")])
def test_rejects_invalid_retry_settings(monkeypatch, name, value):
    monkeypatch.setenv(name, value)
    with pytest.raises(ValidationError):
        Settings()


def test_project_env_file(tmp_path):
    # the test runs from tmp_path, see conftest
    (tmp_path / ".env").write_text("ELEVENLABS_API_KEY=from-dotenv\nMAX_RETRIES=7\n")

    settings = Settings()
    assert settings.api_key == "from-dotenv"
    assert settings.max_retries == 7


def test_user_env_file_is_lowest_priority(tmp_path, monkeypatch):
    user_dir = Path.home() / ".xivoice"
    user_dir.mkdir(parents=True)
    (user_dir / ".env").write_text("ELEVENLABS_API_KEY=from-user\nRETRY_DELAY_MS=5\n")
    (tmp_path / ".env").write_text("ELEVENLABS_API_KEY=from-project\n")

    settings = Settings()
    assert settings.api_key == "from-project"
    assert settings.retry_delay_ms == 5

    monkeypatch.setenv("ELEVENLABS_API_KEY", "from-process")
    assert Settings().api_key == "from-process"
