"""Pytest configuration and fixtures."""

from __future__ import annotations

import pytest

from xivoice.shared.requests import reset_client

_ENV_VARS = (
    "ELEVENLABS_API_KEY",
    "MAX_RETRIES",
    "RETRY_DELAY_MS",
    "OUTPUT_DIR",
    "XIVOICE_LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    """Isolate every test from the developer's environment and .env files."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.chdir(tmp_path)
    reset_client()
    yield
    reset_client()
