from __future__ import annotations

import json
from typing import Any

import httpx
import pytest

from xivoice.shared.requests import ClientConfig, XiClient

AUDIO = b"ID3\x04\x00fake-mp3-frames"


class FakeElevenLabs:
    """Records requests and answers them like the ElevenLabs API would."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.status_code = 200
        self.json_body: Any | None = None
        self.content = AUDIO

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.json_body is not None:
            return httpx.Response(self.status_code, json=self.json_body)
        return httpx.Response(self.status_code, content=self.content)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    @property
    def last_json(self) -> dict[str, Any]:
        return json.loads(self.last.content)


@pytest.fixture
def api() -> FakeElevenLabs:
    return FakeElevenLabs()


@pytest.fixture
def xi_client(api: FakeElevenLabs) -> XiClient:
    config = ClientConfig(api_key="test-key", max_retries=0, retry_delay_ms=0)
    return XiClient(config, client=httpx.AsyncClient(transport=httpx.MockTransport(api)))
