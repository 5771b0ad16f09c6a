from __future__ import annotations

from pathlib import Path

import pytest
from fastmcp.exceptions import ToolError

from xivoice.constants import DEFAULT_VOICE_ID, DEFAULT_VOICE_SETTINGS, THERAPEUTIC_PRESETS
from xivoice.tools.tts import TextToSpeechStreamTool, TextToSpeechTool, resolve_voice
from xivoice.types import VoiceSettings


class TestResolveVoice:
    def test_defaults(self):
        settings, model = resolve_voice(None, None, None)
        assert settings == DEFAULT_VOICE_SETTINGS
        assert model == "eleven_multilingual_v2"

    def test_preset_overrides_everything(self):
        settings, model = resolve_voice(
            "energetic_motivation", VoiceSettings(stability=0.1), "eleven_v3"
        )
        assert settings == THERAPEUTIC_PRESETS["energetic_motivation"]["voice_settings"]
        assert model == "eleven_turbo_v2_5"

    def test_custom_settings(self):
        settings, model = resolve_voice(
            None, {"stability": 0.2, "similarity_boost": 0.9}, "eleven_flash_v2"
        )
        assert settings["stability"] == 0.2
        assert settings["similarity_boost"] == 0.9
        assert "speed" not in settings
        assert model == "eleven_flash_v2"


@pytest.mark.asyncio
async def test_tts_writes_audio_and_reports(api, xi_client, tmp_path):
    target = tmp_path / "out" / "hello.mp3"

    [content] = await TextToSpeechTool(env=xi_client)(
        text="Hello there", output_path=str(target), seed=42, previous_text="Before."
    )

    assert target.read_bytes() == api.content
    assert api.last.url.path == f"/v1/text-to-speech/{DEFAULT_VOICE_ID}"
    assert api.last.url.params["output_format"] == "mp3_44100_128"
    body = api.last_json
    assert body["text"] == "Hello there"
    assert body["model_id"] == "eleven_multilingual_v2"
    assert body["voice_settings"] == DEFAULT_VOICE_SETTINGS
    assert body["seed"] == 42
    assert body["previous_text"] == "Before."
    assert "next_text" not in body

    assert content.text == (
        "Generated TTS audio:\n"
        f"- File: {target}\n"
        f"- Voice: {DEFAULT_VOICE_ID}\n"
        "- Model: eleven_multilingual_v2\n"
        "- Characters: 11\n"
        "- Format: mp3_44100_128"
    )


@pytest.mark.asyncio
async def test_tts_preset(api, xi_client, tmp_path):
    await TextToSpeechTool(env=xi_client)(
        text="Breathe", preset="hypnosis_deep", output_path=str(tmp_path / "a.mp3")
    )

    body = api.last_json
    assert body["model_id"] == "eleven_multilingual_v2"
    assert body["voice_settings"]["stability"] == 0.8


@pytest.mark.asyncio
async def test_tts_default_path_under_output_dir(api, xi_client, tmp_path, monkeypatch):
    monkeypatch.setenv("OUTPUT_DIR", str(tmp_path / "audio"))

    [content] = await TextToSpeechTool(env=xi_client)(text="Hi", output_format="pcm_16000")

    files = list((tmp_path / "audio").iterdir())
    assert len(files) == 1
    assert files[0].name.startswith("tts_")
    assert files[0].suffix == ".wav"
    assert f"- File: {files[0]}" in content.text


@pytest.mark.asyncio
async def test_tts_stream_uses_stream_endpoint(api, xi_client, tmp_path, monkeypatch):
    monkeypatch.setenv("OUTPUT_DIR", str(tmp_path))

    [content] = await TextToSpeechStreamTool(env=xi_client)(
        text="Quick", voice_id="abc", seed=7, previous_text="Before.", next_text="After."
    )

    assert api.last.url.path == "/v1/text-to-speech/abc/stream"
    body = api.last_json
    assert body["seed"] == 7
    assert body["previous_text"] == "Before."
    assert body["next_text"] == "After."
    assert content.text.startswith("Generated streaming TTS audio:")
    assert next(Path(tmp_path).glob("tts_stream_*.mp3"))


@pytest.mark.asyncio
async def test_tts_api_error_becomes_tool_error(api, xi_client, tmp_path):
    api.status_code = 401
    api.json_body = {"detail": {"message": "Invalid API key"}}

    with pytest.raises(ToolError) as excinfo:
        await TextToSpeechTool(env=xi_client)(text="Hi", output_path=str(tmp_path / "x.mp3"))

    message = str(excinfo.value)
    assert message.startswith(
        "Error generating TTS audio: Unauthorized - Invalid or missing API key: Invalid API key"
    )
    assert "ELEVENLABS_API_KEY" in message
    assert not (tmp_path / "x.mp3").exists()


@pytest.mark.asyncio
async def test_tts_unwritable_path(api, xi_client, tmp_path):
    blocker = tmp_path / "file"
    blocker.write_text("not a directory")

    with pytest.raises(ToolError, match="Error generating TTS audio"):
        await TextToSpeechTool(env=xi_client)(text="Hi", output_path=str(blocker / "x.mp3"))
