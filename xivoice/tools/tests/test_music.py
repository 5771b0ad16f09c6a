from __future__ import annotations

import pytest
from fastmcp.exceptions import ToolError

from xivoice.constants import MUSIC_PRESETS
from xivoice.tools.music import MusicStreamTool, MusicTool, resolve_music
from xivoice.types import CompositionPlan


def test_resolve_music_defaults():
    assert resolve_music(None, "calm piano", None, None) == ("calm piano", 60, True)


def test_resolve_music_preset_wins():
    preset = MUSIC_PRESETS["yoga_flow"]
    assert resolve_music("yoga_flow", "ignored", 10, False) == (
        preset["prompt"],
        240,
        True,
    )


@pytest.mark.asyncio
async def test_music_tool(api, xi_client, tmp_path):
    target = tmp_path / "song.mp3"
    plan = CompositionPlan.model_validate(
        {
            "sections": [{"start_ms": 0, "end_ms": 30000, "style": "ambient", "mood": "calm"}],
            "global_settings": {"tempo_bpm": 60, "key": "C minor"},
        }
    )

    [content] = await MusicTool(env=xi_client)(
        prompt="Soft ambient pads", duration_seconds=30, composition_plan=plan,
        output_path=str(target),
    )

    assert target.read_bytes() == api.content
    assert api.last.url.path == "/v1/music"
    body = api.last_json
    assert body["prompt"] == "Soft ambient pads"
    assert body["duration_seconds"] == 30
    assert body["instrumental"] is True
    assert body["composition_plan"] == {
        "sections": [{"start_ms": 0, "end_ms": 30000, "style": "ambient", "mood": "calm"}],
        "global_settings": {"tempo_bpm": 60, "key": "C minor"},
    }
    assert content.text == (
        "Generated music:\n"
        f"- File: {target}\n"
        "- Prompt: Soft ambient pads\n"
        "- Duration: 30s\n"
        "- Instrumental: true\n"
        "- Format: mp3_44100_128"
    )


@pytest.mark.asyncio
async def test_music_vocals_omit_instrumental_flag(api, xi_client, tmp_path):
    [content] = await MusicTool(env=xi_client)(
        prompt="A folk song", instrumental=False, output_path=str(tmp_path / "m.mp3")
    )

    assert "instrumental" not in api.last_json
    assert "- Instrumental: false" in content.text


@pytest.mark.asyncio
async def test_music_preset_truncates_prompt_in_report(api, xi_client, tmp_path):
    [content] = await MusicTool(env=xi_client)(
        prompt="x", preset="sleep_therapy", output_path=str(tmp_path / "m.mp3")
    )

    prompt = MUSIC_PRESETS["sleep_therapy"]["prompt"]
    assert api.last_json["prompt"] == prompt
    assert api.last_json["duration_seconds"] == 300
    assert f"- Prompt: {prompt[:100]}...\n" in content.text


@pytest.mark.asyncio
async def test_music_accepts_fractional_duration(api, xi_client, tmp_path):
    [content] = await MusicTool(env=xi_client)(
        prompt="Rain loop", duration_seconds=30.5, output_path=str(tmp_path / "m.mp3")
    )

    assert api.last_json["duration_seconds"] == 30.5
    assert "- Duration: 30.5s\n" in content.text


@pytest.mark.asyncio
async def test_stream_music(api, xi_client, tmp_path, monkeypatch):
    monkeypatch.setenv("OUTPUT_DIR", str(tmp_path))
    plan = CompositionPlan.model_validate(
        {"sections": [{"start_ms": 0, "end_ms": 20000, "style": "drums"}]}
    )

    [content] = await MusicStreamTool(env=xi_client)(
        prompt="Drums", duration_seconds=20, composition_plan=plan
    )

    assert api.last.url.path == "/v1/music/stream"
    assert api.last_json == {
        "prompt": "Drums",
        "duration_seconds": 20,
        "instrumental": True,
        "composition_plan": {"sections": [{"start_ms": 0, "end_ms": 20000, "style": "drums"}]},
    }
    assert content.text.startswith("Generated streaming music:")
    assert len(list(tmp_path.glob("music_stream_*.mp3"))) == 1


@pytest.mark.asyncio
async def test_music_server_error(api, xi_client, tmp_path):
    api.status_code = 503

    with pytest.raises(ToolError, match="^Error generating music: Service Unavailable"):
        await MusicTool(env=xi_client)(prompt="Drums", output_path=str(tmp_path / "m.mp3"))
