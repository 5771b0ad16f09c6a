from __future__ import annotations

import re
from datetime import UTC, datetime
from pathlib import Path

import pytest

from xivoice.tools.output import (
    default_output_path,
    extension_for,
    resolve_output_path,
    slugify,
    timestamp,
    write_audio,
)


def test_timestamp_format():
    now = datetime(2026, 10, 18, 16, 49, 0, 123456, tzinfo=UTC)
    assert timestamp(now) == "2026-10-18T16-49-00"


def test_timestamp_default_is_file_safe():
    assert re.fullmatch(r"\d{4}-\d{2}-\d{2}T\d{2}-\d{2}-\d{2}", timestamp())


@pytest.mark.parametrize(
    ("fmt", "ext"),
    [
        ("mp3_44100_128", "mp3"),
        ("mp3_22050_32", "mp3"),
        ("pcm_16000", "wav"),
        ("pcm_44100", "wav"),
        ("ulaw_8000", "audio"),
    ],
)
def test_extension_for(fmt, ext):
    assert extension_for(fmt) == ext


def test_slugify():
    assert slugify("Soft ocean waves, with gulls!") == "soft_ocean_waves__with_gulls_"
    assert slugify("a" * 50) == "a" * 30


def test_default_output_path_uses_output_dir_env(monkeypatch, tmp_path):
    monkeypatch.setenv("OUTPUT_DIR", str(tmp_path / "out"))
    path = default_output_path("tts", "mp3_44100_128")
    assert path.parent == tmp_path / "out"
    assert re.fullmatch(r"tts_\d{4}-\d{2}-\d{2}T\d{2}-\d{2}-\d{2}\.mp3", path.name)


def test_default_output_path_explicit_dir(tmp_path):
    path = default_output_path("music", "pcm_24000", tmp_path)
    assert path.parent == tmp_path
    assert path.name.startswith("music_")
    assert path.suffix == ".wav"


def test_resolve_output_path_prefers_caller_path(tmp_path):
    given = str(tmp_path / "mine.mp3")
    assert resolve_output_path(given, "tts", "mp3_44100_128") == Path(given)
    assert resolve_output_path(None, "tts", "mp3_44100_128", tmp_path).parent == tmp_path


@pytest.mark.asyncio
async def test_write_audio_creates_directories(tmp_path):
    target = tmp_path / "nested" / "deeper" / "clip.mp3"

    written = await write_audio(target, b"\x00\x01audio")

    assert written == target
    assert target.read_bytes() == b"\x00\x01audio"
