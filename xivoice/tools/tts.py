from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Annotated, Any

from mcp.types import ContentBlock, TextContent
from pydantic import Field

from xivoice.constants import (
    DEFAULT_OUTPUT_FORMAT,
    DEFAULT_TTS_MODEL,
    DEFAULT_VOICE_ID,
    DEFAULT_VOICE_SETTINGS,
    THERAPEUTIC_PRESETS,
    TTS_MODELS,
    OutputFormat,
    TherapeuticPresetName,
    TTSModel,
    tts_endpoint,
    tts_stream_endpoint,
)
from xivoice.shared.exceptions import XiException
from xivoice.types import VoiceSettings

from .base import BaseTool
from .output import resolve_output_path, write_audio

if TYPE_CHECKING:
    from collections.abc import Callable

logger = logging.getLogger(__name__)


def resolve_voice(
    preset: str | None, voice_settings: VoiceSettings | None, model_id: str | None
) -> tuple[dict[str, Any], str]:
    """A preset overrides both the voice settings and the model."""
    if preset and preset in THERAPEUTIC_PRESETS:
        chosen = THERAPEUTIC_PRESETS[preset]
        return dict(chosen["voice_settings"]), chosen["model_id"]

    if voice_settings is None:
        return dict(DEFAULT_VOICE_SETTINGS), model_id or DEFAULT_TTS_MODEL
    settings = VoiceSettings.model_validate(voice_settings).model_dump(exclude_none=True)
    return settings, model_id or DEFAULT_TTS_MODEL


class TextToSpeechTool(BaseTool):
    """Generate speech from text and save it to disk."""

    name = "elevenlabs_tts"
    title = "Text to Speech"
    description = (
        "Generate speech from text using ElevenLabs Text-to-Speech.\n"
        f"Models: {', '.join(TTS_MODELS)}\n"
        f"Presets: {', '.join(THERAPEUTIC_PRESETS)}\n"
        f"Default voice: {DEFAULT_VOICE_ID} (Rachel)\n"
        "Use elevenlabs_list_voices to find voice IDs."
    )

    endpoint: Callable[[str], str] = staticmethod(tts_endpoint)
    file_prefix = "tts"
    label = "TTS audio"

    async def __call__(
        self,
        text: Annotated[
            str, Field(min_length=1, max_length=5000, description="Text to convert to speech")
        ],
        voice_id: Annotated[
            str,
            Field(description="Voice ID. Use elevenlabs_list_voices to find available voices"),
        ] = DEFAULT_VOICE_ID,
        model_id: Annotated[TTSModel, Field(description="TTS model to use")] = DEFAULT_TTS_MODEL,
        voice_settings: Annotated[
            VoiceSettings | None, Field(description="Voice settings for fine-tuning output")
        ] = None,
        preset: Annotated[
            TherapeuticPresetName | None,
            Field(
                description=(
                    "Use a predefined therapeutic preset (overrides voice_settings and model_id)"
                )
            ),
        ] = None,
        output_format: Annotated[
            OutputFormat, Field(description="Audio output format")
        ] = DEFAULT_OUTPUT_FORMAT,
        output_path: Annotated[
            str | None,
            Field(
                description=(
                    "Full path where to save the audio file. "
                    "If not provided, uses OUTPUT_DIR env or current directory"
                )
            ),
        ] = None,
        seed: Annotated[int | None, Field(description="Seed for reproducible generation")] = None,
        previous_text: Annotated[
            str | None, Field(description="Previous text for better flow (context)")
        ] = None,
        next_text: Annotated[
            str | None, Field(description="Next text for better flow (context)")
        ] = None,
    ) -> list[ContentBlock]:
        voice_id = voice_id or DEFAULT_VOICE_ID
        settings, resolved_model = resolve_voice(preset, voice_settings, model_id)

        body: dict[str, Any] = {
            "text": text,
            "model_id": resolved_model,
            "voice_settings": settings,
        }
        if seed is not None:
            body["seed"] = seed
        if previous_text:
            body["previous_text"] = previous_text
        if next_text:
            body["next_text"] = next_text

        path = f"{self.endpoint(voice_id)}?output_format={output_format}"

        try:
            logger.info("Generating %s with voice %s", self.label, voice_id)
            audio = await self.client.post_for_bytes(path, body)
            logger.info("Audio generated, size: %d bytes", len(audio))

            target = resolve_output_path(output_path, self.file_prefix, output_format)
            await write_audio(target, audio)
        except (XiException, OSError) as e:
            self.fail(f"generating {self.label}", e)

        return [
            TextContent(
                type="text",
                text=(
                    f"Generated {self.label}:\n"
                    f"- File: {target}\n"
                    f"- Voice: {voice_id}\n"
                    f"- Model: {resolved_model}\n"
                    f"- Characters: {len(text)}\n"
                    f"- Format: {output_format}"
                ),
            )
        ]


class TextToSpeechStreamTool(TextToSpeechTool):
    name = "elevenlabs_tts_stream"
    title = "Text to Speech (Streaming)"
    description = (
        "Generate speech with streaming (lower latency). Same parameters as elevenlabs_tts.\n"
        "Use for real-time applications or when you need faster initial response."
    )

    endpoint = staticmethod(tts_stream_endpoint)
    file_prefix = "tts_stream"
    label = "streaming TTS audio"
