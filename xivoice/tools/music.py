from __future__ import annotations

import logging
from typing import Annotated, Any

from mcp.types import ContentBlock, TextContent
from pydantic import Field

from xivoice.constants import (
    DEFAULT_OUTPUT_FORMAT,
    MUSIC_ENDPOINT,
    MUSIC_PRESETS,
    MUSIC_STREAM_ENDPOINT,
    MusicPresetName,
    OutputFormat,
)
from xivoice.shared.exceptions import XiException
from xivoice.types import CompositionPlan

from .base import BaseTool
from .output import resolve_output_path, write_audio

logger = logging.getLogger(__name__)

DEFAULT_DURATION_SECONDS = 60


def resolve_music(
    preset: str | None, prompt: str, duration_seconds: float | None, instrumental: bool | None
) -> tuple[str, float, bool]:
    """A preset replaces prompt, duration and instrumental wholesale."""
    if preset and preset in MUSIC_PRESETS:
        chosen = MUSIC_PRESETS[preset]
        return chosen["prompt"], chosen["duration_seconds"], chosen["instrumental"]
    return (
        prompt,
        DEFAULT_DURATION_SECONDS if duration_seconds is None else duration_seconds,
        True if instrumental is None else instrumental,
    )


def _short_prompt(prompt: str) -> str:
    return prompt[:100] + ("..." if len(prompt) > 100 else "")


class MusicTool(BaseTool):
    name = "elevenlabs_music"
    title = "Generate Music"
    description = (
        "Generate music from a text prompt.\n"
        "Duration: 10-300 seconds (10s to 5min)\n"
        f"Presets: {', '.join(MUSIC_PRESETS)}\n"
        "Use instrumental=true for background music without vocals."
    )

    endpoint = MUSIC_ENDPOINT
    file_prefix = "music"
    label = "music"

    async def __call__(
        self,
        prompt: Annotated[
            str,
            Field(
                min_length=1,
                max_length=1000,
                description="Natural language description of the music to generate",
            ),
        ],
        duration_seconds: Annotated[
            float,
            Field(ge=10, le=300, description="Duration in seconds (10-300, i.e., 10s to 5min)"),
        ] = DEFAULT_DURATION_SECONDS,
        instrumental: Annotated[bool, Field(description="Force instrumental (no vocals)")] = True,
        preset: Annotated[
            MusicPresetName | None,
            Field(
                description=(
                    "Use a predefined music preset (overrides prompt, duration, instrumental)"
                )
            ),
        ] = None,
        composition_plan: Annotated[
            CompositionPlan | None,
            Field(description="Advanced: detailed composition structure"),
        ] = None,
        output_format: Annotated[
            OutputFormat, Field(description="Audio output format")
        ] = DEFAULT_OUTPUT_FORMAT,
        output_path: Annotated[
            str | None, Field(description="Full path where to save the audio file")
        ] = None,
    ) -> list[ContentBlock]:
        prompt, duration_seconds, instrumental = resolve_music(
            preset, prompt, duration_seconds, instrumental
        )

        body: dict[str, Any] = {"prompt": prompt, "duration_seconds": duration_seconds}
        # The API treats an absent flag as "vocals allowed"
        if instrumental:
            body["instrumental"] = True
        if composition_plan is not None:
            body["composition_plan"] = CompositionPlan.model_validate(
                composition_plan
            ).model_dump(exclude_none=True)

        try:
            logger.info("Generating %ss of %s", duration_seconds, self.label)
            audio = await self.client.post_for_bytes(
                f"{self.endpoint}?output_format={output_format}", body
            )
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
                    f"- Prompt: {_short_prompt(prompt)}\n"
                    f"- Duration: {duration_seconds:g}s\n"
                    f"- Instrumental: {'true' if instrumental else 'false'}\n"
                    f"- Format: {output_format}"
                ),
            )
        ]


class MusicStreamTool(MusicTool):
    name = "elevenlabs_stream_music"
    title = "Generate Music (Streaming)"
    description = (
        "Generate music with streaming (better for longer compositions). "
        "Same parameters as elevenlabs_music."
    )

    endpoint = MUSIC_STREAM_ENDPOINT
    file_prefix = "music_stream"
    label = "streaming music"
