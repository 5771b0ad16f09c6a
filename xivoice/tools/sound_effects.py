from __future__ import annotations

import logging
from typing import Annotated, Any

from mcp.types import ContentBlock, TextContent
from pydantic import Field

from xivoice.constants import (
    DEFAULT_OUTPUT_FORMAT,
    SOUND_EFFECT_EXAMPLES,
    SOUND_EFFECTS_ENDPOINT,
    OutputFormat,
)
from xivoice.shared.exceptions import XiException

from .base import BaseTool
from .output import resolve_output_path, slugify, write_audio

logger = logging.getLogger(__name__)

DEFAULT_PROMPT_INFLUENCE = 0.3

# Ready-made prompts for meditation and therapy sessions
THERAPEUTIC_SOUNDS: dict[str, str] = {
    # Nature
    "ocean_waves": "Soft ocean waves gently rolling onto sandy beach with distant seagulls",
    "rain_on_window": "Gentle rain falling on a window with occasional distant thunder",
    "forest_morning": "Peaceful forest morning with birds chirping and gentle wind through leaves",
    "stream_flowing": "Clear mountain stream flowing over smooth rocks",
    "wind_through_trees": "Soft wind blowing through tall pine trees",
    # Ambient
    "fireplace_crackling": "Warm crackling fireplace with occasional wood popping",
    "wind_chimes": "Gentle wind chimes tinkling in a light breeze",
    "temple_bells": "Distant temple bells echoing softly",
    # Bells and bowls
    "singing_bowl": "Tibetan singing bowl struck gently with long resonance",
    "meditation_bell": "Single clear meditation bell with long decay",
    "crystal_bowl": "Crystal singing bowl with ethereal sustained tone",
    "gong_soft": "Soft gong being struck with gradual building resonance",
    # Transitions
    "gentle_chime": "Single gentle chime for meditation transitions",
    "breath_cue": "Soft subtle tone for breathing exercise cues",
    "awakening_bell": "Gentle bell to signal end of meditation",
}


def get_sound_effect_examples() -> dict[str, dict[str, Any]]:
    """Example prompts with the duration and influence that suit them."""
    return {name: dict(example) for name, example in SOUND_EFFECT_EXAMPLES.items()}


def _sound_ideas(limit: int = 5) -> str:
    return "\n".join(
        f'- {name}: "{prompt}"' for name, prompt in list(THERAPEUTIC_SOUNDS.items())[:limit]
    )


class SoundEffectTool(BaseTool):
    name = "elevenlabs_sound_effect"
    title = "Sound Effect"
    description = (
        "Generate cinematic sound effects from text description.\n"
        "Duration: 0.5-22 seconds (auto if not specified)\n"
        "prompt_influence: 0-1 (higher = more literal interpretation)\n\n"
        "Therapeutic sound ideas:\n"
        f"{_sound_ideas()}"
    )

    async def __call__(
        self,
        text: Annotated[
            str,
            Field(
                min_length=1,
                max_length=500,
                description="Natural language description of the sound effect to generate",
            ),
        ],
        duration_seconds: Annotated[
            float | None,
            Field(
                ge=0.5,
                le=22,
                description=(
                    "Duration in seconds (0.5-22). "
                    "If not provided, auto-determines based on prompt"
                ),
            ),
        ] = None,
        prompt_influence: Annotated[
            float,
            Field(
                ge=0,
                le=1,
                description=(
                    "How strongly the prompt influences generation (0-1). "
                    "Higher = more literal interpretation"
                ),
            ),
        ] = DEFAULT_PROMPT_INFLUENCE,
        output_format: Annotated[
            OutputFormat, Field(description="Audio output format")
        ] = DEFAULT_OUTPUT_FORMAT,
        output_path: Annotated[
            str | None, Field(description="Full path where to save the audio file")
        ] = None,
    ) -> list[ContentBlock]:
        body: dict[str, Any] = {"text": text, "prompt_influence": prompt_influence}
        if duration_seconds is not None:
            body["duration_seconds"] = duration_seconds

        try:
            logger.info("Generating sound effect: %s", slugify(text))
            audio = await self.client.post_for_bytes(
                f"{SOUND_EFFECTS_ENDPOINT}?output_format={output_format}", body
            )
            target = resolve_output_path(output_path, f"sfx_{slugify(text)}", output_format)
            await write_audio(target, audio)
        except (XiException, OSError) as e:
            self.fail("generating sound effect", e)

        duration = f"{duration_seconds}s" if duration_seconds is not None else "auto"
        return [
            TextContent(
                type="text",
                text=(
                    "Generated sound effect:\n"
                    f"- File: {target}\n"
                    f"- Description: {text}\n"
                    f"- Duration: {duration}\n"
                    f"- Prompt influence: {prompt_influence}\n"
                    f"- Format: {output_format}"
                ),
            )
        ]
