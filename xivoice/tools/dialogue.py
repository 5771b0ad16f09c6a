from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Annotated, Any

from mcp.types import ContentBlock, TextContent
from pydantic import Field

from xivoice.constants import (
    AUDIO_TAGS,
    DEFAULT_OUTPUT_FORMAT,
    DIALOGUE_ENDPOINT,
    ELEVEN_V3,
    DialogueModel,
    OutputFormat,
)
from xivoice.shared.exceptions import XiException
from xivoice.types import VoiceSettings

from .base import BaseTool
from .output import resolve_output_path, write_audio

logger = logging.getLogger(__name__)

_TAG_PATTERN = re.compile(r"\[([^\]]+)\]")

MEDITATION_EXAMPLE = """
[softly, warmly] Welcome to this moment of peace and relaxation.

[whispers] Close your eyes and let go of all tension.

[calmly] Take a deep breath in... [pause] ...and slowly release.

[sighs] Feel the weight of your body sinking into comfort.

[softly] You are safe here. You are at peace.

[whispers] Let each breath carry you deeper into relaxation.
""".strip()


@dataclass
class TagReport:
    """Audio tags found in a dialogue text, with warnings for unknown ones."""

    tags: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)


def validate_audio_tags(text: str) -> TagReport:
    """Collect ``[tag, tag]`` markers. Unknown tags only warn; the API may still accept them."""
    report = TagReport()
    for match in _TAG_PATTERN.finditer(text):
        for tag in (t.strip().lower() for t in match.group(1).split(",")):
            report.tags.append(tag)
            if tag not in AUDIO_TAGS:
                report.warnings.append(
                    f"Unknown audio tag: [{tag}]. It may still work but is not officially documented."  # noqa: E501
                )
    return report


def format_meditation_text(sections: list[dict[str, str]]) -> str:
    """Join ``{"emotion": ..., "text": ...}`` sections into tagged paragraphs."""
    return "\n\n".join(
        f"[{section['emotion']}] {section['text']}" if section.get("emotion") else section["text"]
        for section in sections
    )


class DialogueTool(BaseTool):
    name = "elevenlabs_dialogue"
    title = "Dialogue"
    description = (
        "Generate natural dialogue with multiple voices and emotional audio tags (V3).\n"
        "Use audio tags in text like: [whispers], [sighs], [calmly], [softly, warmly]\n"
        f"Available tags: {', '.join(AUDIO_TAGS[:15])}, ...\n"
        "Example meditation text format:\n"
        f"{MEDITATION_EXAMPLE[:200]}..."
    )

    async def __call__(
        self,
        text: Annotated[
            str,
            Field(
                min_length=1,
                max_length=10000,
                description=(
                    "Dialogue text with optional V3 audio tags like [whispers], [sighs], "
                    "[calmly], [softly, warmly]. "
                    f"Available tags: {', '.join(AUDIO_TAGS[:10])}, etc."
                ),
            ),
        ],
        voice_ids: Annotated[
            list[str],
            Field(
                min_length=1,
                max_length=10,
                description="Array of voice IDs for different speakers in the dialogue",
            ),
        ],
        model_id: Annotated[
            DialogueModel,
            Field(description="Model to use (eleven_v3 recommended for audio tags)"),
        ] = ELEVEN_V3,
        voice_settings: Annotated[
            VoiceSettings | None, Field(description="Voice settings applied to all voices")
        ] = None,
        output_format: Annotated[
            OutputFormat, Field(description="Audio output format")
        ] = DEFAULT_OUTPUT_FORMAT,
        output_path: Annotated[
            str | None, Field(description="Full path where to save the audio file")
        ] = None,
    ) -> list[ContentBlock]:
        report = validate_audio_tags(text)
        for warning in report.warnings:
            logger.warning("%s", warning)

        body: dict[str, Any] = {
            "text": text,
            "voice_ids": voice_ids,
            "model_id": model_id or ELEVEN_V3,
        }
        if voice_settings is not None:
            body["voice_settings"] = VoiceSettings.model_validate(voice_settings).model_dump(
                exclude_none=True
            )

        try:
            audio = await self.client.post_for_bytes(
                f"{DIALOGUE_ENDPOINT}?output_format={output_format}", body
            )
            target = resolve_output_path(output_path, "dialogue", output_format)
            await write_audio(target, audio)
        except (XiException, OSError) as e:
            self.fail("generating dialogue", e)

        text_out = (
            "Generated dialogue audio:\n"
            f"- File: {target}\n"
            f"- Voices: {', '.join(voice_ids)}\n"
            f"- Model: {body['model_id']}\n"
            f"- Characters: {len(text)}\n"
            f"- Format: {output_format}\n"
            f"- Audio tags found: {', '.join(report.tags) if report.tags else 'none'}"
        )
        if report.warnings:
            text_out += "\n\nWarnings:\n" + "\n".join(report.warnings)

        return [TextContent(type="text", text=text_out)]
