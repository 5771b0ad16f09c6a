from __future__ import annotations

import logging
from typing import Annotated, Literal

from mcp.types import ContentBlock, TextContent
from pydantic import Field, ValidationError

from xivoice.constants import VOICES_ENDPOINT, voice_endpoint
from xivoice.shared.exceptions import XiDecodeError, XiException
from xivoice.types import Voice, VoicesResponse

from .base import BaseTool

logger = logging.getLogger(__name__)

Gender = Literal["male", "female", "neutral"]
VoiceCategory = Literal["premade", "cloned", "generated", "professional"]


def _contains(value: str | None, needle: str) -> bool:
    return needle in (value or "").lower()


def filter_voices(
    voices: list[Voice],
    *,
    language: str | None = None,
    gender: str | None = None,
    category: str | None = None,
    use_case: str | None = None,
) -> list[Voice]:
    """Apply the optional list filters. Every given filter must match."""
    if language:
        lang = language.lower()
        voices = [
            v
            for v in voices
            if _contains(v.labels.language, lang) or _contains(v.labels.accent, lang)
        ]

    if gender:
        voices = [v for v in voices if (v.labels.gender or "").lower() == gender.lower()]

    if category:
        voices = [v for v in voices if v.category == category]

    if use_case:
        needle = use_case.lower()
        voices = [
            v
            for v in voices
            if _contains(v.labels.use_case, needle) or _contains(v.labels.description, needle)
        ]

    return voices


def format_voice(voice: Voice) -> str:
    labels = ", ".join(
        f"{key}: {value}" for key, value in voice.labels.model_dump().items() if value
    )
    return (
        f"{voice.name} ({voice.voice_id})\n"
        f"  Category: {voice.category}\n"
        f"  Labels: {labels or 'none'}\n"
        f"  Preview: {voice.preview_url}"
    )


def format_voices_list(voices: list[Voice]) -> str:
    if not voices:
        return "No voices found matching the criteria."

    lines = []
    for v in voices:
        details = [v.labels.gender or "unknown"]
        if v.labels.accent:
            details.append(v.labels.accent)
        if v.labels.use_case:
            details.append(v.labels.use_case)
        lines.append(f"- {v.name} ({v.voice_id}) [{', '.join(details)}]")
    return "\n".join(lines)


class ListVoicesTool(BaseTool):
    """List voices, optionally filtered by their labels."""

    name = "elevenlabs_list_voices"
    title = "List Voices"
    description = (
        "List all available ElevenLabs voices with optional filtering.\n"
        "Filters: language, gender (male/female/neutral), "
        "category (premade/cloned/generated/professional), use_case.\n"
        "Returns voice IDs that can be used with TTS tools."
    )

    async def fetch(self) -> list[Voice]:
        payload = await self.client.get(VOICES_ENDPOINT)
        try:
            return VoicesResponse.model_validate(payload).voices
        except ValidationError as e:
            raise XiDecodeError(f"Unexpected voices payload: {e}") from None

    async def __call__(
        self,
        language: Annotated[
            str | None, Field(description='Filter voices by language (e.g., "german", "english")')
        ] = None,
        gender: Annotated[Gender | None, Field(description="Filter by gender")] = None,
        category: Annotated[
            VoiceCategory | None, Field(description="Filter by voice category")
        ] = None,
        use_case: Annotated[
            str | None,
            Field(description='Filter by use case (e.g., "narration", "meditation")'),
        ] = None,
    ) -> list[ContentBlock]:
        try:
            all_voices = await self.fetch()
        except XiException as e:
            self.fail("listing voices", e)

        voices = filter_voices(
            all_voices, language=language, gender=gender, category=category, use_case=use_case
        )
        logger.debug("Filtered %d of %d voices", len(voices), len(all_voices))
        text = (
            f"Found {len(voices)} voices ({len(all_voices)} total):\n\n"
            f"{format_voices_list(voices)}"
        )
        return [TextContent(type="text", text=text)]


class GetVoiceTool(BaseTool):
    """Get detailed information about a specific voice by its ID."""

    name = "elevenlabs_get_voice"
    title = "Get Voice"

    async def __call__(
        self,
        voice_id: Annotated[str, Field(min_length=1, description="The voice ID to get details for")],
    ) -> list[ContentBlock]:
        try:
            payload = await self.client.get(voice_endpoint(voice_id))
            try:
                voice = Voice.model_validate(payload)
            except ValidationError as e:
                raise XiDecodeError(f"Unexpected voice payload: {e}") from None
        except XiException as e:
            self.fail("getting voice", e)

        return [TextContent(type="text", text=format_voice(voice))]
