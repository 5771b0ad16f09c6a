from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from xivoice.constants import DEFAULT_VOICE_SETTINGS


class VoiceSettings(BaseModel):
    """Fine-tuning knobs sent with TTS and dialogue requests."""

    stability: float = Field(
        default=DEFAULT_VOICE_SETTINGS["stability"],
        ge=0,
        le=1,
        description="Voice stability (0-1). Lower = more expressive, Higher = more consistent",
    )
    similarity_boost: float = Field(
        default=DEFAULT_VOICE_SETTINGS["similarity_boost"],
        ge=0,
        le=1,
        description="Voice clarity/similarity (0-1). Higher = clearer but may sound artificial",
    )
    style: float | None = Field(
        default=DEFAULT_VOICE_SETTINGS["style"],
        ge=0,
        le=1,
        description="Style exaggeration (0-1). Only for v2 models",
    )
    use_speaker_boost: bool | None = Field(
        default=DEFAULT_VOICE_SETTINGS["use_speaker_boost"],
        description="Boost speaker similarity",
    )
    speed: float | None = Field(default=None, description="Speaking speed multiplier")


class VoiceLabels(BaseModel):
    model_config = ConfigDict(extra="allow")

    accent: str | None = None
    description: str | None = None
    age: str | None = None
    gender: str | None = None
    use_case: str | None = None
    language: str | None = None


class Voice(BaseModel):
    """A voice as returned by ``GET /voices``."""

    model_config = ConfigDict(extra="allow")

    voice_id: str
    name: str
    category: str | None = None
    labels: VoiceLabels = Field(default_factory=VoiceLabels)
    preview_url: str | None = None
    available_for_tiers: list[str] = Field(default_factory=list)
    settings: VoiceSettings | None = None
    high_quality_base_model_ids: list[str] = Field(default_factory=list)


class VoicesResponse(BaseModel):
    voices: list[Voice] = Field(default_factory=list)


class MusicSection(BaseModel):
    start_ms: int = Field(ge=0, description="Start time in milliseconds")
    end_ms: int = Field(ge=0, description="End time in milliseconds")
    style: str = Field(description="Musical style/genre for this section")
    instruments: list[str] | None = Field(default=None, description="Instruments to use")
    mood: str | None = Field(default=None, description="Mood of this section")
    energy_level: Literal["low", "medium", "high"] | None = Field(
        default=None, description="Energy level"
    )


class MusicGlobalSettings(BaseModel):
    tempo_bpm: float | None = Field(default=None, ge=20, le=300, description="Tempo in BPM")
    key: str | None = Field(default=None, description='Musical key (e.g., "C minor", "E major")')
    time_signature: str | None = Field(
        default=None, description='Time signature (e.g., "4/4", "3/4")'
    )


class CompositionPlan(BaseModel):
    """Advanced, section-by-section structure for music generation."""

    sections: list[MusicSection] | None = Field(
        default=None, description="Detailed section-by-section composition"
    )
    global_settings: MusicGlobalSettings | None = Field(
        default=None, description="Global music settings"
    )
