"""Static tables for the ElevenLabs API: endpoints, models, formats and presets."""

from __future__ import annotations

from typing import Any, Literal

ELEVENLABS_API_BASE = "https://api.elevenlabs.io/v1"

# Header carrying the API key on every request
API_KEY_HEADER = "xi-api-key"


def tts_endpoint(voice_id: str) -> str:
    return f"/text-to-speech/{voice_id}"


def tts_stream_endpoint(voice_id: str) -> str:
    return f"/text-to-speech/{voice_id}/stream"


def voice_endpoint(voice_id: str) -> str:
    return f"/voices/{voice_id}"


DIALOGUE_ENDPOINT = "/text-to-dialogue"
MUSIC_ENDPOINT = "/music"
MUSIC_STREAM_ENDPOINT = "/music/stream"
SOUND_EFFECTS_ENDPOINT = "/sound-generation"
VOICES_ENDPOINT = "/voices"

# TTS models
ELEVEN_V3 = "eleven_v3"
MULTILINGUAL_V2 = "eleven_multilingual_v2"
TURBO_V2_5 = "eleven_turbo_v2_5"
TURBO_V2 = "eleven_turbo_v2"
FLASH_V2_5 = "eleven_flash_v2_5"
FLASH_V2 = "eleven_flash_v2"

TTSModel = Literal[
    "eleven_v3",
    "eleven_multilingual_v2",
    "eleven_turbo_v2_5",
    "eleven_turbo_v2",
    "eleven_flash_v2_5",
    "eleven_flash_v2",
]
TTS_MODELS: tuple[str, ...] = (
    ELEVEN_V3,
    MULTILINGUAL_V2,
    TURBO_V2_5,
    TURBO_V2,
    FLASH_V2_5,
    FLASH_V2,
)
DEFAULT_TTS_MODEL = MULTILINGUAL_V2

DialogueModel = Literal["eleven_v3", "eleven_multilingual_v2"]

OutputFormat = Literal[
    "mp3_22050_32",
    "mp3_44100_64",
    "mp3_44100_96",
    "mp3_44100_128",
    "mp3_44100_192",
    "pcm_16000",
    "pcm_22050",
    "pcm_24000",
    "pcm_44100",
    "ulaw_8000",
]
DEFAULT_OUTPUT_FORMAT = "mp3_44100_128"

DEFAULT_VOICE_SETTINGS: dict[str, Any] = {
    "stability": 0.5,
    "similarity_boost": 0.75,
    "style": 0.0,
    "use_speaker_boost": True,
}

# Rachel, a popular English voice
DEFAULT_VOICE_ID = "21m00Tcm4TlvDq8ikWAM"

# Audio tags understood by eleven_v3 for emotional expression
AUDIO_TAGS: tuple[str, ...] = (
    # Emotions
    "happy",
    "sad",
    "angry",
    "fearful",
    "disgusted",
    "surprised",
    "neutral",
    "calm",
    "excited",
    "confident",
    "worried",
    # Speaking style
    "whispers",
    "shouts",
    "laughs",
    "giggles",
    "sighs",
    "cries",
    "screams",
    "yawns",
    "sniffs",
    # Tone modifiers
    "softly",
    "loudly",
    "quickly",
    "slowly",
    "warmly",
    "coldly",
    "sarcastically",
    "sincerely",
    # Special
    "breathing",
    "pause",
    "emphasis",
)

TherapeuticPresetName = Literal[
    "meditation_calm",
    "meditation_warm",
    "hypnosis_deep",
    "energetic_motivation",
    "children_storytelling",
]

THERAPEUTIC_PRESETS: dict[str, dict[str, Any]] = {
    "meditation_calm": {
        "voice_settings": {
            "stability": 0.7,
            "similarity_boost": 0.8,
            "style": 0.2,
            "use_speaker_boost": True,
        },
        "model_id": MULTILINGUAL_V2,
    },
    "meditation_warm": {
        "voice_settings": {
            "stability": 0.6,
            "similarity_boost": 0.85,
            "style": 0.4,
            "use_speaker_boost": True,
        },
        "model_id": MULTILINGUAL_V2,
    },
    "hypnosis_deep": {
        "voice_settings": {
            "stability": 0.8,
            "similarity_boost": 0.75,
            "style": 0.1,
            "use_speaker_boost": True,
        },
        "model_id": MULTILINGUAL_V2,
    },
    "energetic_motivation": {
        "voice_settings": {
            "stability": 0.4,
            "similarity_boost": 0.9,
            "style": 0.6,
            "use_speaker_boost": True,
        },
        "model_id": TURBO_V2_5,
    },
    "children_storytelling": {
        "voice_settings": {
            "stability": 0.5,
            "similarity_boost": 0.8,
            "style": 0.5,
            "use_speaker_boost": True,
        },
        "model_id": TURBO_V2_5,
    },
}

MusicPresetName = Literal[
    "meditation_ambient",
    "sleep_therapy",
    "yoga_flow",
    "nature_sounds",
    "therapeutic_background",
]

MUSIC_PRESETS: dict[str, dict[str, Any]] = {
    "meditation_ambient": {
        "prompt": (
            "Peaceful ambient meditation music with soft synthesizer pads, gentle nature "
            "sounds, slow harmonic progression, 60 BPM, deeply calming atmosphere"
        ),
        "instrumental": True,
        "duration_seconds": 300,
    },
    "sleep_therapy": {
        "prompt": (
            "Ultra-slow ambient sleep music, barely audible drones, delta wave inducing "
            "frequencies, ethereal textures, minimal movement, 40 BPM or slower"
        ),
        "instrumental": True,
        "duration_seconds": 300,
    },
    "yoga_flow": {
        "prompt": (
            "Flowing yoga music with indian instruments, tanpura drone, soft tabla rhythms, "
            "meditative sitar melodies, 80 BPM, peaceful and centered"
        ),
        "instrumental": True,
        "duration_seconds": 240,
    },
    "nature_sounds": {
        "prompt": (
            "Natural soundscape with forest ambience, gentle stream water, soft bird calls, "
            "wind through leaves, no musical instruments, organic and peaceful"
        ),
        "instrumental": True,
        "duration_seconds": 300,
    },
    "therapeutic_background": {
        "prompt": (
            "Soft therapeutic background music, gentle piano with subtle strings, slow tempo "
            "55 BPM, warm and supportive, emotionally safe atmosphere"
        ),
        "instrumental": True,
        "duration_seconds": 180,
    },
}

SOUND_EFFECT_EXAMPLES: dict[str, dict[str, Any]] = {
    "ocean_waves": {
        "text": "Soft ocean waves with gentle seagulls in distance",
        "duration_seconds": 30,
        "prompt_influence": 0.5,
    },
    "forest_ambience": {
        "text": "Forest ambience with birds chirping and wind in leaves",
        "duration_seconds": 60,
        "prompt_influence": 0.5,
    },
    "bell_chime": {
        "text": "Gentle bell chime with long reverb tail",
        "duration_seconds": 5,
        "prompt_influence": 0.5,
    },
    "fireplace": {
        "text": "Warm crackling fireplace",
        "duration_seconds": 30,
        "prompt_influence": 0.5,
    },
    "singing_bowl": {
        "text": "Tibetan singing bowl struck softly, deep resonance with subtle harmonics",
        "duration_seconds": 15,
        "prompt_influence": 0.8,
    },
}

# Human readable descriptions used when formatting HTTP errors
ERROR_MESSAGES: dict[int, str] = {
    400: "Bad Request - Invalid parameters provided",
    401: "Unauthorized - Invalid or missing API key",
    403: "Forbidden - Insufficient permissions for this operation",
    429: "Rate Limited - Too many requests, please try again later",
    500: "Server Error - ElevenLabs service temporarily unavailable",
    502: "Bad Gateway - ElevenLabs service temporarily unavailable",
    503: "Service Unavailable - ElevenLabs service temporarily unavailable",
}
