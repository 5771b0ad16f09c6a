from __future__ import annotations

from .base import BaseTool
from .dialogue import DialogueTool
from .music import MusicStreamTool, MusicTool
from .sound_effects import SoundEffectTool
from .tts import TextToSpeechStreamTool, TextToSpeechTool
from .voices import GetVoiceTool, ListVoicesTool

__all__ = [
    "BaseTool",
    "DialogueTool",
    "GetVoiceTool",
    "ListVoicesTool",
    "MusicStreamTool",
    "MusicTool",
    "SoundEffectTool",
    "TextToSpeechStreamTool",
    "TextToSpeechTool",
]
