from __future__ import annotations

from .server import VoiceServer, create_server

__all__ = ["VoiceServer", "create_server"]
