"""xivoice.

MCP tools for ElevenLabs speech, dialogue, music and sound effect generation.
"""

from __future__ import annotations

from .shared import (
    ClientConfig,
    RequestDescriptor,
    XiClient,
    XiException,
    get_client,
    reset_client,
)

__all__ = [
    "ClientConfig",
    "RequestDescriptor",
    "XiClient",
    "XiException",
    "get_client",
    "reset_client",
]

try:
    from .version import __version__
except ImportError:
    __version__ = "unknown"
