"""FastMCP server exposing the ElevenLabs tools."""

from __future__ import annotations

import asyncio
import logging
import signal
import sys
from typing import TYPE_CHECKING, Any

import anyio
from fastmcp.server.server import FastMCP, Transport

from xivoice.tools import (
    BaseTool,
    DialogueTool,
    GetVoiceTool,
    ListVoicesTool,
    MusicStreamTool,
    MusicTool,
    SoundEffectTool,
    TextToSpeechStreamTool,
    TextToSpeechTool,
)

if TYPE_CHECKING:
    from collections.abc import Callable

    from xivoice.shared.requests import XiClient

__all__ = ["SERVER_NAME", "VoiceServer", "create_server"]

logger = logging.getLogger(__name__)

SERVER_NAME = "elevenlabs-mcp"

INSTRUCTIONS = (
    "Tools for ElevenLabs voice generation. Use elevenlabs_list_voices to find voice IDs, "
    "then generate speech, multi-voice dialogue, music or sound effects. "
    "Every generation tool writes an audio file and reports its path."
)

TOOL_CLASSES: tuple[type[BaseTool], ...] = (
    ListVoicesTool,
    GetVoiceTool,
    TextToSpeechTool,
    TextToSpeechStreamTool,
    DialogueTool,
    MusicTool,
    MusicStreamTool,
    SoundEffectTool,
)


def _run_until_signal(coro_fn: Callable[..., Any], *args: Any, **kwargs: Any) -> None:
    """Run *coro_fn* via anyio.run() and cancel it cleanly on SIGTERM (POSIX)."""
    sys.stderr.flush()

    async def _runner() -> None:
        stop_evt = asyncio.Event()
        if sys.platform != "win32":
            loop = asyncio.get_running_loop()
            try:
                loop.add_signal_handler(signal.SIGTERM, stop_evt.set)
            except (ValueError, OSError) as e:
                logger.warning("Could not register SIGTERM handler: %s", e)

        try:
            async with anyio.create_task_group() as tg:

                async def _serve() -> None:
                    await coro_fn(*args, **kwargs)
                    tg.cancel_scope.cancel()

                async def _watch() -> None:
                    await stop_evt.wait()
                    logger.info("SIGTERM received, shutting down")
                    tg.cancel_scope.cancel()

                tg.start_soon(_serve)
                tg.start_soon(_watch)
        except* asyncio.CancelledError:
            logger.debug("Server task group cancelled")

    anyio.run(_runner)


class VoiceServer(FastMCP):
    """FastMCP server that also accepts ``BaseTool`` instances in ``add_tool``."""

    def __init__(
        self, name: str | None = None, instructions: str | None = None, **fastmcp_kwargs: Any
    ) -> None:
        super().__init__(
            name=name or SERVER_NAME, instructions=instructions or INSTRUCTIONS, **fastmcp_kwargs
        )

    def add_tool(self, obj: Any, **kwargs: Any) -> Any:
        if isinstance(obj, BaseTool):
            return super().add_tool(obj.mcp, **kwargs)
        return super().add_tool(obj, **kwargs)

    def run(
        self,
        transport: Transport | None = None,
        show_banner: bool = True,
        **transport_kwargs: Any,
    ) -> None:
        if transport is None:
            transport = "stdio"

        async def _bootstrap() -> None:
            await self.run_async(transport=transport, show_banner=show_banner, **transport_kwargs)

        logger.info("ElevenLabs MCP server running on %s", transport)
        _run_until_signal(_bootstrap)


def create_server(client: XiClient | None = None, **fastmcp_kwargs: Any) -> VoiceServer:
    """Build a server with every tool registered.

    Args:
        client: Client shared by all tools. When omitted each call uses ``get_client()``,
            so configuration is read on first use rather than at build time.
    """
    server = VoiceServer(**fastmcp_kwargs)
    for tool_cls in TOOL_CLASSES:
        server.add_tool(tool_cls(env=client))
    logger.debug("Registered %d tools", len(TOOL_CLASSES))
    return server
