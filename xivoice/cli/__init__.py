"""xivoice CLI - run the ElevenLabs MCP server and browse its presets."""

from __future__ import annotations

import logging
import sys
from enum import Enum

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from xivoice.constants import MUSIC_PRESETS, THERAPEUTIC_PRESETS
from xivoice.settings import get_settings
from xivoice.shared.exceptions import XiConfigError
from xivoice.shared.hints import render_hints
from xivoice.shared.requests import get_client

app = typer.Typer(
    name="xivoice",
    help="🎙️ ElevenLabs MCP server: speech, dialogue, music and sound effects",
    add_completion=False,
    rich_markup_mode="rich",
    pretty_exceptions_enable=False,
)

# stdout belongs to the stdio MCP transport
console = Console(stderr=True)


class TransportChoice(str, Enum):
    stdio = "stdio"
    http = "http"
    sse = "sse"


def configure_logging(verbose: bool = False) -> None:
    if verbose:
        level: int | str = logging.DEBUG
    else:
        try:
            level = get_settings().log_level.upper()
        except ValidationError:
            # serve reports the bad setting right after
            level = logging.INFO
    logging.basicConfig(
        stream=sys.stderr,
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        force=True,
    )
    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


@app.command()
def serve(
    transport: TransportChoice = typer.Option(
        TransportChoice.stdio, "--transport", "-t", help="MCP transport to serve on"
    ),
    port: int = typer.Option(8765, "--port", "-p", help="HTTP server port (ignored for stdio)"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show detailed logs"),
) -> None:
    """🚀 Start the MCP server."""
    configure_logging(verbose)

    try:
        client = get_client()
    except XiConfigError as e:
        console.print(f"[red]❌ Error: {e}[/red]")
        render_hints(e.hints, console=console)
        raise typer.Exit(1) from e

    from xivoice.server import create_server

    server = create_server(client)
    if transport is TransportChoice.stdio:
        server.run(transport="stdio", show_banner=False)
    else:
        server.run(transport=transport.value, show_banner=False, host="127.0.0.1", port=port)


@app.command()
def presets() -> None:
    """📋 Show voice presets, music presets and sound effect ideas."""
    from xivoice.tools.sound_effects import THERAPEUTIC_SOUNDS

    voice_table = Table(title="Voice Presets (elevenlabs_tts preset=...)")
    voice_table.add_column("Preset", style="cyan")
    voice_table.add_column("Model", style="magenta")
    voice_table.add_column("Stability", justify="right")
    voice_table.add_column("Similarity", justify="right")
    voice_table.add_column("Style", justify="right")
    for name, preset in THERAPEUTIC_PRESETS.items():
        settings = preset["voice_settings"]
        voice_table.add_row(
            name,
            preset["model_id"],
            str(settings["stability"]),
            str(settings["similarity_boost"]),
            str(settings["style"]),
        )

    music_table = Table(title="Music Presets (elevenlabs_music preset=...)")
    music_table.add_column("Preset", style="cyan")
    music_table.add_column("Duration", justify="right")
    music_table.add_column("Prompt", style="dim")
    for name, preset in MUSIC_PRESETS.items():
        music_table.add_row(name, f"{preset['duration_seconds']}s", preset["prompt"])

    sound_table = Table(title="Therapeutic Sound Ideas (elevenlabs_sound_effect)")
    sound_table.add_column("Name", style="cyan")
    sound_table.add_column("Prompt", style="dim")
    for name, prompt in THERAPEUTIC_SOUNDS.items():
        sound_table.add_row(name, prompt)

    console.print(voice_table)
    console.print(music_table)
    console.print(sound_table)


@app.command()
def version() -> None:
    """Show xivoice version."""
    from xivoice import __version__

    console.print(f"xivoice version: [cyan]{__version__}[/cyan]")


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
