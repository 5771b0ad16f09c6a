from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

    from rich.console import Console
logger = logging.getLogger(__name__)


@dataclass
class Hint:
    """Structured hint for user guidance.

    Attributes:
        title: Short title describing the hint.
        message: Main explanatory message.
        tips: Optional list of short actionable tips.
        docs_url: Optional URL for documentation.
        code: Optional machine-readable code (e.g., "XI_AUTH_MISSING").
    """

    title: str
    message: str
    tips: list[str] | None = None
    docs_url: str | None = None
    code: str | None = None


# Common, reusable hints
API_KEY_MISSING = Hint(
    title="ElevenLabs API key required",
    message="Missing or invalid ELEVENLABS_API_KEY.",
    tips=[
        "Set ELEVENLABS_API_KEY in your environment or in ~/.xivoice/.env",
        "Check for whitespace or truncation",
    ],
    docs_url="https://elevenlabs.io/app/settings/api-keys",
    code="XI_AUTH_MISSING",
)

PERMISSION_DENIED = Hint(
    title="Permission denied",
    message="The API key is not allowed to use this endpoint.",
    tips=[
        "Check the key's permissions in the ElevenLabs dashboard",
        "Some models and endpoints need a paid plan",
    ],
    code="XI_FORBIDDEN",
)

RATE_LIMIT_HIT = Hint(
    title="Rate limit reached",
    message="Too many requests.",
    tips=[
        "Raise RETRY_DELAY_MS or MAX_RETRIES",
        "Check your concurrency and character quota",
    ],
    code="XI_RATE_LIMIT",
)

SERVICE_UNAVAILABLE = Hint(
    title="Service unavailable",
    message="ElevenLabs kept failing after all retries.",
    tips=[
        "Try again in a few minutes",
        "Check https://status.elevenlabs.io",
    ],
    code="XI_SERVICE_UNAVAILABLE",
)

NETWORK_UNREACHABLE = Hint(
    title="Network error",
    message="Could not reach api.elevenlabs.io.",
    tips=[
        "Check your internet connection and proxy settings",
        "Raise MAX_RETRIES for flaky networks",
    ],
    code="XI_NETWORK",
)

INVALID_CONFIG = Hint(
    title="Invalid configuration",
    message="Configuration is missing or malformed.",
    tips=[
        "MAX_RETRIES and RETRY_DELAY_MS must be non-negative integers",
        "Run: xivoice presets to verify the install",
    ],
    code="XI_INVALID_CONFIG",
)


def format_hints(hints: Iterable[Hint] | None) -> str:
    """Render hints as plain text, one block per hint."""
    if not hints:
        return ""

    blocks = []
    for hint in hints:
        lines = [f"{hint.title}: {hint.message}" if hint.title != hint.message else hint.message]
        lines.extend(f"  - {tip}" for tip in hint.tips or [])
        if hint.docs_url:
            lines.append(f"  {hint.docs_url}")
        blocks.append("\n".join(lines))
    return "\n".join(blocks)


def render_hints(hints: Iterable[Hint] | None, *, console: Console | None = None) -> None:
    """Render a collection of hints on a rich console (stderr by default)."""
    if not hints:
        return

    if console is None:
        from rich.console import Console

        console = Console(stderr=True)

    for hint in hints:
        try:
            # Compact rendering - skip title if same as message
            if hint.title and hint.title != hint.message:
                console.print(f"[yellow]{hint.title}:[/yellow] {hint.message}")
            else:
                console.print(f"[yellow]{hint.message}[/yellow]")

            if hint.tips:
                for tip in hint.tips:
                    console.print(f"  • {tip}")

            if hint.docs_url:
                console.print(f"  [link={hint.docs_url}]{hint.docs_url}[/link]")
        except Exception:
            logger.warning("Failed to render hint: %s", hint)
            continue
