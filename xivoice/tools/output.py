"""Where generated audio ends up on disk."""

from __future__ import annotations

import logging
import re
from datetime import UTC, datetime
from pathlib import Path

import anyio

from xivoice.settings import get_settings

logger = logging.getLogger(__name__)


def timestamp(now: datetime | None = None) -> str:
    """UTC ISO timestamp safe for file names, e.g. ``2026-10-18T16-49-00``."""
    now = now or datetime.now(UTC)
    return re.sub(r"[:.]", "-", now.isoformat())[:19]


def extension_for(output_format: str) -> str:
    if output_format.startswith("mp3"):
        return "mp3"
    if output_format.startswith("pcm"):
        return "wav"
    return "audio"


def slugify(text: str, limit: int = 30) -> str:
    """Short file-name fragment: first ``limit`` chars, non-alphanumerics as ``_``."""
    return re.sub(r"[^a-zA-Z0-9]", "_", text[:limit]).lower()


def default_output_path(
    prefix: str, output_format: str, output_dir: str | Path | None = None
) -> Path:
    if output_dir is None:
        output_dir = get_settings().output_dir
    return Path(output_dir) / f"{prefix}_{timestamp()}.{extension_for(output_format)}"


def resolve_output_path(
    output_path: str | None, prefix: str, output_format: str, output_dir: str | Path | None = None
) -> Path:
    """Use the caller's path when given, otherwise derive one under the output dir."""
    if output_path:
        return Path(output_path)
    return default_output_path(prefix, output_format, output_dir)


async def write_audio(path: str | Path, data: bytes) -> Path:
    """Write ``data`` to ``path``, creating parent directories as needed."""
    target = anyio.Path(path)
    await target.parent.mkdir(parents=True, exist_ok=True)
    await target.write_bytes(data)

    stats = await target.stat()
    logger.debug("Wrote %d bytes to %s", stats.st_size, target)
    return Path(path)
