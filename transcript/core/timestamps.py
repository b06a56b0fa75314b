"""Conversion between WebVTT clock text and seconds."""

from __future__ import annotations


def parse_timestamp(timestamp: str) -> float:
    """Parse ``HH:MM:SS.mmm``, ``MM:SS.mmm`` or bare ``SS.mmm`` into seconds.

    Field ranges are not checked, so ``00:75:00.000`` yields 4500.0.
    Non-numeric fields raise whatever ``int()``/``float()`` raise.
    """
    parts = timestamp.strip().split(":")
    if len(parts) == 3:
        hours, minutes, seconds = int(parts[0]), int(parts[1]), float(parts[2])
    elif len(parts) == 2:
        hours, minutes, seconds = 0, int(parts[0]), float(parts[1])
    else:
        # More than three fields ends up in float() and fails there.
        hours, minutes, seconds = 0, 0, float(timestamp)
    return hours * 3600 + minutes * 60 + seconds


def format_timestamp(seconds: float) -> str:
    """Format seconds as ``HH:MM:SS.mmm``.

    Rounds to whole milliseconds before splitting, so 59.9996 becomes
    ``00:01:00.000`` rather than ``00:00:59.1000``.
    """
    total_ms = max(round(seconds * 1000), 0)
    h = total_ms // 3_600_000
    total_ms %= 3_600_000
    m = total_ms // 60_000
    total_ms %= 60_000
    s = total_ms // 1000
    ms = total_ms % 1000
    return f"{h:02d}:{m:02d}:{s:02d}.{ms:03d}"
