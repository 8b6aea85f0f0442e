from __future__ import annotations


def format_timestamp(milliseconds: int) -> str:
    """Return ``mm:ss`` for caption lists; minutes keep counting past 59."""
    total_seconds = max(int(milliseconds), 0) // 1000
    minutes, seconds = divmod(total_seconds, 60)
    return f"{minutes:02d}:{seconds:02d}"


def format_time_range(start_ms: int, end_ms: int) -> str:
    return f"{format_timestamp(start_ms)} - {format_timestamp(end_ms)}"


def format_srt_timestamp(milliseconds: int) -> str:
    """Return ``HH:MM:SS,mmm`` as used by SubRip files."""
    total = max(int(milliseconds), 0)
    hours, rem = divmod(total, 3_600_000)
    minutes, rem = divmod(rem, 60_000)
    seconds, ms = divmod(rem, 1000)
    return f"{hours:02d}:{minutes:02d}:{seconds:02d},{ms:03d}"
