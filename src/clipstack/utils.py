import time
from datetime import datetime


def format_size(size: int) -> str:
    """Formats a byte count as B, KB or MB."""
    if size < 1024:
        return f"{size}B"
    if size < 1024 * 1024:
        return f"{size / 1024:.1f}KB"
    return f"{size / (1024 * 1024):.1f}MB"


def format_relative_time(timestamp_ms: int, now_ms: int | None = None) -> str:
    """Formats a millisecond timestamp relative to now, e.g. '5m ago'."""
    if now_ms is None:
        now_ms = time.time_ns() // 1_000_000
    diff_secs = max(0, (now_ms - timestamp_ms) // 1000)

    if diff_secs < 60:
        return f"{diff_secs}s ago"
    if diff_secs < 3600:
        return f"{diff_secs // 60}m ago"
    if diff_secs < 86400:
        return f"{diff_secs // 3600}h ago"
    return f"{diff_secs // 86400}d ago"


def format_timestamp(timestamp_ms: int) -> str:
    """Local time as YYYY-MM-DD HH:MM:SS; placeholder when out of range."""
    try:
        return datetime.fromtimestamp(timestamp_ms / 1000).strftime("%Y-%m-%d %H:%M:%S")
    except (OverflowError, OSError, ValueError):
        return "????-??-?? ??:??:??"


def list_preview(preview: str, width: int = 50) -> str:
    return preview[:width].replace("\n", "↵")
