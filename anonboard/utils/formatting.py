"""
AnonBoard Formatting Utilities

Helper functions for formatting output.
"""

import time
from datetime import datetime, timezone


def now_us() -> int:
    """Current wall-clock time in microseconds since epoch."""
    return int(time.time() * 1_000_000)


def format_iso(timestamp_us: int) -> str:
    """
    Format microsecond timestamp as an ISO-8601 UTC string.

    Args:
        timestamp_us: Microseconds since epoch

    Returns:
        Formatted string like "2025-12-10T14:32:05.123456Z"
    """
    dt = datetime.fromtimestamp(timestamp_us / 1_000_000, tz=timezone.utc)
    return dt.strftime("%Y-%m-%dT%H:%M:%S.%fZ")


def format_uptime(start_time: float) -> str:
    """
    Format uptime from start timestamp.

    Args:
        start_time: Unix timestamp of start

    Returns:
        Formatted string like "2d 5h 30m"
    """
    if not start_time:
        return "Unknown"

    elapsed = int(time.time() - start_time)

    days = elapsed // 86400
    hours = (elapsed % 86400) // 3600
    minutes = (elapsed % 3600) // 60

    parts = []
    if days > 0:
        parts.append(f"{days}d")
    if hours > 0 or days > 0:
        parts.append(f"{hours}h")
    parts.append(f"{minutes}m")

    return " ".join(parts)


def truncate(text: str, max_length: int = 50, suffix: str = "...") -> str:
    """
    Truncate text to maximum length.

    Used to keep post excerpts in log lines short.
    """
    if len(text) <= max_length:
        return text

    return text[:max_length - len(suffix)] + suffix
