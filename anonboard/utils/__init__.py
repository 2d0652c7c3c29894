"""AnonBoard Utilities Module."""

from .formatting import format_iso, format_uptime, now_us, truncate

__all__ = ["format_iso", "format_uptime", "now_us", "truncate"]
