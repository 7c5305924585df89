from __future__ import annotations

from datetime import datetime
from typing import Optional

DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def format_instant(ts: Optional[datetime]) -> str:
    """Render an instant with the fixed report pattern; absent instants are ``""``."""
    if ts is None:
        return ""
    return ts.strftime(DATE_FORMAT)


def format_duration(duration_ms: int) -> str:
    """
    Render an elapsed time in milliseconds as a short human readable string.

    Examples: ``"0 sec"``, ``"42 sec"``, ``"3m 5s"``, ``"1h 2m 3s"``, ``"2d 4h 10m"``.
    """
    seconds = max(int(duration_ms), 0) // 1000
    if seconds < 60:
        return f"{seconds} sec"

    minutes, seconds = divmod(seconds, 60)
    if minutes < 60:
        return f"{minutes}m {seconds}s"

    hours, minutes = divmod(minutes, 60)
    if hours < 24:
        return f"{hours}h {minutes}m {seconds}s"

    days, hours = divmod(hours, 24)
    return f"{days}d {hours}h {minutes}m"
