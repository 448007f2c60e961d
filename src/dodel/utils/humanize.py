"""Human readable time formatting."""

from __future__ import annotations

from datetime import datetime


def human_time(moment: datetime, now: datetime) -> str:
    """Return how long ago ``moment`` was, e.g. ``"5 minutes ago"``."""
    seconds = (now - moment).total_seconds()
    hours = seconds / 3600
    minutes = seconds / 60
    if hours >= 2:
        return f"{int(hours)} hours ago"
    if hours >= 1:
        return "an hour ago"
    if minutes >= 2:
        return f"{int(minutes)} minutes ago"
    if minutes >= 1:
        return "a minute ago"
    if seconds >= 5:
        return f"{int(seconds)} seconds ago"
    return "just now"
