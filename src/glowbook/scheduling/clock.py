"""Minutes-of-day helpers: conversion, slot labels and duration text."""

import re

MINUTES_PER_DAY = 1440

_LABEL_RE = re.compile(r"^\s*(\d{1,2}):(\d{2})\s*([AaPp][Mm])?\s*$")


def to_minutes(hour: int, minute: int = 0) -> int:
    """Convert an hour/minute pair to minutes since midnight."""
    return hour * 60 + minute


def split_minutes(minutes: int) -> tuple[int, int]:
    """Inverse of `to_minutes`: returns (hour, minute)."""
    return divmod(minutes, 60)


def format_minutes(minutes: int) -> str:
    """Format minutes-of-day as a 12-hour label, e.g. 765 -> "12:45 PM"."""
    hour, minute = split_minutes(minutes)
    period = "PM" if hour >= 12 else "AM"
    display_hour = 12 if hour == 0 else (hour - 12 if hour > 12 else hour)
    return f"{display_hour}:{minute:02d} {period}"


def parse_time_label(label: str) -> int:
    """Parse "10:00 AM" / "1:15 pm" / "14:30" into minutes-of-day.

    Raises ValueError for anything that is not a valid time of day.
    """
    match = _LABEL_RE.match(label)
    if match is None:
        raise ValueError(f"Unrecognised time label: {label!r}")

    hour, minute = int(match.group(1)), int(match.group(2))
    period = match.group(3)
    if minute > 59:
        raise ValueError(f"Unrecognised time label: {label!r}")

    if period is None:
        if hour > 23:
            raise ValueError(f"Unrecognised time label: {label!r}")
        return to_minutes(hour, minute)

    if not 1 <= hour <= 12:
        raise ValueError(f"Unrecognised time label: {label!r}")
    hour %= 12
    if period.upper() == "PM":
        hour += 12
    return to_minutes(hour, minute)


def format_duration(minutes: int) -> str:
    """Human duration: 45 -> "45 min", 60 -> "1h", 90 -> "1h 30min"."""
    if minutes < 60:
        return f"{minutes} min"
    hours, mins = divmod(minutes, 60)
    if mins == 0:
        return f"{hours}h"
    return f"{hours}h {mins}min"
