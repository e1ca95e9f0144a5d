"""Input validation helpers for habit fields."""

from __future__ import annotations

import re

PHONE_MIN_DIGITS = 10
PHONE_MAX_DIGITS = 15

_PHONE_CHARS = re.compile(r"[0-9+\-() ]+")
_TIME_PATTERN = re.compile(r"([01][0-9]|2[0-3]):[0-5][0-9]")


def is_phone_valid(candidate: str) -> bool:
    """Return True when ``candidate`` looks like a dialable phone number.

    The trimmed value must be 10-15 characters long, use only digits,
    spaces, ``+``, ``-`` and parentheses, and contain 10-15 digits.
    """

    clean = (candidate or "").strip()
    if not PHONE_MIN_DIGITS <= len(clean) <= PHONE_MAX_DIGITS:
        return False
    if not _PHONE_CHARS.fullmatch(clean):
        return False
    digits = sum(1 for ch in clean if ch.isdigit())
    return PHONE_MIN_DIGITS <= digits <= PHONE_MAX_DIGITS


def is_time_valid(value: str) -> bool:
    """Validate zero-padded 24-hour ``HH:MM``."""

    return bool(_TIME_PATTERN.fullmatch(value or ""))


def format_time(hour: int, minute: int) -> str:
    """Render a picker selection as ``HH:MM``."""

    if not (0 <= hour <= 23 and 0 <= minute <= 59):
        raise ValueError(f"Invalid time {hour}:{minute}")
    return f"{hour:02d}:{minute:02d}"


def clean_single_line(value: str, limit: int) -> str:
    """Drop newlines and cut ``value`` down to ``limit`` characters."""

    return (value or "").replace("\r", "").replace("\n", "")[:limit]


__all__ = [
    "PHONE_MAX_DIGITS",
    "PHONE_MIN_DIGITS",
    "clean_single_line",
    "format_time",
    "is_phone_valid",
    "is_time_valid",
]
