"""Conversions for exercise rest intervals written as ``mm:ss``."""

from __future__ import annotations

from app.domain.entities import DEFAULT_REST_SECONDS


def parse_rest(value: int | str | None) -> int:
    """Return the rest interval in seconds.

    Accepts a number of seconds or a ``mm:ss`` string. Empty values fall back to
    the default rest and unparseable strings are read as plain seconds when
    possible.
    """

    if isinstance(value, int):
        return value
    if not value:
        return DEFAULT_REST_SECONDS

    parts = value.strip().split(":")
    if len(parts) != 2:
        try:
            return int(value)
        except ValueError:
            return DEFAULT_REST_SECONDS

    minutes, seconds = (_to_int(part) for part in parts)
    return minutes * 60 + seconds


def format_rest(seconds: int) -> str:
    minutes, remainder = divmod(seconds, 60)
    return f"{minutes:02d}:{remainder:02d}"


def _to_int(part: str) -> int:
    try:
        return int(part)
    except ValueError:
        return 0
