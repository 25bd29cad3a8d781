"""Helpers for rendering response fields."""
from __future__ import annotations

_NANOSECOND = 1
_MICROSECOND = 1_000 * _NANOSECOND
_MILLISECOND = 1_000 * _MICROSECOND
_SECOND = 1_000 * _MILLISECOND
_MINUTE = 60 * _SECOND
_HOUR = 60 * _MINUTE


def _decimal(value: int, unit: int) -> str:
    whole, fraction = divmod(value, unit)
    if not fraction:
        return str(whole)
    digits = len(str(unit)) - 1
    return f"{whole}.{fraction:0{digits}d}".rstrip("0")


def format_duration(seconds: float) -> str:
    """Render ``seconds`` the way Go prints a ``time.Duration``.

    >>> format_duration(0.00125)
    '1.25ms'
    >>> format_duration(90)
    '1m30s'
    """
    nanoseconds = int(round(seconds * _SECOND))
    if nanoseconds == 0:
        return "0s"
    sign = "-" if nanoseconds < 0 else ""
    nanoseconds = abs(nanoseconds)

    if nanoseconds < _MICROSECOND:
        return f"{sign}{nanoseconds}ns"
    if nanoseconds < _MILLISECOND:
        return f"{sign}{_decimal(nanoseconds, _MICROSECOND)}µs"
    if nanoseconds < _SECOND:
        return f"{sign}{_decimal(nanoseconds, _MILLISECOND)}ms"

    hours, remainder = divmod(nanoseconds, _HOUR)
    minutes, remainder = divmod(remainder, _MINUTE)
    parts = [sign]
    if hours:
        parts.append(f"{hours}h")
    if hours or minutes:
        parts.append(f"{minutes}m")
    parts.append(f"{_decimal(remainder, _SECOND)}s")
    return "".join(parts)


__all__ = ["format_duration"]
