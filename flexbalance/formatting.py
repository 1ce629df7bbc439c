"""
Human-readable rendering of durations and day counts.
"""

SECONDS_PER_DAY = 86_400
SECONDS_PER_HOUR = 3600
SECONDS_PER_MINUTE = 60


def format_duration(seconds: float) -> str:
    """
    Format seconds as ``"1d 2h 3m 4s"``.

    Zero units are left out, zero itself is ``"0s"`` and negative values get
    a leading ``-``. Fractions of a second are rounded.
    """
    total = round(seconds)
    negative = total < 0
    total = abs(total)

    days, total = divmod(total, SECONDS_PER_DAY)
    hours, total = divmod(total, SECONDS_PER_HOUR)
    minutes, secs = divmod(total, SECONDS_PER_MINUTE)

    parts = []
    if days:
        parts.append(f"{days}d")
    if hours:
        parts.append(f"{hours}h")
    if minutes:
        parts.append(f"{minutes}m")
    if secs or not parts:
        parts.append(f"{secs}s")

    result = " ".join(parts)
    return f"-{result}" if negative else result


def format_days(days: float) -> str:
    """Format a day count with one decimal, e.g. ``"1.5"``."""
    return f"{days + 0.0:.1f}"
