"""
Time formatting utilities for human-readable output.
"""


def format_time(us: float) -> str:
    """
    Format time in microseconds to a human-readable string.

    Args:
        us: Time in microseconds, the unit used by .cpuprofile files

    Returns:
        Formatted time string (e.g., "850.00 us", "12.34 ms", "2.34 s", "1m 30.50s")
    """
    if us < 1000:
        return f"{us:.2f} us"
    elif us < 1_000_000:
        return f"{us/1000:.2f} ms"
    elif us < 60_000_000:
        return f"{us/1_000_000:.2f} s"
    else:
        minutes = int(us / 60_000_000)
        seconds = (us % 60_000_000) / 1_000_000
        return f"{minutes}m {seconds:.2f}s"


def format_percent(part: float, total: float) -> str:
    """Format part as a percentage of total."""
    if not total:
        return "0.0%"
    return f"{part / total * 100:.1f}%"
