"""Formatting helpers for solver reports."""


def time_str(seconds: float) -> str:
    """Format a duration: "0.042s" below a minute, "HH:MM:SS.ss" otherwise."""
    if seconds < 60:
        return f"{seconds:.3f}s"
    hours, rem = divmod(seconds, 3600)
    minutes, secs = divmod(rem, 60)
    return f"{int(hours):02}:{int(minutes):02}:{secs:05.2f}"


def int_comma(n: int) -> str:
    """Format an integer with commas as thousands separators."""
    return f"{n:,}"


def plural(count: int, noun: str, plural_noun: str | None = None) -> str:
    """Format a count with its noun, e.g. "1 solution", "1,024 solutions".

    Args:
        count: The number of things.
        noun: Singular form of the noun.
        plural_noun: Plural form, if it is not `noun` followed by "s".
    """
    if count == 1:
        return f"{int_comma(count)} {noun}"
    return f"{int_comma(count)} {plural_noun or noun + 's'}"
