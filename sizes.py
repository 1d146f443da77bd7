# sizes.py
"""Human readable byte counts (binary units)."""
from decimal import ROUND_HALF_UP, Decimal

# (threshold, shift applied before the final /1024, suffix), largest first
_UNITS = (
    (1 << 60, 50, "EB"),
    (1 << 50, 40, "PB"),
    (1 << 40, 30, "TB"),
    (1 << 30, 20, "GB"),
    (1 << 20, 10, "MB"),
    (1 << 10, 0, "KB"),
)


def _trim(value: Decimal) -> str:
    # midpoints round away from zero: 1152 bytes is "1.13 KB"
    rounded = value.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    return f"{rounded:f}".rstrip("0").rstrip(".")


def format_size(size: int) -> str:
    """
    Format a byte count with the largest unit whose threshold is met.

    1 -> "1 B", 1024 -> "1 KB", 1_000_000 -> "976.56 KB".
    Anything non-positive is reported as "0 B".
    """
    size = int(size)
    if size <= 0:
        return "0 B"
    for threshold, shift, suffix in _UNITS:
        if size >= threshold:
            return f"{_trim(Decimal(size >> shift) / 1024)} {suffix}"
    return f"{size} B"
