import math
from numbers import Number
from typing import Optional, Sequence


def percentage(numerator, denominator):
    """numerator / denominator * 100, or 0 when the denominator is 0."""
    return numerator / denominator * 100 if denominator > 0 else 0.0


def get_average(data):
    return sum(data) / len(data) if data else 0.0


def population_std(values: Sequence[float]) -> float:
    """Standard deviation dividing by n."""
    n = len(values)
    if not n:
        return 0.0
    mean = sum(values) / n
    return math.sqrt(sum((v - mean) ** 2 for v in values) / n)


def sample_variance(values: Sequence[float]) -> float:
    """Bessel-corrected variance (n - 1); 0 with fewer than 2 values."""
    n = len(values)
    if n < 2:
        return 0.0
    mean = sum(values) / n
    return sum((v - mean) ** 2 for v in values) / (n - 1)


def is_number(value) -> bool:
    # bool is an int subclass but never a P&L amount
    return isinstance(value, Number) and not isinstance(value, bool) and not math.isnan(value)


def normalize_time_to_hhmm(time_str: Optional[str]) -> str:
    """
    Pads a trade time to HH:MM, dropping seconds.

    Args:
        time_str: A time such as "9:5", "09:30" or "14:05:59".

    Returns:
        The zero-padded "HH:MM" string, "00:00" for an empty value.
    """
    parts = (time_str or "").split(":")
    hours = parts[0] or "0"
    minutes = parts[1] if len(parts) > 1 and parts[1] else "0"
    return f"{hours.strip().zfill(2)}:{minutes.strip().zfill(2)}"


def time_to_minutes(hhmm: str) -> Optional[int]:
    try:
        hours, minutes = hhmm.split(":")[:2]
        return int(hours) * 60 + int(minutes)
    except ValueError:
        return None


def is_time_in_interval(time_str: str, start: str, end: str) -> bool:
    """Inclusive start <= time <= end; unparseable times fall in no bucket."""
    t = time_to_minutes(normalize_time_to_hhmm(time_str))
    s = time_to_minutes(start)
    e = time_to_minutes(end)
    if t is None or s is None or e is None:
        return False
    return s <= t <= e


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))
