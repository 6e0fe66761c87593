import math


def as_float(value: object, default: float = 0.0) -> float:
    """Read a loosely-typed numeric; None, NaN, inf and junk become default."""
    if value is None or isinstance(value, bool):
        return default if value is None else float(value)
    try:
        number = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return default
    if math.isnan(number) or math.isinf(number):
        return default
    return number


def as_optional_float(value: object) -> float | None:
    if value is None:
        return None
    number = as_float(value, default=math.nan)
    return None if math.isnan(number) else number


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def round_half_up(value: float) -> int:
    """Round .5 away from zero for positives (builtin round() is banker's)."""
    return int(math.floor(value + 0.5))
