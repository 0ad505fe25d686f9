from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal


def round_half_up(value: float, places: int = 0) -> float:
    """Round the exact binary value half-up, like JS toFixed (1.005 -> 1.0, 2.5 -> 3).

    Built-in round() rounds halves to even.
    """
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP))


def round_minutes(value: float) -> int:
    return int(round_half_up(value, 0))


def format_number(value: float) -> str:
    """Shortest human form of a threshold: 4.0 -> '4', 7.2 -> '7.2'."""
    return f"{value:g}"
