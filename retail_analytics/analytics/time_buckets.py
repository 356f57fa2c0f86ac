"""
Shift classification of sale hours.
"""

from enum import Enum

import polars as pl

AFTERNOON_START = 12
EVENING_START = 18


class Shift(str, Enum):
    """Store trading shifts"""
    MORNING = "Morning"  # before 12:00
    AFTERNOON = "Afternoon"  # 12:00 to 17:59
    EVENING = "Evening"  # 18:00 onwards


def classify_shift(hour: int) -> Shift:
    """Map an hour of the day (0-23) to its shift."""
    if not 0 <= hour <= 23:
        raise ValueError(f"Hour must be between 0 and 23, got {hour}")
    if hour < AFTERNOON_START:
        return Shift.MORNING
    if hour < EVENING_START:
        return Shift.AFTERNOON
    return Shift.EVENING


def shift_expression(hour_column: str = "sale_hour") -> pl.Expr:
    """Vectorized ``classify_shift``; a null hour falls through to Evening like the SQL CASE."""
    hour = pl.col(hour_column)
    return (
        pl.when(hour < AFTERNOON_START)
        .then(pl.lit(Shift.MORNING.value))
        .when(hour < EVENING_START)
        .then(pl.lit(Shift.AFTERNOON.value))
        .otherwise(pl.lit(Shift.EVENING.value))
    )
