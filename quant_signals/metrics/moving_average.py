"""Simple and exponential moving averages"""

from collections.abc import Sequence
from typing import Optional


def calculate_sma(values: Sequence[float], period: int) -> Optional[float]:
    """
    Arithmetic mean of the last `period` values

    Args:
        values: Values in chronological order
        period: Lookback period

    Returns:
        SMA value or None if fewer than `period` values
    """
    if period <= 0 or len(values) < period:
        return None

    recent = values[-period:]
    return sum(recent) / period


def ema_series(values: Sequence[float], period: int) -> list[float]:
    """
    Exponential moving average series

    The first EMA is the SMA of the first `period` values; each later value is
    EMA_t = value_t * k + EMA_{t-1} * (1 - k) with k = 2 / (period + 1).

    Args:
        values: Values in chronological order
        period: EMA period

    Returns:
        EMA values aligned to values[period-1:], empty if insufficient data
    """
    if period <= 0 or len(values) < period:
        return []

    k = 2.0 / (period + 1)
    ema = sum(values[:period]) / period
    series = [ema]
    for value in values[period:]:
        ema = value * k + ema * (1 - k)
        series.append(ema)
    return series


def calculate_ema(values: Sequence[float], period: int) -> Optional[float]:
    """Latest EMA value or None if insufficient data"""
    series = ema_series(values, period)
    return series[-1] if series else None
