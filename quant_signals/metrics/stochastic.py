"""Stochastic Oscillator"""

from collections.abc import Sequence
from typing import Optional

from ..models.indicators import StochasticValues
from .moving_average import calculate_sma

NEUTRAL_K = 50.0


def calculate_percent_k(highs: Sequence[float], lows: Sequence[float],
                        close: float) -> float:
    """
    %K for a single window

    %K = 100 * (close - lowest_low) / (highest_high - lowest_low)
    A flat window (zero range) is neutral: %K = 50.
    """
    highest_high = max(highs)
    lowest_low = min(lows)
    price_range = highest_high - lowest_low

    if price_range == 0:
        return NEUTRAL_K

    return 100.0 * (close - lowest_low) / price_range


def percent_k_series(highs: Sequence[float], lows: Sequence[float],
                     closes: Sequence[float], period: int = 14,
                     count: Optional[int] = None) -> list[float]:
    """
    %K values for the most recent windows, oldest first

    Args:
        highs, lows, closes: Aligned bar series in chronological order
        period: %K lookback
        count: Number of trailing %K values wanted (None for all)

    Returns:
        Up to `count` %K values, empty if fewer than `period` bars
    """
    n = len(closes)
    if period <= 0 or n < period or len(highs) != n or len(lows) != n:
        return []

    first_end = period
    if count is not None:
        first_end = max(period, n - count + 1)

    return [
        calculate_percent_k(highs[end - period:end], lows[end - period:end], closes[end - 1])
        for end in range(first_end, n + 1)
    ]


def calculate_stochastic(highs: Sequence[float], lows: Sequence[float],
                         closes: Sequence[float], period: int = 14,
                         signal_period: int = 3) -> StochasticValues:
    """
    Calculate Stochastic %K and %D

    %K needs `period` bars; %D = SMA(signal_period) of %K and needs
    `period + signal_period - 1` bars.

    Returns:
        StochasticValues with None for parts that lack history
    """
    k_values = percent_k_series(highs, lows, closes, period, count=signal_period)
    if not k_values:
        return StochasticValues()

    return StochasticValues(
        k=k_values[-1],
        d=calculate_sma(k_values, signal_period),
    )
