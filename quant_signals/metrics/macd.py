"""MACD (Moving Average Convergence Divergence)"""

from collections.abc import Sequence

from ..models.indicators import MACDValues
from .moving_average import ema_series


def macd_line_series(closes: Sequence[float], fast: int = 12, slow: int = 26) -> list[float]:
    """
    MACD line EMA(fast) - EMA(slow) for every close where both are defined

    Returns:
        Values aligned to closes[slow-1:], empty if fewer than `slow` closes
    """
    slow_ema = ema_series(closes, slow)
    if not slow_ema:
        return []

    fast_ema = ema_series(closes, fast)
    # fast_ema starts at closes[fast-1]; skip ahead to closes[slow-1]
    offset = slow - fast
    return [fast_ema[i + offset] - slow_ema[i] for i in range(len(slow_ema))]


def calculate_macd(closes: Sequence[float], fast: int = 12, slow: int = 26,
                   signal: int = 9) -> MACDValues:
    """
    Calculate MACD line, signal line and histogram

    The MACD line needs `slow` closes. The signal line is EMA(signal) of the
    MACD line series and is reported once `slow + signal` closes exist. The
    histogram is macd - signal, computed from the exact values reported.

    Args:
        closes: Close prices in chronological order
        fast: Fast EMA period
        slow: Slow EMA period
        signal: Signal line EMA period

    Returns:
        MACDValues with None for parts that lack history
    """
    line = macd_line_series(closes, fast, slow)
    if not line:
        return MACDValues()

    macd = line[-1]
    if len(closes) < slow + signal:
        return MACDValues(macd=macd)

    signal_value = ema_series(line, signal)[-1]
    return MACDValues(
        macd=macd,
        signal=signal_value,
        histogram=macd - signal_value,
    )
