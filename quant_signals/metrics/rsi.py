"""RSI (Relative Strength Index) with Wilder smoothing"""

from collections.abc import Sequence
from typing import Optional


def calculate_rsi(closes: Sequence[float], period: int = 14) -> Optional[float]:
    """
    Calculate RSI over the full close series

    The first average gain/loss is the simple mean of the first `period`
    changes; later averages use Wilder smoothing with factor 1/period.

    RSI = 100 - 100 / (1 + RS), RS = avg_gain / avg_loss
    RSI = 100 when avg_loss is zero.

    Args:
        closes: Close prices in chronological order
        period: RSI period (default 14)

    Returns:
        RSI in [0, 100] or None if fewer than period + 1 closes
    """
    if period <= 0 or len(closes) < period + 1:
        return None

    changes = [closes[i] - closes[i - 1] for i in range(1, len(closes))]

    avg_gain = sum(max(c, 0.0) for c in changes[:period]) / period
    avg_loss = sum(max(-c, 0.0) for c in changes[:period]) / period

    for change in changes[period:]:
        avg_gain = (avg_gain * (period - 1) + max(change, 0.0)) / period
        avg_loss = (avg_loss * (period - 1) + max(-change, 0.0)) / period

    if avg_loss == 0:
        return 100.0

    rs = avg_gain / avg_loss
    return 100.0 - 100.0 / (1.0 + rs)
