"""Bollinger Bands"""

import math
from collections.abc import Sequence

from ..models.indicators import BollingerBands
from .moving_average import calculate_sma


def calculate_bollinger_bands(closes: Sequence[float], period: int = 20,
                              std_dev: float = 2.0) -> BollingerBands:
    """
    Calculate Bollinger Bands over the trailing window

    middle = SMA(period)
    upper/lower = middle +/- std_dev * population standard deviation

    Args:
        closes: Close prices in chronological order
        period: Lookback period (default 20)
        std_dev: Band width in standard deviations (default 2)

    Returns:
        BollingerBands, all None if fewer than `period` closes
    """
    middle = calculate_sma(closes, period)
    if middle is None:
        return BollingerBands()

    window = closes[-period:]
    # d * d overflows to inf instead of raising, so the snapshot check rejects it
    variance = sum((value - middle) * (value - middle) for value in window) / period
    width = std_dev * math.sqrt(variance)

    return BollingerBands(
        upper=middle + width,
        middle=middle,
        lower=middle - width,
    )
