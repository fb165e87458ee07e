"""Indicator calculation engine for technical analysis"""

from .bollinger import calculate_bollinger_bands
from .calculator import IndicatorCalculator
from .macd import calculate_macd
from .moving_average import calculate_ema, calculate_sma, ema_series
from .rsi import calculate_rsi
from .stochastic import calculate_stochastic

__all__ = [
    "IndicatorCalculator",
    "calculate_sma",
    "calculate_ema",
    "ema_series",
    "calculate_rsi",
    "calculate_macd",
    "calculate_bollinger_bands",
    "calculate_stochastic",
]
