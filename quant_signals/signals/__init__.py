"""
Signal rule layer.

Maps indicator snapshots and market summaries to directional, strength-rated
signals using fixed, configurable thresholds. Rules are independent per
indicator; conflicting signals (e.g. RSI SELL with MACD BUY) are all returned
and left for the consumer to resolve.
"""

from .market import evaluate_market_signals
from .rules import evaluate_indicator_signals

__all__ = ["evaluate_indicator_signals", "evaluate_market_signals"]
