"""
Quant Signals - Technical Analysis and Opportunity Scoring Engine

Ingests streaming OHLCV bars and social/market evidence for tradable assets,
maintains rolling windows per asset and timeframe, derives technical
indicators and directional signals, and fuses them into a composite
opportunity score.
"""

__version__ = "0.1.0"
__author__ = "Quant Signals Team"
