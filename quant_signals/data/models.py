"""
Canonical data models for normalized market data.

This module defines immutable data structures for validated OHLCV bars and
24h market summaries, plus the key used to address rolling windows.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class Timeframe(str, Enum):
    """Bar interval."""
    MINUTE_1 = "1m"
    MINUTE_5 = "5m"
    MINUTE_15 = "15m"
    MINUTE_30 = "30m"
    HOUR_1 = "1h"
    HOUR_4 = "4h"
    DAY_1 = "1d"
    WEEK_1 = "1w"

    @property
    def duration_ms(self) -> int:
        """Length of one bar in milliseconds."""
        return _TIMEFRAME_MS[self]


_MINUTE_MS = 60 * 1000

_TIMEFRAME_MS = {
    Timeframe.MINUTE_1: _MINUTE_MS,
    Timeframe.MINUTE_5: 5 * _MINUTE_MS,
    Timeframe.MINUTE_15: 15 * _MINUTE_MS,
    Timeframe.MINUTE_30: 30 * _MINUTE_MS,
    Timeframe.HOUR_1: 60 * _MINUTE_MS,
    Timeframe.HOUR_4: 240 * _MINUTE_MS,
    Timeframe.DAY_1: 1440 * _MINUTE_MS,
    Timeframe.WEEK_1: 7 * 1440 * _MINUTE_MS,
}


@dataclass(frozen=True)
class Bar:
    """OHLCV observation for an asset over one timeframe interval."""
    asset: str
    timeframe: Timeframe
    timestamp: int      # epoch ms, bar open time
    open: float
    high: float
    low: float
    close: float
    volume: float

    @property
    def key(self) -> "WindowKey":
        return WindowKey(self.asset, self.timeframe)


@dataclass(frozen=True)
class WindowKey:
    """Address of a rolling window: one per (asset, timeframe)."""
    asset: str
    timeframe: Timeframe

    def __str__(self) -> str:
        return f"{self.asset}:{self.timeframe.value}"


@dataclass(frozen=True)
class MarketSummary:
    """24h market statistics for the most liquid trading pair of an asset."""
    price_usd: float
    price_change_24h: float          # percent
    volume_h24: float
    volume_h1: float
    liquidity_usd: float
    buys_24h: int = 0
    sells_24h: int = 0
    volume_m5: float = 0.0
    volume_h6: float = 0.0
    market_cap: Optional[float] = None
    chain: Optional[str] = None
    timestamp: Optional[int] = None  # epoch ms when the summary was taken
