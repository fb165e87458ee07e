"""Pytest configuration and shared fixtures."""

from typing import Callable, List, Optional

import pytest

from quant_signals.config.defaults import get_default_config
from quant_signals.data.models import Bar, MarketSummary, Timeframe
from quant_signals.data.window import RollingWindowStore
from quant_signals.engine import SignalEngine

BASE_TS = 1_700_000_000_000
MINUTE_MS = 60_000

RSI_SCENARIO_CLOSES = [
    10, 10.5, 10.2, 10.8, 11, 10.9, 11.2, 11.5, 11.3, 11.6, 11.8, 11.7, 12, 12.2, 12.5
]


def make_bar(close: float, timestamp: int = BASE_TS, asset: str = "ETH",
             timeframe: Timeframe = Timeframe.MINUTE_1, open_price: Optional[float] = None,
             high: Optional[float] = None, low: Optional[float] = None,
             volume: float = 1000.0) -> Bar:
    """Build a valid bar around a close; high/low default to a 1% envelope."""
    open_price = close if open_price is None else open_price
    high = max(open_price, close) * 1.01 if high is None else high
    low = min(open_price, close) * 0.99 if low is None else low
    return Bar(
        asset=asset,
        timeframe=timeframe,
        timestamp=timestamp,
        open=open_price,
        high=high,
        low=low,
        close=close,
        volume=volume,
    )


def make_bars(closes: List[float], asset: str = "ETH",
              timeframe: Timeframe = Timeframe.MINUTE_1,
              start_ts: int = BASE_TS) -> List[Bar]:
    """One bar per close, each opening at the previous close."""
    bars = []
    previous = closes[0] if closes else None
    for i, close in enumerate(closes):
        bars.append(make_bar(
            close,
            timestamp=start_ts + i * MINUTE_MS,
            asset=asset,
            timeframe=timeframe,
            open_price=previous,
        ))
        previous = close
    return bars


@pytest.fixture
def bar_factory() -> Callable[..., Bar]:
    return make_bar


@pytest.fixture
def bars_factory() -> Callable[..., List[Bar]]:
    return make_bars


@pytest.fixture
def default_config():
    return get_default_config()


@pytest.fixture
def store() -> RollingWindowStore:
    return RollingWindowStore()


@pytest.fixture
def engine() -> SignalEngine:
    return SignalEngine()


@pytest.fixture
def liquid_market() -> MarketSummary:
    """Market summary clearing every default floor with a positive 24h change."""
    return MarketSummary(
        price_usd=3300.0,
        price_change_24h=4.5,
        volume_h24=250_000.0,
        volume_h1=10_000.0,
        liquidity_usd=80_000.0,
        buys_24h=110,
        sells_24h=100,
    )
