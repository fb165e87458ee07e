"""
Bar validation at the ingestion boundary.

A bar that fails any check is rejected with InvalidBarError; nothing is ever
coerced into range.
"""

import math
from numbers import Real
from typing import Any

from ..errors import InvalidBarError
from .models import Bar, Timeframe


def _check_finite(name: str, value: Any) -> None:
    if isinstance(value, bool) or not isinstance(value, Real):
        raise InvalidBarError(f"Invalid {name} type: {type(value).__name__}", field=name, value=value)
    if math.isnan(value) or math.isinf(value):
        raise InvalidBarError(f"Invalid {name} value: {value}", field=name, value=value)


def validate_bar(bar: Bar) -> None:
    """
    Validate a bar against the OHLCV invariants.

    Checks:
        - asset is a non-empty string and timeframe a Timeframe
        - timestamp is a non-negative integer (epoch ms)
        - open/high/low/close are finite and positive
        - high >= max(open, close, low) and low <= min(open, close, high)
        - volume is finite and non-negative

    Raises:
        InvalidBarError: On the first violated invariant
    """
    if not isinstance(bar.asset, str) or not bar.asset:
        raise InvalidBarError("Bar missing asset symbol", field="asset", value=bar.asset)

    if not isinstance(bar.timeframe, Timeframe):
        raise InvalidBarError(f"Invalid timeframe: {bar.timeframe!r}", field="timeframe", value=bar.timeframe)

    if isinstance(bar.timestamp, bool) or not isinstance(bar.timestamp, int) or bar.timestamp < 0:
        raise InvalidBarError(f"Invalid timestamp: {bar.timestamp!r}", field="timestamp", value=bar.timestamp)

    for name in ("open", "high", "low", "close"):
        price = getattr(bar, name)
        _check_finite(name, price)
        if price <= 0:
            raise InvalidBarError(f"Non-positive {name}: {price}", field=name, value=price)

    if bar.high < max(bar.open, bar.close, bar.low):
        raise InvalidBarError(
            f"High {bar.high} must be >= max(open {bar.open}, close {bar.close}, low {bar.low})",
            field="high", value=bar.high
        )

    if bar.low > min(bar.open, bar.close, bar.high):
        raise InvalidBarError(
            f"Low {bar.low} must be <= min(open {bar.open}, close {bar.close}, high {bar.high})",
            field="low", value=bar.low
        )

    _check_finite("volume", bar.volume)
    if bar.volume < 0:
        raise InvalidBarError(f"Negative volume: {bar.volume}", field="volume", value=bar.volume)
