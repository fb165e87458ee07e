"""
Parsers converting raw provider payloads into canonical models.

Bars arrive either as mappings or as exchange kline rows
``[ts, open, high, low, close, volume, ...]`` with string or numeric fields.
Market summaries arrive as DexScreener-style pair objects.
"""

from collections.abc import Mapping, Sequence
from typing import Any, Optional, Union

from ..errors import MalformedDataError, MissingDataError
from .models import Bar, MarketSummary, Timeframe
from .validators import validate_bar

BAR_FIELDS = ("timestamp", "open", "high", "low", "close", "volume")


def parse_timeframe(value: Union[str, Timeframe]) -> Timeframe:
    """Resolve a timeframe string such as '1m' or '4h'."""
    if isinstance(value, Timeframe):
        return value
    try:
        return Timeframe(value)
    except ValueError:
        raise MalformedDataError(
            f"Unknown timeframe: {value!r}",
            raw_data=str(value),
            expected_format="one of " + ", ".join(t.value for t in Timeframe)
        ) from None


def _to_float(name: str, value: Any) -> float:
    if value is None or value == "":
        raise MissingDataError(f"Missing bar field: {name}", data_type=name)
    try:
        return float(value)
    except (TypeError, ValueError):
        raise MalformedDataError(f"Invalid {name}: {value!r}", raw_data=str(value)[:100]) from None


def _to_timestamp(value: Any) -> int:
    if value is None or value == "":
        raise MissingDataError("Missing bar field: timestamp", data_type="timestamp")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise MalformedDataError(
            f"Invalid timestamp: {value!r}",
            raw_data=str(value)[:100],
            expected_format="epoch milliseconds"
        ) from None


def parse_bar(asset: str, timeframe: Union[str, Timeframe], payload: Any) -> Bar:
    """
    Parse and validate a single bar payload.

    Args:
        asset: Asset symbol the bar belongs to
        timeframe: Bar timeframe
        payload: Mapping with BAR_FIELDS keys, or a kline row

    Returns:
        Validated Bar

    Raises:
        MissingDataError: Required field absent
        MalformedDataError: Field cannot be converted
        InvalidBarError: Parsed values violate the OHLCV invariants
    """
    if isinstance(payload, Mapping):
        values = [payload.get(name) for name in BAR_FIELDS]
    elif isinstance(payload, Sequence) and not isinstance(payload, (str, bytes)):
        if len(payload) < len(BAR_FIELDS):
            raise MalformedDataError(
                f"Kline row has {len(payload)} fields, expected at least {len(BAR_FIELDS)}",
                raw_data=str(payload)[:100],
                expected_format="[ts, open, high, low, close, volume, ...]"
            )
        values = list(payload[:len(BAR_FIELDS)])
    else:
        raise MalformedDataError(
            f"Bar payload must be a mapping or sequence, got {type(payload).__name__}",
            raw_data=str(payload)[:100]
        )

    raw = dict(zip(BAR_FIELDS, values))
    bar = Bar(
        asset=asset,
        timeframe=parse_timeframe(timeframe),
        timestamp=_to_timestamp(raw["timestamp"]),
        open=_to_float("open", raw["open"]),
        high=_to_float("high", raw["high"]),
        low=_to_float("low", raw["low"]),
        close=_to_float("close", raw["close"]),
        volume=_to_float("volume", raw["volume"]),
    )
    validate_bar(bar)
    return bar


def select_deepest_pair(pairs: Sequence[Mapping[str, Any]]) -> Optional[Mapping[str, Any]]:
    """Pick the pair with the highest USD liquidity, None if there are no pairs."""
    if not pairs:
        return None
    return max(pairs, key=lambda p: float((p.get("liquidity") or {}).get("usd") or 0.0))


def parse_market_summary(pair: Mapping[str, Any], timestamp: Optional[int] = None) -> MarketSummary:
    """
    Convert a DexScreener-style pair object into a MarketSummary.

    Raises:
        MalformedDataError: If the pair lacks price, volume or liquidity data
    """
    try:
        volume = pair["volume"]
        txns = (pair.get("txns") or {}).get("h24") or {}
        return MarketSummary(
            price_usd=float(pair["priceUsd"]),
            price_change_24h=float((pair.get("priceChange") or {}).get("h24") or 0.0),
            volume_h24=float(volume.get("h24") or 0.0),
            volume_h1=float(volume.get("h1") or 0.0),
            volume_m5=float(volume.get("m5") or 0.0),
            volume_h6=float(volume.get("h6") or 0.0),
            liquidity_usd=float(pair["liquidity"]["usd"]),
            buys_24h=int(txns.get("buys") or 0),
            sells_24h=int(txns.get("sells") or 0),
            market_cap=float(pair["marketCap"]) if pair.get("marketCap") is not None else None,
            chain=pair.get("chainId"),
            timestamp=timestamp,
        )
    except (KeyError, TypeError, ValueError) as e:
        raise MalformedDataError(
            f"Invalid market pair payload: {e}",
            raw_data=str(pair)[:100],
            expected_format="DexScreener pair"
        ) from e
