"""Market summary signals, trend and sentiment classification"""

import math
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ..config.defaults import RuleThresholds
from ..data.models import MarketSummary
from ..models.signals import Signal, SignalAction, SignalKind, SignalStrength


class Trend(str, Enum):
    INCREASING = "increasing"
    DECREASING = "decreasing"
    STABLE = "stable"


class Sentiment(str, Enum):
    BULLISH = "bullish"
    BEARISH = "bearish"
    NEUTRAL = "neutral"


@dataclass(frozen=True)
class MarketAnalysis:
    """Market-side view of an asset built from its 24h summary."""
    asset: str
    summary: MarketSummary
    volume_trend: Trend
    buy_sell_ratio: float
    sentiment: Sentiment
    signals: tuple[Signal, ...] = ()


def buy_sell_ratio(buys: int, sells: int) -> float:
    """
    Ratio of buy to sell transactions

    No sells: infinite when there were buys, 1.0 (balanced) when there were none.
    """
    if sells == 0:
        return math.inf if buys > 0 else 1.0
    return buys / sells


def analyze_trend(values: Sequence[float], threshold_pct: float = 5.0) -> Trend:
    """
    Classify a series by the percent change of its first value over its last

    Values are ordered most recent first (e.g. m5, h1, h6, h24 volumes).
    Fewer than two values, or a zero base, is stable.
    """
    if len(values) < 2 or values[-1] == 0:
        return Trend.STABLE

    change = (values[0] - values[-1]) / values[-1] * 100
    if change > threshold_pct:
        return Trend.INCREASING
    if change < -threshold_pct:
        return Trend.DECREASING
    return Trend.STABLE


def analyze_sentiment(summary: MarketSummary,
                      thresholds: Optional[RuleThresholds] = None) -> Sentiment:
    """Bullish on heavy buying with a rising price, bearish on the reverse"""
    thresholds = thresholds or RuleThresholds()
    ratio = buy_sell_ratio(summary.buys_24h, summary.sells_24h)

    if ratio > thresholds.bullish_buy_ratio and summary.price_change_24h > 0:
        return Sentiment.BULLISH
    if ratio < thresholds.bearish_buy_ratio and summary.price_change_24h < 0:
        return Sentiment.BEARISH
    return Sentiment.NEUTRAL


def volume_change_pct(summary: MarketSummary) -> Optional[float]:
    """
    24h volume against the last hour's volume annualized to 24h, in percent

    None when there was no volume in the last hour.
    """
    projected = summary.volume_h1 * 24
    if projected <= 0:
        return None
    return (summary.volume_h24 - projected) / projected * 100


def evaluate_market_signals(summary: MarketSummary,
                            thresholds: Optional[RuleThresholds] = None) -> list[Signal]:
    """
    Derive PRICE, VOLUME and SENTIMENT signals from a market summary

    Returns:
        A new list of signals in PRICE, VOLUME, SENTIMENT order
    """
    thresholds = thresholds or RuleThresholds()
    signals = []

    change = summary.price_change_24h
    if abs(change) > thresholds.price_change_pct:
        signals.append(Signal(
            kind=SignalKind.PRICE,
            action=SignalAction.BUY if change > 0 else SignalAction.SELL,
            strength=SignalStrength.STRONG,
            reason=f"Large price movement of {change:.2f}% in 24h",
        ))

    volume_change = volume_change_pct(summary)
    if volume_change is not None and abs(volume_change) > thresholds.volume_change_pct:
        signals.append(Signal(
            kind=SignalKind.VOLUME,
            action=SignalAction.BUY if volume_change > 0 else SignalAction.SELL,
            strength=SignalStrength.MEDIUM,
            reason=f"Significant volume change of {volume_change:.2f}%",
        ))

    ratio = buy_sell_ratio(summary.buys_24h, summary.sells_24h)
    if abs(ratio - 1) > thresholds.sentiment_ratio_deviation:
        buying = ratio > 1
        signals.append(Signal(
            kind=SignalKind.SENTIMENT,
            action=SignalAction.BUY if buying else SignalAction.SELL,
            strength=SignalStrength.MEDIUM,
            reason=(
                f"Strong {'buying' if buying else 'selling'} pressure "
                f"with {ratio:.2f} buy/sell ratio"
            ),
        ))

    return signals


def build_market_analysis(asset: str, summary: MarketSummary,
                          thresholds: Optional[RuleThresholds] = None) -> MarketAnalysis:
    """Assemble trend, sentiment and signals for one asset's market summary"""
    thresholds = thresholds or RuleThresholds()
    volumes = [summary.volume_m5, summary.volume_h1, summary.volume_h6, summary.volume_h24]

    return MarketAnalysis(
        asset=asset,
        summary=summary,
        volume_trend=analyze_trend(volumes, thresholds.trend_change_pct),
        buy_sell_ratio=buy_sell_ratio(summary.buys_24h, summary.sells_24h),
        sentiment=analyze_sentiment(summary, thresholds),
        signals=tuple(evaluate_market_signals(summary, thresholds)),
    )
