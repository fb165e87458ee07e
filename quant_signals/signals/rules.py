"""Indicator signal rules"""

from typing import Optional

from ..config.defaults import RuleThresholds
from ..models.indicators import IndicatorSnapshot, MACDValues, StochasticValues
from ..models.signals import Signal, SignalAction, SignalKind, SignalStrength


def rsi_signal(rsi: Optional[float], thresholds: RuleThresholds) -> Optional[Signal]:
    """RSI above overbought -> SELL, below oversold -> BUY, both STRONG"""
    if rsi is None:
        return None

    if rsi > thresholds.rsi_overbought:
        return Signal(
            kind=SignalKind.RSI,
            action=SignalAction.SELL,
            strength=SignalStrength.STRONG,
            reason=f"RSI {rsi:.2f} above {thresholds.rsi_overbought:g} (overbought)",
        )
    if rsi < thresholds.rsi_oversold:
        return Signal(
            kind=SignalKind.RSI,
            action=SignalAction.BUY,
            strength=SignalStrength.STRONG,
            reason=f"RSI {rsi:.2f} below {thresholds.rsi_oversold:g} (oversold)",
        )
    return None


def macd_signal(macd: MACDValues) -> Optional[Signal]:
    """
    MACD histogram rule

    BUY when histogram > 0 and histogram > signal line;
    SELL when histogram < 0 and histogram < signal line.
    """
    if macd.histogram is None or macd.signal is None:
        return None

    histogram, signal = macd.histogram, macd.signal
    if histogram > 0 and histogram > signal:
        return Signal(
            kind=SignalKind.MACD,
            action=SignalAction.BUY,
            strength=SignalStrength.MEDIUM,
            reason=f"MACD histogram {histogram:.4f} positive and above signal {signal:.4f}",
        )
    if histogram < 0 and histogram < signal:
        return Signal(
            kind=SignalKind.MACD,
            action=SignalAction.SELL,
            strength=SignalStrength.MEDIUM,
            reason=f"MACD histogram {histogram:.4f} negative and below signal {signal:.4f}",
        )
    return None


def stochastic_signal(stochastic: StochasticValues, thresholds: RuleThresholds) -> Optional[Signal]:
    """Both %K and %D overbought -> SELL, both oversold -> BUY, MEDIUM"""
    if stochastic.k is None or stochastic.d is None:
        return None

    k, d = stochastic.k, stochastic.d
    if k > thresholds.stochastic_overbought and d > thresholds.stochastic_overbought:
        return Signal(
            kind=SignalKind.STOCHASTIC,
            action=SignalAction.SELL,
            strength=SignalStrength.MEDIUM,
            reason=f"Stochastic %K {k:.2f} / %D {d:.2f} above {thresholds.stochastic_overbought:g}",
        )
    if k < thresholds.stochastic_oversold and d < thresholds.stochastic_oversold:
        return Signal(
            kind=SignalKind.STOCHASTIC,
            action=SignalAction.BUY,
            strength=SignalStrength.MEDIUM,
            reason=f"Stochastic %K {k:.2f} / %D {d:.2f} below {thresholds.stochastic_oversold:g}",
        )
    return None


def evaluate_indicator_signals(snapshot: IndicatorSnapshot,
                               thresholds: Optional[RuleThresholds] = None) -> list[Signal]:
    """
    Derive signals from an indicator snapshot

    Deterministic and stateless. Absent indicators contribute nothing; no
    neutral placeholder is emitted.

    Returns:
        A new list of signals in RSI, MACD, Stochastic order
    """
    thresholds = thresholds or RuleThresholds()

    candidates = (
        rsi_signal(snapshot.rsi, thresholds),
        macd_signal(snapshot.macd),
        stochastic_signal(snapshot.stochastic, thresholds),
    )
    return [signal for signal in candidates if signal is not None]
