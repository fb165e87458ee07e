"""Indicator calculator coordinating all indicator calculations for a window"""

import math
from typing import Optional

import structlog

from ..config.defaults import IndicatorParams
from ..data.models import WindowKey
from ..data.window import RollingWindowStore
from ..errors import IndicatorCalculationError
from ..models.indicators import IndicatorSnapshot
from .bollinger import calculate_bollinger_bands
from .macd import calculate_macd
from .moving_average import calculate_sma
from .rsi import calculate_rsi
from .stochastic import calculate_stochastic

logger = structlog.get_logger(__name__)

BOUNDED_OUTPUTS = ("rsi", "stochastic.k", "stochastic.d")


class IndicatorCalculator:
    """
    Computes every indicator as a function of the trailing window of a key.

    The calculator holds no bar history of its own; it reads the window store.
    The only state it keeps is a per-key cache of the last snapshot, tagged
    with the store generation of the window it was computed from.
    """

    def __init__(self, params: Optional[IndicatorParams] = None):
        self.params = params or IndicatorParams()
        self._cache: dict[WindowKey, tuple[int, IndicatorSnapshot]] = {}

    def calculate(self, store: RollingWindowStore, key: WindowKey) -> IndicatorSnapshot:
        """
        Calculate the indicator snapshot for a key's current window

        Args:
            store: Window store holding the key's bars
            key: (asset, timeframe) to evaluate

        Returns:
            IndicatorSnapshot; indicators lacking history are None

        Raises:
            IndicatorCalculationError: If a defined output is non-finite or out of range
        """
        with store.lock(key):
            last_bar = store.last_bar(key)
            if last_bar is None:
                return IndicatorSnapshot()

            generation = store.generation(key)
            cached = self._cache.get(key)
            if cached is not None and cached[0] == generation:
                return cached[1]

            closes = store.series(key, "close")
            highs = store.series(key, "high")
            lows = store.series(key, "low")

            snapshot = self.calculate_from_series(closes, highs, lows)
            self._validate_snapshot(snapshot, key)
            self._cache[key] = (generation, snapshot)

            logger.debug(
                "Recomputed indicators",
                key=str(key),
                bars=len(closes),
                defined=sorted(snapshot.defined_values())
            )
            return snapshot

    def calculate_from_series(self, closes, highs, lows) -> IndicatorSnapshot:
        """Pure computation of a snapshot from aligned close/high/low series"""
        p = self.params
        return IndicatorSnapshot(
            rsi=calculate_rsi(closes, p.rsi_period),
            sma=calculate_sma(closes, p.sma_period),
            bollinger=calculate_bollinger_bands(closes, p.bollinger_period, p.bollinger_std_dev),
            macd=calculate_macd(closes, p.macd_fast, p.macd_slow, p.macd_signal),
            stochastic=calculate_stochastic(
                highs, lows, closes, p.stochastic_period, p.stochastic_signal_period
            ),
        )

    def get_warmup_period(self) -> int:
        """Minimum number of bars needed for every indicator to be defined"""
        return self.params.max_lookback()

    def is_warmed_up(self, store: RollingWindowStore, key: WindowKey) -> bool:
        """Check if the key has enough history for a complete snapshot"""
        return store.bar_count(key) >= self.get_warmup_period()

    def invalidate(self, key: Optional[WindowKey] = None) -> None:
        """Drop cached snapshots for one key or all keys"""
        if key is None:
            self._cache.clear()
        else:
            self._cache.pop(key, None)

    def _validate_snapshot(self, snapshot: IndicatorSnapshot, key: WindowKey) -> None:
        """Reject non-finite outputs and oscillators outside [0, 100]"""
        for name, value in snapshot.defined_values().items():
            if math.isnan(value) or math.isinf(value):
                raise IndicatorCalculationError(
                    f"Invalid {name} value: {value}",
                    indicator=name,
                    calculation_input={"key": str(key)}
                )
            if name in BOUNDED_OUTPUTS and not 0.0 <= value <= 100.0:
                raise IndicatorCalculationError(
                    f"{name} out of range: {value}",
                    indicator=name,
                    calculation_input={"key": str(key)}
                )
