"""Data models for indicator calculations"""

from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass(frozen=True)
class BollingerBands:
    """Bollinger band values; all None until the lookback is filled."""
    upper: Optional[float] = None
    middle: Optional[float] = None
    lower: Optional[float] = None


@dataclass(frozen=True)
class MACDValues:
    """MACD line, signal line and histogram (macd - signal)."""
    macd: Optional[float] = None
    signal: Optional[float] = None
    histogram: Optional[float] = None


@dataclass(frozen=True)
class StochasticValues:
    """Stochastic %K and %D in [0, 100]."""
    k: Optional[float] = None
    d: Optional[float] = None


@dataclass(frozen=True)
class IndicatorSnapshot:
    """
    Indicator values computed over the trailing window of one key.

    A None value means the window is shorter than the indicator's lookback;
    it is never reported as zero.
    """
    rsi: Optional[float] = None
    sma: Optional[float] = None
    bollinger: BollingerBands = field(default_factory=BollingerBands)
    macd: MACDValues = field(default_factory=MACDValues)
    stochastic: StochasticValues = field(default_factory=StochasticValues)

    def defined_values(self) -> dict[str, float]:
        """Flat name -> value mapping of every defined indicator output."""
        flat = {
            "rsi": self.rsi,
            "sma": self.sma,
            "bollinger.upper": self.bollinger.upper,
            "bollinger.middle": self.bollinger.middle,
            "bollinger.lower": self.bollinger.lower,
            "macd.macd": self.macd.macd,
            "macd.signal": self.macd.signal,
            "macd.histogram": self.macd.histogram,
            "stochastic.k": self.stochastic.k,
            "stochastic.d": self.stochastic.d,
        }
        return {name: value for name, value in flat.items() if value is not None}

    def is_complete(self) -> bool:
        """True once every indicator output is defined."""
        return len(self.defined_values()) == 10

    def to_dict(self) -> dict[str, Any]:
        return {
            "rsi": self.rsi,
            "sma": self.sma,
            "bollinger_bands": {
                "upper": self.bollinger.upper,
                "middle": self.bollinger.middle,
                "lower": self.bollinger.lower,
            },
            "macd": {
                "macd": self.macd.macd,
                "signal": self.macd.signal,
                "histogram": self.macd.histogram,
            },
            "stochastic": {
                "k": self.stochastic.k,
                "d": self.stochastic.d,
            },
        }
