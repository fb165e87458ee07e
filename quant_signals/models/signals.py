"""Signal data models shared by the rule layer and the scorer."""

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Any, Optional

from .indicators import IndicatorSnapshot


class SignalKind(str, Enum):
    """Which evidence produced the signal."""
    RSI = "RSI"
    MACD = "MACD"
    STOCHASTIC = "STOCHASTIC"
    PRICE = "PRICE"
    VOLUME = "VOLUME"
    SENTIMENT = "SENTIMENT"


class SignalAction(str, Enum):
    BUY = "BUY"
    SELL = "SELL"
    HOLD = "HOLD"


class SignalStrength(IntEnum):
    """Signal strength; the integer value is the 1-3 numeric scale."""
    WEAK = 1
    MEDIUM = 2
    STRONG = 3


@dataclass(frozen=True)
class Signal:
    """One directional signal. Immutable; every evaluation builds a fresh list."""
    kind: SignalKind
    action: SignalAction
    strength: SignalStrength
    reason: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.kind.value,
            "action": self.action.value,
            "strength": self.strength.name,
            "strength_value": int(self.strength),
            "reason": self.reason,
        }


@dataclass(frozen=True)
class AnalysisResult:
    """Output of one evaluation: the indicator snapshot and its signals."""
    asset: str
    timeframe: str
    timestamp: Optional[int]
    snapshot: IndicatorSnapshot
    signals: tuple[Signal, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "asset": self.asset,
            "timeframe": self.timeframe,
            "timestamp": self.timestamp,
            "metrics": self.snapshot.to_dict(),
            "signals": [signal.to_dict() for signal in self.signals],
        }
