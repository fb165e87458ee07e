"""
Main signal engine coordinator.

Orchestrates the pipeline:
Bar -> Rolling Window Store -> Indicator Calculator -> Signal Rules
    -> Opportunity Scorer (with external evidence) -> Opportunities
"""

import threading
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional, Union

import structlog

from .config.defaults import DefaultConfig, get_default_config
from .config.loader import ConfigLoader
from .data.models import Bar, MarketSummary, Timeframe, WindowKey
from .data.parsers import parse_timeframe
from .data.validators import validate_bar
from .data.window import RollingWindowStore
from .errors import DataQualityError, SystemFailureError
from .logging.config import get_signal_logger, log_signal_decision
from .metrics.calculator import IndicatorCalculator
from .models.signals import AnalysisResult, Signal
from .scoring.evidence import EvidenceSource
from .scoring.opportunities import Opportunity, OpportunityTracker
from .scoring.scorer import OpportunityScore, OpportunityScorer
from .signals.market import MarketAnalysis, build_market_analysis
from .signals.rules import evaluate_indicator_signals
from .utils.time import now_ms as wall_clock_ms

logger = structlog.get_logger(__name__)
signal_logger = get_signal_logger(__name__)


@dataclass(frozen=True)
class AssetEvidence:
    """Everything the scorer needs for one asset in one detection cycle."""
    asset: str
    sources: Sequence[EvidenceSource] = ()
    signals: Sequence[Signal] = ()
    market: Optional[MarketSummary] = None


@dataclass
class EngineStats:
    bars_accepted: int = 0
    bars_rejected: int = 0
    signals_emitted: int = 0
    opportunities_detected: int = 0
    rejections_by_type: dict[str, int] = field(default_factory=dict)


class SignalEngine:
    """
    Coordinator for indicator evaluation and opportunity detection.

    All state lives on the instance (window store, calculator cache,
    opportunity tracker); nothing is read from module globals, so independent
    engines can run side by side. Updates for one (asset, timeframe) key are
    serialized by the store's per-key lock; different keys proceed in parallel.
    """

    def __init__(self, config: Optional[DefaultConfig] = None,
                 store: Optional[RollingWindowStore] = None,
                 tracker: Optional[OpportunityTracker] = None) -> None:
        self.config = config or get_default_config()
        self.store = store or RollingWindowStore(self.config.window)
        self.calculator = IndicatorCalculator(self.config.indicators)
        self.scorer = OpportunityScorer(self.config.scoring)
        self.tracker = tracker or OpportunityTracker(self.config.scoring)
        self.stats = EngineStats()
        self._stats_lock = threading.Lock()

        logger.info(
            "Signal engine initialized",
            warmup_bars=self.calculator.get_warmup_period(),
            max_bars=self.store.params.max_bars,
            detection_threshold=self.config.scoring.detection_threshold
        )

    @classmethod
    def for_asset(cls, asset: str, config_dir: Optional[Union[str, Path]] = None,
                  overrides: Optional[dict[str, Any]] = None) -> "SignalEngine":
        """Build an engine from defaults, assets.yaml and call-site overrides"""
        loader = ConfigLoader.create(Path(config_dir) if config_dir else None)
        return cls(config=loader.build_config(asset, overrides))

    def analyze(self, bar: Bar) -> AnalysisResult:
        """
        Ingest one bar and evaluate its key's window.

        Raises:
            InvalidBarError: Bar violates the OHLCV invariants
            OutOfOrderBarError: Bar is not newer than the key's last bar
            IndicatorCalculationError: Window with the bar yields non-finite
                indicators; the bar is rolled back out of the store
        """
        try:
            validate_bar(bar)
            key = bar.key
            with self.store.lock(key):
                evicted = self.store.append(bar)
                try:
                    result = self._evaluate_locked(key)
                except SystemFailureError as e:
                    self.store.rollback(key, evicted)
                    self._count_rejection(e)
                    logger.error(
                        "Rolled back bar after indicator failure",
                        key=str(key),
                        timestamp=bar.timestamp,
                        error=str(e),
                        error_type=type(e).__name__
                    )
                    raise
        except DataQualityError as e:
            error_type = type(e).__name__
            self._count_rejection(e)
            logger.warning(
                "Rejected bar",
                asset=getattr(bar, "asset", None),
                timestamp=getattr(bar, "timestamp", None),
                error=str(e),
                error_type=error_type
            )
            raise

        with self._stats_lock:
            self.stats.bars_accepted += 1
            self.stats.signals_emitted += len(result.signals)
        for signal in result.signals:
            log_signal_decision(
                signal_logger,
                asset=result.asset,
                timeframe=result.timeframe,
                kind=signal.kind.value,
                action=signal.action.value,
                strength=signal.strength.name,
                reason=signal.reason,
            )
        return result

    def _count_rejection(self, error: Exception) -> None:
        error_type = type(error).__name__
        with self._stats_lock:
            self.stats.bars_rejected += 1
            rejections = self.stats.rejections_by_type
            rejections[error_type] = rejections.get(error_type, 0) + 1

    def evaluate(self, asset: str, timeframe: Union[str, Timeframe]) -> AnalysisResult:
        """Evaluate the current window for a key without ingesting a bar"""
        key = WindowKey(asset, parse_timeframe(timeframe))
        with self.store.lock(key):
            return self._evaluate_locked(key)

    def _evaluate_locked(self, key: WindowKey) -> AnalysisResult:
        snapshot = self.calculator.calculate(self.store, key)
        signals = evaluate_indicator_signals(snapshot, self.config.rules)
        last_bar = self.store.last_bar(key)

        return AnalysisResult(
            asset=key.asset,
            timeframe=key.timeframe.value,
            timestamp=last_bar.timestamp if last_bar else None,
            snapshot=snapshot,
            signals=tuple(signals),
        )

    def analyze_market(self, asset: str, summary: MarketSummary) -> MarketAnalysis:
        """Derive PRICE/VOLUME/SENTIMENT signals and trend from a market summary"""
        analysis = build_market_analysis(asset, summary, self.config.rules)
        logger.debug(
            "Analyzed market summary",
            asset=asset,
            sentiment=analysis.sentiment.value,
            volume_trend=analysis.volume_trend.value,
            signals=[s.kind.value for s in analysis.signals]
        )
        return analysis

    def score(self, asset: str, sources: Iterable[EvidenceSource] = (),
              signals: Iterable[Signal] = (),
              market: Optional[MarketSummary] = None) -> OpportunityScore:
        """Score one asset; empty evidence and empty signals score zero"""
        return self.scorer.score(asset, sources, signals, market)

    def detect_opportunities(self, candidates: Iterable[AssetEvidence],
                             now_ms: Optional[int] = None) -> list[Opportunity]:
        """
        Score each candidate asset and record those reaching the threshold.

        Returns:
            New or updated opportunities, highest overall score first
        """
        now_ms = wall_clock_ms() if now_ms is None else now_ms
        found = []

        for candidate in candidates:
            score = self.scorer.score(candidate.asset, candidate.sources, candidate.signals, candidate.market)
            opportunity = self.tracker.detect(
                candidate.asset, score, candidate.sources, candidate.signals, now_ms
            )
            if opportunity is not None:
                found.append(opportunity)

        with self._stats_lock:
            self.stats.opportunities_detected += len(found)
        return sorted(found, key=lambda o: o.score.overall, reverse=True)

    def expire_opportunities(self, now_ms: Optional[int] = None,
                             retention_ms: Optional[int] = None) -> list[Opportunity]:
        """Expire opportunities not refreshed within the retention window"""
        now_ms = wall_clock_ms() if now_ms is None else now_ms
        return self.tracker.expire(now_ms, retention_ms)

    def get_runtime_stats(self) -> dict[str, Any]:
        """Get runtime statistics"""
        with self._stats_lock:
            counters = {
                "bars_accepted": self.stats.bars_accepted,
                "bars_rejected": self.stats.bars_rejected,
                "rejections_by_type": dict(self.stats.rejections_by_type),
                "signals_emitted": self.stats.signals_emitted,
                "opportunities_detected": self.stats.opportunities_detected,
            }

        return {
            "tracked_keys": len(self.store.keys()),
            **counters,
            "active_opportunities": len(self.tracker.active()),
        }
