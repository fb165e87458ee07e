"""Opportunity scorer fusing social, technical and market evidence"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Any, Optional

from ..config.defaults import ScoringParams
from ..data.models import MarketSummary
from ..logging.config import get_scoring_logger
from ..models.signals import Signal
from .evidence import EvidenceSource, ScoreComponent, by_component

logger = get_scoring_logger(__name__)

MIN_SCORE = 0.0
MAX_SCORE = 100.0


def clamp_score(value: float) -> float:
    """Clamp a score into [0, 100]"""
    return min(max(value, MIN_SCORE), MAX_SCORE)


@dataclass(frozen=True)
class OpportunityScore:
    """Social, technical and overall scores, each in [0, 100]."""
    social: float = 0.0
    technical: float = 0.0
    overall: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return {"social": self.social, "technical": self.technical, "overall": self.overall}


class OpportunityScorer:
    """
    Coarse heuristic scorer.

    social    = mean(confidence * 100 * weight) over SOCIAL evidence, 0 if none
    technical = points_per_signal per signal
              + confidence * points_per_signal * weight per TECHNICAL evidence
              + volume_points if 24h volume > volume_floor
              + liquidity_points if USD liquidity > liquidity_floor
              + momentum_points if 24h price change > 0
    overall   = mean(social, technical)

    Every component is clamped to [0, 100]. Missing social evidence or a
    missing market summary each contribute zero rather than failing.
    """

    def __init__(self, params: Optional[ScoringParams] = None):
        self.params = params or ScoringParams()

    def social_score(self, sources: Sequence[EvidenceSource]) -> float:
        if not sources:
            return 0.0
        total = sum(s.confidence * 100.0 * s.fusion.weight for s in sources)
        return clamp_score(total / len(sources))

    def technical_score(self, signals: Sequence[Signal],
                        sources: Sequence[EvidenceSource],
                        market: Optional[MarketSummary] = None) -> float:
        p = self.params
        score = len(signals) * p.points_per_signal
        score += sum(s.confidence * p.points_per_signal * s.fusion.weight for s in sources)

        if market is not None:
            if market.volume_h24 > p.volume_floor:
                score += p.volume_points
            if market.liquidity_usd > p.liquidity_floor:
                score += p.liquidity_points
            if market.price_change_24h > 0:
                score += p.momentum_points

        return clamp_score(score)

    def score(self, asset: str, sources: Iterable[EvidenceSource] = (),
              signals: Iterable[Signal] = (),
              market: Optional[MarketSummary] = None) -> OpportunityScore:
        """
        Score one asset

        Args:
            asset: Asset symbol (used for logging only)
            sources: Evidence already filtered to the relevant time range
            signals: Technical and market signals for the asset
            market: Optional 24h market summary for liquidity terms

        Returns:
            OpportunityScore with every component in [0, 100]
        """
        grouped = by_component(sources)
        signals = list(signals)

        social = self.social_score(grouped[ScoreComponent.SOCIAL])
        technical = self.technical_score(signals, grouped[ScoreComponent.TECHNICAL], market)
        overall = clamp_score((social + technical) / 2)

        logger.debug(
            "Scored asset",
            asset=asset,
            social=social,
            technical=technical,
            overall=overall,
            social_sources=len(grouped[ScoreComponent.SOCIAL]),
            technical_sources=len(grouped[ScoreComponent.TECHNICAL]),
            signals=len(signals),
            has_market=market is not None
        )

        return OpportunityScore(social=social, technical=technical, overall=overall)

    def meets_threshold(self, score: OpportunityScore) -> bool:
        return score.overall >= self.params.detection_threshold
