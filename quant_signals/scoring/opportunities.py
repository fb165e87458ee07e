"""
Opportunity lifecycle tracking.

An opportunity is created when an asset's overall score reaches the detection
threshold. Re-detection inside the same (asset, evaluation window) updates the
existing opportunity and moves it to TRACKING; expiry is driven by the caller
through expire().
"""

import threading
from collections.abc import Sequence
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Optional

from ..config.defaults import ScoringParams
from ..logging.config import get_scoring_logger, log_opportunity_transition
from ..models.signals import Signal, SignalAction
from ..utils.time import format_timestamp, window_bucket
from .evidence import EvidenceOrigin, EvidenceSource
from .scorer import OpportunityScore

logger = get_scoring_logger(__name__)

BASE_RISKS = (
    "High volatility potential",
    "Limited trading history",
)


class OpportunityStatus(str, Enum):
    NEW = "NEW"
    TRACKING = "TRACKING"
    EXPIRED = "EXPIRED"


@dataclass(frozen=True)
class Opportunity:
    """A detected, scored candidate trading setup."""
    id: str
    asset: str
    created_at: int                     # epoch ms
    sources: tuple[EvidenceSource, ...]
    score: OpportunityScore
    signals: tuple[Signal, ...]
    status: OpportunityStatus
    last_updated: int                   # epoch ms
    window: int
    summary: str = ""
    risks: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready view with ISO8601 UTC timestamps."""
        return {
            "id": self.id,
            "asset": self.asset,
            "created_at": format_timestamp(self.created_at),
            "sources": [
                {
                    "origin": s.origin.value,
                    "timestamp": format_timestamp(s.timestamp),
                    "confidence": s.confidence,
                }
                for s in self.sources
            ],
            "score": self.score.to_dict(),
            "analysis": {
                "summary": self.summary,
                "signals": [signal.to_dict() for signal in self.signals],
                "risks": list(self.risks),
            },
            "status": self.status.value,
            "last_updated": format_timestamp(self.last_updated),
        }


def generate_opportunity_id(asset: str, sources: Sequence[EvidenceSource],
                            timestamp: int, window: int) -> str:
    """
    Deterministic id: <origin>_<source timestamp>_<asset>_<window>

    The earliest source names the detection; technical-only detections use the
    evaluation timestamp. Including the asset keeps simultaneous detections for
    different assets distinct.
    """
    if sources:
        first = min(sources, key=lambda s: s.timestamp)
        origin, source_ts = first.origin.value, first.timestamp
    else:
        origin, source_ts = EvidenceOrigin.TECHNICAL.value, timestamp
    return f"{origin}_{source_ts}_{asset}_{window}"


def describe_risks(sources: Sequence[EvidenceSource], signals: Sequence[Signal]) -> tuple[str, ...]:
    risks = list(BASE_RISKS)
    if any(s.origin is EvidenceOrigin.SOCIAL for s in sources):
        risks.append("Unverified social signals")
    else:
        risks.append("No social corroboration")
    actions = {signal.action for signal in signals}
    if SignalAction.BUY in actions and SignalAction.SELL in actions:
        risks.append("Conflicting technical signals")
    return tuple(risks)


class OpportunityTracker:
    """Thread-safe registry of opportunities keyed by (asset, evaluation window)."""

    def __init__(self, params: Optional[ScoringParams] = None):
        self.params = params or ScoringParams()
        self._lock = threading.Lock()
        self._by_id: dict[str, Opportunity] = {}
        self._by_window: dict[tuple[str, int], str] = {}

    def detect(self, asset: str, score: OpportunityScore,
               sources: Sequence[EvidenceSource], signals: Sequence[Signal],
               now_ms: int) -> Optional[Opportunity]:
        """
        Record a detection if the score reaches the threshold.

        Returns:
            The new or updated opportunity, or None below threshold
        """
        if score.overall < self.params.detection_threshold:
            return None

        window = window_bucket(now_ms, self.params.evaluation_window_ms)
        sources = tuple(sources)
        signals = tuple(signals)

        with self._lock:
            existing_id = self._by_window.get((asset, window))
            existing = self._by_id.get(existing_id) if existing_id else None

            if existing is not None and existing.status is not OpportunityStatus.EXPIRED:
                updated = replace(
                    existing,
                    status=OpportunityStatus.TRACKING,
                    score=score,
                    sources=sources,
                    signals=signals,
                    last_updated=now_ms,
                    risks=describe_risks(sources, signals),
                )
                self._by_id[updated.id] = updated
                log_opportunity_transition(
                    logger, updated.id, asset,
                    existing.status.value, updated.status.value, score.overall
                )
                return updated

            opportunity_id = generate_opportunity_id(asset, sources, now_ms, window)
            if opportunity_id in self._by_id:
                # the window's previous opportunity expired; keep ids unique
                opportunity_id = f"{opportunity_id}_{now_ms}"

            opportunity = Opportunity(
                id=opportunity_id,
                asset=asset,
                created_at=now_ms,
                sources=sources,
                score=score,
                signals=signals,
                status=OpportunityStatus.NEW,
                last_updated=now_ms,
                window=window,
                summary=(
                    f"Found potential opportunity in {asset} with overall score "
                    f"{score.overall:.1f} (social {score.social:.1f}, technical {score.technical:.1f})"
                ),
                risks=describe_risks(sources, signals),
            )
            self._by_id[opportunity.id] = opportunity
            self._by_window[(asset, window)] = opportunity.id

        log_opportunity_transition(
            logger, opportunity.id, asset, None, opportunity.status.value, score.overall
        )
        return opportunity

    def expire(self, now_ms: int, retention_ms: Optional[int] = None) -> list[Opportunity]:
        """
        Expire opportunities not updated within the retention window.

        Returns:
            Opportunities that moved to EXPIRED on this call
        """
        retention_ms = self.params.retention_window_ms if retention_ms is None else retention_ms
        cutoff = now_ms - retention_ms
        expired = []

        with self._lock:
            for opportunity in list(self._by_id.values()):
                if opportunity.status is OpportunityStatus.EXPIRED:
                    continue
                if opportunity.last_updated < cutoff:
                    updated = replace(opportunity, status=OpportunityStatus.EXPIRED, last_updated=now_ms)
                    self._by_id[updated.id] = updated
                    expired.append((opportunity.status, updated))

        for previous, opportunity in expired:
            log_opportunity_transition(
                logger, opportunity.id, opportunity.asset,
                previous.value, opportunity.status.value, opportunity.score.overall
            )
        return [opportunity for _, opportunity in expired]

    def get(self, opportunity_id: str) -> Optional[Opportunity]:
        with self._lock:
            return self._by_id.get(opportunity_id)

    def active(self, asset: Optional[str] = None) -> list[Opportunity]:
        """Non-expired opportunities, optionally for one asset, oldest first"""
        with self._lock:
            found = [
                o for o in self._by_id.values()
                if o.status is not OpportunityStatus.EXPIRED and (asset is None or o.asset == asset)
            ]
        return sorted(found, key=lambda o: o.created_at)

    def prune(self) -> int:
        """Forget expired opportunities; returns how many were dropped"""
        with self._lock:
            stale = [oid for oid, o in self._by_id.items() if o.status is OpportunityStatus.EXPIRED]
            for oid in stale:
                opportunity = self._by_id.pop(oid)
                key = (opportunity.asset, opportunity.window)
                if self._by_window.get(key) == oid:
                    del self._by_window[key]
        return len(stale)

    def __len__(self) -> int:
        with self._lock:
            return len(self._by_id)
