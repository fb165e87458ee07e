"""
Evidence source models and the fusion table.

Evidence origins form a closed set. Each origin maps to exactly one score
component in FUSION_TABLE; adding an origin without a table entry fails at
import time.
"""

import math
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from ..errors import MalformedDataError
from ..utils.time import is_within


class EvidenceOrigin(str, Enum):
    SOCIAL = "SOCIAL"
    TECHNICAL = "TECHNICAL"


class ScoreComponent(str, Enum):
    SOCIAL = "social"
    TECHNICAL = "technical"


@dataclass(frozen=True)
class FusionRule:
    """Where an origin's evidence lands and how much it counts."""
    component: ScoreComponent
    weight: float = 1.0


FUSION_TABLE: dict[EvidenceOrigin, FusionRule] = {
    EvidenceOrigin.SOCIAL: FusionRule(ScoreComponent.SOCIAL, weight=1.0),
    EvidenceOrigin.TECHNICAL: FusionRule(ScoreComponent.TECHNICAL, weight=1.0),
}

_unmapped = set(EvidenceOrigin) - set(FUSION_TABLE)
if _unmapped:
    raise TypeError(f"Evidence origins without a fusion rule: {sorted(o.value for o in _unmapped)}")


@dataclass(frozen=True)
class SocialPayload:
    """Content of a social-media post that produced evidence."""
    url: Optional[str]
    text: str
    engagement: int
    likes: int = 0
    retweets: int = 0
    replies: int = 0
    author: Optional[str] = None


@dataclass(frozen=True)
class EvidenceSource:
    """
    One unit of external corroboration for an asset.

    Owned by the caller; the scorer only reads it.
    """
    origin: EvidenceOrigin
    timestamp: int          # epoch ms
    confidence: float       # [0, 1]
    payload: Any = None

    def __post_init__(self):
        if not isinstance(self.origin, EvidenceOrigin):
            raise MalformedDataError(f"Unknown evidence origin: {self.origin!r}")
        if (isinstance(self.confidence, bool)
                or not isinstance(self.confidence, (int, float))
                or math.isnan(self.confidence)
                or not 0.0 <= self.confidence <= 1.0):
            raise MalformedDataError(
                f"Evidence confidence must be within [0, 1], got {self.confidence!r}",
                expected_format="float in [0, 1]"
            )

    @property
    def fusion(self) -> FusionRule:
        return FUSION_TABLE[self.origin]


def filter_window(sources: Iterable[EvidenceSource],
                  start_ms: Optional[int] = None,
                  end_ms: Optional[int] = None) -> list[EvidenceSource]:
    """Sources whose timestamp falls within [start_ms, end_ms]"""
    return [s for s in sources if is_within(s.timestamp, start_ms, end_ms)]


def by_component(sources: Iterable[EvidenceSource]) -> dict[ScoreComponent, list[EvidenceSource]]:
    """Group sources by the score component they feed"""
    grouped: dict[ScoreComponent, list[EvidenceSource]] = {c: [] for c in ScoreComponent}
    for source in sources:
        grouped[source.fusion.component].append(source)
    return grouped
