"""
Opportunity scoring module.

Fuses social evidence, technical signals and market liquidity into bounded
social/technical/overall scores, and tracks detected opportunities through
their NEW -> TRACKING -> EXPIRED lifecycle.
"""

from .evidence import EvidenceOrigin, EvidenceSource
from .opportunities import Opportunity, OpportunityStatus, OpportunityTracker
from .scorer import OpportunityScore, OpportunityScorer

__all__ = [
    "EvidenceOrigin",
    "EvidenceSource",
    "Opportunity",
    "OpportunityStatus",
    "OpportunityTracker",
    "OpportunityScore",
    "OpportunityScorer",
]
