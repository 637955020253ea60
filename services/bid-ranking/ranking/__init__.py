# Bid Ranking Module
# Value-based ranking of supplier bids (price, delivery, warranty, quality)

from .models import (
    Bid,
    PreferenceVector,
    SubScores,
    ScoredBid,
    CompetitiveBid,
    RankingRequest,
    RankingResponse,
    CompetitiveRequest,
    Dimension,
    DEFAULT_PREFERENCES,
    SCORE_TIE_TOLERANCE,
)
from .engine import (
    ValueRankingEngine,
    normalize_dimension,
    competitive_view,
    leader,
    rank_bids,
)
from .preferences import load_preferences

__all__ = [
    "Bid",
    "PreferenceVector",
    "SubScores",
    "ScoredBid",
    "CompetitiveBid",
    "RankingRequest",
    "RankingResponse",
    "CompetitiveRequest",
    "Dimension",
    "DEFAULT_PREFERENCES",
    "SCORE_TIE_TOLERANCE",
    "ValueRankingEngine",
    "normalize_dimension",
    "competitive_view",
    "leader",
    "rank_bids",
    "load_preferences",
]
