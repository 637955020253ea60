"""
Value Ranking Engine
====================
Ranks competing bids of one tender by a buyer-weighted blend of
price, delivery time, warranty length and quality rating.

Key features:
1. Min-max normalization per dimension across the current bid set
2. Missing terms score 0 on that dimension (no rescaling of weights)
3. Identical values across all bids give a neutral 0.5
4. Near-equal scores (< SCORE_TIE_TOLERANCE) are decided by price, then input order
5. Pure: no I/O, no state kept between calls
"""

from functools import cmp_to_key
from typing import Dict, List, Optional, Sequence, Tuple

from .models import (
    Bid,
    CompetitiveBid,
    Dimension,
    PreferenceVector,
    ScoredBid,
    SubScores,
    RankingResponse,
    DEFAULT_PREFERENCES,
    SCORE_TIE_TOLERANCE,
)


DIMENSIONS: Tuple[Dimension, ...] = ("price", "delivery", "warranty", "quality")

# Dimensions where a smaller value is a better offer
LOWER_IS_BETTER = {"price", "delivery"}

NEUTRAL_SCORE = 0.5

# Re-ranking an already scored list keeps only the plain bid fields
BID_FIELDS = set(Bid.model_fields)


def normalize_dimension(bids: Sequence[Bid], dimension: Dimension) -> List[float]:
    """
    Normalized 0-1 score of every bid on one dimension, in input order.

    Example for delivery (lower is better), values [5, 10, None]:
      min = 5, max = 10
      5 -> 1.0, 10 -> 0.0, None -> 0.0
    """
    values = [bid.dimension_value(dimension) for bid in bids]
    present = [v for v in values if v is not None]

    if not present:
        return [0.0] * len(bids)

    min_v, max_v = min(present), max(present)
    spread = max_v - min_v

    scores = []
    for v in values:
        if v is None:
            scores.append(0.0)
        elif spread == 0:
            scores.append(NEUTRAL_SCORE)
        elif dimension in LOWER_IS_BETTER:
            scores.append((max_v - v) / spread)
        else:
            scores.append((v - min_v) / spread)
    return scores


class ValueRankingEngine:
    """
    Value-based ranking of supplier bids.

    Composite score = weighted mean of the four normalized dimension scores,
    with the buyer's priorities as raw weights:

        (price*pP + delivery*pD + warranty*pW + quality*pQ) / (pP + pD + pW + pQ)

    The engine keeps no state between calls - the same (bids, preferences)
    always produce the same ranking.
    """

    def __init__(self, preferences: Optional[PreferenceVector] = None):
        self.preferences = preferences or DEFAULT_PREFERENCES

    def rank(
        self,
        bids: Sequence[Bid],
        preferences: Optional[PreferenceVector] = None,
    ) -> List[ScoredBid]:
        """Score all bids and return them ordered by rank (1 = best value)"""
        prefs = preferences or self.preferences
        if not bids:
            return []

        # Step 1: Normalize each dimension once over the full bid set
        normalized: Dict[Dimension, List[float]] = {
            dimension: normalize_dimension(bids, dimension) for dimension in DIMENSIONS
        }

        # Step 2: Composite score per bid
        entries = []
        for index, bid in enumerate(bids):
            sub_scores = SubScores(**{d: normalized[d][index] for d in DIMENSIONS})
            score = self._composite_score(sub_scores, prefs)
            entries.append((index, bid, sub_scores, score))

        # Step 3: Order - score desc, then price asc, then input position
        entries.sort(key=cmp_to_key(self._compare_entries))

        # Step 4: Dense 1-based ranks
        return [
            ScoredBid(
                **bid.model_dump(include=BID_FIELDS),
                score=score,
                rank=position + 1,
                sub_scores=sub_scores,
                missing_dimensions=[d for d in DIMENSIONS if not bid.has_dimension(d)],
            )
            for position, (_, bid, sub_scores, score) in enumerate(entries)
        ]

    def _composite_score(self, sub_scores: SubScores, prefs: PreferenceVector) -> float:
        """Weighted mean of dimension scores, clamped to 0-1"""
        total_weight = prefs.total_priority
        if total_weight == 0:
            return 0.0

        weighted = (
            sub_scores.price * prefs.price_priority
            + sub_scores.delivery * prefs.delivery_priority
            + sub_scores.warranty * prefs.warranty_priority
            + sub_scores.quality * prefs.quality_priority
        )
        return min(1.0, max(0.0, weighted / total_weight))

    @staticmethod
    def _compare_entries(a, b) -> int:
        index_a, bid_a, _, score_a = a
        index_b, bid_b, _, score_b = b

        if abs(score_a - score_b) >= SCORE_TIE_TOLERANCE:
            return -1 if score_a > score_b else 1
        if bid_a.price != bid_b.price:
            return -1 if bid_a.price < bid_b.price else 1
        return index_a - index_b


def leader(ranked: Sequence[ScoredBid]) -> Optional[ScoredBid]:
    """Current award candidate (rank 1), or None when there are no bids"""
    for bid in ranked:
        if bid.rank == 1:
            return bid
    return None


def competitive_view(ranked: Sequence[ScoredBid], supplier_id: str) -> List[CompetitiveBid]:
    """
    Anonymized leaderboard for one invited supplier.
    Only price, rank and score are exposed; the supplier sees which entry is theirs.
    """
    return [
        CompetitiveBid(
            price=bid.price,
            rank=bid.rank,
            score=bid.score,
            is_yours=bid.supplier_id == supplier_id,
        )
        for bid in ranked
    ]


def rank_bids(
    bids: Sequence[Bid],
    preferences: Optional[PreferenceVector] = None,
) -> RankingResponse:
    """
    Rank bids of one tender with given preferences.

    Example:
        from ranking.engine import rank_bids
        from ranking.models import Bid

        bids = [
            Bid(id="b1", supplier_id="s1", price=100, delivery_days=5, warranty_months=12, quality_score=4),
            Bid(id="b2", supplier_id="s2", price=90, delivery_days=10, warranty_months=6, quality_score=3),
        ]

        response = rank_bids(bids)
        for result in response.results:
            print(f"{result.rank}. {result.id}: {result.score:.3f}")
    """
    prefs = preferences or DEFAULT_PREFERENCES
    results = ValueRankingEngine(prefs).rank(bids)
    top = leader(results)

    return RankingResponse(
        results=results,
        preferences_used=prefs,
        tie_tolerance=SCORE_TIE_TOLERANCE,
        leader_id=top.id if top else None,
        comparison_available=len(results) >= 2,
    )
