"""
Bid Ranking Models
==================
Pydantic models for value-based bid ranking.

Key principles:
1. Optional terms (delivery, warranty, quality) use explicit absence (None),
   never a sentinel zero - "0 months warranty" is a real offer
2. Min-max normalization across the bid set of ONE tender
3. Priorities are raw multipliers (not range-validated)
4. Output is derived on every call and never stored as authoritative state

Field names are snake_case; camelCase aliases match the records kept by the
bid store and the tender configuration store.
"""

from pydantic import BaseModel, Field
from typing import Any, Dict, List, Optional, Literal, Union


Dimension = Literal["price", "delivery", "warranty", "quality"]

# Scores closer than this are treated as equal and fall through to price
SCORE_TIE_TOLERANCE = 0.001


class PreferenceVector(BaseModel):
    """
    Buyer-configured importance of each dimension.
    Nominal range is 1-5 (Low / Medium / High on the tender form).
    """
    model_config = {"populate_by_name": True, "frozen": True}

    price_priority: int = Field(default=4, alias="pricePriority", description="Weight of price")
    delivery_priority: int = Field(default=3, alias="deliveryPriority", description="Weight of delivery time")
    warranty_priority: int = Field(default=3, alias="warrantyPriority", description="Weight of warranty length")
    quality_priority: int = Field(default=3, alias="qualityPriority", description="Weight of quality rating")

    @property
    def total_priority(self) -> int:
        return (
            self.price_priority
            + self.delivery_priority
            + self.warranty_priority
            + self.quality_priority
        )


DEFAULT_PREFERENCES = PreferenceVector()


class Bid(BaseModel):
    """One supplier's current offer against a tender"""
    model_config = {"populate_by_name": True}

    id: str = Field(..., description="Unique bid identifier")
    supplier_id: str = Field(..., alias="supplierId", description="Submitting supplier")
    price: float = Field(..., gt=0, allow_inf_nan=False, description="Offered price")

    # Optional terms - None means "not specified"
    delivery_days: Optional[int] = Field(default=None, alias="deliveryDays", description="Delivery time in days")
    warranty_months: Optional[int] = Field(default=None, alias="warrantyMonths", description="Warranty length in months")
    quality_score: Optional[int] = Field(default=None, alias="qualityScore", description="Quality rating (1-5)")

    def has_dimension(self, dimension: Dimension) -> bool:
        """Whether this bid supplies a usable value for the dimension"""
        return self.dimension_value(dimension) is not None

    def dimension_value(self, dimension: Dimension) -> Optional[float]:
        """
        Value used for normalization, or None when the dimension does not apply.

        Delivery and quality only count when positive. Warranty counts from 0
        months up. Price is always present.
        """
        if dimension == "price":
            return self.price
        if dimension == "delivery":
            if self.delivery_days is not None and self.delivery_days > 0:
                return self.delivery_days
            return None
        if dimension == "warranty":
            if self.warranty_months is not None and self.warranty_months >= 0:
                return self.warranty_months
            return None
        if dimension == "quality":
            if self.quality_score is not None and self.quality_score > 0:
                return self.quality_score
            return None
        return None


class SubScores(BaseModel):
    """Normalized per-dimension scores (for auditability)"""
    price: float = Field(default=0.0, ge=0, le=1)
    delivery: float = Field(default=0.0, ge=0, le=1)
    warranty: float = Field(default=0.0, ge=0, le=1)
    quality: float = Field(default=0.0, ge=0, le=1)


class ScoredBid(Bid):
    """Bid with its composite value score and final leaderboard position"""
    score: float = Field(ge=0, le=1)
    rank: int = Field(ge=1)
    sub_scores: SubScores = Field(default_factory=SubScores, alias="subScores")
    missing_dimensions: List[Dimension] = Field(default_factory=list, alias="missingDimensions")


class CompetitiveBid(BaseModel):
    """Anonymized leaderboard entry shown to an invited supplier"""
    model_config = {"populate_by_name": True}

    price: float
    rank: int
    score: float
    is_yours: bool = Field(default=False, alias="isYours")


class RankingRequest(BaseModel):
    """Request to rank the current bids of one tender"""
    bids: List[Bid] = Field(default_factory=list)
    preferences: Optional[PreferenceVector] = None


class RankingResponse(BaseModel):
    """Ranked leaderboard with the parameters used to build it"""
    model_config = {"populate_by_name": True}

    results: List[ScoredBid]
    preferences_used: PreferenceVector = Field(alias="preferencesUsed")
    tie_tolerance: float = Field(default=SCORE_TIE_TOLERANCE, alias="tieTolerance")
    leader_id: Optional[str] = Field(default=None, alias="leaderId")
    comparison_available: bool = Field(
        default=False,
        alias="comparisonAvailable",
        description="True if 2+ bids available for comparison"
    )


class CompetitiveRequest(BaseModel):
    """
    Supplier-facing leaderboard request.

    `preferences` is the raw value held by the tender configuration store
    (JSON string, object, or nothing) and is resolved with defaults.
    """
    model_config = {"populate_by_name": True}

    bids: List[Bid] = Field(default_factory=list)
    supplier_id: str = Field(..., alias="supplierId")
    preferences: Optional[Union[str, Dict[str, Any]]] = None
