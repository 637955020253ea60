"""
Bid Ranking Service
Ranks supplier bids of a live tender by value (price, delivery, warranty, quality).
Stateless: every request carries the full current bid set of one tender.
"""

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from typing import List
import logging
import os

from ranking import (
    ValueRankingEngine,
    RankingRequest,
    RankingResponse,
    CompetitiveRequest,
    CompetitiveBid,
    PreferenceVector,
    DEFAULT_PREFERENCES,
    competitive_view,
    load_preferences,
    rank_bids,
)

SERVICE_VERSION = "1.0.0"

HOST = os.getenv("BID_RANKING_HOST", "0.0.0.0")
PORT = int(os.getenv("BID_RANKING_PORT", "8013"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Setup logging
logging.basicConfig(level=LOG_LEVEL)
logger = logging.getLogger(__name__)

# Prometheus metrics
from prometheus_fastapi_instrumentator import Instrumentator

app = FastAPI(
    title="Bid Ranking Service",
    description="Value-based ranking of supplier bids for live tenders",
    version=SERVICE_VERSION
)

# Initialize Prometheus metrics
Instrumentator().instrument(app).expose(app)

# CORS configuration
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy", "service": "bid-ranking", "version": SERVICE_VERSION}


@app.post("/ranking/analyze", response_model=RankingResponse)
async def analyze_ranking(request: RankingRequest):
    """
    Value ranking for the buyer's monitor view.

    Each dimension is min-max normalized across the submitted bids,
    then combined with the tender's priorities into a 0-1 score.
    Near-equal scores are ordered by price, then by submission order.
    """
    try:
        response = rank_bids(request.bids, request.preferences)
        logger.info(f"Ranked {len(response.results)} bids, leader={response.leader_id}")
        return response
    except Exception as e:
        logger.error(f"Ranking failed: {type(e).__name__}: {str(e)}")
        raise HTTPException(status_code=500, detail=str(e))


@app.post("/ranking/competitive", response_model=List[CompetitiveBid])
async def competitive_ranking(request: CompetitiveRequest):
    """
    Anonymized leaderboard for an invited supplier.

    `preferences` is passed as stored with the tender (JSON string or object);
    unusable values fall back to the defaults.
    """
    try:
        preferences = load_preferences(request.preferences)
        ranked = ValueRankingEngine(preferences).rank(request.bids)
        logger.info(f"Competitive view for supplier {request.supplier_id}: {len(ranked)} bids")
        return competitive_view(ranked, request.supplier_id)
    except Exception as e:
        logger.error(f"Competitive ranking failed: {type(e).__name__}: {str(e)}")
        raise HTTPException(status_code=500, detail=str(e))


@app.get("/ranking/preferences/default", response_model=PreferenceVector)
async def get_default_preferences():
    """Default priorities applied when a tender has none recorded"""
    return DEFAULT_PREFERENCES


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=HOST, port=PORT)
