"""
API Endpoints for Competitor Analysis

Handles:
1. Analyze competitors for a keyword (cached after the first call)
2. Save a competitor page manually
3. List stored competitors
"""

import logging
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from contentplanner import services
from contentplanner.database import get_db
from contentplanner.schemas import CompetitorAnalysisRequest, CompetitorCreate, CompetitorOut

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/competitors",
    tags=["Competitors"],
)


@router.post("/analyze", response_model=List[CompetitorOut])
def analyze_competitors(
    request: CompetitorAnalysisRequest,
    db: Session = Depends(get_db),
):
    """
    Competitors ranking for a keyword, best position first.

    The first request for a keyword generates and stores up to 10 listings;
    later requests return the stored rows unchanged.
    """
    return services.analyze_competitors(db, request)


@router.post("", response_model=CompetitorOut, status_code=201)
def create_competitor(
    request: CompetitorCreate,
    db: Session = Depends(get_db),
):
    return services.create_competitor(db, request)


@router.get("", response_model=List[CompetitorOut])
def list_competitors(db: Session = Depends(get_db)):
    """All competitors, most recently analyzed first."""
    return services.list_competitors(db)
