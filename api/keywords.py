"""
API Endpoints for Keyword Research

Handles:
1. Research keywords around a seed (variants + synthesized metrics)
2. Save a keyword with known metrics
3. List stored keywords
"""

import logging
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from contentplanner import services
from contentplanner.database import get_db
from contentplanner.schemas import KeywordCreate, KeywordOut, KeywordResearchRequest

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/keywords",
    tags=["Keywords"],
)


@router.post("/research", response_model=List[KeywordOut])
def research_keywords(
    request: KeywordResearchRequest,
    db: Session = Depends(get_db),
):
    """
    Expand a seed keyword and return the variants that pass the
    search-volume and difficulty thresholds.

    Keywords already stored are returned as stored, so repeating a request
    adds no rows.
    """
    return services.research_keywords(db, request)


@router.post("", response_model=KeywordOut, status_code=201)
def create_keyword(
    request: KeywordCreate,
    db: Session = Depends(get_db),
):
    """Save a keyword. Duplicate keyword text is rejected with 422."""
    return services.create_keyword(db, request)


@router.get("", response_model=List[KeywordOut])
def list_keywords(db: Session = Depends(get_db)):
    """All keywords, newest first."""
    return services.list_keywords(db)
