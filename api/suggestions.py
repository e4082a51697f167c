"""
API Endpoints for Optimization Suggestions

Handles:
1. Create a suggestion manually
2. Mark a suggestion as implemented (or not)
"""

import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from contentplanner import services
from contentplanner.database import get_db
from contentplanner.schemas import SuggestionCreate, SuggestionOut, SuggestionStatusUpdate

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/suggestions",
    tags=["Optimization Suggestions"],
)


@router.post("", response_model=SuggestionOut, status_code=201)
def create_suggestion(
    request: SuggestionCreate,
    db: Session = Depends(get_db),
):
    """Attach a suggestion to an existing outline (404 if the outline is missing)."""
    return services.create_suggestion(db, request)


@router.patch("/{suggestion_id}", response_model=SuggestionOut)
def update_suggestion_status(
    suggestion_id: int,
    request: SuggestionStatusUpdate,
    db: Session = Depends(get_db),
):
    suggestion = services.set_suggestion_implemented(db, suggestion_id, request.is_implemented)
    if suggestion is None:
        raise HTTPException(status_code=404, detail=f"Suggestion {suggestion_id} not found")
    return suggestion
