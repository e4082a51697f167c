"""
API Endpoints for Content Outlines

Handles:
1. Create, update, list and fetch outlines
2. Generate an outline from a content-type template
3. List and generate optimization suggestions for an outline
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from contentplanner import services
from contentplanner.database import get_db
from contentplanner.schemas import (
    GenerateOutlineRequest,
    OutlineCreate,
    OutlineOut,
    OutlineUpdate,
    SuggestionOut,
)

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/outlines",
    tags=["Content Outlines"],
)


# =============================================================================
# OUTLINES
# =============================================================================

@router.post("", response_model=OutlineOut, status_code=201)
def create_outline(
    request: OutlineCreate,
    db: Session = Depends(get_db),
):
    return services.create_outline(db, request)


@router.post("/generate", response_model=OutlineOut, status_code=201)
def generate_outline(
    request: GenerateOutlineRequest,
    db: Session = Depends(get_db),
):
    """
    Generate and store an outline for a keyword.

    content_type must be one of: blog_post, article, guide, tutorial, review.
    """
    return services.generate_outline(db, request.target_keyword, request.content_type)


@router.get("", response_model=List[OutlineOut])
def list_outlines(db: Session = Depends(get_db)):
    """All outlines, newest first."""
    return services.list_outlines(db)


@router.get("/{outline_id}", response_model=OutlineOut)
def get_outline(
    outline_id: int,
    db: Session = Depends(get_db),
):
    outline = services.get_outline(db, outline_id)
    if outline is None:
        raise HTTPException(status_code=404, detail=f"Content outline {outline_id} not found")
    return outline


@router.patch("/{outline_id}", response_model=OutlineOut)
def update_outline(
    outline_id: int,
    request: OutlineUpdate,
    db: Session = Depends(get_db),
):
    """
    Update outline fields.

    Only fields present in the request body change; updated_at is always
    refreshed.
    """
    return services.update_outline(db, outline_id, request)


# =============================================================================
# SUGGESTIONS FOR AN OUTLINE
# =============================================================================

@router.get("/{outline_id}/suggestions", response_model=List[SuggestionOut])
def list_suggestions(
    outline_id: int,
    db: Session = Depends(get_db),
):
    return services.list_suggestions(db, outline_id)


@router.post("/{outline_id}/suggestions/generate", response_model=List[SuggestionOut], status_code=201)
def generate_suggestions(
    outline_id: int,
    db: Session = Depends(get_db),
):
    """Run the on-page rule engine against the outline and store the results."""
    return services.generate_suggestions(db, outline_id)
