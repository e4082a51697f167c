"""
Optimization Suggestion Service

Runs the on-page rule engine against a stored outline and tracks which
suggestions have been implemented.
"""

import logging
from typing import Any, List, Optional

from sqlalchemy.orm import Session

from contentplanner.database import repository
from contentplanner.database.models import OptimizationSuggestion, Priority
from contentplanner.errors import NotFoundError
from contentplanner.generators import evaluate_outline
from contentplanner.schemas import SuggestionCreate
from .common import coerce_request

logger = logging.getLogger(__name__)


def _require_outline(db: Session, outline_id: int):
    outline = repository.get_outline(db, outline_id)
    if outline is None:
        logger.info(f"Outline {outline_id} not found")
        raise NotFoundError("Content outline", outline_id)
    return outline


def create_suggestion(db: Session, data: Any) -> OptimizationSuggestion:
    """
    Insert a hand-written suggestion.

    Raises:
        NotFoundError: the referenced outline does not exist
    """
    data = coerce_request(SuggestionCreate, data)
    _require_outline(db, data.content_outline_id)
    return repository.insert_suggestions(db, [data.model_dump()])[0]


def list_suggestions(db: Session, outline_id: int) -> List[OptimizationSuggestion]:
    """An outline's suggestions in creation order (empty if none)."""
    return repository.list_suggestions(db, outline_id)


def generate_suggestions(db: Session, outline_id: int) -> List[OptimizationSuggestion]:
    """
    Evaluate an outline against every rule group and store the results.

    Args:
        db: Database session
        outline_id: Outline to evaluate

    Returns:
        Stored suggestions in evaluation order

    Raises:
        NotFoundError: no outline with this id
    """
    outline = _require_outline(db, outline_id)
    drafts = evaluate_outline(outline)
    rows = repository.insert_suggestions(db, [draft.to_record(outline.id) for draft in drafts])

    high = sum(1 for draft in drafts if draft.priority == Priority.HIGH)
    logger.info(f"Outline {outline_id}: {len(rows)} suggestions ({high} high priority)")
    return rows


def set_suggestion_implemented(
    db: Session,
    suggestion_id: int,
    is_implemented: bool,
) -> Optional[OptimizationSuggestion]:
    """Flip the implemented flag. Unknown ids return None."""
    row = repository.set_suggestion_implemented(db, suggestion_id, is_implemented)
    if row is None:
        logger.info(f"Suggestion {suggestion_id} not found")
    return row
