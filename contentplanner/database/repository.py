"""
Repository Layer - Clean Interface for Data Operations

Provides simple functions to store and retrieve planning entities.
Handles all SQLAlchemy complexity internally.

Every function takes the caller's Session; nothing here commits. Inserts
run inside a SAVEPOINT so a rejected row leaves the outer transaction
usable. Storage failures surface as PersistenceError (ConflictError for
constraint violations) with the SQLAlchemy exception chained.
"""

import logging
from datetime import datetime
from functools import wraps
from typing import List, Dict, Any, Optional, Iterable

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from contentplanner.errors import ConflictError, PersistenceError
from .models import (
    Keyword, Competitor, ContentOutline, OptimizationSuggestion,
)

logger = logging.getLogger(__name__)

SCORE_PLACES = 2


def _storage_errors(func):
    """Translate SQLAlchemy failures into the planner's error taxonomy."""
    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except IntegrityError as e:
            logger.warning(f"{func.__name__} rejected by constraint: {e.orig}")
            raise ConflictError(f"{func.__name__}: constraint violation ({e.orig})") from e
        except SQLAlchemyError as e:
            logger.error(f"{func.__name__} failed: {e}")
            raise PersistenceError(f"{func.__name__} failed: {e}") from e
    return wrapper


def _round_scores(values: Dict[str, Any], fields: Iterable[str]) -> Dict[str, Any]:
    """Round fixed-point columns so what we write is what we read back."""
    rounded = dict(values)
    for name in fields:
        if rounded.get(name) is not None:
            rounded[name] = round(float(rounded[name]), SCORE_PLACES)
    return rounded


def _insert_all(db: Session, rows: List[Any]) -> List[Any]:
    with db.begin_nested():
        db.add_all(rows)
    return rows


# =============================================================================
# KEYWORDS
# =============================================================================

@_storage_errors
def get_keyword_by_text(db: Session, keyword: str) -> Optional[Keyword]:
    """Exact-match lookup on the keyword business key."""
    return db.execute(
        select(Keyword).where(Keyword.keyword == keyword)
    ).scalar_one_or_none()


@_storage_errors
def insert_keyword(db: Session, values: Dict[str, Any]) -> Keyword:
    """Insert one keyword row and return it with its id."""
    row = Keyword(**_round_scores(values, ("difficulty", "cpc")))
    _insert_all(db, [row])
    logger.debug(f"Stored keyword {row.keyword!r} as {row.id}")
    return row


@_storage_errors
def list_keywords(db: Session) -> List[Keyword]:
    """All keywords, newest first."""
    return list(db.execute(
        select(Keyword).order_by(Keyword.created_at.desc(), Keyword.id.desc())
    ).scalars())


# =============================================================================
# COMPETITORS
# =============================================================================

COMPETITOR_SCORES = ("domain_authority", "page_authority", "content_quality_score")


@_storage_errors
def get_competitors_for_keyword(
    db: Session,
    target_keyword: str,
    limit: Optional[int] = None,
) -> List[Competitor]:
    """Competitors for a keyword, best ranking first."""
    query = (
        select(Competitor)
        .where(Competitor.target_keyword == target_keyword)
        .order_by(Competitor.ranking_position.asc(), Competitor.id.asc())
    )
    if limit is not None:
        query = query.limit(limit)
    return list(db.execute(query).scalars())


@_storage_errors
def insert_competitors(db: Session, records: List[Dict[str, Any]]) -> List[Competitor]:
    """Insert a batch of competitors atomically (all or none)."""
    rows = [Competitor(**_round_scores(record, COMPETITOR_SCORES)) for record in records]
    _insert_all(db, rows)
    logger.debug(f"Stored {len(rows)} competitors")
    return rows


@_storage_errors
def list_competitors(db: Session) -> List[Competitor]:
    """All competitors, most recently analyzed first."""
    return list(db.execute(
        select(Competitor).order_by(Competitor.analyzed_at.desc(), Competitor.id.desc())
    ).scalars())


# =============================================================================
# CONTENT OUTLINES
# =============================================================================

@_storage_errors
def get_outline(db: Session, outline_id: int) -> Optional[ContentOutline]:
    """Outline by primary key, or None."""
    return db.get(ContentOutline, outline_id)


@_storage_errors
def insert_outline(db: Session, values: Dict[str, Any]) -> ContentOutline:
    """Insert one outline; created_at and updated_at start equal."""
    now = datetime.utcnow()
    row = ContentOutline(created_at=now, updated_at=now, **values)
    _insert_all(db, [row])
    logger.debug(f"Stored outline {row.id} for {row.target_keyword!r}")
    return row


@_storage_errors
def update_outline(
    db: Session,
    outline_id: int,
    changes: Dict[str, Any],
) -> Optional[ContentOutline]:
    """
    Apply a partial update to an outline.

    updated_at is refreshed even when `changes` is empty.
    Returns None if the outline does not exist.
    """
    row = db.get(ContentOutline, outline_id)
    if row is None:
        return None

    for name, value in changes.items():
        setattr(row, name, value)
    row.updated_at = max(datetime.utcnow(), row.created_at)
    db.flush()
    return row


@_storage_errors
def list_outlines(db: Session) -> List[ContentOutline]:
    """All outlines, newest first."""
    return list(db.execute(
        select(ContentOutline).order_by(ContentOutline.created_at.desc(), ContentOutline.id.desc())
    ).scalars())


# =============================================================================
# OPTIMIZATION SUGGESTIONS
# =============================================================================

@_storage_errors
def insert_suggestions(db: Session, records: List[Dict[str, Any]]) -> List[OptimizationSuggestion]:
    """Insert suggestions in the given order and return them with ids."""
    rows = [OptimizationSuggestion(**_round_scores(record, ("impact_score",))) for record in records]
    _insert_all(db, rows)
    return rows


@_storage_errors
def list_suggestions(db: Session, outline_id: int) -> List[OptimizationSuggestion]:
    """Suggestions for one outline in creation order."""
    return list(db.execute(
        select(OptimizationSuggestion)
        .where(OptimizationSuggestion.content_outline_id == outline_id)
        .order_by(OptimizationSuggestion.id.asc())
    ).scalars())


@_storage_errors
def set_suggestion_implemented(
    db: Session,
    suggestion_id: int,
    is_implemented: bool,
) -> Optional[OptimizationSuggestion]:
    """Set the implemented flag; None if the suggestion does not exist."""
    row = db.get(OptimizationSuggestion, suggestion_id)
    if row is None:
        return None
    row.is_implemented = is_implemented
    db.flush()
    return row
