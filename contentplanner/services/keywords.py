"""
Keyword Research Service

Expands a seed keyword, synthesizes metrics for each candidate, filters by
the caller's thresholds and stores new keywords. Existing keywords are
returned as stored (never re-synthesized), so repeating a request does not
add rows.
"""

import logging
import random
from typing import Any, List, Optional

from sqlalchemy.orm import Session

from contentplanner.database import repository
from contentplanner.database.models import Keyword
from contentplanner.errors import ConflictError, ValidationError
from contentplanner.generators import generate_variants, synthesize_metrics
from contentplanner.schemas import KeywordCreate, KeywordResearchRequest
from contentplanner.utils.config import make_random
from .common import coerce_request

logger = logging.getLogger(__name__)


def _passes_thresholds(search_volume: int, difficulty: float, request: KeywordResearchRequest) -> bool:
    return search_volume >= request.min_search_volume and difficulty <= request.max_difficulty


def research_keywords(
    db: Session,
    request: Any,
    rng: Optional[random.Random] = None,
) -> List[Keyword]:
    """
    Research keywords around a seed.

    Args:
        db: Database session
        request: KeywordResearchRequest (or equivalent dict)
        rng: Random source for metric synthesis

    Returns:
        Keyword rows in variant-generation order (may be empty)
    """
    request = coerce_request(KeywordResearchRequest, request)
    rng = rng if rng is not None else make_random()
    seed = request.seed_keyword

    results: List[Keyword] = []
    created = 0

    for candidate in generate_variants(seed, request.include_related):
        existing = repository.get_keyword_by_text(db, candidate)
        if existing is not None:
            if _passes_thresholds(existing.search_volume, existing.difficulty, request):
                results.append(existing)
            continue

        metrics = synthesize_metrics(candidate, seed=seed, rng=rng)
        if not _passes_thresholds(metrics.search_volume, metrics.difficulty, request):
            continue

        try:
            row = repository.insert_keyword(db, metrics.to_record())
            created += 1
        except ConflictError:
            # Another request stored this keyword first; use theirs
            row = repository.get_keyword_by_text(db, candidate)
            if row is None:
                raise
        results.append(row)

    logger.info(
        f"Keyword research for {seed!r}: {len(results)} keywords "
        f"({created} new, {len(results) - created} existing)"
    )
    return results


def create_keyword(db: Session, data: Any) -> Keyword:
    """
    Save a keyword with caller-supplied metrics.

    Raises:
        ValidationError: invalid input or the keyword already exists
    """
    data = coerce_request(KeywordCreate, data)
    try:
        return repository.insert_keyword(db, data.model_dump())
    except ConflictError as e:
        raise ValidationError(f"Keyword {data.keyword!r} already exists", value=data.keyword) from e


def list_keywords(db: Session) -> List[Keyword]:
    """All stored keywords, newest first."""
    return repository.list_keywords(db)
