"""
Competitor Analysis Service

Cache-aside over stored competitors: if any rows exist for the target
keyword they are returned as-is, otherwise a mock SERP is generated and
stored. Stored rows are never refreshed.
"""

import logging
import random
from typing import Any, List, Optional

from sqlalchemy.orm import Session

from contentplanner.database import repository
from contentplanner.database.models import Competitor
from contentplanner.errors import ConflictError, ValidationError
from contentplanner.generators import generate_competitors
from contentplanner.schemas import CompetitorAnalysisRequest, CompetitorCreate
from contentplanner.utils.config import make_random
from .common import coerce_request

logger = logging.getLogger(__name__)


def analyze_competitors(
    db: Session,
    request: Any,
    rng: Optional[random.Random] = None,
) -> List[Competitor]:
    """
    Return competitors for a keyword, generating them on first request.

    Args:
        db: Database session
        request: CompetitorAnalysisRequest (or equivalent dict)
        rng: Random source for the mock generator

    Returns:
        Competitor rows ordered by ranking position
    """
    request = coerce_request(CompetitorAnalysisRequest, request)
    keyword = request.target_keyword

    cached = repository.get_competitors_for_keyword(db, keyword, request.limit)
    if cached:
        logger.info(f"Competitor cache hit for {keyword!r}: {len(cached)} rows")
        return cached

    rng = rng if rng is not None else make_random()
    listings = generate_competitors(keyword, request.limit, rng=rng)
    logger.info(f"Competitor cache miss for {keyword!r}: generated {len(listings)} listings")

    try:
        return repository.insert_competitors(db, [listing.to_record() for listing in listings])
    except ConflictError:
        # A concurrent analysis stored its batch first
        logger.warning(f"Competitor batch for {keyword!r} lost an insert race, returning stored rows")
        return repository.get_competitors_for_keyword(db, keyword, request.limit)


def create_competitor(db: Session, data: Any) -> Competitor:
    """
    Save a competitor page.

    Raises:
        ValidationError: invalid input or the ranking slot is already taken
    """
    data = coerce_request(CompetitorCreate, data)
    try:
        return repository.insert_competitors(db, [data.model_dump()])[0]
    except ConflictError as e:
        raise ValidationError(
            f"Ranking position {data.ranking_position} for {data.target_keyword!r} is already stored",
            value=data.ranking_position,
        ) from e


def list_competitors(db: Session) -> List[Competitor]:
    """All stored competitors, most recently analyzed first."""
    return repository.list_competitors(db)
