"""
Content Outline Service

Manual outline CRUD plus template-driven generation.
"""

import logging
import random
from typing import Any, List, Optional

from sqlalchemy.orm import Session

from contentplanner.database import repository
from contentplanner.database.models import ContentOutline
from contentplanner.errors import NotFoundError
from contentplanner.generators import generate_outline as draft_outline
from contentplanner.generators.helpers import enum_value
from contentplanner.schemas import GenerateOutlineRequest, OutlineCreate, OutlineUpdate
from contentplanner.utils.config import make_random
from .common import coerce_request

logger = logging.getLogger(__name__)


def create_outline(db: Session, data: Any) -> ContentOutline:
    """Insert a hand-written outline."""
    data = coerce_request(OutlineCreate, data)
    return repository.insert_outline(db, data.model_dump())


def update_outline(db: Session, outline_id: int, changes: Any) -> ContentOutline:
    """
    Apply a partial update. Only fields present in `changes` are written;
    updated_at is refreshed regardless.

    Raises:
        NotFoundError: no outline with this id
    """
    changes = coerce_request(OutlineUpdate, changes)
    row = repository.update_outline(db, outline_id, changes.changes())
    if row is None:
        logger.info(f"Outline {outline_id} not found for update")
        raise NotFoundError("Content outline", outline_id)
    return row


def get_outline(db: Session, outline_id: int) -> Optional[ContentOutline]:
    """Outline by id, or None."""
    row = repository.get_outline(db, outline_id)
    if row is None:
        logger.debug(f"Outline {outline_id} not found")
    return row


def list_outlines(db: Session) -> List[ContentOutline]:
    return repository.list_outlines(db)


def generate_outline(
    db: Session,
    target_keyword: str,
    content_type: Any,
    rng: Optional[random.Random] = None,
) -> ContentOutline:
    """
    Generate an outline from the content-type template and store it.

    Raises:
        ValidationError: empty keyword or unknown content type
    """
    request = coerce_request(GenerateOutlineRequest, {
        "target_keyword": target_keyword,
        "content_type": enum_value(content_type),
    })
    rng = rng if rng is not None else make_random()
    draft = draft_outline(request.target_keyword, request.content_type, rng=rng)
    row = repository.insert_outline(db, draft.to_record())
    logger.info(
        f"Generated {draft.content_type.value} outline {row.id} for {target_keyword!r} "
        f"({draft.word_count_target} words)"
    )
    return row
