"""
Competitor Mock Generator

Builds a ranked list of synthetic competing pages for a target keyword.
Authority and quality fall with rank, with a shared ±5 noise band per
page so the ordering looks like a real SERP rather than a staircase:

    base_authority        = max(95 - 8·rank, 30)
    domain_authority      = round(max(base_authority + v, 10))
    page_authority        = round(max(base_authority - 5 + v, 5))
    content_quality_score = round(max(90 - 3·rank + v, 40))
    backlinks             = randint[0, 1000) + 100·(11 - rank)
"""

import math
import random
import re
from dataclasses import dataclass, asdict
from typing import List, Optional, Tuple

from .helpers import resolve_rng


REFERENCE_DOMAINS: Tuple[str, ...] = (
    "wikipedia.org",
    "hubspot.com",
    "forbes.com",
    "moz.com",
    "searchenginejournal.com",
    "neilpatel.com",
    "backlinko.com",
    "semrush.com",
    "ahrefs.com",
    "contentmarketinginstitute.com",
)

MAX_MOCK_COMPETITORS = len(REFERENCE_DOMAINS)

AUTHORITY_NOISE = 5
WORD_COUNT_RANGE = (1500, 3500)  # [low, high)
BACKLINK_NOISE_RANGE = (0, 1000)  # [low, high)

META_DESCRIPTION_TEMPLATE = (
    "Learn everything about {keyword} with this comprehensive guide from "
    "{label}. Expert tips, examples and best practices."
)


@dataclass
class CompetitorListing:
    """One synthetic SERP entry."""
    domain: str
    title: str
    url: str
    meta_description: str
    word_count: int
    domain_authority: float
    page_authority: float
    backlinks: int
    ranking_position: int
    target_keyword: str
    content_quality_score: float

    def to_record(self) -> dict:
        return asdict(self)


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def slugify(text: str) -> str:
    """Lowercase, non-alphanumeric runs collapsed to single dashes."""
    return re.sub(r"[^a-z0-9]+", "-", text.lower()).strip("-")


def domain_label(domain: str) -> str:
    """Display name for a domain: first DNS label, capitalized."""
    return domain.split(".")[0].capitalize()


def build_listing(
    target_keyword: str,
    domain: str,
    rank: int,
    rng: random.Random,
) -> CompetitorListing:
    """Synthesize the listing at a given 1-based rank."""
    base_authority = max(95 - rank * 8, 30)
    variance = rng.uniform(-AUTHORITY_NOISE, AUTHORITY_NOISE)
    label = domain_label(domain)

    return CompetitorListing(
        domain=domain,
        title=f"{target_keyword} - Complete Guide | {label}",
        url=f"https://{domain}/{slugify(target_keyword)}",
        meta_description=META_DESCRIPTION_TEMPLATE.format(keyword=target_keyword, label=label),
        word_count=rng.randrange(*WORD_COUNT_RANGE),
        domain_authority=_round_half_up(max(base_authority + variance, 10)),
        page_authority=_round_half_up(max(base_authority - 5 + variance, 5)),
        backlinks=rng.randrange(*BACKLINK_NOISE_RANGE) + 100 * (11 - rank),
        ranking_position=rank,
        target_keyword=target_keyword,
        content_quality_score=_round_half_up(max(90 - rank * 3 + variance, 40)),
    )


def generate_competitors(
    target_keyword: str,
    count: int,
    rng: Optional[random.Random] = None,
) -> List[CompetitorListing]:
    """
    Generate up to min(count, 10) listings ranked 1..N.

    Args:
        target_keyword: Keyword the pages compete for
        count: Desired number of listings
        rng: Random source (inject a seeded one for reproducible output)
    """
    rng = resolve_rng(rng)
    count = max(0, min(count, MAX_MOCK_COMPETITORS))
    return [
        build_listing(target_keyword, domain, rank, rng)
        for rank, domain in enumerate(REFERENCE_DOMAINS[:count], start=1)
    ]
