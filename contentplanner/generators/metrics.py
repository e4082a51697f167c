"""
Keyword Metrics Synthesizer

Produces plausible SEO metrics for a keyword without calling any data
provider. The keyword is compared against a reference seed:

    search_volume = base × U(0.5, 1.0)
        base = 10000 for the seed itself, else randint[1000, 9000)

    difficulty = clamp(base + U(-20, 20), 5, 100)
        base = 30 for candidates longer than the seed (long-tail), else 60

    cpc = base + U(0, 2)
        base = 3.50 with commercial intent words, else 1.20

Competition is bucketed from difficulty, so the two always agree.
"""

import json
import logging
import random
from dataclasses import dataclass
from typing import Optional, Tuple

from contentplanner.database.models import Competition
from .helpers import resolve_rng

logger = logging.getLogger(__name__)


COMMERCIAL_INTENT_WORDS: Tuple[str, ...] = (
    "best", "buy", "price", "cost", "review", "comparison",
)

TREND_MONTHS: Tuple[str, ...] = ("Jan", "Feb", "Mar", "Apr", "May", "Jun")

SEED_VOLUME = 10000
VARIANT_VOLUME_RANGE = (1000, 9000)  # [low, high)
VOLUME_SCALE_RANGE = (0.5, 1.0)

LONG_TAIL_DIFFICULTY = 30
HEAD_TERM_DIFFICULTY = 60
DIFFICULTY_JITTER = 20
DIFFICULTY_BOUNDS = (5, 100)

COMMERCIAL_CPC = 3.50
DEFAULT_CPC = 1.20
CPC_JITTER = 2.0

TREND_VALUE_RANGE = (50, 150)  # [low, high)


@dataclass
class KeywordMetrics:
    """Synthesized metrics for one keyword."""
    keyword: str
    search_volume: int
    difficulty: float
    cpc: float
    competition: Competition
    trend_data: str

    def to_record(self) -> dict:
        return {
            "keyword": self.keyword,
            "search_volume": self.search_volume,
            "difficulty": self.difficulty,
            "cpc": self.cpc,
            "competition": self.competition,
            "trend_data": self.trend_data,
        }


def competition_for_difficulty(difficulty: float) -> Competition:
    """high above 70, medium above 40, low otherwise."""
    if difficulty > 70:
        return Competition.HIGH
    if difficulty > 40:
        return Competition.MEDIUM
    return Competition.LOW


def has_commercial_intent(keyword: str) -> bool:
    lowered = keyword.lower()
    return any(word in lowered for word in COMMERCIAL_INTENT_WORDS)


def synthesize_search_volume(keyword: str, seed: str, rng: random.Random) -> int:
    if keyword == seed:
        base = SEED_VOLUME
    else:
        base = rng.randrange(*VARIANT_VOLUME_RANGE)
    return int(base * rng.uniform(*VOLUME_SCALE_RANGE))


def synthesize_difficulty(keyword: str, seed: str, rng: random.Random) -> float:
    base = LONG_TAIL_DIFFICULTY if len(keyword) > len(seed) else HEAD_TERM_DIFFICULTY
    low, high = DIFFICULTY_BOUNDS
    value = base + rng.uniform(-DIFFICULTY_JITTER, DIFFICULTY_JITTER)
    return round(min(high, max(low, value)), 2)


def synthesize_cpc(keyword: str, rng: random.Random) -> float:
    base = COMMERCIAL_CPC if has_commercial_intent(keyword) else DEFAULT_CPC
    # U[0, 2) rather than uniform()'s closed interval
    return round(base + rng.random() * CPC_JITTER, 2)


def synthesize_trend_data(rng: random.Random) -> str:
    values = [rng.randrange(*TREND_VALUE_RANGE) for _ in TREND_MONTHS]
    return json.dumps({"months": list(TREND_MONTHS), "values": values})


def synthesize_metrics(
    keyword: str,
    seed: Optional[str] = None,
    rng: Optional[random.Random] = None,
) -> KeywordMetrics:
    """
    Synthesize the full metric set for a keyword.

    Args:
        keyword: Candidate keyword
        seed: Reference keyword the candidate was derived from. Defaults to
            the keyword itself.
        rng: Random source (inject a seeded one for reproducible output)

    Returns:
        KeywordMetrics
    """
    rng = resolve_rng(rng)
    seed = keyword if seed is None else seed

    difficulty = synthesize_difficulty(keyword, seed, rng)
    return KeywordMetrics(
        keyword=keyword,
        search_volume=synthesize_search_volume(keyword, seed, rng),
        difficulty=difficulty,
        cpc=synthesize_cpc(keyword, rng),
        competition=competition_for_difficulty(difficulty),
        trend_data=synthesize_trend_data(rng),
    )
