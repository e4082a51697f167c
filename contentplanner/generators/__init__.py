"""
Generation Rule Engine for Content Planner

Deterministic, rule-based generators that turn a seed keyword or an outline
into planning objects. All randomness comes from an injected
`random.Random`, so a seeded generator reproduces the same output.

1. **Metrics Synthesizer** - search volume, difficulty, CPC, competition, trend
2. **Keyword Variant Generator** - templated expansions of a seed keyword
3. **Competitor Mock Generator** - ranked synthetic SERP listings
4. **Outline Template Engine** - per-content-type outline drafts
5. **Optimization Rule Engine** - prioritized on-page suggestions

Example Usage:
    import random
    from contentplanner.generators import generate_variants, synthesize_metrics

    rng = random.Random(7)
    for candidate in generate_variants("email marketing"):
        metrics = synthesize_metrics(candidate, seed="email marketing", rng=rng)
        print(candidate, metrics.search_volume, metrics.competition.value)
"""

from .helpers import EmbeddedJSON, to_json

from .metrics import (
    KeywordMetrics,
    COMMERCIAL_INTENT_WORDS,
    competition_for_difficulty,
    synthesize_metrics,
)

from .variants import (
    VARIANT_TEMPLATES,
    generate_variants,
)

from .competitors import (
    CompetitorListing,
    REFERENCE_DOMAINS,
    MAX_MOCK_COMPETITORS,
    generate_competitors,
    slugify,
)

from .outlines import (
    OutlineTemplate,
    OutlineDraft,
    CONTENT_TEMPLATES,
    ALLOWED_CONTENT_TYPES,
    parse_content_type,
    estimate_reading_time,
    determine_difficulty,
    generate_outline,
)

from .optimization import (
    SuggestionDraft,
    RULE_GROUPS,
    evaluate_outline,
)

__all__ = [
    # Helpers
    "EmbeddedJSON",
    "to_json",
    # Metrics
    "KeywordMetrics",
    "COMMERCIAL_INTENT_WORDS",
    "competition_for_difficulty",
    "synthesize_metrics",
    # Variants
    "VARIANT_TEMPLATES",
    "generate_variants",
    # Competitors
    "CompetitorListing",
    "REFERENCE_DOMAINS",
    "MAX_MOCK_COMPETITORS",
    "generate_competitors",
    "slugify",
    # Outlines
    "OutlineTemplate",
    "OutlineDraft",
    "CONTENT_TEMPLATES",
    "ALLOWED_CONTENT_TYPES",
    "parse_content_type",
    "estimate_reading_time",
    "determine_difficulty",
    "generate_outline",
    # Optimization
    "SuggestionDraft",
    "RULE_GROUPS",
    "evaluate_outline",
]
