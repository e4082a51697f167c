"""
Keyword Variant Generator

Expands a seed keyword into related keyword strings with fixed templates.
The seed always comes first; duplicates collapse to their first position.
"""

from typing import List, Tuple

VARIANT_TEMPLATES: Tuple[str, ...] = (
    "{seed} guide",
    "{seed} tips",
    "best {seed}",
    "how to {seed}",
    "{seed} tutorial",
    "{seed} review",
    "{seed} comparison",
    "top {seed}",
    "{seed} benefits",
    "{seed} cost",
)


def generate_variants(seed: str, include_related: bool = True) -> List[str]:
    """
    Generate candidate keywords for a seed.

    Multi-word seeds also yield the words reversed and the seed without
    its last word.
    """
    if not include_related:
        return [seed]

    candidates = [seed]
    candidates.extend(template.format(seed=seed) for template in VARIANT_TEMPLATES)

    words = seed.split()
    if len(words) > 1:
        candidates.append(" ".join(reversed(words)))
        candidates.append(" ".join(words[:-1]))

    # dict keeps insertion order
    return list(dict.fromkeys(candidates))
