"""
Content Planner Services

Each operation takes the caller's Session first. Nothing here commits;
the session owner (get_db / get_db_context) decides.

Usage:
    from contentplanner.database import get_db_context
    from contentplanner.services import generate_outline, generate_suggestions

    with get_db_context() as db:
        outline = generate_outline(db, "email marketing", "guide")
        suggestions = generate_suggestions(db, outline.id)
"""

from .keywords import (
    research_keywords,
    create_keyword,
    list_keywords,
)

from .competitors import (
    analyze_competitors,
    create_competitor,
    list_competitors,
)

from .outlines import (
    create_outline,
    update_outline,
    get_outline,
    list_outlines,
    generate_outline,
)

from .suggestions import (
    create_suggestion,
    list_suggestions,
    generate_suggestions,
    set_suggestion_implemented,
)

__all__ = [
    # Keywords
    "research_keywords",
    "create_keyword",
    "list_keywords",
    # Competitors
    "analyze_competitors",
    "create_competitor",
    "list_competitors",
    # Outlines
    "create_outline",
    "update_outline",
    "get_outline",
    "list_outlines",
    "generate_outline",
    # Suggestions
    "create_suggestion",
    "list_suggestions",
    "generate_suggestions",
    "set_suggestion_implemented",
]
