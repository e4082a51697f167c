"""
Content Planner Database Layer

Usage:
    from contentplanner.database import (
        # Session management
        init_db, get_db, get_db_context,

        # Models
        Keyword, Competitor, ContentOutline, OptimizationSuggestion,

        # Repository
        get_outline, insert_outline, list_suggestions,
    )

    init_db()

    with get_db_context() as db:
        outline = get_outline(db, 42)
"""

# Models
from .models import (
    Base,
    Keyword,
    Competitor,
    ContentOutline,
    OptimizationSuggestion,
    # Enums
    Competition,
    ContentType,
    DifficultyLevel,
    SuggestionType,
    Priority,
)

# Session management
from .session import (
    get_db,
    get_db_context,
    init_db,
    check_db_connection,
    create_db_engine,
    get_engine,
    get_db_info,
    get_session_factory,
)

# Repository (high-level data operations)
from .repository import (
    get_keyword_by_text,
    insert_keyword,
    list_keywords,
    get_competitors_for_keyword,
    insert_competitors,
    list_competitors,
    get_outline,
    insert_outline,
    update_outline,
    list_outlines,
    insert_suggestions,
    list_suggestions,
    set_suggestion_implemented,
)

__all__ = [
    # Models
    "Base",
    "Keyword",
    "Competitor",
    "ContentOutline",
    "OptimizationSuggestion",
    # Enums
    "Competition",
    "ContentType",
    "DifficultyLevel",
    "SuggestionType",
    "Priority",
    # Session
    "get_db",
    "get_db_context",
    "init_db",
    "check_db_connection",
    "create_db_engine",
    "get_engine",
    "get_db_info",
    "get_session_factory",
    # Repository
    "get_keyword_by_text",
    "insert_keyword",
    "list_keywords",
    "get_competitors_for_keyword",
    "insert_competitors",
    "list_competitors",
    "get_outline",
    "insert_outline",
    "update_outline",
    "list_outlines",
    "insert_suggestions",
    "list_suggestions",
    "set_suggestion_implemented",
]
