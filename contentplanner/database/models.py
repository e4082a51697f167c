"""
SQLAlchemy Models for Content Planner

Four tables, one per planning entity:
1. keywords - researched or saved keywords with synthesized metrics
2. competitors - ranked competing pages per target keyword
3. content_outlines - article outlines (generated or hand-written)
4. optimization_suggestions - on-page suggestions attached to an outline

Scores are fixed-point (2 decimal places) and come back as floats.
JSON-valued columns are stored as opaque text.
"""

import enum
from datetime import datetime

from sqlalchemy import (
    Column, String, Integer, Numeric, Boolean, DateTime, Text,
    ForeignKey, Enum, Index, UniqueConstraint,
)
from sqlalchemy.orm import declarative_base, relationship

Base = declarative_base()


def _enum_values(enum_cls):
    return [member.value for member in enum_cls]


# =============================================================================
# ENUMS
# =============================================================================

class Competition(enum.Enum):
    """Coarse competition tier derived from difficulty"""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class ContentType(enum.Enum):
    """Kinds of content an outline can target"""
    BLOG_POST = "blog_post"
    ARTICLE = "article"
    GUIDE = "guide"
    TUTORIAL = "tutorial"
    REVIEW = "review"


class DifficultyLevel(enum.Enum):
    """Audience level of a piece of content"""
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


class SuggestionType(enum.Enum):
    """On-page area an optimization suggestion targets"""
    TITLE = "title"
    META_DESCRIPTION = "meta_description"
    HEADINGS = "headings"
    INTERNAL_LINKS = "internal_links"
    IMAGES = "images"
    KEYWORD_DENSITY = "keyword_density"
    READABILITY = "readability"


class Priority(enum.Enum):
    """Suggestion priority"""
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


# =============================================================================
# TABLES
# =============================================================================

class Keyword(Base):
    """Keywords - one row per distinct keyword text"""
    __tablename__ = "keywords"

    id = Column(Integer, primary_key=True, autoincrement=True)
    keyword = Column(Text, nullable=False)

    # Search metrics (synthesized)
    search_volume = Column(Integer, nullable=False)
    difficulty = Column(Numeric(5, 2, asdecimal=False), nullable=False)  # 0-100
    cpc = Column(Numeric(10, 2, asdecimal=False), nullable=False)  # dollars
    competition = Column(
        Enum(Competition, name="competition", values_callable=_enum_values),
        nullable=False,
    )
    trend_data = Column(Text)  # {"months": [...], "values": [...]}

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    __table_args__ = (
        UniqueConstraint("keyword", name="uq_keyword_text"),
    )

    def __repr__(self):
        return f"<Keyword {self.id} {self.keyword!r}>"


class Competitor(Base):
    """Competing pages ranking for a target keyword"""
    __tablename__ = "competitors"

    id = Column(Integer, primary_key=True, autoincrement=True)

    # Page identification
    domain = Column(Text, nullable=False)
    title = Column(Text, nullable=False)
    url = Column(Text, nullable=False)
    meta_description = Column(Text)

    # Page metrics
    word_count = Column(Integer, nullable=False)
    domain_authority = Column(Numeric(5, 2, asdecimal=False), nullable=False)
    page_authority = Column(Numeric(5, 2, asdecimal=False), nullable=False)
    backlinks = Column(Integer, nullable=False)
    content_quality_score = Column(Numeric(5, 2, asdecimal=False), nullable=False)

    # SERP placement
    ranking_position = Column(Integer, nullable=False)
    target_keyword = Column(Text, nullable=False)

    analyzed_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    __table_args__ = (
        UniqueConstraint("target_keyword", "ranking_position", name="uq_competitor_rank"),
        Index("idx_competitor_keyword", "target_keyword"),
    )

    def __repr__(self):
        return f"<Competitor {self.id} #{self.ranking_position} {self.domain}>"


class ContentOutline(Base):
    """Content outlines - the parent of optimization suggestions"""
    __tablename__ = "content_outlines"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(Text, nullable=False)
    target_keyword = Column(Text, nullable=False)
    secondary_keywords = Column(Text)  # JSON array
    meta_description = Column(Text)
    word_count_target = Column(Integer, nullable=False)
    outline_structure = Column(Text, nullable=False)  # JSON object
    seo_suggestions = Column(Text)  # JSON array
    content_type = Column(
        Enum(ContentType, name="content_type", values_callable=_enum_values),
        nullable=False,
    )
    difficulty_level = Column(
        Enum(DifficultyLevel, name="difficulty_level", values_callable=_enum_values),
        nullable=False,
    )
    estimated_reading_time = Column(Integer, nullable=False)  # minutes

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    suggestions = relationship(
        "OptimizationSuggestion",
        back_populates="content_outline",
        order_by="OptimizationSuggestion.id",
    )

    def __repr__(self):
        return f"<ContentOutline {self.id} {self.content_type.value if self.content_type else None}>"


class OptimizationSuggestion(Base):
    """On-page optimization suggestions for an outline"""
    __tablename__ = "optimization_suggestions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    content_outline_id = Column(Integer, ForeignKey("content_outlines.id"), nullable=False)

    suggestion_type = Column(
        Enum(SuggestionType, name="suggestion_type", values_callable=_enum_values),
        nullable=False,
    )
    priority = Column(
        Enum(Priority, name="priority", values_callable=_enum_values),
        nullable=False,
    )
    suggestion = Column(Text, nullable=False)
    current_value = Column(Text)
    recommended_value = Column(Text)
    impact_score = Column(Numeric(5, 2, asdecimal=False), nullable=False)  # 0-100
    is_implemented = Column(Boolean, nullable=False, default=False)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    content_outline = relationship("ContentOutline", back_populates="suggestions")

    __table_args__ = (
        Index("idx_suggestion_outline", "content_outline_id"),
    )

    def __repr__(self):
        return f"<OptimizationSuggestion {self.id} {self.suggestion_type.value if self.suggestion_type else None}>"
