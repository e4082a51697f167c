"""
Request and Response Contracts

Pydantic models for every service operation. Requests carry the field
constraints; responses are built straight from ORM rows
(from_attributes) so scores come back as 2-decimal floats.
"""

from datetime import datetime
from typing import Optional
from urllib.parse import urlparse

from pydantic import BaseModel, Field, field_validator, model_validator

from contentplanner.database.models import (
    Competition, ContentType, DifficultyLevel, SuggestionType, Priority,
)


# =============================================================================
# KEYWORDS
# =============================================================================

class KeywordResearchRequest(BaseModel):
    """Expand a seed keyword into researched keywords."""
    seed_keyword: str = Field(..., min_length=1)
    location: Optional[str] = None
    language: str = "en"
    include_related: bool = True
    min_search_volume: int = Field(default=0, ge=0)
    max_difficulty: float = Field(default=100, ge=0, le=100)


class KeywordCreate(BaseModel):
    """Save a keyword with known metrics."""
    keyword: str = Field(..., min_length=1)
    search_volume: int = Field(..., ge=0)
    difficulty: float = Field(..., ge=0, le=100)
    cpc: float = Field(..., ge=0)
    competition: Competition
    trend_data: Optional[str] = None


class KeywordOut(BaseModel):
    id: int
    keyword: str
    search_volume: int
    difficulty: float
    cpc: float
    competition: Competition
    trend_data: Optional[str] = None
    created_at: datetime

    class Config:
        from_attributes = True


# =============================================================================
# COMPETITORS
# =============================================================================

class CompetitorAnalysisRequest(BaseModel):
    """Analyze the pages ranking for a keyword."""
    target_keyword: str = Field(..., min_length=1)
    location: Optional[str] = None
    limit: int = Field(default=10, gt=0)


class CompetitorCreate(BaseModel):
    """Save a competitor page."""
    domain: str = Field(..., min_length=1)
    title: str = Field(..., min_length=1)
    url: str
    meta_description: Optional[str] = None
    word_count: int = Field(..., ge=0)
    domain_authority: float = Field(..., ge=0, le=100)
    page_authority: float = Field(..., ge=0, le=100)
    backlinks: int = Field(..., ge=0)
    ranking_position: int = Field(..., gt=0)
    target_keyword: str = Field(..., min_length=1)
    content_quality_score: float = Field(..., ge=0, le=100)

    @field_validator("url")
    @classmethod
    def url_must_be_http(cls, value: str) -> str:
        parsed = urlparse(value)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValueError(f"url must be an absolute http(s) URL, got {value!r}")
        return value


class CompetitorOut(BaseModel):
    id: int
    domain: str
    title: str
    url: str
    meta_description: Optional[str] = None
    word_count: int
    domain_authority: float
    page_authority: float
    backlinks: int
    ranking_position: int
    target_keyword: str
    content_quality_score: float
    analyzed_at: datetime

    class Config:
        from_attributes = True


# =============================================================================
# CONTENT OUTLINES
# =============================================================================

class OutlineCreate(BaseModel):
    """Hand-written outline."""
    title: str = Field(..., min_length=1)
    target_keyword: str = Field(..., min_length=1)
    secondary_keywords: Optional[str] = None  # JSON array
    meta_description: Optional[str] = None
    word_count_target: int = Field(..., gt=0)
    outline_structure: str = Field(..., min_length=1)  # JSON object
    seo_suggestions: Optional[str] = None  # JSON array
    content_type: ContentType
    difficulty_level: DifficultyLevel
    estimated_reading_time: int = Field(..., gt=0)


NON_NULLABLE_OUTLINE_FIELDS = (
    "title", "target_keyword", "word_count_target", "outline_structure",
    "content_type", "difficulty_level", "estimated_reading_time",
)


class OutlineUpdate(BaseModel):
    """Partial update: only fields present in the payload change."""
    title: Optional[str] = Field(default=None, min_length=1)
    target_keyword: Optional[str] = Field(default=None, min_length=1)
    secondary_keywords: Optional[str] = None
    meta_description: Optional[str] = None
    word_count_target: Optional[int] = Field(default=None, gt=0)
    outline_structure: Optional[str] = Field(default=None, min_length=1)
    seo_suggestions: Optional[str] = None
    content_type: Optional[ContentType] = None
    difficulty_level: Optional[DifficultyLevel] = None
    estimated_reading_time: Optional[int] = Field(default=None, gt=0)

    @model_validator(mode="after")
    def required_columns_not_null(self):
        for name in NON_NULLABLE_OUTLINE_FIELDS:
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"{name} cannot be null")
        return self

    def changes(self) -> dict:
        return self.model_dump(exclude_unset=True)


class GenerateOutlineRequest(BaseModel):
    """Generate an outline from a content-type template."""
    target_keyword: str = Field(..., min_length=1)
    # Plain string: unknown types are reported with the allowed set
    content_type: str


class OutlineOut(BaseModel):
    id: int
    title: str
    target_keyword: str
    secondary_keywords: Optional[str] = None
    meta_description: Optional[str] = None
    word_count_target: int
    outline_structure: str
    seo_suggestions: Optional[str] = None
    content_type: ContentType
    difficulty_level: DifficultyLevel
    estimated_reading_time: int
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


# =============================================================================
# OPTIMIZATION SUGGESTIONS
# =============================================================================

class SuggestionCreate(BaseModel):
    """Hand-written optimization suggestion."""
    content_outline_id: int
    suggestion_type: SuggestionType
    priority: Priority
    suggestion: str = Field(..., min_length=1)
    current_value: Optional[str] = None
    recommended_value: Optional[str] = None
    impact_score: float = Field(..., ge=0, le=100)
    is_implemented: bool = False


class SuggestionStatusUpdate(BaseModel):
    is_implemented: bool


class SuggestionOut(BaseModel):
    id: int
    content_outline_id: int
    suggestion_type: SuggestionType
    priority: Priority
    suggestion: str
    current_value: Optional[str] = None
    recommended_value: Optional[str] = None
    impact_score: float
    is_implemented: bool
    created_at: datetime

    class Config:
        from_attributes = True
