"""
On-Page Optimization Rule Engine

Inspects an outline's text attributes and emits prioritized suggestions.
Seven rule groups run in a fixed order; each returns zero or more
suggestions and the engine concatenates them:

    Group             Trigger                          Priority  Impact
    ----------------  -------------------------------  --------  ------
    title             length > 60                      high      85
                      length < 30                      medium    70
                      keyword missing                  high      90
    meta_description  missing                          high      80
                      length > 160                     medium    65
                      keyword missing                  medium    75
    headings          structure parses as JSON         medium    70
                      structure missing or malformed   high      85
    internal_links    always                           medium    60
    images            always                           medium    55
    keyword_density   always                           medium    65
                      secondary keywords present       low       50
    readability       always (grade band by level)     medium    60
                      word count < 300                 high      75

Malformed embedded JSON never raises; it is treated as absent.
"""

from dataclasses import dataclass
from typing import Any, Callable, List, Optional, Protocol, Tuple

from contentplanner.database.models import DifficultyLevel, Priority, SuggestionType
from .helpers import EmbeddedJSON, enum_value


TITLE_MAX_LENGTH = 60
TITLE_MIN_LENGTH = 30
META_MAX_LENGTH = 160
MIN_WORD_COUNT = 300

READING_GRADES = {
    DifficultyLevel.BEGINNER.value: "Grade 6-8 reading level",
    DifficultyLevel.ADVANCED.value: "Grade 10-12 reading level",
}
DEFAULT_READING_GRADE = "Grade 8-10 reading level"


class OutlineLike(Protocol):
    """The outline attributes the rules read."""
    title: str
    target_keyword: str
    meta_description: Optional[str]
    outline_structure: Optional[str]
    secondary_keywords: Optional[str]
    word_count_target: int
    difficulty_level: Any


@dataclass
class SuggestionDraft:
    """A suggestion before it is attached to an outline and stored."""
    suggestion_type: SuggestionType
    priority: Priority
    suggestion: str
    current_value: Optional[str]
    recommended_value: Optional[str]
    impact_score: float

    def to_record(self, content_outline_id: int) -> dict:
        return {
            "content_outline_id": content_outline_id,
            "suggestion_type": self.suggestion_type,
            "priority": self.priority,
            "suggestion": self.suggestion,
            "current_value": self.current_value,
            "recommended_value": self.recommended_value,
            "impact_score": self.impact_score,
            "is_implemented": False,
        }


def _contains_keyword(text: str, keyword: str) -> bool:
    return keyword.lower() in text.lower()


# =============================================================================
# RULE GROUPS
# =============================================================================

def title_rules(outline: OutlineLike) -> List[SuggestionDraft]:
    suggestions = []
    title = outline.title or ""
    keyword = outline.target_keyword

    if len(title) > TITLE_MAX_LENGTH:
        suggestions.append(SuggestionDraft(
            suggestion_type=SuggestionType.TITLE,
            priority=Priority.HIGH,
            suggestion="Title is too long for search results. Consider shortening to 50-60 characters.",
            current_value=f"{len(title)} characters",
            recommended_value="50-60 characters",
            impact_score=85,
        ))
    elif len(title) < TITLE_MIN_LENGTH:
        suggestions.append(SuggestionDraft(
            suggestion_type=SuggestionType.TITLE,
            priority=Priority.MEDIUM,
            suggestion="Title might be too short. Consider expanding to 30-60 characters for better SEO.",
            current_value=f"{len(title)} characters",
            recommended_value="30-60 characters",
            impact_score=70,
        ))

    if not _contains_keyword(title, keyword):
        suggestions.append(SuggestionDraft(
            suggestion_type=SuggestionType.TITLE,
            priority=Priority.HIGH,
            suggestion="Include the target keyword in the title for better SEO ranking.",
            current_value=title,
            recommended_value=f'Title with "{keyword}" included',
            impact_score=90,
        ))

    return suggestions


def meta_description_rules(outline: OutlineLike) -> List[SuggestionDraft]:
    meta = outline.meta_description
    keyword = outline.target_keyword

    if not meta:
        return [SuggestionDraft(
            suggestion_type=SuggestionType.META_DESCRIPTION,
            priority=Priority.HIGH,
            suggestion="Add a meta description to improve search result click-through rates.",
            current_value=None,
            recommended_value=f'150-160 character description including "{keyword}"',
            impact_score=80,
        )]

    suggestions = []
    if len(meta) > META_MAX_LENGTH:
        suggestions.append(SuggestionDraft(
            suggestion_type=SuggestionType.META_DESCRIPTION,
            priority=Priority.MEDIUM,
            suggestion="Meta description is too long and may be truncated in search results.",
            current_value=f"{len(meta)} characters",
            recommended_value="150-160 characters",
            impact_score=65,
        ))

    if not _contains_keyword(meta, keyword):
        suggestions.append(SuggestionDraft(
            suggestion_type=SuggestionType.META_DESCRIPTION,
            priority=Priority.MEDIUM,
            suggestion="Include the target keyword in meta description for better relevance.",
            current_value=meta,
            recommended_value=f'Meta description with "{keyword}" included',
            impact_score=75,
        ))

    return suggestions


def heading_rules(outline: OutlineLike) -> List[SuggestionDraft]:
    keyword = outline.target_keyword
    structure = EmbeddedJSON.parse(outline.outline_structure)

    if structure.is_valid:
        return [SuggestionDraft(
            suggestion_type=SuggestionType.HEADINGS,
            priority=Priority.MEDIUM,
            suggestion=(
                "Use H1-H6 tags in hierarchical order and include target keyword "
                "in H1 and some H2 headings."
            ),
            current_value="Current heading structure",
            recommended_value=f'Hierarchical headings with "{keyword}" in main headings',
            impact_score=70,
        )]

    return [SuggestionDraft(
        suggestion_type=SuggestionType.HEADINGS,
        priority=Priority.HIGH,
        suggestion="Create a clear heading structure with H1-H6 tags including the target keyword.",
        current_value="Unstructured or missing headings",
        recommended_value=f'Structured headings with "{keyword}" in H1',
        impact_score=85,
    )]


def internal_link_rules(outline: OutlineLike) -> List[SuggestionDraft]:
    return [SuggestionDraft(
        suggestion_type=SuggestionType.INTERNAL_LINKS,
        priority=Priority.MEDIUM,
        suggestion=(
            "Add 3-5 internal links to related content to improve site structure "
            "and user engagement."
        ),
        current_value="No internal linking strategy specified",
        recommended_value="3-5 relevant internal links with descriptive anchor text",
        impact_score=60,
    )]


def image_rules(outline: OutlineLike) -> List[SuggestionDraft]:
    return [SuggestionDraft(
        suggestion_type=SuggestionType.IMAGES,
        priority=Priority.MEDIUM,
        suggestion=(
            "Optimize all images with descriptive alt text, file names, "
            "and appropriate file sizes."
        ),
        current_value="No image optimization specified",
        recommended_value=f'Alt text including "{outline.target_keyword}" where relevant, compressed images',
        impact_score=55,
    )]


def keyword_density_rules(outline: OutlineLike) -> List[SuggestionDraft]:
    keyword = outline.target_keyword
    suggestions = [SuggestionDraft(
        suggestion_type=SuggestionType.KEYWORD_DENSITY,
        priority=Priority.MEDIUM,
        suggestion=(
            "Maintain target keyword density of 1-2% and naturally incorporate "
            "secondary keywords."
        ),
        current_value="Keyword density not optimized",
        recommended_value=f'"{keyword}" at 1-2% density + secondary keywords naturally distributed',
        impact_score=65,
    )]

    secondary = EmbeddedJSON.parse(outline.secondary_keywords).as_list()
    if secondary:
        suggestions.append(SuggestionDraft(
            suggestion_type=SuggestionType.KEYWORD_DENSITY,
            priority=Priority.LOW,
            suggestion=(
                "Use secondary keywords naturally throughout the content to capture "
                "related search queries."
            ),
            current_value=f"{len(secondary)} secondary keywords identified",
            recommended_value="Natural integration of secondary keywords in subheadings and body text",
            impact_score=50,
        ))

    return suggestions


def readability_rules(outline: OutlineLike) -> List[SuggestionDraft]:
    level = enum_value(outline.difficulty_level)
    grade = READING_GRADES.get(level, DEFAULT_READING_GRADE)
    word_count = outline.word_count_target

    suggestions = [SuggestionDraft(
        suggestion_type=SuggestionType.READABILITY,
        priority=Priority.MEDIUM,
        suggestion=(
            f"Optimize content readability for {level} level audience using short "
            "paragraphs, bullet points, and clear language."
        ),
        current_value=f"Target: {level} level content",
        recommended_value=(
            f"{grade}, short paragraphs (2-3 sentences), bullet points, "
            "subheadings every 200-300 words"
        ),
        impact_score=60,
    )]

    if word_count is not None and word_count < MIN_WORD_COUNT:
        suggestions.append(SuggestionDraft(
            suggestion_type=SuggestionType.READABILITY,
            priority=Priority.HIGH,
            suggestion="Increase word count to at least 300 words for better search engine ranking.",
            current_value=f"{word_count} words",
            recommended_value="At least 300-500 words for short content, 1000+ for comprehensive guides",
            impact_score=75,
        ))

    return suggestions


RULE_GROUPS: Tuple[Callable[[OutlineLike], List[SuggestionDraft]], ...] = (
    title_rules,
    meta_description_rules,
    heading_rules,
    internal_link_rules,
    image_rules,
    keyword_density_rules,
    readability_rules,
)


def evaluate_outline(outline: OutlineLike) -> List[SuggestionDraft]:
    """Run every rule group in order and collect their suggestions."""
    suggestions: List[SuggestionDraft] = []
    for rule_group in RULE_GROUPS:
        suggestions.extend(rule_group(outline))
    return suggestions
