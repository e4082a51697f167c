"""
Outline Template Engine

Each content type has a fixed template: a word-count range, a complexity
factor that slows the assumed reading speed, and a section skeleton with a
[keyword] placeholder. Generation picks a word count inside the range and
derives everything else from the template and the keyword.

Reading time:
    words_per_minute = 200 / complexity_factor
    minutes          = ceil(word_count / words_per_minute)

Difficulty (first match wins):
    beginner      blog posts, or under 1200 words
    advanced      guides and tutorials, or over 2500 words
    intermediate  everything else
"""

import logging
import math
import random
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

from contentplanner.database.models import ContentType, DifficultyLevel
from contentplanner.errors import ValidationError
from .helpers import resolve_rng, to_json

logger = logging.getLogger(__name__)


BASE_READING_SPEED = 200  # words per minute
KEYWORD_PLACEHOLDER = "[keyword]"


@dataclass(frozen=True)
class OutlineTemplate:
    """Static per-content-type configuration."""
    word_count_range: Tuple[int, int]  # [low, high)
    complexity_factor: float
    sections: Tuple[str, ...]
    title: str
    meta_description: str
    secondary_keywords: Tuple[str, str]
    seo_tips: Tuple[str, str]


CONTENT_TEMPLATES: Mapping[ContentType, OutlineTemplate] = MappingProxyType({
    ContentType.BLOG_POST: OutlineTemplate(
        word_count_range=(800, 2000),
        complexity_factor=4,
        sections=(
            "Introduction and hook",
            "What is [keyword]?",
            "Benefits of [keyword]",
            "How to implement [keyword]",
            "Common mistakes to avoid",
            "Best practices and tips",
            "Conclusion and next steps",
        ),
        title="The Complete Guide to {keyword}: Everything You Need to Know",
        meta_description=(
            "Discover everything you need to know about {keyword}. Learn best practices, "
            "tips, and expert insights in this comprehensive guide."
        ),
        secondary_keywords=("{keyword} explained", "{keyword} examples"),
        seo_tips=(
            "Include a compelling meta description under 160 characters",
            "Add social sharing buttons to increase engagement",
        ),
    ),
    ContentType.ARTICLE: OutlineTemplate(
        word_count_range=(1200, 3000),
        complexity_factor=4,
        sections=(
            "Executive summary",
            "Background and context",
            "Key findings about [keyword]",
            "Analysis and implications",
            "Case studies and examples",
            "Future outlook",
            "Conclusion",
        ),
        title="{keyword}: Analysis, Insights, and Best Practices for 2024",
        meta_description=(
            "In-depth analysis of {keyword} with expert insights, research findings, "
            "and practical implications for your business."
        ),
        secondary_keywords=("{keyword} analysis", "{keyword} research"),
        seo_tips=(
            "Include data and statistics to support claims",
            "Add author bio and credentials for authority",
        ),
    ),
    ContentType.GUIDE: OutlineTemplate(
        word_count_range=(1500, 4000),
        complexity_factor=3.5,
        sections=(
            "Introduction to [keyword]",
            "Prerequisites and requirements",
            "Step 1: Getting started",
            "Step 2: Core implementation",
            "Step 3: Advanced techniques",
            "Troubleshooting common issues",
            "Resources and next steps",
        ),
        title="Step-by-Step Guide to {keyword}: From Beginner to Expert",
        meta_description=(
            "Complete step-by-step guide to {keyword}. Learn from basics to advanced "
            "techniques with practical examples and best practices."
        ),
        secondary_keywords=("{keyword} tutorial", "{keyword} step by step"),
        seo_tips=(
            "Create a table of contents for easy navigation",
            "Include downloadable resources or checklists",
        ),
    ),
    ContentType.TUTORIAL: OutlineTemplate(
        word_count_range=(1000, 2500),
        complexity_factor=3,
        sections=(
            "What you'll learn",
            "Tools and setup required",
            "Step-by-step walkthrough",
            "Code examples and explanations",
            "Testing and validation",
            "Common pitfalls",
            "Summary and practice exercises",
        ),
        title="Learn {keyword}: Hands-On Tutorial with Examples",
        meta_description=(
            "Learn {keyword} with our hands-on tutorial. Follow along with code "
            "examples and detailed explanations."
        ),
        secondary_keywords=("{keyword} walkthrough", "learn {keyword}"),
        seo_tips=(
            "Add code snippets with proper syntax highlighting",
            "Include screenshots or video demonstrations",
        ),
    ),
    ContentType.REVIEW: OutlineTemplate(
        word_count_range=(800, 1800),
        complexity_factor=4.5,
        sections=(
            "Introduction to [keyword]",
            "Key features and specifications",
            "Pros and cons analysis",
            "Performance evaluation",
            "Comparison with alternatives",
            "Pricing and value assessment",
            "Final verdict and recommendations",
        ),
        title="{keyword} Review: Features, Pricing, and Is It Worth It?",
        meta_description=(
            "Honest review of {keyword}. Pros, cons, features, pricing, and comparisons "
            "to help you make an informed decision."
        ),
        secondary_keywords=("{keyword} comparison", "{keyword} evaluation"),
        seo_tips=(
            "Include product images and specifications",
            "Add comparison tables with competitors",
        ),
    ),
})

GENERIC_SECONDARY_KEYWORDS: Tuple[str, ...] = ("{keyword} guide", "{keyword} tips")

GENERIC_SEO_TIPS: Tuple[str, ...] = (
    'Include "{keyword}" in the title and first paragraph',
    "Use keyword variations naturally throughout the content",
    "Add internal links to related content",
    "Optimize images with alt text containing relevant keywords",
    "Use header tags (H1, H2, H3) to structure content",
)

ALLOWED_CONTENT_TYPES: Tuple[str, ...] = tuple(content_type.value for content_type in ContentType)


@dataclass
class OutlineDraft:
    """A generated outline, not yet persisted."""
    title: str
    target_keyword: str
    content_type: ContentType
    difficulty_level: DifficultyLevel
    word_count_target: int
    estimated_reading_time: int
    meta_description: str
    outline_structure: Dict[str, Any]
    secondary_keywords: List[str] = field(default_factory=list)
    seo_suggestions: List[str] = field(default_factory=list)

    def to_record(self) -> dict:
        """Column values, with structured fields serialized to JSON text."""
        return {
            "title": self.title,
            "target_keyword": self.target_keyword,
            "secondary_keywords": to_json(self.secondary_keywords),
            "meta_description": self.meta_description,
            "word_count_target": self.word_count_target,
            "outline_structure": to_json(self.outline_structure),
            "seo_suggestions": to_json(self.seo_suggestions),
            "content_type": self.content_type,
            "difficulty_level": self.difficulty_level,
            "estimated_reading_time": self.estimated_reading_time,
        }


def parse_content_type(value: Union[str, ContentType]) -> ContentType:
    """Coerce to ContentType, rejecting anything outside the five types."""
    if isinstance(value, ContentType):
        return value
    try:
        return ContentType(value)
    except ValueError:
        raise ValidationError(
            f"Invalid content type {value!r}. Must be one of: {', '.join(ALLOWED_CONTENT_TYPES)}",
            value=value,
        ) from None


def estimate_reading_time(word_count: int, complexity_factor: float) -> int:
    """Minutes to read `word_count` words at 200 wpm slowed by the factor."""
    words_per_minute = BASE_READING_SPEED / complexity_factor
    return math.ceil(word_count / words_per_minute)


def determine_difficulty(content_type: ContentType, word_count: int) -> DifficultyLevel:
    if content_type == ContentType.BLOG_POST or word_count < 1200:
        return DifficultyLevel.BEGINNER
    if content_type in (ContentType.GUIDE, ContentType.TUTORIAL) or word_count > 2500:
        return DifficultyLevel.ADVANCED
    return DifficultyLevel.INTERMEDIATE


def build_outline_structure(target_keyword: str, template: OutlineTemplate) -> Dict[str, Any]:
    main_sections = []
    for section in template.sections:
        title = section.replace(KEYWORD_PLACEHOLDER, target_keyword)
        main_sections.append({
            "title": title,
            "subsections": [
                f"Key points about {title.lower()}",
                "Examples and case studies",
            ],
        })

    return {
        "introduction": {
            "title": "Introduction",
            "subsections": [
                "Hook and attention grabber",
                f"Overview of {target_keyword}",
                "What readers will learn",
            ],
        },
        "mainSections": main_sections,
        "conclusion": {
            "title": "Conclusion",
            "subsections": ["Summary of key points", "Call to action", "Next steps"],
        },
    }


def build_secondary_keywords(target_keyword: str, template: OutlineTemplate) -> List[str]:
    patterns = GENERIC_SECONDARY_KEYWORDS + template.secondary_keywords
    return [pattern.format(keyword=target_keyword) for pattern in patterns]


def build_seo_tips(target_keyword: str, template: OutlineTemplate) -> List[str]:
    patterns = GENERIC_SEO_TIPS + template.seo_tips
    return [pattern.format(keyword=target_keyword) for pattern in patterns]


def generate_outline(
    target_keyword: str,
    content_type: Union[str, ContentType],
    rng: Optional[random.Random] = None,
) -> OutlineDraft:
    """
    Generate an outline draft for a keyword and content type.

    Raises:
        ValidationError: content_type is not one of the five known types
    """
    content_type = parse_content_type(content_type)
    template = CONTENT_TEMPLATES[content_type]
    rng = resolve_rng(rng)

    word_count = rng.randrange(*template.word_count_range)

    draft = OutlineDraft(
        title=template.title.format(keyword=target_keyword),
        target_keyword=target_keyword,
        content_type=content_type,
        difficulty_level=determine_difficulty(content_type, word_count),
        word_count_target=word_count,
        estimated_reading_time=estimate_reading_time(word_count, template.complexity_factor),
        meta_description=template.meta_description.format(keyword=target_keyword),
        outline_structure=build_outline_structure(target_keyword, template),
        secondary_keywords=build_secondary_keywords(target_keyword, template),
        seo_suggestions=build_seo_tips(target_keyword, template),
    )
    logger.debug(
        f"Outline draft for {target_keyword!r} ({content_type.value}): "
        f"{word_count} words, {draft.difficulty_level.value}"
    )
    return draft
