"""
Test Suite for the Service Layer

Exercises every operation against an in-memory SQLite database:
keyword research, competitor analysis, outline CRUD and generation,
suggestion generation and status tracking.
"""

import json
import random

import pytest
from sqlalchemy import func, select

from contentplanner import services
from contentplanner.database import repository
from contentplanner.database import (
    Competitor, ContentOutline, Keyword, OptimizationSuggestion,
)
from contentplanner.database.models import (
    Competition, ContentType, DifficultyLevel, Priority, SuggestionType,
)
from contentplanner.errors import NotFoundError, ValidationError


def count(db, model) -> int:
    return db.execute(select(func.count()).select_from(model)).scalar_one()


def outline_payload(**overrides):
    payload = {
        "title": "Email Marketing for Small Businesses",
        "target_keyword": "email marketing",
        "secondary_keywords": json.dumps(["newsletter tips"]),
        "meta_description": "How small businesses can use email marketing to grow.",
        "word_count_target": 1200,
        "outline_structure": json.dumps({"introduction": {}, "mainSections": [], "conclusion": {}}),
        "seo_suggestions": json.dumps(["Use short subject lines"]),
        "content_type": "article",
        "difficulty_level": "intermediate",
        "estimated_reading_time": 6,
    }
    payload.update(overrides)
    return payload


def competitor_payload(**overrides):
    payload = {
        "domain": "example.com",
        "title": "Email Marketing Guide",
        "url": "https://example.com/email-marketing",
        "meta_description": None,
        "word_count": 2100,
        "domain_authority": 55.456,
        "page_authority": 48,
        "backlinks": 320,
        "ranking_position": 1,
        "target_keyword": "email marketing",
        "content_quality_score": 71.5,
    }
    payload.update(overrides)
    return payload


def miss_once(real_lookup, empty):
    """Wrap a repository lookup so its first call sees nothing stored."""
    calls = []

    def lookup(*args, **kwargs):
        calls.append(args)
        if len(calls) == 1:
            return empty
        return real_lookup(*args, **kwargs)

    return lookup


# ============================================================================
# Keyword Research
# ============================================================================

class TestKeywordResearch:
    """Variant expansion, threshold filtering and idempotence."""

    def test_research_stores_variants(self, db, rng):
        results = services.research_keywords(db, {"seed_keyword": "email marketing"}, rng=rng)

        assert results[0].keyword == "email marketing"
        assert len(results) == 13
        assert count(db, Keyword) == 13
        for row in results:
            assert row.id is not None
            assert 5 <= row.difficulty <= 100
            assert row.cpc >= 0

    def test_research_is_idempotent(self, db):
        request = {"seed_keyword": "email marketing"}

        first = services.research_keywords(db, request, rng=random.Random(1))
        rows_after_first = count(db, Keyword)
        second = services.research_keywords(db, request, rng=random.Random(2))

        assert count(db, Keyword) == rows_after_first
        assert {row.keyword for row in second} == {row.keyword for row in first}
        assert [row.id for row in second] == [row.id for row in first]

    def test_thresholds_filter(self, db, rng):
        results = services.research_keywords(
            db,
            {"seed_keyword": "email marketing", "min_search_volume": 10**6},
            rng=rng,
        )

        assert results == []
        assert count(db, Keyword) == 0

    def test_max_difficulty(self, db, rng):
        results = services.research_keywords(
            db, {"seed_keyword": "email marketing", "max_difficulty": 45}, rng=rng,
        )
        assert all(row.difficulty <= 45 for row in results)

    def test_existing_rows_filtered_by_stored_metrics(self, db, rng):
        services.create_keyword(db, {
            "keyword": "email marketing guide",
            "search_volume": 10,
            "difficulty": 20,
            "cpc": 0.5,
            "competition": "low",
        })

        results = services.research_keywords(
            db, {"seed_keyword": "email marketing", "min_search_volume": 100}, rng=rng,
        )

        assert "email marketing guide" not in {row.keyword for row in results}
        stored = db.execute(
            select(Keyword).where(Keyword.keyword == "email marketing guide")
        ).scalar_one()
        assert stored.search_volume == 10

    def test_related_disabled(self, db, rng):
        results = services.research_keywords(
            db, {"seed_keyword": "seo", "include_related": False}, rng=rng,
        )

        assert [row.keyword for row in results] == ["seo"]
        assert 5000 <= results[0].search_volume <= 10000

    def test_lost_insert_race_returns_stored_row(self, db, rng, monkeypatch):
        """A concurrent writer stored the keyword between lookup and insert."""
        stored = services.create_keyword(db, {
            "keyword": "seo",
            "search_volume": 4200,
            "difficulty": 35,
            "cpc": 1.5,
            "competition": "low",
        })
        monkeypatch.setattr(
            repository, "get_keyword_by_text",
            miss_once(repository.get_keyword_by_text, None),
        )

        results = services.research_keywords(
            db, {"seed_keyword": "seo", "include_related": False}, rng=rng,
        )

        assert [row.id for row in results] == [stored.id]
        assert results[0].search_volume == 4200
        assert count(db, Keyword) == 1

    def test_blank_seed_rejected(self, db):
        with pytest.raises(ValidationError):
            services.research_keywords(db, {"seed_keyword": ""})


class TestKeywordCrud:

    def test_create_and_list(self, db):
        created = services.create_keyword(db, {
            "keyword": "seo audit",
            "search_volume": 2400,
            "difficulty": 42.129,
            "cpc": 3.456,
            "competition": "medium",
            "trend_data": None,
        })

        assert created.id is not None
        assert created.difficulty == 42.13
        assert created.cpc == 3.46
        assert created.competition == Competition.MEDIUM
        assert [row.id for row in services.list_keywords(db)] == [created.id]

    def test_duplicate_keyword(self, db):
        payload = {
            "keyword": "seo audit",
            "search_volume": 2400,
            "difficulty": 42,
            "cpc": 3,
            "competition": "medium",
        }
        services.create_keyword(db, payload)

        with pytest.raises(ValidationError, match="seo audit"):
            services.create_keyword(db, payload)
        assert count(db, Keyword) == 1

    def test_out_of_range_difficulty(self, db):
        with pytest.raises(ValidationError):
            services.create_keyword(db, {
                "keyword": "seo",
                "search_volume": 1,
                "difficulty": 150,
                "cpc": 1,
                "competition": "high",
            })

    def test_list_newest_first(self, db):
        for text in ("first", "second", "third"):
            services.create_keyword(db, {
                "keyword": text,
                "search_volume": 100,
                "difficulty": 10,
                "cpc": 1,
                "competition": "low",
            })

        assert [row.keyword for row in services.list_keywords(db)] == ["third", "second", "first"]


# ============================================================================
# Competitor Analysis
# ============================================================================

class TestCompetitorAnalysis:
    """Cache-aside over stored competitors."""

    def test_first_call_generates(self, db, rng):
        rows = services.analyze_competitors(db, {"target_keyword": "email marketing", "limit": 5}, rng=rng)

        assert [row.ranking_position for row in rows] == [1, 2, 3, 4, 5]
        assert count(db, Competitor) == 5
        assert all(row.target_keyword == "email marketing" for row in rows)

    def test_second_call_returns_stored_rows(self, db):
        request = {"target_keyword": "email marketing", "limit": 5}

        first = services.analyze_competitors(db, request, rng=random.Random(1))
        second = services.analyze_competitors(db, request, rng=random.Random(2))

        assert [row.id for row in second] == [row.id for row in first]
        assert [row.domain_authority for row in second] == [row.domain_authority for row in first]
        assert count(db, Competitor) == 5

    def test_limit_capped_at_ten(self, db, rng):
        rows = services.analyze_competitors(db, {"target_keyword": "seo", "limit": 25}, rng=rng)

        assert len(rows) == 10
        assert [row.ranking_position for row in rows] == list(range(1, 11))

    def test_default_limit(self, db, rng):
        assert len(services.analyze_competitors(db, {"target_keyword": "seo"}, rng=rng)) == 10

    def test_cached_rows_respect_limit(self, db, rng):
        services.analyze_competitors(db, {"target_keyword": "seo", "limit": 10}, rng=rng)
        rows = services.analyze_competitors(db, {"target_keyword": "seo", "limit": 3}, rng=rng)

        assert [row.ranking_position for row in rows] == [1, 2, 3]

    def test_lost_insert_race_returns_stored_rows(self, db, rng, monkeypatch):
        """A concurrent analysis stored its batch between lookup and insert."""
        request = {"target_keyword": "seo", "limit": 3}
        first = services.analyze_competitors(db, request, rng=rng)
        monkeypatch.setattr(
            repository, "get_competitors_for_keyword",
            miss_once(repository.get_competitors_for_keyword, []),
        )

        second = services.analyze_competitors(db, request, rng=random.Random(5))

        assert [row.id for row in second] == [row.id for row in first]
        assert count(db, Competitor) == 3

    def test_zero_limit_rejected(self, db):
        with pytest.raises(ValidationError):
            services.analyze_competitors(db, {"target_keyword": "seo", "limit": 0})


class TestCompetitorCrud:

    def test_create_rounds_scores(self, db):
        row = services.create_competitor(db, competitor_payload())

        assert row.id is not None
        assert row.domain_authority == 55.46
        assert row.content_quality_score == 71.5

    def test_duplicate_rank(self, db):
        services.create_competitor(db, competitor_payload())

        with pytest.raises(ValidationError):
            services.create_competitor(db, competitor_payload(domain="other.com"))
        assert count(db, Competitor) == 1

    def test_invalid_url(self, db):
        with pytest.raises(ValidationError):
            services.create_competitor(db, competitor_payload(url="not a url"))

    def test_manual_rows_count_as_cache(self, db, rng):
        services.create_competitor(db, competitor_payload())
        rows = services.analyze_competitors(db, {"target_keyword": "email marketing"}, rng=rng)

        assert [row.domain for row in rows] == ["example.com"]

    def test_list(self, db, rng):
        services.analyze_competitors(db, {"target_keyword": "seo", "limit": 2}, rng=rng)
        services.analyze_competitors(db, {"target_keyword": "ppc", "limit": 2}, rng=rng)

        rows = services.list_competitors(db)
        assert len(rows) == 4
        assert rows[0].target_keyword == "ppc"


# ============================================================================
# Content Outlines
# ============================================================================

class TestOutlineService:
    """Manual CRUD and generated outlines."""

    def test_create_and_get(self, db):
        created = services.create_outline(db, outline_payload())
        fetched = services.get_outline(db, created.id)

        assert fetched is created
        assert fetched.content_type == ContentType.ARTICLE
        assert fetched.difficulty_level == DifficultyLevel.INTERMEDIATE
        assert fetched.created_at == fetched.updated_at

    def test_get_unknown(self, db):
        assert services.get_outline(db, 4242) is None

    def test_invalid_payload(self, db):
        with pytest.raises(ValidationError):
            services.create_outline(db, outline_payload(content_type="podcast"))

    def test_update_only_supplied_fields(self, db):
        created = services.create_outline(db, outline_payload())
        created_at = created.created_at

        updated = services.update_outline(db, created.id, {"title": "Email Marketing in 2024"})

        assert updated.title == "Email Marketing in 2024"
        assert updated.target_keyword == "email marketing"
        assert updated.word_count_target == 1200
        assert updated.created_at == created_at
        assert updated.updated_at >= created_at

    def test_update_clears_nullable_field(self, db):
        created = services.create_outline(db, outline_payload())
        updated = services.update_outline(db, created.id, {"meta_description": None})

        assert updated.meta_description is None

    def test_update_rejects_null_required_field(self, db):
        created = services.create_outline(db, outline_payload())

        with pytest.raises(ValidationError):
            services.update_outline(db, created.id, {"title": None})

    @pytest.mark.parametrize("field", ["title", "target_keyword", "outline_structure"])
    def test_update_rejects_empty_text(self, db, field):
        created = services.create_outline(db, outline_payload())

        with pytest.raises(ValidationError):
            services.update_outline(db, created.id, {field: ""})
        assert getattr(services.get_outline(db, created.id), field)

    def test_empty_update_refreshes_timestamp(self, db):
        created = services.create_outline(db, outline_payload())
        updated = services.update_outline(db, created.id, {})

        assert updated.title == "Email Marketing for Small Businesses"
        assert updated.updated_at >= updated.created_at

    def test_update_unknown(self, db):
        with pytest.raises(NotFoundError) as exc_info:
            services.update_outline(db, 777, {"title": "Anything"})
        assert "777" in str(exc_info.value)

    def test_list_newest_first(self, db):
        first = services.create_outline(db, outline_payload())
        second = services.create_outline(db, outline_payload(title="Second outline about email marketing"))

        assert [row.id for row in services.list_outlines(db)] == [second.id, first.id]

    def test_generate_blog_post(self, db, rng):
        outline = services.generate_outline(db, "digital marketing", "blog_post", rng=rng)

        assert outline.id is not None
        assert outline.title == "The Complete Guide to digital marketing: Everything You Need to Know"
        assert outline.content_type == ContentType.BLOG_POST
        assert outline.difficulty_level == DifficultyLevel.BEGINNER
        assert 800 <= outline.word_count_target < 2000
        assert json.loads(outline.secondary_keywords)[:2] == [
            "digital marketing guide", "digital marketing tips",
        ]
        assert "mainSections" in json.loads(outline.outline_structure)
        assert count(db, ContentOutline) == 1

    def test_generate_empty_keyword(self, db, rng):
        with pytest.raises(ValidationError):
            services.generate_outline(db, "", "guide", rng=rng)
        assert count(db, ContentOutline) == 0

    def test_generate_accepts_enum_type(self, db, rng):
        outline = services.generate_outline(db, "seo", ContentType.GUIDE, rng=rng)
        assert outline.content_type == ContentType.GUIDE

    def test_generate_invalid_type(self, db, rng):
        with pytest.raises(ValidationError, match="Must be one of"):
            services.generate_outline(db, "seo", "whitepaper", rng=rng)
        assert count(db, ContentOutline) == 0


# ============================================================================
# Optimization Suggestions
# ============================================================================

class TestSuggestionService:
    """Rule-engine persistence and the status tracker."""

    def test_generate_for_unknown_outline(self, db):
        with pytest.raises(NotFoundError) as exc_info:
            services.generate_suggestions(db, 999999)
        assert "999999" in str(exc_info.value)

    def test_generate_persists_in_order(self, db, rng):
        outline = services.generate_outline(db, "digital marketing", "blog_post", rng=rng)
        generated = services.generate_suggestions(db, outline.id)

        assert generated
        assert all(row.id is not None for row in generated)
        assert all(row.is_implemented is False for row in generated)
        assert all(row.content_outline_id == outline.id for row in generated)
        assert [row.id for row in services.list_suggestions(db, outline.id)] == [row.id for row in generated]

    def test_generated_title_too_long(self, db, rng):
        """The blog post template title is 68 characters."""
        outline = services.generate_outline(db, "digital marketing", "blog_post", rng=rng)
        generated = services.generate_suggestions(db, outline.id)

        assert generated[0].suggestion_type == SuggestionType.TITLE
        assert generated[0].priority == Priority.HIGH
        assert generated[0].impact_score == 85

    def test_long_title_and_meta(self, db):
        outline = services.create_outline(db, outline_payload(
            title=("email marketing " * 7)[:97],
            meta_description=("email marketing " * 12)[:178],
        ))
        generated = services.generate_suggestions(db, outline.id)

        assert any(
            row.suggestion_type == SuggestionType.TITLE
            and row.priority == Priority.HIGH
            and row.impact_score > 80
            for row in generated
        )
        assert any(
            row.suggestion_type == SuggestionType.META_DESCRIPTION
            and row.priority == Priority.MEDIUM
            and row.current_value == "178 characters"
            for row in generated
        )

    def test_malformed_structure(self, db):
        outline = services.create_outline(db, outline_payload(
            outline_structure="{broken",
            secondary_keywords="also broken",
        ))
        generated = services.generate_suggestions(db, outline.id)

        headings = [row for row in generated if row.suggestion_type == SuggestionType.HEADINGS]
        assert headings[0].priority == Priority.HIGH
        density = [row for row in generated if row.suggestion_type == SuggestionType.KEYWORD_DENSITY]
        assert len(density) == 1

    def test_list_empty(self, db):
        outline = services.create_outline(db, outline_payload())
        assert services.list_suggestions(db, outline.id) == []

    def test_create_manual(self, db):
        outline = services.create_outline(db, outline_payload())
        row = services.create_suggestion(db, {
            "content_outline_id": outline.id,
            "suggestion_type": "images",
            "priority": "low",
            "suggestion": "Add a header image",
            "impact_score": 30.333,
        })

        assert row.id is not None
        assert row.impact_score == 30.33
        assert row.is_implemented is False
        assert services.list_suggestions(db, outline.id) == [row]

    def test_create_for_unknown_outline(self, db):
        with pytest.raises(NotFoundError):
            services.create_suggestion(db, {
                "content_outline_id": 31337,
                "suggestion_type": "images",
                "priority": "low",
                "suggestion": "Add a header image",
                "impact_score": 30,
            })
        assert count(db, OptimizationSuggestion) == 0

    def test_status_tracker(self, db, rng):
        outline = services.generate_outline(db, "seo", "guide", rng=rng)
        suggestion = services.generate_suggestions(db, outline.id)[0]
        text = suggestion.suggestion

        updated = services.set_suggestion_implemented(db, suggestion.id, True)
        assert updated.is_implemented is True
        assert updated.suggestion == text

        db.expire_all()
        assert db.get(OptimizationSuggestion, suggestion.id).is_implemented is True

        reverted = services.set_suggestion_implemented(db, suggestion.id, False)
        assert reverted.is_implemented is False

    def test_status_tracker_unknown(self, db):
        assert services.set_suggestion_implemented(db, 999999, True) is None
