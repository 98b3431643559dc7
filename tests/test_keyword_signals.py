"""
Test Suite for Keyword Signals

Tests the per-keyword on-page heuristics shown next to the visibility score.
"""

import pytest

from src.context.page_analyzer import SiteAnalysis
from src.scoring.keyword_signals import (
    KeywordScore,
    analyze_keyword,
    analyze_keywords,
    build_insights,
    clean_keyword,
    estimate_google_ranking,
    review_bonus,
    score_to_llm_visibility,
)


class TestCleanKeyword:

    def test_removes_profession_words(self):
        assert clean_keyword("Car Accident Lawyer") == "car accident"
        assert clean_keyword("DUI Attorney") == "dui"

    def test_plain_keyword(self):
        assert clean_keyword("Probate") == "probate"


class TestReviewBonus:

    @pytest.mark.parametrize(
        "rating,reviews,expected",
        [
            (4.8, 150, 15),
            (4.6, 120, 12),
            (4.5, 60, 8),
            (4.2, 25, 4),
            (3.9, 500, 0),
            (4.9, 10, 0),
            (None, None, 0),
        ],
    )
    def test_tiers(self, rating, reviews, expected):
        assert review_bonus(rating, reviews) == expected


class TestEstimateGoogleRanking:

    def test_full_marks_without_reviews(self, dui_pages):
        """Title 35 + dedicated page 30 + 1200 words 5 + schema 20."""
        assert estimate_google_ranking("DUI Lawyer", dui_pages) == 90

    def test_capped_at_100(self, dui_pages):
        assert estimate_google_ranking("DUI Lawyer", dui_pages, rating=4.9, reviews=200) == 100

    def test_no_schema_penalty(self, dui_pages):
        dui_pages[0].has_schema = False
        assert estimate_google_ranking("DUI Lawyer", dui_pages) == 28

    def test_long_dedicated_page(self, dui_pages):
        dui_pages[1].word_count = 1600
        assert estimate_google_ranking("DUI Lawyer", dui_pages) == 95

    def test_short_page_is_not_dedicated(self, dui_pages):
        dui_pages[1].word_count = 450
        assert estimate_google_ranking("DUI Lawyer", dui_pages) == 55

    def test_schema_only(self, dui_pages):
        assert estimate_google_ranking("Probate Lawyer", dui_pages) == 20


class TestLLMVisibility:

    def test_tiers(self):
        assert score_to_llm_visibility(80) == {"chatgpt": True, "perplexity": True, "gemini": True}
        assert score_to_llm_visibility(65) == {"chatgpt": True, "perplexity": True, "gemini": False}
        assert score_to_llm_visibility(50) == {"chatgpt": True, "perplexity": False, "gemini": False}
        assert score_to_llm_visibility(10) == {"chatgpt": False, "perplexity": False, "gemini": False}

    def test_coin_flip_band(self, fixed_source):
        assert score_to_llm_visibility(35, rng=fixed_source(value=0.9))["chatgpt"] is True
        assert score_to_llm_visibility(35, rng=fixed_source(value=0.1))["chatgpt"] is False


class TestAnalyzeKeyword:

    def test_signals(self, dui_pages):
        result = analyze_keyword("DUI Lawyer", dui_pages)

        assert isinstance(result, KeywordScore)
        assert result.found_in_title
        assert result.has_dedicated_page
        assert result.total_mentions == 3
        assert result.google_ranking_estimate == 90
        assert result.chatgpt and result.perplexity and result.gemini

    def test_keyword_only_in_headings(self, dui_pages):
        result = analyze_keyword("Drug Crime Lawyer", dui_pages)

        assert not result.found_in_title
        assert not result.has_dedicated_page
        assert result.total_mentions == 1

    def test_to_dict_uses_camel_case(self, dui_pages):
        data = analyze_keyword("DUI Lawyer", dui_pages).to_dict()
        assert set(data) == {
            "keyword", "googleRankingEstimate", "foundInTitle", "hasDedicatedPage",
            "totalMentions", "chatgpt", "perplexity", "gemini",
        }

    def test_analyze_keywords_keeps_order(self, dui_site):
        results = analyze_keywords(["Drug Crime Lawyer", "DUI Lawyer"], dui_site)
        assert [r.keyword for r in results] == ["Drug Crime Lawyer", "DUI Lawyer"]

    def test_analyze_keywords_without_pages(self):
        site = SiteAnalysis(base_url="https://unreachable.example")
        assert analyze_keywords(["DUI Lawyer"], site) == []
        assert analyze_keywords([], site) == []


class TestBuildInsights:

    def test_thin_content(self, dui_site):
        keywords = ["DUI Lawyer", "Drug Crime Lawyer"]
        scores = analyze_keywords(keywords, dui_site)
        insights = build_insights(dui_site, scores, keywords, city="Austin")

        assert len(insights) == 1
        assert "750 words" in insights[0]
        assert "Austin" in insights[0]

    def test_all_findings(self, dui_site):
        for page in dui_site.pages:
            page.has_schema = False
        keywords = ["Probate Lawyer", "Estate Planning Lawyer", "Trust Lawyer"]
        scores = analyze_keywords(keywords, dui_site)
        insights = build_insights(dui_site, scores, keywords)

        assert len(insights) == 3
        assert "2 pages analyzed" in insights[0]
        assert "your market" in insights[1]
        assert insights[2] == "Only 0 of 3 target keywords appear in page titles."

    def test_no_pages(self):
        site = SiteAnalysis(base_url="https://unreachable.example")
        assert build_insights(site, [], ["DUI Lawyer"]) == []
