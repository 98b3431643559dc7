"""
Scoring Module for the Law Firm AI Grader

1. **Visibility Score** (client, competitors, platforms)
   Deterministic scores derived from firm and competitor names.
   The client always lands below every listed competitor.

2. **Competitor Normalization**
   Filters, self-excludes and truncates the caller's competitor list.

3. **Keyword Signals**
   Per-keyword on-page checks and ranking estimates for the report.

Example Usage:
    from src.scoring import synthesize_visibility

    report = synthesize_visibility(
        "Smith & Associates",
        [{"name": "Jones Injury Law"}, {"name": "Garcia Legal"}],
    )
    print(report.to_dict())
"""

from .helpers import (
    CLIENT_BAND,
    COMPETITOR_BAND,
    MAX_ADJUSTMENT_MARGIN,
    MAX_SCORED_COMPETITORS,
    MIN_ADJUSTMENT_MARGIN,
    SCORE_FLOOR,
    ScoreBand,
    pseudo_random,
    string_to_hash,
)

from .competitors import (
    Competitor,
    coerce_competitor,
    filter_self_matches,
    is_self_match,
    normalize_competitors,
)

from .visibility import (
    NamedEntity,
    PlatformScoreSet,
    ScoredEntity,
    VisibilityReport,
    adjust_client_score,
    calculate_platform_scores,
    client_score,
    competitor_score,
    rank_competitors,
    synthesize_visibility,
)

from .keyword_signals import (
    KeywordScore,
    analyze_keyword,
    analyze_keywords,
    build_insights,
    clean_keyword,
    estimate_google_ranking,
    review_bonus,
    score_to_llm_visibility,
)

__all__ = [
    # Helpers
    "CLIENT_BAND",
    "COMPETITOR_BAND",
    "MAX_ADJUSTMENT_MARGIN",
    "MAX_SCORED_COMPETITORS",
    "MIN_ADJUSTMENT_MARGIN",
    "SCORE_FLOOR",
    "ScoreBand",
    "pseudo_random",
    "string_to_hash",

    # Competitors
    "Competitor",
    "coerce_competitor",
    "filter_self_matches",
    "is_self_match",
    "normalize_competitors",

    # Visibility
    "NamedEntity",
    "PlatformScoreSet",
    "ScoredEntity",
    "VisibilityReport",
    "adjust_client_score",
    "calculate_platform_scores",
    "client_score",
    "competitor_score",
    "rank_competitors",
    "synthesize_visibility",

    # Keyword signals
    "KeywordScore",
    "analyze_keyword",
    "analyze_keywords",
    "build_insights",
    "clean_keyword",
    "estimate_google_ranking",
    "review_bonus",
    "score_to_llm_visibility",
]
