"""
Keyword Signal Heuristics

Per-keyword on-page checks reported next to the visibility score:
- Keyword found in a page title
- Dedicated page (keyword in URL and H1)
- Mention count across titles and headings
- Rough Google ranking estimate (0-100) and the AI platforms it implies

These are presentation heuristics. They never feed the overall score.
"""

import math
import random
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence, TYPE_CHECKING

if TYPE_CHECKING:
    from src.context.page_analyzer import PageAnalysis, SiteAnalysis


_PROFESSION_WORDS = ("lawyer", "attorney")


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def clean_keyword(keyword: str) -> str:
    """Lowercase keyword with 'lawyer' / 'attorney' removed."""
    cleaned = keyword.lower()
    for word in _PROFESSION_WORDS:
        cleaned = cleaned.replace(word, "")
    return cleaned.strip()


# =============================================================================
# RANKING ESTIMATE
# =============================================================================

def review_bonus(rating: Optional[float], reviews: Optional[int]) -> int:
    """Bonus points for the Google rating / review volume tier."""
    rating = rating or 0
    reviews = reviews or 0

    if rating >= 4.8 and reviews >= 150:
        return 15
    if rating >= 4.5 and reviews >= 100:
        return 12
    if rating >= 4.5 and reviews >= 50:
        return 8
    if rating >= 4.0 and reviews >= 20:
        return 4
    return 0


def estimate_google_ranking(
    keyword: str,
    pages: Sequence["PageAnalysis"],
    rating: Optional[float] = None,
    reviews: Optional[int] = None,
) -> int:
    """
    Heuristic 0-100 ranking estimate for a keyword.

    Title match 35, dedicated page 30 (+10 over 1500 words, +5 over 1000),
    schema 20 (without schema everything so far is cut to 40%), then the
    review tier bonus.
    """
    kw = clean_keyword(keyword)
    score = 0

    if any(kw in p.title.lower() for p in pages):
        score += 35

    dedicated = next(
        (
            p for p in pages
            if kw in p.url.lower()
            and any(kw in h1.lower() for h1 in p.h1_tags)
            and p.word_count > 500
        ),
        None,
    )
    if dedicated is not None:
        score += 30
        if dedicated.word_count > 1500:
            score += 10
        elif dedicated.word_count > 1000:
            score += 5

    if any(p.has_schema for p in pages):
        score += 20
    else:
        score = _round_half_up(score * 0.4)

    score += review_bonus(rating, reviews)
    return min(score, 100)


def score_to_llm_visibility(score: int, rng: Optional[random.Random] = None) -> Dict[str, bool]:
    """
    Which AI platforms would plausibly surface the firm for a ranking score.

    The 30-44 band is a coin flip (30% chance of ChatGPT).
    """
    if score >= 75:
        return {"chatgpt": True, "perplexity": True, "gemini": True}
    if score >= 60:
        return {"chatgpt": True, "perplexity": True, "gemini": False}
    if score >= 45:
        return {"chatgpt": True, "perplexity": False, "gemini": False}
    if score >= 30:
        source = rng or random
        return {"chatgpt": source.random() > 0.7, "perplexity": False, "gemini": False}
    return {"chatgpt": False, "perplexity": False, "gemini": False}


# =============================================================================
# KEYWORD SCORES
# =============================================================================

@dataclass
class KeywordScore:
    """On-page signals and ranking estimate for one keyword."""
    keyword: str
    google_ranking_estimate: int
    found_in_title: bool
    has_dedicated_page: bool
    total_mentions: int
    chatgpt: bool = False
    perplexity: bool = False
    gemini: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "keyword": self.keyword,
            "googleRankingEstimate": self.google_ranking_estimate,
            "foundInTitle": self.found_in_title,
            "hasDedicatedPage": self.has_dedicated_page,
            "totalMentions": self.total_mentions,
            "chatgpt": self.chatgpt,
            "perplexity": self.perplexity,
            "gemini": self.gemini,
        }


def analyze_keyword(
    keyword: str,
    pages: Sequence["PageAnalysis"],
    rating: Optional[float] = None,
    reviews: Optional[int] = None,
    rng: Optional[random.Random] = None,
) -> KeywordScore:
    kw = clean_keyword(keyword)

    found_in_title = any(kw in p.title.lower() for p in pages)
    has_dedicated_page = any(
        kw in p.url.lower() and any(kw in h1.lower() for h1 in p.h1_tags)
        for p in pages
    )
    total_mentions = sum(
        " ".join([p.title, *p.h1_tags, *p.h2_tags]).lower().count(kw)
        for p in pages
    )

    estimate = estimate_google_ranking(keyword, pages, rating, reviews)
    visibility = score_to_llm_visibility(estimate, rng=rng)

    return KeywordScore(
        keyword=keyword,
        google_ranking_estimate=estimate,
        found_in_title=found_in_title,
        has_dedicated_page=has_dedicated_page,
        total_mentions=total_mentions,
        **visibility,
    )


def analyze_keywords(
    keywords: Optional[Sequence[str]],
    site: "SiteAnalysis",
    rating: Optional[float] = None,
    reviews: Optional[int] = None,
    rng: Optional[random.Random] = None,
) -> List[KeywordScore]:
    """Keyword scores for every target keyword; empty when nothing was fetched."""
    if not keywords or not site.pages:
        return []
    return [analyze_keyword(kw, site.pages, rating, reviews, rng=rng) for kw in keywords]


# =============================================================================
# INSIGHTS
# =============================================================================

def build_insights(
    site: "SiteAnalysis",
    keyword_scores: Sequence[KeywordScore],
    keywords: Optional[Sequence[str]] = None,
    city: Optional[str] = None,
) -> List[str]:
    """Plain-language findings about the firm's site."""
    if not site.pages:
        return []

    insights = []
    pages_analyzed = len(site.pages)

    if not site.has_schema:
        insights.append(
            f"No LocalBusiness / LegalService schema detected on the "
            f"{pages_analyzed} pages analyzed."
        )

    if site.avg_words < 800:
        where = city or "your market"
        insights.append(
            f"Pages have an average of {site.avg_words} words. Top firms in "
            f"{where} typically have 1,500-2,000 word practice pages."
        )

    total_keywords = len(keywords or [])
    in_titles = len([k for k in keyword_scores if k.found_in_title])
    if in_titles < total_keywords / 3:
        insights.append(
            f"Only {in_titles} of {total_keywords} target keywords appear in page titles."
        )

    return insights
