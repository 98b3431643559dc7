"""
Visibility Score Synthesizer

Produces the client's AI visibility score, competitor scores and the
per-platform breakdown shown in the grader report.

Scores are derived from name hashes, not measured:
- Client scores fall in CLIENT_BAND (14-29)
- Competitor scores fall in COMPETITOR_BAND (75-96)
- The client always ends up strictly below the weakest listed competitor

Everything is reproducible from the names alone except the adjustment
margin drawn in adjust_client_score, which comes from a real random source.
"""

import logging
import random
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional

from .competitors import (
    Competitor,
    coerce_competitor,
    filter_self_matches,
    normalize_competitors,
)
from .helpers import (
    CLIENT_BAND,
    COMPETITOR_BAND,
    MAX_ADJUSTMENT_MARGIN,
    MAX_SCORED_COMPETITORS,
    MIN_ADJUSTMENT_MARGIN,
    SCORE_FLOOR,
    pseudo_random,
    string_to_hash,
)

logger = logging.getLogger(__name__)


# =============================================================================
# DATA CLASSES
# =============================================================================

@dataclass(frozen=True)
class NamedEntity:
    """A firm or competitor identified solely by display name."""
    name: str


@dataclass(frozen=True)
class ScoredEntity(NamedEntity):
    """A named entity annotated with a 0-100 score."""
    score: int

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "score": self.score}


@dataclass(frozen=True)
class PlatformScoreSet:
    """Per-platform scores derived from the overall score."""
    chatgpt: int
    perplexity: int
    gemini: int

    def to_dict(self) -> Dict[str, int]:
        return {
            "chatgptScore": self.chatgpt,
            "perplexityScore": self.perplexity,
            "geminiScore": self.gemini,
        }


@dataclass
class VisibilityReport:
    """Complete synthesized score set for one request."""
    firm_name: str
    overall_score: int
    platform_scores: PlatformScoreSet
    competitors: List[ScoredEntity] = field(default_factory=list)
    calculated_score: int = 0       # Before adjustment

    @property
    def was_adjusted(self) -> bool:
        return self.overall_score != self.calculated_score

    def to_dict(self) -> Dict[str, Any]:
        return {
            "overallScore": self.overall_score,
            **self.platform_scores.to_dict(),
            "competitors": [c.to_dict() for c in self.competitors],
        }


# =============================================================================
# SCORES
# =============================================================================

def client_score(firm_name: str) -> int:
    """Deterministic client score in CLIENT_BAND."""
    return CLIENT_BAND.draw(string_to_hash(firm_name))


def competitor_score(competitor_name: str, index: int, base_seed: int) -> int:
    """
    Deterministic competitor score in COMPETITOR_BAND.

    Args:
        competitor_name: Competitor display name
        index: Position in the truncated competitor list
        base_seed: Hash of the client firm name

    Returns:
        Score in COMPETITOR_BAND
    """
    seed = string_to_hash(competitor_name) + index + base_seed
    return COMPETITOR_BAND.draw(seed)


def rank_competitors(
    raw_competitors: Optional[Iterable[Any]],
    firm_name: str,
) -> List[ScoredEntity]:
    """
    Score and rank competitors for a client firm.

    Self-matches are removed and only the first MAX_SCORED_COMPETITORS
    survivors (input order) are scored. The result is sorted by score,
    highest first; equal scores keep their relative order.
    """
    if not raw_competitors:
        return []

    named = [c for c in (coerce_competitor(r) for r in raw_competitors) if c is not None]
    survivors = filter_self_matches(named, firm_name)[:MAX_SCORED_COMPETITORS]

    base_seed = string_to_hash(firm_name)
    scored = [
        ScoredEntity(name=c.name, score=competitor_score(c.name, index, base_seed))
        for index, c in enumerate(survivors)
    ]

    return sorted(scored, key=lambda c: c.score, reverse=True)


def adjust_client_score(
    calculated_score: int,
    competitors: Optional[List[ScoredEntity]],
    rng: Optional[random.Random] = None,
) -> int:
    """
    Force the client score below the weakest competitor.

    Args:
        calculated_score: Client score before adjustment
        competitors: Scored competitors
        rng: Source with randint(a, b); defaults to the random module

    Returns:
        calculated_score if already below every competitor, otherwise the
        lowest competitor score minus a 2-5 point margin, floored at 5
    """
    if not competitors:
        return calculated_score

    lowest = min(c.score for c in competitors)
    if calculated_score < lowest:
        return calculated_score

    source = rng or random
    margin = source.randint(MIN_ADJUSTMENT_MARGIN, MAX_ADJUSTMENT_MARGIN)
    adjusted = max(lowest - margin, SCORE_FLOOR)

    logger.debug(
        f"Adjusted client score {calculated_score} -> {adjusted} "
        f"(lowest competitor {lowest}, margin {margin})"
    )
    return adjusted


def _bounded(seed: int, low: int, high: int) -> int:
    return pseudo_random(seed, min(low, high), high)


def calculate_platform_scores(overall_score: int, firm_name: str) -> PlatformScoreSet:
    """
    Derive ChatGPT / Perplexity / Gemini scores from the overall score.

    Perplexity is always 0. Bounds that would invert for out-of-band
    overall scores collapse onto the upper bound.
    """
    seed = string_to_hash(firm_name)

    chatgpt = _bounded(
        seed + 5,
        max(5, overall_score - 10),
        min(35, overall_score + 5),
    )
    gemini = _bounded(
        seed + 9,
        max(0, overall_score - 15),
        min(25, overall_score),
    )

    return PlatformScoreSet(chatgpt=chatgpt, perplexity=0, gemini=gemini)


# =============================================================================
# END TO END
# =============================================================================

def synthesize_visibility(
    firm_name: str,
    competitors: Optional[Iterable[Any]] = None,
    rng: Optional[random.Random] = None,
) -> VisibilityReport:
    """
    Build the full score set for a grader request.

    Args:
        firm_name: Client firm name
        competitors: Raw competitor records ({name, website?, rating?, reviews?})
        rng: Optional margin source for adjust_client_score

    Returns:
        VisibilityReport ready for serialization
    """
    normalized: List[Competitor] = normalize_competitors(competitors, firm_name)
    ranked = rank_competitors(normalized, firm_name)

    calculated = client_score(firm_name)
    overall = adjust_client_score(calculated, ranked, rng=rng)
    platforms = calculate_platform_scores(overall, firm_name)

    logger.info(
        f"Visibility for {firm_name!r}: overall={overall} "
        f"(calculated {calculated}), {len(ranked)} competitors"
    )

    return VisibilityReport(
        firm_name=firm_name,
        overall_score=overall,
        platform_scores=platforms,
        competitors=ranked,
        calculated_score=calculated,
    )
