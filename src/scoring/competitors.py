"""
Competitor Normalization

Turns the untrusted competitor list supplied by the caller (Google Places
results forwarded by the frontend) into the ordered input the visibility
synthesizer scores:

1. Drop records without a usable name
2. Drop the firm itself (case-insensitive substring match on the firm name)
3. Keep input order
4. Keep the first MAX_SCORED_COMPETITORS survivors
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional

from .helpers import MAX_SCORED_COMPETITORS

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Competitor:
    """A competitor as supplied by the caller. Identity is the name only."""
    name: str
    website: Optional[str] = None
    rating: Optional[float] = None
    reviews: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "website": self.website,
            "rating": self.rating,
            "reviews": self.reviews,
        }


def _field(record: Any, key: str) -> Any:
    if isinstance(record, dict):
        return record.get(key)
    return getattr(record, key, None)


def coerce_competitor(record: Any) -> Optional[Competitor]:
    """
    Build a Competitor from a dict, model or Competitor.

    Returns None when the record has no usable name.
    """
    if isinstance(record, Competitor):
        return record if record.name and record.name.strip() else None

    name = _field(record, "name")
    if not isinstance(name, str) or not name.strip():
        return None

    return Competitor(
        name=name,
        website=_field(record, "website") or None,
        rating=_field(record, "rating"),
        reviews=_field(record, "reviews"),
    )


def is_self_match(competitor_name: str, firm_name: str) -> bool:
    """
    True when the competitor name contains the firm name (case-insensitive).

    An empty firm name is contained in every name, so it matches everything.
    """
    return (firm_name or "").lower() in (competitor_name or "").lower()


def filter_self_matches(competitors: Iterable[Any], firm_name: str) -> List[Any]:
    """Remove entries whose name contains the firm name, keeping order."""
    kept = []
    for competitor in competitors:
        name = _field(competitor, "name") or ""
        if is_self_match(name, firm_name):
            logger.debug(f"Excluding self-match competitor: {name}")
            continue
        kept.append(competitor)
    return kept


def normalize_competitors(
    records: Optional[Iterable[Any]],
    firm_name: str,
    limit: int = MAX_SCORED_COMPETITORS,
) -> List[Competitor]:
    """
    Normalize an external competitor list for scoring.

    Args:
        records: Raw competitor records ({name, website?, rating?, reviews?})
        firm_name: Client firm name used for self-exclusion
        limit: Maximum survivors to keep

    Returns:
        Up to `limit` competitors in input order
    """
    if not records:
        return []

    named = [c for c in (coerce_competitor(r) for r in records) if c is not None]
    survivors = filter_self_matches(named, firm_name)

    if len(survivors) > limit:
        logger.info(f"Truncating {len(survivors)} competitors to {limit}")

    return survivors[:limit]
