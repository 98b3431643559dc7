"""
Keyword Extractor

Builds a firm's practice area and target keyword list:
1. Scrape the site with Firecrawl and mine its markdown
2. Fall back to the practice dictionary when scraping is unavailable,
   fails, or yields fewer than MIN_SITE_KEYWORDS phrases
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from src.integrations.firecrawl import FirecrawlClient

from .practice_areas import (
    DEFAULT_PRACTICE,
    FALLBACK_KEYWORDS,
    detect_practice_by_name,
    detect_practice_from_content,
    extract_keywords_from_markdown,
    normalize_keywords,
)

logger = logging.getLogger(__name__)


MIN_SITE_KEYWORDS = 5
MAX_KEYWORDS = 10


@dataclass
class KeywordExtraction:
    """Detected practice area and keywords."""
    practice_area: str
    keywords: List[str] = field(default_factory=list)
    source: str = "fallback"        # site or fallback

    def to_dict(self) -> Dict[str, Any]:
        return {
            "practiceArea": self.practice_area,
            "keywords": self.keywords,
            "source": self.source,
        }


def fallback_extraction(
    firm_name: str,
    city: str,
    google_types: Optional[Sequence[str]] = None,
) -> KeywordExtraction:
    """Dictionary keywords for the practice guessed from the firm name."""
    practice_area = detect_practice_by_name(firm_name, google_types)
    base = FALLBACK_KEYWORDS.get(practice_area) or FALLBACK_KEYWORDS[DEFAULT_PRACTICE]
    keywords = [f"{kw} in {city}" if city else kw for kw in base[:MAX_KEYWORDS]]
    return KeywordExtraction(practice_area=practice_area, keywords=keywords, source="fallback")


class KeywordExtractor:
    """Extracts practice area and keywords, preferring real site content."""

    def __init__(self, firecrawl: Optional[FirecrawlClient] = None):
        self.firecrawl = firecrawl

    async def extract(
        self,
        firm_name: str,
        website: str,
        city: str = "",
        google_types: Optional[Sequence[str]] = None,
    ) -> KeywordExtraction:
        logger.info(f"Extracting keywords for {firm_name}")

        markdown = None
        if self.firecrawl is not None and website:
            markdown = await self.firecrawl.scrape_markdown(website)

        if markdown:
            practice_area = detect_practice_from_content(markdown)
            raw_keywords = extract_keywords_from_markdown(markdown)

            if len(raw_keywords) >= MIN_SITE_KEYWORDS:
                keywords = normalize_keywords(raw_keywords, city, limit=MAX_KEYWORDS)
                logger.info(
                    f"Found {practice_area}, {len(keywords)} keywords from site content"
                )
                return KeywordExtraction(
                    practice_area=practice_area,
                    keywords=keywords,
                    source="site",
                )

        logger.info(f"Using fallback keywords for {firm_name}")
        return fallback_extraction(firm_name, city, google_types)
