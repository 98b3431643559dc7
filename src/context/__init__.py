"""
Firm Context Package

Understands the firm before it is scored:
- Website page analysis (titles, headings, word counts, schema)
- Practice area detection and keyword suggestion
- Firecrawl-backed keyword extraction with dictionary fallback
"""

from .page_analyzer import (
    PageAnalysis,
    PageFetcher,
    SiteAnalysis,
    analyze_site,
    extract_internal_links,
    extract_text,
    normalize_base_url,
)
from .practice_areas import (
    PRACTICE_PROFILES,
    PracticeProfile,
    detect_practice_area,
    detect_practice_by_name,
    detect_practice_from_content,
    extract_heading_keywords,
    extract_keywords_from_markdown,
    normalize_keywords,
    suggest_keywords,
)
from .keyword_extractor import KeywordExtraction, KeywordExtractor, fallback_extraction

__all__ = [
    "PageAnalysis",
    "PageFetcher",
    "SiteAnalysis",
    "analyze_site",
    "extract_internal_links",
    "extract_text",
    "normalize_base_url",
    "PRACTICE_PROFILES",
    "PracticeProfile",
    "detect_practice_area",
    "detect_practice_by_name",
    "detect_practice_from_content",
    "extract_heading_keywords",
    "extract_keywords_from_markdown",
    "normalize_keywords",
    "suggest_keywords",
    "KeywordExtraction",
    "KeywordExtractor",
    "fallback_extraction",
]
