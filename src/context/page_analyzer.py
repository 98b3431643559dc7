"""
Firm Website Page Analyzer

Fetches a law firm's homepage and a handful of practice-area pages and
extracts the on-page signals the grader reports on:
- Title, H1 and H2 headings
- Visible word count
- schema.org markup presence
- Internal practice/service/attorney links
"""

import asyncio
import logging
import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
from urllib.parse import urlparse

import httpx

logger = logging.getLogger(__name__)


USER_AGENT = "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36"

# Internal links containing any of these are treated as practice pages
PRACTICE_LINK_HINTS = ("practice", "service", "area", "attorney", "lawyer", "legal")

MAX_INTERNAL_PAGES = 5


# =============================================================================
# HTML EXTRACTION
# =============================================================================

_SCRIPT_RE = re.compile(r"<script[^>]*>.*?</script>", re.DOTALL | re.IGNORECASE)
_STYLE_RE = re.compile(r"<style[^>]*>.*?</style>", re.DOTALL | re.IGNORECASE)
_TAG_RE = re.compile(r"<[^>]+>")
_SPACE_RE = re.compile(r"\s+")
_TITLE_RE = re.compile(r"<title[^>]*>([^<]+)</title>", re.IGNORECASE)
_LINK_RE = re.compile(r"""<a[^>]*href=["']([^"']+)["'][^>]*>""", re.IGNORECASE)


def _strip_tags(fragment: str) -> str:
    return _SPACE_RE.sub(" ", _TAG_RE.sub(" ", fragment)).strip()


def extract_text(html: str) -> str:
    """Extract readable text from HTML."""
    html = _SCRIPT_RE.sub("", html)
    html = _STYLE_RE.sub("", html)
    return _strip_tags(html)


def count_words(text: str) -> int:
    return len(text.split())


def extract_title(html: str) -> str:
    match = _TITLE_RE.search(html)
    return match.group(1).strip() if match else ""


def extract_headings(html: str, level: int) -> List[str]:
    """Text of every <hN> heading, inner tags stripped, empties dropped."""
    pattern = re.compile(rf"<h{level}[^>]*>(.*?)</h{level}>", re.DOTALL | re.IGNORECASE)
    headings = []
    for match in pattern.finditer(html):
        text = _strip_tags(match.group(1))
        if text:
            headings.append(text)
    return headings


def has_schema_markup(html: str) -> bool:
    lower = html.lower()
    return "schema.org" in lower or '"@type"' in lower


def extract_internal_links(html: str, base_host: str, limit: int = MAX_INTERNAL_PAGES) -> List[str]:
    """
    Find internal links that look like practice-area pages.

    Args:
        html: Page HTML
        base_host: Hostname of the firm site
        limit: Maximum links to return

    Returns:
        Absolute https URLs, first-seen order, deduplicated
    """
    links: List[str] = []
    seen = set()

    for match in _LINK_RE.finditer(html):
        href = match.group(1).strip()
        if not href:
            continue
        if href.startswith(("#", "mailto:", "tel:")):
            continue
        if href.startswith("http") and base_host not in href:
            continue

        if href.startswith("/"):
            href = f"https://{base_host}{href}"
        elif not href.startswith("http"):
            href = f"https://{base_host}/{href}"

        lower = href.lower()
        if any(hint in lower for hint in PRACTICE_LINK_HINTS) and href not in seen:
            seen.add(href)
            links.append(href)

    return links[:limit]


def normalize_base_url(url: str) -> str:
    """Add https:// when missing and drop a trailing slash."""
    url = url.strip()
    base = url if url.startswith("http") else f"https://{url}"
    return base[:-1] if base.endswith("/") else base


# =============================================================================
# DATA CLASSES
# =============================================================================

@dataclass
class PageAnalysis:
    """On-page signals for a single URL."""
    url: str
    title: str = ""
    word_count: int = 0
    h1_tags: List[str] = field(default_factory=list)
    h2_tags: List[str] = field(default_factory=list)
    has_schema: bool = False
    html: str = field(default="", repr=False)

    @classmethod
    def from_html(cls, url: str, html: str) -> "PageAnalysis":
        return cls(
            url=url,
            title=extract_title(html),
            word_count=count_words(extract_text(html)),
            h1_tags=extract_headings(html, 1),
            h2_tags=extract_headings(html, 2),
            has_schema=has_schema_markup(html),
            html=html,
        )

    @property
    def headings(self) -> List[str]:
        return self.h1_tags + self.h2_tags

    def to_dict(self) -> Dict[str, Any]:
        return {
            "url": self.url,
            "title": self.title,
            "wordCount": self.word_count,
            "h1Tags": self.h1_tags,
            "h2Tags": self.h2_tags,
            "hasSchema": self.has_schema,
        }


@dataclass
class SiteAnalysis:
    """Homepage plus analyzed internal pages."""
    base_url: str
    pages: List[PageAnalysis] = field(default_factory=list)

    @property
    def homepage(self) -> Optional[PageAnalysis]:
        return self.pages[0] if self.pages else None

    @property
    def total_words(self) -> int:
        return sum(p.word_count for p in self.pages)

    @property
    def avg_words(self) -> int:
        if not self.pages:
            return 0
        return round(self.total_words / len(self.pages))

    @property
    def has_schema(self) -> bool:
        return any(p.has_schema for p in self.pages)

    @property
    def dedicated_pages(self) -> int:
        return len([
            p for p in self.pages
            if p.url != self.base_url and p.word_count > 400
        ])

    def summary(self) -> Dict[str, Any]:
        return {
            "pagesAnalyzed": len(self.pages),
            "totalWords": self.total_words,
            "avgWords": self.avg_words,
            "hasSchema": self.has_schema,
            "dedicatedPages": self.dedicated_pages,
        }


# =============================================================================
# FETCHER
# =============================================================================

class PageFetcher:
    """Fetches firm pages and turns them into PageAnalysis objects."""

    def __init__(self, timeout: float = 10.0, client: Optional[httpx.AsyncClient] = None):
        self.timeout = timeout
        self.client = client or httpx.AsyncClient(
            timeout=timeout,
            follow_redirects=True,
            headers={"User-Agent": USER_AGENT},
        )

    async def close(self):
        """Close the HTTP client."""
        await self.client.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def analyze_page(self, url: str) -> Optional[PageAnalysis]:
        """Fetch and analyze a page. Returns None when it can't be fetched."""
        try:
            response = await self.client.get(url)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.warning(f"HTTP error fetching {url}: {e.response.status_code}")
            return None
        except httpx.RequestError as e:
            logger.warning(f"Request error fetching {url}: {e}")
            return None
        except httpx.InvalidURL as e:
            logger.warning(f"Invalid URL {url!r}: {e}")
            return None

        return PageAnalysis.from_html(url, response.text)


async def analyze_site(
    url: str,
    fetcher: PageFetcher,
    max_internal_pages: int = MAX_INTERNAL_PAGES,
) -> SiteAnalysis:
    """
    Analyze a firm homepage and its practice-area pages.

    Args:
        url: Firm website (scheme optional)
        fetcher: PageFetcher to use
        max_internal_pages: Internal pages to follow from the homepage

    Returns:
        SiteAnalysis; empty pages list when the homepage is unreachable
    """
    base_url = normalize_base_url(url)
    site = SiteAnalysis(base_url=base_url)

    homepage = await fetcher.analyze_page(base_url)
    if homepage is None:
        logger.warning(f"Homepage unreachable: {base_url}")
        return site

    site.pages.append(homepage)

    try:
        host = urlparse(base_url).hostname or ""
    except ValueError as e:
        logger.warning(f"Cannot resolve host of {base_url!r}, skipping internal pages: {e}")
        return site

    links = extract_internal_links(homepage.html, host, limit=max_internal_pages) if host else []
    if links:
        results = await asyncio.gather(*(fetcher.analyze_page(link) for link in links))
        site.pages.extend(page for page in results if page is not None)

    logger.info(
        f"Analyzed {len(site.pages)} pages from {base_url} "
        f"({site.total_words} words)"
    )
    return site
