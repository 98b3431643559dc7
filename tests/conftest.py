"""
Pytest Configuration and Shared Fixtures

Provides common fixtures and configuration for all test modules.
"""

import pytest
from typing import List

from src.context.page_analyzer import PageAnalysis, SiteAnalysis


# ============================================================================
# Randomness
# ============================================================================

class FixedSource:
    """Stand-in for random.Random returning fixed draws."""

    def __init__(self, margin: int = 2, value: float = 0.5):
        self.margin = margin
        self.value = value
        self.calls = []

    def randint(self, a: int, b: int) -> int:
        self.calls.append((a, b))
        return self.margin

    def random(self) -> float:
        return self.value


@pytest.fixture
def fixed_source():
    """Factory for deterministic margin / coin-flip sources."""
    return FixedSource


# ============================================================================
# HTML Fixtures
# ============================================================================

HOMEPAGE_HTML = """<html>
<head>
<title>Smith Injury Law | Austin Personal Injury Lawyer</title>
<script type="application/ld+json">{"@context": "https://schema.org", "@type": "LegalService"}</script>
<style>body { color: #333; }</style>
</head>
<body>
<h1>Austin Personal Injury Lawyer</h1>
<h2>Car Accident Attorney</h2>
<h2>Free <b>Consultation</b></h2>
<p>We fight for injured people across Texas.</p>
<a href="/practice-areas/car-accidents">Car Accidents</a>
<a href="/contact">Contact</a>
</body>
</html>"""


PRACTICE_PAGE_HTML = """<html>
<head><title>Car Accidents | Smith Injury Law</title></head>
<body>
<h1>Car Accident Lawyer</h1>
<p>Hurt in a crash? We can help.</p>
</body>
</html>"""


@pytest.fixture
def homepage_html() -> str:
    return HOMEPAGE_HTML


@pytest.fixture
def practice_page_html() -> str:
    return PRACTICE_PAGE_HTML


# ============================================================================
# Page Fixtures
# ============================================================================

@pytest.fixture
def dui_pages() -> List[PageAnalysis]:
    """A small DUI defense site: homepage plus a dedicated DUI page."""
    return [
        PageAnalysis(
            url="https://smithdefense.com",
            title="DUI Lawyer | Smith Defense",
            word_count=300,
            h1_tags=["Austin Criminal Defense"],
            h2_tags=["Drug Crimes"],
            has_schema=True,
        ),
        PageAnalysis(
            url="https://smithdefense.com/dui-defense",
            title="DUI Defense",
            word_count=1200,
            h1_tags=["DUI Defense Lawyer"],
            h2_tags=[],
            has_schema=False,
        ),
    ]


@pytest.fixture
def dui_site(dui_pages) -> SiteAnalysis:
    return SiteAnalysis(base_url="https://smithdefense.com", pages=dui_pages)
