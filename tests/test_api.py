"""
Test Suite for the Grader API

Endpoints are exercised through FastAPI's TestClient with page fetching
and external clients replaced via dependency overrides.
"""

from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from api.analyze import app, get_external_clients, get_page_fetcher
from src.analyzer.recommendations import DEFAULT_RECOMMENDATIONS
from src.context.page_analyzer import PageAnalysis
from src.integrations.config import ExternalAPIClients, ExternalAPIConfig
from src.scoring import client_score


class FakeFetcher:
    """Serves canned pages keyed by URL."""

    def __init__(self, pages):
        self.pages = pages
        self.requested = []

    async def analyze_page(self, url):
        self.requested.append(url)
        html = self.pages.get(url)
        return PageAnalysis.from_html(url, html) if html is not None else None


@pytest.fixture
def fetcher(homepage_html, practice_page_html):
    return FakeFetcher({
        "https://smithlaw.com": homepage_html,
        "https://smithlaw.com/practice-areas/car-accidents": practice_page_html,
    })


@pytest.fixture
def client(fetcher):
    async def override_fetcher():
        return fetcher

    async def override_clients():
        return ExternalAPIClients(ExternalAPIConfig(firecrawl_enabled=False, claude_enabled=False))

    app.dependency_overrides[get_page_fetcher] = override_fetcher
    app.dependency_overrides[get_external_clients] = override_clients
    yield TestClient(app)
    app.dependency_overrides.clear()


def _competitors():
    names = [f"Rival Injury Firm {i}" for i in range(10)]
    names.insert(3, "Smith Injury Law Group")
    return [{"name": n, "rating": 4.6, "reviews": 120} for n in names]


class TestHealth:

    def test_health(self, client):
        assert client.get("/health").json() == {"status": "ok"}

    def test_root(self, client):
        assert client.get("/").json()["status"] == "ok"


class TestAnalyzeValidation:

    def test_missing_firm_name(self, client):
        response = client.post("/api/analyze", json={"url": "smithlaw.com"})
        assert response.status_code == 400
        assert response.json() == {"error": "Missing required fields"}

    def test_missing_url(self, client):
        response = client.post("/api/analyze", json={"firmName": "Smith Injury Law"})
        assert response.status_code == 400
        assert response.json() == {"error": "Missing required fields"}


class TestQuickMode:

    def test_detects_practice(self, client, fetcher):
        response = client.post("/api/analyze", json={
            "url": "smithlaw.com",
            "firmName": "Smith Injury Law",
            "city": "Austin",
            "mode": "quick",
            "googleTypes": ["personal_injury_attorney"],
        })

        assert response.status_code == 200
        data = response.json()
        assert data["detectedPractice"] == "Personal Injury"
        assert data["quickAnalysis"] is True
        assert data["hasSchema"] is True
        assert data["suggestedKeywords"][0] == "Personal Injury Lawyer"
        assert len(data["suggestedKeywords"]) <= 10
        assert fetcher.requested == ["https://smithlaw.com"]

    def test_malformed_url_still_answers(self, client, fetcher, homepage_html):
        fetcher.pages = {"http://[bad": homepage_html}
        response = client.post("/api/analyze", json={
            "url": "http://[bad",
            "firmName": "Acme Law",
            "mode": "quick",
        })

        assert response.status_code == 200
        data = response.json()
        assert data["detectedPractice"] == "Personal Injury"
        assert data["suggestedKeywords"]

    def test_unreachable_homepage(self, client, fetcher):
        fetcher.pages = {}
        response = client.post("/api/analyze", json={
            "url": "http://[bad",
            "firmName": "Smith Family Law",
            "mode": "quick",
        })

        assert response.status_code == 200
        data = response.json()
        assert data["hasSchema"] is False
        assert data["detectedPractice"] == "Family Law"


class TestFullMode:

    BODY = {
        "url": "smithlaw.com",
        "firmName": "Smith Injury Law",
        "city": "Austin",
        "keywords": ["Car Accident Lawyer", "Truck Accident Lawyer"],
        "rating": 4.6,
        "reviews": 120,
        "competitors": _competitors(),
        "googleTypes": ["personal_injury_attorney"],
    }

    def test_report(self, client):
        response = client.post("/api/analyze", json=self.BODY)

        assert response.status_code == 200
        data = response.json()
        for key in (
            "detectedPractice", "suggestedKeywords", "keywordScores", "overallScore",
            "chatgptScore", "perplexityScore", "geminiScore", "competitors",
            "analysis", "insights", "recommendations", "processingTime",
        ):
            assert key in data

        assert data["perplexityScore"] == 0
        assert data["recommendations"] == DEFAULT_RECOMMENDATIONS
        assert [k["keyword"] for k in data["keywordScores"]] == self.BODY["keywords"]
        assert data["analysis"]["pagesAnalyzed"] == 2

    def test_competitors_ranked_below(self, client):
        data = client.post("/api/analyze", json=self.BODY).json()

        competitors = data["competitors"]
        scores = [c["score"] for c in competitors]
        assert len(competitors) == 8
        assert all("smith" not in c["name"].lower() for c in competitors)
        assert scores == sorted(scores, reverse=True)
        assert 5 <= data["overallScore"] < min(scores)

    def test_unreachable_site_still_scored(self, client, fetcher):
        fetcher.pages = {}
        data = client.post("/api/analyze", json=self.BODY).json()

        assert data["analysis"] is None
        assert data["keywordScores"] == []
        assert data["overallScore"] < min(c["score"] for c in data["competitors"])

    def test_no_competitors(self, client):
        body = dict(self.BODY, competitors=[])
        data = client.post("/api/analyze", json=body).json()

        assert data["competitors"] == []
        assert data["overallScore"] == client_score("Smith Injury Law")

    def test_failure_returns_fallback_score(self, client):
        with patch("api.analyze.synthesize_visibility", side_effect=RuntimeError("boom")):
            response = client.post("/api/analyze", json=self.BODY)

        assert response.status_code == 500
        assert response.json() == {"error": "Analysis failed", "overallScore": 5}


class TestScoreEndpoint:

    def test_scores(self, client):
        response = client.post("/api/score", json={
            "firmName": "Acme Law",
            "competitors": [{"name": "Jones Law"}, {"name": "Acme Law LLP"}],
        })

        assert response.status_code == 200
        data = response.json()
        assert [c["name"] for c in data["competitors"]] == ["Jones Law"]
        assert data["perplexityScore"] == 0
        assert data["overallScore"] < data["competitors"][0]["score"]

    def test_empty_firm_name_excludes_all_competitors(self, client):
        response = client.post("/api/score", json={
            "firmName": "",
            "competitors": [{"name": "Jones Law"}, {"name": "Garcia Legal"}],
        })

        assert response.status_code == 200
        data = response.json()
        assert data["competitors"] == []
        assert data["overallScore"] == 14

    def test_deterministic(self, client):
        body = {"firmName": "Acme Law", "competitors": [{"name": "Jones Law"}]}
        first = client.post("/api/score", json=body).json()
        second = client.post("/api/score", json=body).json()
        assert first == second


class TestKeywordsEndpoint:

    def test_missing_fields(self, client):
        response = client.post("/api/keywords", json={"firmName": "Smith Law"})
        assert response.status_code == 400
        assert response.json() == {"error": "Missing required fields"}

    def test_fallback_keywords(self, client):
        response = client.post("/api/keywords", json={
            "firmName": "Smith Family Law",
            "website": "smithfamilylaw.com",
            "city": "Austin",
        })

        assert response.status_code == 200
        data = response.json()
        assert data["practiceArea"] == "Family Law"
        assert data["source"] == "fallback"
        assert data["keywords"][0] == "family law attorney in Austin"
