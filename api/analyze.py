"""
Law Firm AI Grader API

FastAPI service backing the AI visibility grader:
1. Quick mode: detects the firm's practice area and suggests keywords
2. Full mode: analyzes the firm site, scores keywords, and builds the
   visibility report (overall, per-platform and competitor scores)
3. Keyword extraction from site content via Firecrawl
"""

import logging
import sys
import time
from typing import List, Optional

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from src.analyzer.recommendations import RecommendationWriter
from src.context.keyword_extractor import KeywordExtractor
from src.context.page_analyzer import PageFetcher, analyze_site
from src.context.practice_areas import detect_practice_area, suggest_keywords
from src.integrations.config import ExternalAPIClients, ExternalAPIConfig
from src.scoring.keyword_signals import analyze_keywords, build_insights
from src.scoring.visibility import synthesize_visibility
from src.utils.config import get_settings

settings = get_settings()

# Configure logging to stdout (Railway treats stderr as errors)
logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    stream=sys.stdout,
    force=True,
)
logger = logging.getLogger(__name__)

# Quiet down chatty loggers
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("httpcore").setLevel(logging.WARNING)

app = FastAPI(
    title="Maver Law Firm AI Grader",
    description="AI visibility grading for law firm websites",
    version="1.0.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_origin_regex=settings.ALLOWED_ORIGIN_REGEX,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.on_event("startup")
async def startup_event():
    """Report which external APIs are available."""
    ExternalAPIConfig().log_status()


# ============================================================================
# DEPENDENCIES
# ============================================================================

async def get_page_fetcher():
    fetcher = PageFetcher(timeout=settings.PAGE_TIMEOUT)
    try:
        yield fetcher
    finally:
        await fetcher.close()


async def get_external_clients():
    clients = ExternalAPIClients()
    try:
        yield clients
    finally:
        await clients.close()


# ============================================================================
# REQUEST/RESPONSE MODELS
# ============================================================================

class CamelModel(BaseModel):
    """Accepts and emits the frontend's camelCase keys."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CompetitorIn(CamelModel):
    """Competitor forwarded from Google Places."""
    name: Optional[str] = None
    website: Optional[str] = None
    rating: Optional[float] = None
    reviews: Optional[int] = None


class AnalyzeRequest(CamelModel):
    """
    Grader request.

    `url` and `firm_name` are required; they are optional here so the
    endpoint can answer with the 400 `{"error": ...}` body the frontend expects.
    """
    url: Optional[str] = None
    firm_name: Optional[str] = None
    city: Optional[str] = None
    keywords: List[str] = Field(default_factory=list)
    rating: Optional[float] = None
    reviews: Optional[int] = None
    mode: Optional[str] = Field(default=None, description="quick or full (default)")
    competitors: List[CompetitorIn] = Field(default_factory=list)
    google_types: List[str] = Field(default_factory=list)


class ScoreRequest(CamelModel):
    firm_name: str
    competitors: List[CompetitorIn] = Field(default_factory=list)


class ScoredCompetitorOut(CamelModel):
    name: str
    score: int


class ScoreResponse(CamelModel):
    """Visibility score set."""
    overall_score: int
    chatgpt_score: int
    perplexity_score: int
    gemini_score: int
    competitors: List[ScoredCompetitorOut]


class KeywordRequest(CamelModel):
    firm_name: Optional[str] = None
    website: Optional[str] = None
    city: str = ""
    state: Optional[str] = None
    google_types: List[str] = Field(default_factory=list)


# ============================================================================
# API ENDPOINTS
# ============================================================================

@app.get("/")
async def root():
    return {"status": "ok", "service": "Maver Law Firm AI Grader"}


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "ok"}


@app.post("/api/score", response_model=ScoreResponse)
async def score(request: ScoreRequest):
    """Deterministic visibility scores for a firm and its competitors."""
    report = synthesize_visibility(request.firm_name, request.competitors)
    return report.to_dict()


@app.post("/api/keywords")
async def extract_keywords(
    request: KeywordRequest,
    clients: ExternalAPIClients = Depends(get_external_clients),
):
    """Practice area and keywords mined from the firm's site content."""
    if not request.firm_name or not request.website:
        return _missing_fields()

    extractor = KeywordExtractor(firecrawl=clients.firecrawl)
    result = await extractor.extract(
        request.firm_name,
        request.website,
        city=request.city,
        google_types=request.google_types,
    )
    return result.to_dict()


@app.post("/api/analyze")
async def analyze(
    request: AnalyzeRequest,
    fetcher: PageFetcher = Depends(get_page_fetcher),
    clients: ExternalAPIClients = Depends(get_external_clients),
):
    """
    Grade a law firm.

    Quick mode returns the detected practice and suggested keywords from
    the homepage. Full mode returns the complete visibility report.
    """
    if not request.url or not request.firm_name:
        return _missing_fields()

    start_time = time.monotonic()
    is_quick = request.mode == "quick"
    logger.info(f"[START] {'QUICK' if is_quick else 'FULL'} analysis for {request.firm_name}")

    if is_quick:
        return await _quick_analysis(request, fetcher, start_time)

    try:
        return await _full_analysis(request, fetcher, clients, start_time)
    except Exception:
        logger.exception(f"Analysis failed for {request.firm_name}")
        return JSONResponse(
            status_code=500,
            content={"error": "Analysis failed", "overallScore": 5},
        )


def _missing_fields() -> JSONResponse:
    return JSONResponse(status_code=400, content={"error": "Missing required fields"})


def _elapsed(start_time: float) -> int:
    return round(time.monotonic() - start_time)


async def _quick_analysis(request: AnalyzeRequest, fetcher: PageFetcher, start_time: float) -> dict:
    site = await analyze_site(request.url, fetcher, max_internal_pages=0)
    homepage = site.homepage

    headings = homepage.headings if homepage else []
    combined_text = " ".join([request.firm_name, homepage.title if homepage else "", *headings])

    profile = detect_practice_area(request.google_types, combined_text)
    suggested = suggest_keywords(profile, headings, request.city)

    logger.info(f"[QUICK RESULT] practice={profile.label} keywords={suggested}")

    return {
        "detectedPractice": profile.label,
        "suggestedKeywords": suggested,
        "quickAnalysis": True,
        "hasSchema": homepage.has_schema if homepage else False,
        "processingTime": _elapsed(start_time),
    }


async def _full_analysis(
    request: AnalyzeRequest,
    fetcher: PageFetcher,
    clients: ExternalAPIClients,
    start_time: float,
) -> dict:
    logger.info("[FULL] Analyzing main firm...")
    site = await analyze_site(request.url, fetcher, max_internal_pages=settings.MAX_INTERNAL_PAGES)

    keyword_scores = analyze_keywords(request.keywords, site, request.rating, request.reviews)
    insights = build_insights(site, keyword_scores, request.keywords, request.city)

    homepage = site.homepage
    combined_text = " ".join(
        [request.firm_name, homepage.title if homepage else "", *(homepage.headings if homepage else [])]
    )
    profile = detect_practice_area(request.google_types, combined_text)

    if request.competitors:
        logger.info(f"[COMPETITORS] Scoring {len(request.competitors)} competitors")
    report = synthesize_visibility(request.firm_name, request.competitors)

    summary = site.summary() if site.pages else None
    recommendations = await RecommendationWriter(clients.claude).write({
        "firm_name": request.firm_name,
        "city": request.city,
        "practice_area": profile.label,
        "site_summary": summary,
        "insights": insights,
    })

    response = {
        "detectedPractice": profile.label,
        "suggestedKeywords": request.keywords,
        "keywordScores": [k.to_dict() for k in keyword_scores],
        **report.to_dict(),
        "analysis": summary,
        "insights": insights,
        "recommendations": recommendations,
        "processingTime": _elapsed(start_time),
    }

    logger.info(f"[COMPLETE] Score: {report.overall_score} ({response['processingTime']}s)")
    return response


# ============================================================================
# RUN SERVER
# ============================================================================

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "api.analyze:app",
        host="0.0.0.0",
        port=settings.PORT,
        reload=settings.ENVIRONMENT == "development",
    )
