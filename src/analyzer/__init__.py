"""Claude client and report recommendation writer."""

from .client import AnalysisResponse, ClaudeClient, TokenUsage
from .recommendations import DEFAULT_RECOMMENDATIONS, RecommendationWriter

__all__ = [
    "AnalysisResponse",
    "ClaudeClient",
    "TokenUsage",
    "DEFAULT_RECOMMENDATIONS",
    "RecommendationWriter",
]
