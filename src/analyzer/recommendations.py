"""
Report Recommendations

Short, actionable recommendations shown under the visibility score.
Written by Claude when configured; otherwise the standard three.
"""

import json
import logging
import re
from typing import Any, Dict, List, Optional

from .client import ClaudeClient

logger = logging.getLogger(__name__)


DEFAULT_RECOMMENDATIONS = [
    "Add structured data (Schema.org) to improve AI visibility",
    "Optimize content for location-specific search terms",
    "Build review volume to 100+ for better AI recommendations",
]

MAX_RECOMMENDATIONS = 5


SYSTEM_PROMPT = """You are a marketing consultant for law firms focused on visibility in AI assistants (ChatGPT, Perplexity, Gemini).
Give concise, specific, actionable recommendations. No preamble."""


USER_PROMPT = """Write {count} recommendations for this law firm.

## Firm: {firm_name}
## City: {city}
## Practice area: {practice_area}

## Site signals:
{site_summary}

## Findings:
{insights}

Return ONLY a JSON array of strings, e.g. ["...", "..."]."""


_ARRAY_RE = re.compile(r"\[.*\]", re.DOTALL)


def parse_recommendations(content: str) -> List[str]:
    """Pull a JSON string array out of a model response; [] if absent."""
    match = _ARRAY_RE.search(content or "")
    if not match:
        return []
    try:
        items = json.loads(match.group(0))
    except json.JSONDecodeError:
        return []
    if not isinstance(items, list):
        return []
    return [item.strip() for item in items if isinstance(item, str) and item.strip()]


class RecommendationWriter:
    """Produces report recommendations, degrading to defaults."""

    def __init__(self, claude_client: Optional[ClaudeClient] = None):
        self.claude_client = claude_client

    async def write(self, payload: Dict[str, Any]) -> List[str]:
        """
        Recommendations for a firm report.

        Args:
            payload: firm_name, city, practice_area, site_summary, insights

        Returns:
            Up to MAX_RECOMMENDATIONS strings
        """
        if self.claude_client is None:
            return list(DEFAULT_RECOMMENDATIONS)

        prompt = USER_PROMPT.format(
            count=len(DEFAULT_RECOMMENDATIONS),
            firm_name=payload.get("firm_name", ""),
            city=payload.get("city") or "unknown",
            practice_area=payload.get("practice_area") or "unknown",
            site_summary=json.dumps(payload.get("site_summary") or {}, indent=2),
            insights="\n".join(f"- {i}" for i in payload.get("insights") or []) or "- none",
        )

        response = await self.claude_client.analyze(prompt, system=SYSTEM_PROMPT)
        if not response.success:
            logger.warning(f"Recommendation call failed, using defaults: {response.error}")
            return list(DEFAULT_RECOMMENDATIONS)

        recommendations = parse_recommendations(response.content)
        if not recommendations:
            logger.warning("Could not parse recommendations, using defaults")
            return list(DEFAULT_RECOMMENDATIONS)

        return recommendations[:MAX_RECOMMENDATIONS]
