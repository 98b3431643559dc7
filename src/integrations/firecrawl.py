"""
Firecrawl Scraper Client

Reads a law firm's website as clean markdown so practice areas and
keywords can be mined from real content instead of the firm name alone.

Only the single-page /scrape endpoint is used. Transient failures
(rate limits, 5xx, timeouts) are retried with exponential backoff;
anything else surfaces as FirecrawlError.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

import httpx

logger = logging.getLogger(__name__)


FIRECRAWL_API_URL = "https://api.firecrawl.dev/v1"


class FirecrawlError(Exception):
    """Raised when a scrape cannot be completed."""

    def __init__(self, message: str, status_code: Optional[int] = None, response: Optional[dict] = None):
        super().__init__(message)
        self.status_code = status_code
        self.response = response


@dataclass
class RetryConfig:
    """Backoff policy for transient scrape failures."""
    max_retries: int = 3
    initial_delay: float = 1.0
    max_delay: float = 10.0
    exponential_base: float = 2.0
    retryable_status_codes: Tuple[int, ...] = (429, 500, 502, 503, 504)

    def delay_for(self, attempt: int) -> float:
        return min(self.initial_delay * (self.exponential_base ** attempt), self.max_delay)


@dataclass
class ScrapedPage:
    """Markdown and metadata for one scraped URL."""
    url: str
    markdown: str = ""
    metadata: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_response(cls, url: str, payload: Dict[str, Any]) -> "ScrapedPage":
        data = payload.get("data") or {}
        return cls(
            url=url,
            markdown=data.get("markdown") or "",
            metadata=data.get("metadata") or {},
        )

    @property
    def title(self) -> str:
        return self.metadata.get("title", "")


def _error_body(response: httpx.Response) -> Dict[str, Any]:
    """JSON error payload, or {} for empty and non-JSON (gateway HTML) bodies."""
    try:
        body = response.json()
    except ValueError:
        return {}
    return body if isinstance(body, dict) else {}


class FirecrawlClient:
    """
    Async Firecrawl client.

    Usage:
        async with FirecrawlClient(api_key="fc-...") as firecrawl:
            markdown = await firecrawl.scrape_markdown("smithinjurylaw.com")
    """

    def __init__(
        self,
        api_key: str,
        retry_config: Optional[RetryConfig] = None,
        timeout: float = 60.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.retry_config = retry_config or RetryConfig()
        self._client = httpx.AsyncClient(
            base_url=FIRECRAWL_API_URL,
            headers={"Authorization": f"Bearer {api_key}"},
            timeout=httpx.Timeout(timeout),
            transport=transport,
        )
        self._closed = False

    async def scrape_url(self, url: str, only_main_content: bool = True) -> Dict[str, Any]:
        """
        Scrape one URL as markdown.

        Returns:
            Raw API payload: {"success": bool, "data": {"markdown", "metadata"}}

        Raises:
            FirecrawlError: On non-retryable errors or when retries run out
        """
        if self._closed:
            raise FirecrawlError("Client has been closed")

        payload = {
            "url": url,
            "formats": ["markdown"],
            "onlyMainContent": only_main_content,
        }
        return await self._post("/scrape", payload)

    async def scrape_page(self, url: str) -> ScrapedPage:
        return ScrapedPage.from_response(url, await self.scrape_url(url))

    async def scrape_markdown(self, url: str) -> Optional[str]:
        """Markdown for a URL, or None when scraping fails or yields nothing."""
        logger.info(f"Scraping {url} with Firecrawl")
        try:
            page = await self.scrape_page(url)
        except FirecrawlError as e:
            logger.warning(f"Firecrawl scrape failed for {url}: {e}")
            return None

        if not page.markdown:
            logger.info(f"Firecrawl returned no markdown for {url}")
            return None

        logger.info(f"Scraped {len(page.markdown)} chars from {url}")
        return page.markdown

    async def _post(self, endpoint: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        policy = self.retry_config
        attempts = policy.max_retries + 1
        failure: Optional[FirecrawlError] = None

        for attempt in range(attempts):
            try:
                response = await self._client.post(endpoint, json=payload)
            except httpx.TimeoutException as e:
                failure = FirecrawlError(f"Request timed out: {e}")
            except httpx.RequestError as e:
                failure = FirecrawlError(f"Request failed: {e}")
            else:
                if response.is_success:
                    return response.json()

                body = _error_body(response)
                failure = FirecrawlError(
                    f"API error: {body.get('error', response.status_code)}",
                    status_code=response.status_code,
                    response=body,
                )
                if response.status_code not in policy.retryable_status_codes:
                    raise failure

            if attempt + 1 < attempts:
                delay = policy.delay_for(attempt)
                logger.warning(
                    f"Firecrawl request failed, retrying in {delay:.1f}s "
                    f"(attempt {attempt + 1}/{attempts}): {failure}"
                )
                await asyncio.sleep(delay)

        raise failure

    async def close(self):
        if not self._closed:
            await self._client.aclose()
            self._closed = True

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
