"""
Grader Integration Settings

Decides which optional services the grader may call and builds their
clients on first use. Both are optional: without Firecrawl keywords come
from the practice dictionary, without Claude the report carries the
standard recommendations.

Environment (.env supported):
    FIRECRAWL_API_KEY, ANTHROPIC_API_KEY, CLAUDE_MODEL
    FIRECRAWL_ENABLED, CLAUDE_ENABLED (default true)
"""

import logging
import os
from typing import Optional

from dotenv import load_dotenv

from src.analyzer.client import ClaudeClient

from .firecrawl import FirecrawlClient

load_dotenv()

logger = logging.getLogger(__name__)

_TRUTHY = ("true", "1", "yes", "on")
_FALSY = ("false", "0", "no", "off")


def get_env_bool(key: str, default: bool = True) -> bool:
    """Read an on/off flag; unrecognised values give the default."""
    val = os.environ.get(key, "").strip().lower()
    if val in _FALSY:
        return False
    if val in _TRUTHY:
        return True
    return default


class ExternalAPIConfig:
    """Credentials and kill switches for Firecrawl and Claude."""

    def __init__(
        self,
        firecrawl_api_key: Optional[str] = None,
        anthropic_api_key: Optional[str] = None,
        claude_model: Optional[str] = None,
        firecrawl_enabled: bool = True,
        claude_enabled: bool = True,
    ):
        self.firecrawl_api_key = firecrawl_api_key or os.environ.get("FIRECRAWL_API_KEY")
        self.anthropic_api_key = anthropic_api_key or os.environ.get("ANTHROPIC_API_KEY")
        self.claude_model = claude_model or os.environ.get("CLAUDE_MODEL")

        # Environment can only switch a service off, never force it on
        self.firecrawl_enabled = firecrawl_enabled and get_env_bool("FIRECRAWL_ENABLED")
        self.claude_enabled = claude_enabled and get_env_bool("CLAUDE_ENABLED")

    @property
    def has_firecrawl(self) -> bool:
        return self.firecrawl_enabled and bool(self.firecrawl_api_key)

    @property
    def has_claude(self) -> bool:
        return self.claude_enabled and bool(self.anthropic_api_key)

    def log_status(self):
        if not self.has_firecrawl:
            logger.warning("Firecrawl unavailable, keywords will come from the practice dictionary")
        if not self.has_claude:
            logger.warning("Claude unavailable, reports will use standard recommendations")
        logger.info(
            f"Integrations: firecrawl={'on' if self.has_firecrawl else 'off'}, "
            f"claude={'on' if self.has_claude else 'off'}"
        )


class ExternalAPIClients:
    """
    Per-request holder for the optional clients.

    Each property returns None when its service is unavailable, so callers
    only need a None check:

        async with ExternalAPIClients() as clients:
            extractor = KeywordExtractor(firecrawl=clients.firecrawl)
    """

    def __init__(self, config: Optional[ExternalAPIConfig] = None):
        self.config = config or ExternalAPIConfig()
        self._firecrawl: Optional[FirecrawlClient] = None
        self._claude: Optional[ClaudeClient] = None

    @property
    def firecrawl(self) -> Optional[FirecrawlClient]:
        if not self.config.has_firecrawl:
            return None
        if self._firecrawl is None:
            self._firecrawl = FirecrawlClient(api_key=self.config.firecrawl_api_key)
        return self._firecrawl

    @property
    def claude(self) -> Optional[ClaudeClient]:
        if not self.config.has_claude:
            return None
        if self._claude is None:
            self._claude = ClaudeClient(
                api_key=self.config.anthropic_api_key,
                model=self.config.claude_model,
            )
        return self._claude

    async def close(self):
        """Release the Firecrawl connection pool."""
        if self._firecrawl is not None:
            await self._firecrawl.close()
            self._firecrawl = None
        self._claude = None

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
