"""
External API Integrations

Clients for third-party APIs:
- Firecrawl: Website scraping for keyword extraction
- Config: Unified configuration and client management
"""

from .firecrawl import FirecrawlClient, FirecrawlError, RetryConfig
from .config import ExternalAPIConfig, ExternalAPIClients

__all__ = [
    "FirecrawlClient",
    "FirecrawlError",
    "RetryConfig",
    "ExternalAPIConfig",
    "ExternalAPIClients",
]
