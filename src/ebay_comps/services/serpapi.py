from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import Any, List, Optional

import requests

from ebay_comps.errors import FallbackTransportError

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://serpapi.com/search.json"


@dataclass
class SerpApiConfig:
    api_key: Optional[str] = field(default_factory=lambda: os.environ.get("SERP_KEY"))
    base_url: str = field(default_factory=lambda: os.environ.get("SERPAPI_BASE_URL", DEFAULT_BASE_URL))
    timeout_secs: float = field(default_factory=lambda: float(os.environ.get("SERPAPI_TIMEOUT_SECS", "30")))
    ebay_domain: str = "ebay.com"


class SerpApiClient:
    """Thin client for SerpAPI's eBay engine, restricted to sold listings.

    - Missing API key is a soft outcome: ``fetch_results`` returns ``None``.
    - A non-success response raises ``FallbackTransportError``.
    """

    def __init__(self, config: SerpApiConfig | None = None) -> None:
        self.config = config or SerpApiConfig()

    @property
    def configured(self) -> bool:
        return bool(self.config.api_key)

    def _params(self, query: str) -> dict[str, str]:
        return {
            "engine": "ebay",
            "ebay_domain": self.config.ebay_domain,
            "q": query,
            "_nkw": query,
            "sold": "true",
            "completed": "true",
            "api_key": self.config.api_key or "",
        }

    def fetch_results(self, query: str) -> Optional[List[Any]]:
        """Return the raw ``organic_results`` list, or ``None`` when not configured."""
        if not self.configured:
            logger.error("SerpAPI key not configured")
            return None
        try:
            resp = requests.get(self.config.base_url, params=self._params(query), timeout=self.config.timeout_secs)
        except requests.RequestException as e:
            raise FallbackTransportError(f"SerpAPI request failed: {e}") from e
        if not resp.ok:
            error = f"SerpAPI ERROR {resp.status_code}"
            logger.error(error)
            raise FallbackTransportError(error, status=resp.status_code)
        try:
            payload = resp.json()
        except ValueError as e:
            raise FallbackTransportError(f"SerpAPI returned invalid JSON: {e}") from e
        results = payload.get("organic_results") if isinstance(payload, dict) else None
        return results if isinstance(results, list) else []
