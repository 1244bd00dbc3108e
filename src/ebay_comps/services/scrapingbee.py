from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import Optional
from urllib.parse import urlencode

import requests

from ebay_comps.errors import ConfigurationError, PrimaryTransportError

logger = logging.getLogger(__name__)

EBAY_SEARCH_URL = "https://www.ebay.com/sch/i.html"
DEFAULT_BASE_URL = "https://app.scrapingbee.com/api/v1/"


@dataclass
class ScrapingBeeConfig:
    api_key: Optional[str] = field(default_factory=lambda: os.environ.get("BEE_KEY"))
    base_url: str = field(default_factory=lambda: os.environ.get("SCRAPINGBEE_BASE_URL", DEFAULT_BASE_URL))
    timeout_secs: float = field(default_factory=lambda: float(os.environ.get("SCRAPINGBEE_TIMEOUT_SECS", "60")))
    user_agent: str = field(default_factory=lambda: os.environ.get("HTTP_USER_AGENT", "ebay-comps/0.1"))


def sold_search_url(query: str) -> str:
    """eBay sold + completed search, newest first, 240 results per page."""
    return _search_url(query, {"LH_Sold": "1", "LH_Complete": "1"})


def active_search_url(query: str) -> str:
    """eBay live listings search, same sort and page size as the sold search."""
    return _search_url(query, {"LH_Active": "1"})


def _search_url(query: str, flags: dict[str, str]) -> str:
    params = {"_nkw": "+".join(query.split()), "_sop": "12", **flags, "_ipg": "240"}
    return f"{EBAY_SEARCH_URL}?{urlencode(params, safe='+')}"


class ScrapingBeeClient:
    """Fetches eBay search pages through ScrapingBee's HTML API."""

    def __init__(self, config: ScrapingBeeConfig | None = None) -> None:
        self.config = config or ScrapingBeeConfig()

    def fetch_sold_page(self, query: str) -> str:
        return self._fetch(sold_search_url(query))

    def fetch_active_page(self, query: str) -> str:
        return self._fetch(active_search_url(query))

    def _fetch(self, target: str) -> str:
        if not self.config.api_key:
            raise ConfigurationError("ScrapingBee API key (BEE_KEY) is not configured")
        logger.info("Fetching data from URL: %s", target)
        params = {"api_key": self.config.api_key, "url": target}
        try:
            resp = requests.get(
                self.config.base_url,
                params=params,
                headers={"User-Agent": self.config.user_agent},
                timeout=self.config.timeout_secs,
            )
        except requests.RequestException as e:
            raise PrimaryTransportError(f"ScrapingBee request failed: {e}") from e
        if not resp.ok:
            raise PrimaryTransportError(f"ScrapingBee ERROR {resp.status_code}", status=resp.status_code)
        return resp.text
