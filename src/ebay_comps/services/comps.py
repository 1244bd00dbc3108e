from __future__ import annotations

import logging
import time
from typing import Callable, Optional

from ebay_comps.models import ActiveListingsResponse, CompsResponse
from ebay_comps.repositories import CacheConfig, CacheEntry, QueryCache, make_cache

from .orchestrator import PRIMARY_SOURCE, SourceOrchestrator
from .scrapingbee import ScrapingBeeClient, ScrapingBeeConfig
from .serpapi import SerpApiClient, SerpApiConfig

logger = logging.getLogger(__name__)


class CompsService:
    """Cache check, primary fetch, orchestration and cache store for one query."""

    def __init__(
        self,
        primary: ScrapingBeeClient,
        orchestrator: SourceOrchestrator,
        cache: QueryCache,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.primary = primary
        self.orchestrator = orchestrator
        self.cache = cache
        self._clock = clock

    def lookup(self, query: str) -> CompsResponse:
        q = (query or "").strip()
        if not q:
            raise ValueError("Missing query parameter q")

        hit = self.cache.get(q)
        if hit is not None:
            logger.info("Returning cached data for %r", q)
            cached = CompsResponse.model_validate(hit.response)
            return cached.model_copy(update={"cached": True})

        html = self.primary.fetch_sold_page(q)
        result = self.orchestrator.run(q, html)
        response = CompsResponse(
            query=q,
            statistics=result.statistics,
            listings=result.listings,
            source=result.source,
            cached=False,
        )
        self.cache.set(q, CacheEntry(query=q, response=response.model_dump(mode="json", by_alias=True), timestamp=self._clock()))
        logger.info("Returning new fetched data length: %d (source=%s)", len(result.listings), result.source)
        return response

    def active_listings(self, query: str) -> ActiveListingsResponse:
        """Live listings for ``query``; no statistics and no fallback source."""
        q = (query or "").strip()
        if not q:
            raise ValueError("Missing query parameter q")

        key = f"active:{q}"
        hit = self.cache.get(key)
        if hit is not None:
            logger.info("Returning cached active listings for %r", q)
            cached = ActiveListingsResponse.model_validate(hit.response)
            return cached.model_copy(update={"cached": True})

        html = self.primary.fetch_active_page(q)
        items = self.orchestrator.extractor.extract_active(html)
        response = ActiveListingsResponse(query=q, listings=items, source=PRIMARY_SOURCE, cached=False)
        self.cache.set(key, CacheEntry(query=q, response=response.model_dump(mode="json", by_alias=True), timestamp=self._clock()))
        return response


def build_service(
    bee: Optional[ScrapingBeeConfig] = None,
    serp: Optional[SerpApiConfig] = None,
    cache: Optional[CacheConfig] = None,
) -> CompsService:
    return CompsService(
        primary=ScrapingBeeClient(bee),
        orchestrator=SourceOrchestrator(fallback=SerpApiClient(serp)),
        cache=make_cache(cache),
    )
