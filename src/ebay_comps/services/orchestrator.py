"""Choose between the scraped page and the SerpAPI fallback."""

from __future__ import annotations

import logging
import os
from typing import Any, List, Optional, Protocol

from ebay_comps.models import CompsResult
from ebay_comps.normalize import PriceParser, parse_currency

from .extractor import ListingExtractor
from .fallback import map_fallback_results
from .statistics import compute_statistics

logger = logging.getLogger(__name__)

PRIMARY_SOURCE = "scrapingbee"
FALLBACK_SOURCE = "serpapi"
DEFAULT_MIN_LISTINGS = int(os.environ.get("COMPS_MIN_LISTINGS", "3"))


class FallbackSource(Protocol):
    def fetch_results(self, query: str) -> Optional[List[Any]]:
        ...


class SourceOrchestrator:
    """Runs the primary extraction and switches to the fallback when it is thin.

    PRIMARY -> FALLBACK happens once, when the scrape yields fewer than
    ``min_listings`` listings. ``FallbackTransportError`` from the fallback
    propagates; a fallback that is not configured yields an empty result.
    """

    def __init__(
        self,
        fallback: Optional[FallbackSource] = None,
        extractor: Optional[ListingExtractor] = None,
        min_listings: int = DEFAULT_MIN_LISTINGS,
        parse_price: PriceParser = parse_currency,
    ) -> None:
        self.fallback = fallback
        self.parse_price = parse_price
        self.extractor = extractor or ListingExtractor(parse_price)
        self.min_listings = min_listings

    def run(self, query: str, html: str) -> CompsResult:
        listings = self.extractor.extract(html)
        if len(listings) >= self.min_listings:
            return CompsResult(
                listings=listings,
                statistics=compute_statistics(item.price for item in listings),
                source=PRIMARY_SOURCE,
            )

        logger.info(
            "Primary source yielded %d listings (< %d); using %s", len(listings), self.min_listings, FALLBACK_SOURCE
        )
        results = self.fallback.fetch_results(query) if self.fallback is not None else None
        fallback_listings = map_fallback_results(results, self.parse_price) if results is not None else []
        return CompsResult(
            listings=fallback_listings,
            statistics=compute_statistics(item.price for item in fallback_listings),
            source=FALLBACK_SOURCE,
        )
