"""Service layer for the eBay comps lookup."""

from .comps import CompsService, build_service
from .extractor import ListingExtractor
from .fallback import map_fallback_results
from .orchestrator import FALLBACK_SOURCE, PRIMARY_SOURCE, SourceOrchestrator
from .scrapingbee import ScrapingBeeClient, ScrapingBeeConfig
from .serpapi import SerpApiClient, SerpApiConfig
from .statistics import compute_statistics, quantile

__all__ = [
    "CompsService",
    "FALLBACK_SOURCE",
    "ListingExtractor",
    "PRIMARY_SOURCE",
    "ScrapingBeeClient",
    "ScrapingBeeConfig",
    "SerpApiClient",
    "SerpApiConfig",
    "SourceOrchestrator",
    "build_service",
    "compute_statistics",
    "map_fallback_results",
    "quantile",
]
