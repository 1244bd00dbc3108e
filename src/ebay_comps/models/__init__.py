from .listing import (
    ActiveListing,
    ActiveListingsResponse,
    CompsResponse,
    CompsResult,
    ListingRecord,
    SalesStatistics,
)

__all__ = [
    "ActiveListing",
    "ActiveListingsResponse",
    "CompsResponse",
    "CompsResult",
    "ListingRecord",
    "SalesStatistics",
]
