"""Data models for extracted listings and the statistics derived from them."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ListingRecord(BaseModel):
    """Represents a single sold listing, normalized from either source."""

    model_config = ConfigDict(populate_by_name=True)

    title: str = Field(min_length=1)
    price: float = Field(ge=0)
    currency: str = "USD"
    sold_date: str = Field(alias="soldDate")
    condition: str
    image_url: Optional[str] = Field(default=None, alias="imageUrl")
    item_url: Optional[str] = Field(default=None, alias="itemUrl")
    # Stringified cost, "Unknown", or None when the card says nothing about shipping
    shipping: Optional[str] = None


class SalesStatistics(BaseModel):
    model_config = ConfigDict(frozen=True)

    count: int = 0
    p25: Optional[float] = None
    median: Optional[float] = None
    p75: Optional[float] = None


class CompsResult(BaseModel):
    """What the orchestrator produced and which source it came from."""

    listings: List[ListingRecord] = Field(default_factory=list)
    statistics: SalesStatistics = Field(default_factory=SalesStatistics)
    source: str


class CompsResponse(BaseModel):
    """Payload returned to HTTP and CLI callers.

    Wire names (``stats``, ``items``) match what existing frontends consume;
    dump with ``by_alias=True``.
    """

    model_config = ConfigDict(populate_by_name=True)

    query: str
    statistics: SalesStatistics = Field(alias="stats")
    listings: List[ListingRecord] = Field(alias="items")
    source: str
    cached: bool = False


class ActiveListing(BaseModel):
    """A live (unsold) listing; price is absent when the card shows a range."""

    model_config = ConfigDict(populate_by_name=True)

    title: str = Field(min_length=1)
    price: Optional[float] = Field(default=None, ge=0)
    currency: str = "USD"
    condition: str
    image_url: Optional[str] = Field(default=None, alias="imageUrl")
    item_url: Optional[str] = Field(default=None, alias="itemUrl")
    shipping: Optional[str] = None


class ActiveListingsResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    query: str
    listings: List[ActiveListing] = Field(alias="items")
    source: str
    cached: bool = False
