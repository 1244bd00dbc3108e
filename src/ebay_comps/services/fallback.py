from __future__ import annotations

import logging
from typing import Any, Iterable, List, Mapping, Optional

from ebay_comps.models import ListingRecord
from ebay_comps.normalize import (
    InvalidDateError,
    PriceParser,
    coerce_timestamp,
    parse_currency,
    resolve_shipping,
    shipping_label,
    utc_now_iso,
)

logger = logging.getLogger(__name__)


def _price_text(price: Any) -> str:
    if isinstance(price, Mapping):
        raw = price.get("raw")
        return raw if isinstance(raw, str) else ""
    if isinstance(price, str):
        return price
    return ""


def _str_field(obj: Mapping[str, Any], key: str) -> str:
    val = obj.get(key)
    return val.strip() if isinstance(val, str) else ""


def _sold_date(value: Any) -> str:
    if not isinstance(value, str) or not value.strip():
        return utc_now_iso()
    try:
        return coerce_timestamp(value)
    except InvalidDateError:
        # Keep what SerpAPI sent; it is still more useful than "now"
        logger.debug("Passing through unrecognized sold_at %r", value)
        return value.strip()


def map_result(obj: Mapping[str, Any], parse_price: PriceParser = parse_currency) -> Optional[ListingRecord]:
    """Map one ``organic_results`` entry, or return ``None`` if it fails the filter."""
    title = _str_field(obj, "title")
    item_url = _str_field(obj, "link")
    parsed = parse_price(_price_text(obj.get("price")))
    price = parsed.value if parsed else 0.0
    if not title or not item_url or price <= 0:
        return None
    try:
        shipping = shipping_label(resolve_shipping(obj.get("shipping"), parse_price))
    except TypeError:
        shipping = None
    return ListingRecord(
        title=title,
        price=price,
        currency=parsed.currency if parsed else "USD",
        sold_date=_sold_date(obj.get("sold_at")),
        condition=_str_field(obj, "condition") or "Unknown",
        image_url=_str_field(obj, "thumbnail") or None,
        item_url=item_url,
        shipping=shipping,
    )


def map_fallback_results(
    results: Optional[Iterable[Any]], parse_price: PriceParser = parse_currency
) -> List[ListingRecord]:
    """Map SerpAPI ``organic_results`` into listings, keeping input order."""
    items: List[ListingRecord] = []
    for index, obj in enumerate(results or []):
        if not isinstance(obj, Mapping):
            continue
        try:
            item = map_result(obj, parse_price)
        except ValueError as e:
            logger.warning("Skipping SerpAPI result %d: %s", index, e)
            continue
        if item is not None:
            items.append(item)
    return items
