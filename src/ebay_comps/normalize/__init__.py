"""Field-level normalizers shared by the scrape and SerpAPI paths."""

from .dates import InvalidDateError, coerce_timestamp, normalize_sold_date, utc_now_iso
from .price import ParsedPrice, PriceParser, parse_currency
from .shipping import UNKNOWN_SHIPPING, resolve_shipping, shipping_label

__all__ = [
    "InvalidDateError",
    "ParsedPrice",
    "PriceParser",
    "UNKNOWN_SHIPPING",
    "coerce_timestamp",
    "normalize_sold_date",
    "parse_currency",
    "resolve_shipping",
    "shipping_label",
    "utc_now_iso",
]
