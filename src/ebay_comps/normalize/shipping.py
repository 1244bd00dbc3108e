"""Shipping cost resolution.

eBay shows shipping as free text ("Free delivery", "+$5.00 delivery",
"3 bids · +$4.25 delivery") while SerpAPI sends either text or a
``{"raw": ..., "extracted": ...}`` object. Both collapse to a float cost, or
``None`` when the cost is knowably non-free but cannot be determined.
"""

from __future__ import annotations

import re
from typing import Any, Mapping, Optional, Union

from .price import PriceParser, parse_currency

UNKNOWN_SHIPPING = "Unknown"

ShippingValue = Union[str, Mapping[str, Any], None]

_DELIVERY_RE = re.compile(r"\s*delivery\s*$", re.IGNORECASE)


def _resolve_text(text: str, parse: PriceParser) -> Optional[float]:
    lowered = text.lower()
    if "free" in lowered:
        return 0.0
    if "bids" in lowered:
        # Live auction: the card does not say what shipping will cost
        return None
    if "delivery" in lowered:
        amount = _DELIVERY_RE.sub("", text).replace("+", "").strip()
        parsed = parse(amount)
        return parsed.value if parsed else None
    return 0.0


def resolve_shipping(value: ShippingValue, parse: PriceParser = parse_currency) -> Optional[float]:
    """Return the shipping cost for ``value``; ``None`` means unknown."""
    if value is None:
        return 0.0
    if isinstance(value, str):
        return _resolve_text(value, parse)
    if isinstance(value, Mapping):
        extracted = value.get("extracted")
        if extracted is not None and not isinstance(extracted, bool):
            try:
                return float(extracted)
            except (TypeError, ValueError):
                pass
        raw = value.get("raw")
        if isinstance(raw, str):
            return _resolve_text(raw, parse)
        return 0.0
    raise TypeError(f"unsupported shipping value {type(value).__name__}")


def shipping_label(cost: Optional[float]) -> str:
    """Stringify a resolved cost: ``5.0 -> "5"``, ``4.5 -> "4.5"``, ``None -> "Unknown"``."""
    if cost is None:
        return UNKNOWN_SHIPPING
    if float(cost).is_integer():
        return str(int(cost))
    return repr(float(cost))
