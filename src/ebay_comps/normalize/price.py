"""Free-text price parsing.

Handles the shapes eBay and SerpAPI emit, e.g. "$1,234.56", "US $12.00",
"C $8.50", "EUR 1.299,95", "12 345 kr". A string must be exactly one price;
ranges like "$10.00 to $20.00" and prose are rejected.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, Optional


@dataclass(frozen=True)
class ParsedPrice:
    value: float
    symbol: Optional[str] = None
    code: Optional[str] = None

    @property
    def currency(self) -> str:
        """Label used on listing records: symbol, then ISO code, then USD."""
        return self.symbol or self.code or "USD"


PriceParser = Callable[[str], Optional[ParsedPrice]]

_SYMBOL = r"(?:[A-Z]{1,2} ?\$|\$|£|€|¥|₹|kr\.?)"
_PRICE_RE = re.compile(
    rf"^(?P<code_before>[A-Z]{{3}})?\s*(?P<symbol_before>{_SYMBOL})?\s*"
    r"(?P<number>\d(?:[\d,.'\s]*\d)?)"
    rf"\s*(?P<symbol_after>{_SYMBOL})?\s*(?P<code_after>[A-Z]{{3}})?$"
)
_THOUSANDS_COMMA = re.compile(r"\d{1,3}(?:,\d{3})+")
_THOUSANDS_DOT = re.compile(r"\d{1,3}(?:\.\d{3})+")


def _to_float(number: str) -> Optional[float]:
    digits = re.sub(r"[\s']", "", number)
    if "," in digits and "." in digits:
        # Whichever separator comes last is the decimal point
        if digits.rfind(",") > digits.rfind("."):
            digits = digits.replace(".", "").replace(",", ".")
        else:
            digits = digits.replace(",", "")
    elif "," in digits:
        if _THOUSANDS_COMMA.fullmatch(digits):
            digits = digits.replace(",", "")
        elif digits.count(",") == 1:
            digits = digits.replace(",", ".")
        else:
            return None
    elif digits.count(".") > 1:
        if not _THOUSANDS_DOT.fullmatch(digits):
            return None
        digits = digits.replace(".", "")
    try:
        return float(digits)
    except ValueError:
        return None


def parse_currency(text: Optional[str]) -> Optional[ParsedPrice]:
    """Parse ``text`` into a :class:`ParsedPrice`, or ``None`` if it is not a price.

    Never raises. Negative amounts are not prices.
    """
    if not isinstance(text, str):
        return None
    s = text.strip()
    if not s or "-" in s or "−" in s:
        return None
    m = _PRICE_RE.match(s)
    if not m:
        return None
    value = _to_float(m.group("number"))
    if value is None:
        return None
    symbol = m.group("symbol_before") or m.group("symbol_after")
    if symbol:
        symbol = re.sub(r"\s+", " ", symbol)
    code = m.group("code_before") or m.group("code_after")
    return ParsedPrice(value=value, symbol=symbol, code=code)
