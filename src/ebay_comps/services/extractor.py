"""Listing extraction from eBay search pages, built on Scrapy selectors."""

from __future__ import annotations

import logging
from typing import List, Optional

from scrapy import Selector

from ebay_comps.models import ActiveListing, ListingRecord
from ebay_comps.normalize import (
    InvalidDateError,
    PriceParser,
    normalize_sold_date,
    parse_currency,
    resolve_shipping,
    shipping_label,
)

logger = logging.getLogger(__name__)

# eBay injects this card for store promotions that don't match the query
PLACEHOLDER_TITLE = "Shop on eBay"

CARD = ".su-card-container"
TITLE = ".s-card__title .primary"
PRICE = ".s-card__price"
CAPTION = ".s-card__caption"
SUBTITLE_SPAN = ".s-card__subtitle span"
MEDIA = ".su-media__image"
ATTRIBUTES = ".su-card-container__attributes__primary > *"

_COST_HINTS = ("delivery", "free", "shipping")
_CORRUPTION = ("�", "Â")


def _text(sel: Selector) -> str:
    return "".join(sel.css("::text").getall()).strip()


def _first_text(card: Selector, css: str) -> str:
    found = card.css(css)
    return _text(found[0]) if found else ""


def _clean_condition(raw: str) -> Optional[str]:
    if any(c in raw for c in _CORRUPTION):
        return None
    cleaned = raw.replace(" · ", "").replace("·", "").strip()
    return cleaned or None


class ListingExtractor:
    """Extracts ``ListingRecord`` objects from ``.su-card-container`` cards."""

    def __init__(self, parse_price: PriceParser = parse_currency) -> None:
        self._parse_price = parse_price

    def extract(self, html: str) -> List[ListingRecord]:
        """Return accepted listings in document order. Never raises on bad cards."""
        if not html:
            return []
        page = Selector(text=html)
        items: List[ListingRecord] = []
        cards = page.css(CARD)
        for index, card in enumerate(cards):
            try:
                item = self._parse_card(card)
            except InvalidDateError as e:
                logger.warning("Dropping card %d: %s", index, e)
                continue
            except (ValueError, TypeError) as e:
                logger.warning("Skipping malformed card %d: %s", index, e)
                continue
            if item is not None:
                logger.debug("Extracted item: %s - %s - sold %s", item.title, item.price, item.sold_date)
                items.append(item)
        logger.info("Extracted %d listings from %d cards", len(items), len(cards))
        return items

    def _read_card(self, card: Selector) -> dict:
        media = card.css(MEDIA)
        shipping: Optional[str] = None
        attributes = card.css(ATTRIBUTES)
        if len(attributes) > 1:
            shipping = shipping_label(resolve_shipping(self._shipping_text(attributes), self._parse_price))
        return {
            "title": _first_text(card, TITLE),
            "price_text": _first_text(card, PRICE),
            "condition_text": _first_text(card, SUBTITLE_SPAN),
            "image_url": media.css("img::attr(src)").get(),
            "item_url": media.css("a::attr(href)").get(),
            "shipping": shipping,
        }

    def _parse_card(self, card: Selector) -> Optional[ListingRecord]:
        fields = self._read_card(card)
        title = fields["title"]
        sold_text = _first_text(card, CAPTION)
        parsed = self._parse_price(fields["price_text"])

        if not title or title == PLACEHOLDER_TITLE:
            return None
        if parsed is None or not sold_text or not fields["condition_text"]:
            return None
        condition = _clean_condition(fields["condition_text"])
        if condition is None:
            return None

        return ListingRecord(
            title=title,
            price=parsed.value,
            currency=parsed.currency,
            sold_date=normalize_sold_date(sold_text),
            condition=condition,
            image_url=fields["image_url"],
            item_url=fields["item_url"],
            shipping=fields["shipping"],
        )

    def extract_active(self, html: str) -> List[ActiveListing]:
        """Return live listings from an active search page.

        Active cards carry no sold caption; title and condition are required,
        price is kept when it parses (ranges and "or Best Offer" rows do not).
        """
        if not html:
            return []
        cards = Selector(text=html).css(CARD)
        items: List[ActiveListing] = []
        for index, card in enumerate(cards):
            try:
                fields = self._read_card(card)
                title = fields["title"]
                if not title or title == PLACEHOLDER_TITLE:
                    continue
                condition = _clean_condition(fields["condition_text"])
                if condition is None:
                    continue
                parsed = self._parse_price(fields["price_text"])
                items.append(
                    ActiveListing(
                        title=title,
                        price=parsed.value if parsed else None,
                        currency=parsed.currency if parsed else "USD",
                        condition=condition,
                        image_url=fields["image_url"],
                        item_url=fields["item_url"],
                        shipping=fields["shipping"],
                    )
                )
            except (ValueError, TypeError) as e:
                logger.warning("Skipping malformed active card %d: %s", index, e)
        logger.info("Extracted %d active listings from %d cards", len(items), len(cards))
        return items

    @staticmethod
    def _shipping_text(attributes: List[Selector]) -> str:
        # The first attribute is the price row; an auction's "N bids" row may
        # precede the delivery row, so a stated cost wins over the bids row.
        texts = [_text(attr) for attr in attributes[1:]]
        for text in texts:
            if any(hint in text.lower() for hint in _COST_HINTS):
                return text
        for text in texts:
            if "bids" in text.lower():
                return text
        return ""
