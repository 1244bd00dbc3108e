from __future__ import annotations

from ebay_comps.models import ListingRecord
from ebay_comps.normalize import ParsedPrice
from ebay_comps.services import ListingExtractor
from ebay_comps.services.extractor import PLACEHOLDER_TITLE


def test_extractor_parses_card(make_card, make_page) -> None:
    html = make_page(make_card(condition="Pre-Owned · "))
    results = ListingExtractor().extract(html)

    assert len(results) == 1
    listing = results[0]
    assert isinstance(listing, ListingRecord)
    assert listing.title == "Nintendo Switch OLED"
    assert listing.price == 249.99
    assert listing.currency == "$"
    assert listing.sold_date == "2025-09-23T00:00:00.000Z"
    assert listing.condition == "Pre-Owned"
    assert listing.image_url == "https://i.ebayimg.com/images/g/abc/s-l500.webp"
    assert listing.item_url == "https://www.ebay.com/itm/1234567890"
    assert listing.shipping == "5"


def test_placeholder_card_is_excluded(make_card, make_page) -> None:
    html = make_page(make_card(title=PLACEHOLDER_TITLE), make_card(title="Switch Lite"))
    results = ListingExtractor().extract(html)
    assert [r.title for r in results] == ["Switch Lite"]


def test_cards_missing_required_fields_are_dropped(make_card, make_page) -> None:
    html = make_page(
        make_card(title="no price", price=None),
        make_card(title="range price", price="$10.00 to $20.00"),
        make_card(title="no date", sold=None),
        make_card(title="no condition", condition=None),
        make_card(title="kept"),
    )
    results = ListingExtractor().extract(html)
    assert [r.title for r in results] == ["kept"]


def test_bad_date_drops_only_that_card(make_card, make_page) -> None:
    html = make_page(
        make_card(title="first"),
        make_card(title="bad month", sold="Sold Foo 23, 2025"),
        make_card(title="corrupt", sold="Sold Sep 23 Â· 2025"),
        make_card(title="last", sold="Sold Jan 2, 2024"),
    )
    results = ListingExtractor().extract(html)
    assert [r.title for r in results] == ["first", "last"]
    assert results[1].sold_date == "2024-01-02T00:00:00.000Z"


def test_shipping_variants(make_card, make_page) -> None:
    html = make_page(
        make_card(title="auction", attributes=("5 bids", "Located in United States")),
        make_card(title="free", attributes=("Buy It Now", "Free delivery")),
        make_card(title="silent", attributes=("Buy It Now", "Located in United States")),
        make_card(title="no attributes", attributes=()),
        make_card(title="auction with delivery", attributes=("3 bids", "+$5.00 delivery")),
    )
    shipping = {r.title: r.shipping for r in ListingExtractor().extract(html)}
    assert shipping == {
        "auction": "Unknown",
        "free": "0",
        "silent": "0",
        "no attributes": None,
        "auction with delivery": "5",
    }


def test_corrupted_condition_rejects_card(make_card, make_page) -> None:
    html = make_page(make_card(title="mangled", condition="Pre-Owned Â· "), make_card(title="ok"))
    assert [r.title for r in ListingExtractor().extract(html)] == ["ok"]


def test_injected_price_parser_is_used(make_card, make_page) -> None:
    calls = []

    def fake_parse(text: str):
        calls.append(text)
        return ParsedPrice(10.0, None, "GBP") if text == "$249.99" else None

    results = ListingExtractor(parse_price=fake_parse).extract(make_page(make_card()))
    assert results[0].price == 10.0
    assert results[0].currency == "GBP"
    assert "$249.99" in calls


def test_empty_page() -> None:
    assert ListingExtractor().extract("") == []
    assert ListingExtractor().extract("<html><body></body></html>") == []


def test_extract_active_listings(make_card, make_page) -> None:
    html = make_page(
        make_card(title="live", sold=None, condition="Brand New · "),
        make_card(title=PLACEHOLDER_TITLE, sold=None),
        make_card(title="range", sold=None, price="$10.00 to $20.00", attributes=("Buy It Now", "Free delivery")),
        make_card(title="no condition", sold=None, condition=None),
    )
    results = ListingExtractor().extract_active(html)

    assert [r.title for r in results] == ["live", "range"]
    live, ranged = results
    assert live.price == 249.99
    assert live.condition == "Brand New"
    assert live.shipping == "5"
    assert live.item_url == "https://www.ebay.com/itm/1234567890"
    assert ranged.price is None
    assert ranged.currency == "USD"
    assert ranged.shipping == "0"
    assert ListingExtractor().extract_active("") == []
