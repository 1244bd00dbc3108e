from __future__ import annotations

from typing import Callable, Optional, Sequence

import pytest


def _card(
    title: str = "Nintendo Switch OLED",
    price: Optional[str] = "$249.99",
    sold: Optional[str] = "Sold  Sep 23, 2025",
    condition: Optional[str] = "Pre-Owned",
    attributes: Sequence[str] = ("Buy It Now", "+$5.00 delivery"),
    image: str = "https://i.ebayimg.com/images/g/abc/s-l500.webp",
    link: str = "https://www.ebay.com/itm/1234567890",
) -> str:
    price_html = f'<div class="s-card__price">{price}</div>' if price is not None else ""
    sold_html = f'<div class="s-card__caption"><span>{sold}</span></div>' if sold is not None else ""
    cond_html = (
        f'<div class="s-card__subtitle"><span>{condition}</span><span>Nintendo</span></div>'
        if condition is not None
        else ""
    )
    attrs = "".join(f'<div class="s-card__attribute-row"><span>{a}</span></div>' for a in attributes)
    return f"""
    <li class="s-card">
      <div class="su-card-container">
        <div class="su-media__image">
          <a href="{link}"><img src="{image}" /></a>
        </div>
        {sold_html}
        <div class="s-card__title"><span class="su-styled-text primary default">{title}</span></div>
        {cond_html}
        <div class="su-card-container__attributes__primary">
          {price_html}
          {attrs}
        </div>
      </div>
    </li>
    """


def _page(*cards: str) -> str:
    return f"<html><body><ul class='srp-results'>{''.join(cards)}</ul></body></html>"


@pytest.fixture
def make_card() -> Callable[..., str]:
    return _card


@pytest.fixture
def make_page() -> Callable[..., str]:
    return _page
