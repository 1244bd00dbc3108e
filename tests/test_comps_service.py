from __future__ import annotations

import pytest

from ebay_comps.repositories import CacheEntry, MemoryCache, RedisCache
from ebay_comps.services import (
    PRIMARY_SOURCE,
    CompsService,
    ScrapingBeeClient,
    ScrapingBeeConfig,
    SerpApiClient,
    SerpApiConfig,
    SourceOrchestrator,
)


class FakeBee(ScrapingBeeClient):
    def __init__(self, html: str):
        super().__init__(ScrapingBeeConfig(api_key="bee"))
        self.html = html
        self.calls = 0

    def fetch_sold_page(self, query: str) -> str:
        self.calls += 1
        return self.html

    def fetch_active_page(self, query: str) -> str:
        self.calls += 1
        return self.html


class Clock:
    def __init__(self) -> None:
        self.now = 1_000.0

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def page(make_card, make_page) -> str:
    return make_page(*(make_card(title=f"Card {i}", price=f"${20 + i}.00") for i in range(4)))


def _service(html: str, clock: Clock) -> tuple[CompsService, FakeBee]:
    bee = FakeBee(html)
    orch = SourceOrchestrator(fallback=SerpApiClient(SerpApiConfig(api_key=None)))
    return CompsService(bee, orch, MemoryCache(ttl_secs=3600, clock=clock), clock=clock), bee


def test_lookup_fetches_then_serves_from_cache(page):
    clock = Clock()
    svc, bee = _service(page, clock)

    first = svc.lookup("switch")
    assert first.cached is False
    assert first.source == PRIMARY_SOURCE
    assert first.statistics.count == 4

    second = svc.lookup("  switch ")
    assert second.cached is True
    assert second.statistics == first.statistics
    assert [l.title for l in second.listings] == [l.title for l in first.listings]
    assert bee.calls == 1


def test_cache_expires_and_is_per_query(page):
    clock = Clock()
    svc, bee = _service(page, clock)
    svc.lookup("switch")
    svc.lookup("switch lite")
    assert bee.calls == 2

    clock.now += 3600
    assert svc.lookup("switch").cached is False
    assert bee.calls == 3


def test_blank_query_is_rejected(page):
    svc, _ = _service(page, Clock())
    with pytest.raises(ValueError):
        svc.lookup("   ")


def test_wire_format(page):
    svc, _ = _service(page, Clock())
    data = svc.lookup("switch").model_dump(mode="json", by_alias=True)
    assert set(data) == {"query", "stats", "items", "source", "cached"}
    assert set(data["stats"]) == {"count", "p25", "median", "p75"}
    assert set(data["items"][0]) == {
        "title",
        "price",
        "currency",
        "soldDate",
        "condition",
        "imageUrl",
        "itemUrl",
        "shipping",
    }


def test_active_listings_are_cached_separately(page):
    clock = Clock()
    svc, bee = _service(page, clock)

    first = svc.active_listings("switch")
    assert first.cached is False
    assert first.source == PRIMARY_SOURCE
    assert len(first.listings) == 4
    data = first.model_dump(mode="json", by_alias=True)
    assert set(data) == {"query", "items", "source", "cached"}

    assert svc.active_listings("switch").cached is True
    assert svc.lookup("switch").cached is False
    assert bee.calls == 2

    with pytest.raises(ValueError):
        svc.active_listings(" ")


class FakeRedis:
    def __init__(self) -> None:
        self.store: dict[str, tuple[int, str]] = {}

    def get(self, key):
        hit = self.store.get(key)
        return hit[1].encode("utf-8") if hit else None

    def setex(self, key, ttl, value):
        self.store[key] = (ttl, value)


def test_redis_cache_round_trip():
    fake = FakeRedis()
    cache = RedisCache(fake, ttl_secs=60)  # type: ignore[arg-type]
    cache.set("switch", CacheEntry(query="switch", response={"query": "switch"}, timestamp=5.0))
    assert fake.store["comps:switch"][0] == 60
    entry = cache.get("switch")
    assert entry is not None and entry.response == {"query": "switch"}
    assert cache.get("missing") is None

    fake.store["comps:broken"] = (60, "{not json")
    assert cache.get("broken") is None
