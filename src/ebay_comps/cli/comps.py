from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any, List, Optional

from dotenv import load_dotenv

from ebay_comps.errors import CompsError
from ebay_comps.models import CompsResponse
from ebay_comps.services import SourceOrchestrator, build_service
from ebay_comps.services.orchestrator import DEFAULT_MIN_LISTINGS
from ebay_comps.utils.log import configure_logging


class FileFallback:
    """Serves a saved SerpAPI response instead of calling the API."""

    def __init__(self, path: Optional[Path]) -> None:
        self.path = path

    def fetch_results(self, query: str) -> Optional[List[Any]]:
        if self.path is None:
            return None
        payload = json.loads(self.path.read_text(encoding="utf-8"))
        results = payload.get("organic_results") if isinstance(payload, dict) else payload
        return results if isinstance(results, list) else []


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Summarize eBay sold prices for a query")
    parser.add_argument("query", help="Free-text search query")
    parser.add_argument("--html", type=Path, help="Saved eBay search page; skips ScrapingBee")
    parser.add_argument("--serp-json", type=Path, help="Saved SerpAPI response used as the fallback with --html")
    parser.add_argument("--min-listings", type=int, default=DEFAULT_MIN_LISTINGS)
    parser.add_argument("--log-level", default=None)
    args = parser.parse_args(argv)

    load_dotenv()
    configure_logging(args.log_level)

    try:
        if args.html is not None:
            orch = SourceOrchestrator(fallback=FileFallback(args.serp_json), min_listings=args.min_listings)
            result = orch.run(args.query, args.html.read_text(encoding="utf-8"))
            response = CompsResponse(
                query=args.query.strip(),
                statistics=result.statistics,
                listings=result.listings,
                source=result.source,
            )
        else:
            service = build_service()
            service.orchestrator.min_listings = args.min_listings
            response = service.lookup(args.query)
    except (CompsError, ValueError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    print(json.dumps(response.model_dump(mode="json", by_alias=True), indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
