from __future__ import annotations

import logging
from functools import lru_cache
from typing import Callable, Optional

from dotenv import load_dotenv
from fastapi import Depends, FastAPI, Query
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from ebay_comps.errors import CompsError, TransportError
from ebay_comps.services import CompsService, build_service
from ebay_comps.utils.log import configure_logging

load_dotenv()
configure_logging()
logger = logging.getLogger(__name__)

app = FastAPI(title="eBay Comps")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


@lru_cache(maxsize=1)
def get_service() -> CompsService:
    # One service per process so the in-memory cache outlives a request
    return build_service()


def _respond(q: Optional[str], call: Callable[[str], BaseModel]) -> JSONResponse:
    if not q or not q.strip():
        return JSONResponse({"error": "Missing query parameter q"}, status_code=400)
    try:
        result = call(q)
    except TransportError as e:
        return JSONResponse({"error": "Upstream Error", "message": str(e)}, status_code=502)
    except CompsError as e:
        return JSONResponse({"error": "Internal Server Error", "message": str(e)}, status_code=500)
    except Exception as e:
        logger.exception("Error in handler for %r", q)
        return JSONResponse({"error": "Internal Server Error", "message": str(e)}, status_code=500)
    return JSONResponse(result.model_dump(mode="json", by_alias=True))


@app.get("/healthz")
def healthz() -> dict[str, bool]:
    return {"ok": True}


@app.get("/comps")
def comps(
    q: Optional[str] = Query(None, description="Free-text search query"),
    service: CompsService = Depends(get_service),
) -> JSONResponse:
    return _respond(q, service.lookup)


@app.get("/listings")
def listings(
    q: Optional[str] = Query(None, description="Free-text search query"),
    service: CompsService = Depends(get_service),
) -> JSONResponse:
    return _respond(q, service.active_listings)
