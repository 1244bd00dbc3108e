from __future__ import annotations

import logging
import os
from typing import Optional

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: Optional[str] = None) -> None:
    """Configure root logging once; ``LOG_LEVEL`` picks the level (default INFO).

    Third-party HTTP clients stay at WARNING so request URLs carrying API keys
    are not logged.
    """
    name = (level or os.environ.get("LOG_LEVEL") or "INFO").upper()
    logging.basicConfig(level=getattr(logging, name, logging.INFO), format=LOG_FORMAT)
    for noisy in ("urllib3", "requests", "scrapy"):
        logging.getLogger(noisy).setLevel(logging.WARNING)
