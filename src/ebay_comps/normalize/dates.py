from __future__ import annotations

import re
from datetime import datetime, timezone
from typing import Optional

ISO_FORMAT = "%Y-%m-%dT%H:%M:%S.000Z"

# "Sold Sep 23, 2025" / "Sold  September 3, 2025" / "Sold Sep. 23 2025"
_SOLD_RE = re.compile(
    r"^Sold\s+(?P<month>[A-Za-z]+)\.?\s+(?P<day>\d{1,2}),?\s+(?P<year>\d{4})$"
)


class InvalidDateError(ValueError):
    """Raised when a sold-date caption cannot be turned into a real date."""


def _month_index(token: str) -> int:
    # Resolve the month through strptime, the same way a full date would parse
    for fmt in ("%b %d %Y", "%B %d %Y"):
        try:
            return datetime.strptime(f"{token} 1 2020", fmt).month
        except ValueError:
            continue
    raise InvalidDateError(f"unrecognized month {token!r}")


def _format(dt: datetime) -> str:
    return dt.astimezone(timezone.utc).strftime(ISO_FORMAT)


def normalize_sold_date(text: str) -> str:
    """Convert ``"Sold Sep 23, 2025"`` to ``"2025-09-23T00:00:00.000Z"``.

    Any text that is not cleanly ASCII after whitespace is collapsed is treated
    as corrupt and rejected rather than repaired.
    """
    s = " ".join((text or "").split())
    if not s.isascii():
        raise InvalidDateError(f"non-ASCII characters in date {text!r}")
    m = _SOLD_RE.match(s)
    if not m:
        raise InvalidDateError(f"not a sold-date caption: {text!r}")
    month = _month_index(m.group("month"))
    try:
        dt = datetime(int(m.group("year")), month, int(m.group("day")), tzinfo=timezone.utc)
    except ValueError as e:
        raise InvalidDateError(f"invalid calendar date {text!r}: {e}") from e
    return _format(dt)


def coerce_timestamp(value: Optional[str]) -> str:
    """Canonicalize a date from either a sold caption or an ISO-8601 string."""
    s = (value or "").strip()
    if not s:
        raise InvalidDateError("empty date")
    if s.lower().startswith("sold"):
        return normalize_sold_date(s)
    try:
        dt = datetime.fromisoformat(s.replace("Z", "+00:00"))
    except ValueError as e:
        raise InvalidDateError(f"unrecognized date {value!r}") from e
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return _format(dt)


def utc_now_iso() -> str:
    return _format(datetime.now(timezone.utc))
