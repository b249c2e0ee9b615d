"""Canonical forms for identity keys, money and timestamps.

Every field-level defect has a sentinel here instead of an exception:

- blank or missing identifiers become ``""`` and are never used as index keys
- unparseable money becomes ``0.0``
- unparseable or missing timestamps compare as :data:`EARLIEST_INSTANT`
"""

from __future__ import annotations

import math
import re
from datetime import UTC, date, datetime, time
from decimal import Decimal
from typing import Final

EARLIEST_INSTANT: Final[datetime] = datetime.min.replace(tzinfo=UTC)

_AMOUNT_PATTERN = re.compile(r"[-+]?(?:\d+\.?\d*|\.\d+)")
_AMOUNT_NOISE = str.maketrans("", "", "$€£, \u00a0")
_UTC_SUFFIXES: Final[tuple[str, ...]] = (" UTC", " GMT", "Z")
_DATETIME_FORMATS: Final[tuple[str, ...]] = (
    "%Y-%m-%d %H:%M:%S %z",
    "%Y-%m-%d %H:%M %z",
    "%m/%d/%Y %H:%M:%S",
    "%m/%d/%Y %H:%M",
    "%m/%d/%Y",
    "%b %d, %Y %H:%M",
    "%b %d, %Y",
    "%B %d, %Y",
    "%d %b %Y",
    "%d %B %Y",
)


def identity_text(value: object) -> str:
    """Return the textual identity form of an id value.

    ``7``, ``7.0``, ``"7"`` and ``" 7 "`` all map to ``"7"``. ``None`` and NaN
    map to the empty string.
    """

    if value is None:
        return ""
    if isinstance(value, bool):
        return str(value)
    if isinstance(value, float):
        if math.isnan(value):
            return ""
        if value.is_integer():
            return str(int(value))
    if isinstance(value, Decimal) and value == value.to_integral_value():
        return str(value.to_integral_value())
    return str(value).strip()


def normalize_text(value: object) -> str:
    if value is None:
        return ""
    return str(value).strip().lower()


def normalize_email(value: object) -> str:
    return normalize_text(value)


def parse_amount(value: object) -> float:
    """Parse a monetary amount, falling back to ``0.0``.

    Currency symbols and thousands separators are ignored; the first numeric
    token wins, so ``"49.99 USD"`` parses as ``49.99``.
    """

    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, int | float | Decimal):
        amount = float(value)
        return amount if math.isfinite(amount) else 0.0
    text = str(value).translate(_AMOUNT_NOISE)
    match = _AMOUNT_PATTERN.match(text)
    if match is None:
        return 0.0
    amount = float(match.group(0))
    return amount if math.isfinite(amount) else 0.0


def parse_instant(value: object) -> datetime | None:
    """Parse an export timestamp into an aware UTC datetime.

    Returns ``None`` for blank or unparseable input, and for offset values that
    fall outside the representable range once shifted to UTC. Naive values are
    taken as UTC.
    """

    if value is None:
        return None
    if isinstance(value, datetime | date):
        parsed: datetime | date | None = value
    else:
        text = str(value).strip()
        if not text:
            return None
        parsed = _parse_iso(text) or _parse_with_formats(text)
    if parsed is None:
        return None
    try:
        return to_instant(parsed)
    except OverflowError:
        return None


def parse_date(value: object) -> date | None:
    instant = parse_instant(value)
    return instant.date() if instant is not None else None


def to_instant(value: date | datetime | None) -> datetime:
    """Map a date, datetime or ``None`` onto a comparable UTC instant."""

    if value is None:
        return EARLIEST_INSTANT
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value.astimezone(UTC)
    return datetime.combine(value, time.min, tzinfo=UTC)


def _parse_iso(text: str) -> datetime | None:
    candidate = text
    for suffix in _UTC_SUFFIXES:
        if candidate.endswith(suffix):
            candidate = candidate[: -len(suffix)].rstrip() + "+00:00"
            break
    try:
        return datetime.fromisoformat(candidate)
    except ValueError:
        return None


def _parse_with_formats(text: str) -> datetime | None:
    for fmt in _DATETIME_FORMATS:
        try:
            return datetime.strptime(text, fmt)  # noqa: DTZ007
        except ValueError:
            continue
    return None
