"""Shared normalization helpers: case folding, rounding and date arithmetic."""

import math
from datetime import date, datetime, time, timezone
from typing import Iterable, List, Optional, Union

from .config import DAYS_PER_YEAR

DateLike = Union[datetime, date]


def normalize_terms(values: Optional[Iterable[str]]) -> List[str]:
    """
    Lower-case free-text terms.

    Every entry is kept, blanks included, so the result has the caller's
    length. A blank term is contained in every other term.
    """
    if not values:
        return []
    return ["" if value is None else str(value).lower() for value in values]


def round_half_up(value: float, precision: int) -> float:
    """Round to ``precision`` decimals, halves away from zero for positives."""
    factor = 10 ** precision
    return math.floor(value * factor + 0.5) / factor


def terms_overlap(term: str, candidates: Iterable[str]) -> bool:
    """True if ``term`` contains, or is contained in, any of ``candidates``."""
    return any(term in other or other in term for other in candidates)


def utc_now() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_naive_utc(value: DateLike) -> datetime:
    """Coerce a date or datetime to a naive UTC datetime."""
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            return value.astimezone(timezone.utc).replace(tzinfo=None)
        return value
    return datetime.combine(value, time.min)


def years_between(start: DateLike, end: DateLike, days_per_year: float = DAYS_PER_YEAR) -> float:
    """
    Length of the span from ``start`` to ``end`` in years.

    Negative spans (end before start) count as zero.
    """
    delta = to_naive_utc(end) - to_naive_utc(start)
    years = delta.total_seconds() / (days_per_year * 86400)
    return max(0.0, years)
