from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from typing import Any, Optional


def utc_today() -> date:
    return datetime.now(timezone.utc).date()


def parse_date(value: Any) -> Optional[date]:
    """Coerce a stored date value to a calendar date.

    Accepts ``date``/``datetime`` objects and ISO strings. Timestamps keep
    only their UTC calendar date, so ``2025-03-01T00:00:00Z`` is March 1
    regardless of the local timezone. Anything unusable gives ``None``.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value.date()
    if isinstance(value, date):
        return value
    s = str(value).strip()
    if not s:
        return None
    try:
        return datetime.strptime(s, "%Y-%m-%d").date()
    except ValueError:
        pass
    try:
        parsed = datetime.fromisoformat(s.replace("Z", "+00:00"))
    except ValueError:
        return None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc)
    return parsed.date()


def utc_date(year: int, month_index: int, day: int) -> date:
    # Month index is 0-based; out-of-range month/day values roll over into
    # neighbouring months and years instead of raising.
    year += month_index // 12
    month_index %= 12
    return date(year, month_index + 1, 1) + timedelta(days=day - 1)


def shift_years(d: date, years: int) -> date:
    return utc_date(d.year + years, d.month - 1, d.day)


def format_display(d: Optional[date]) -> str:
    if d is None:
        return ""
    return f"{d.strftime('%b')} {d.day}, {d.year}"
