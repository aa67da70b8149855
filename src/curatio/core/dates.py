"""Partial date resolution for DataCite date values."""

from __future__ import annotations

import calendar
import re
from datetime import date, timedelta

from curatio.core.exceptions import FormatError

YEAR_PATTERN = re.compile(r"^(\d{4})$")
YEAR_MONTH_PATTERN = re.compile(r"^(\d{4})-(\d{2})$")
FULL_DATE_PATTERN = re.compile(r"^(\d{4})-(\d{2})-(\d{2})(?:T\S*)?$")


def parse_date(raw: str | None, is_end_date: bool = False) -> str | None:
    """
    Expand a partial date into an ISO-8601 calendar date.

    Examples:
        - "2020" -> "2020-01-01" (start) / "2020-12-31" (end)
        - "2020-02" -> "2020-02-01" (start) / "2020-02-29" (end)
        - "2021-02-30" -> "2021-03-02" (day overflow rolls forward)

    Args:
        raw: Year, year-month or full date; a trailing time part is dropped
        is_end_date: Resolve partial dates to the last day of the period

    Returns:
        ``YYYY-MM-DD`` or None for empty input, an out-of-range month or an
        unrecognised format
    """
    if raw is None:
        return None
    value = str(raw).strip()
    if not value:
        return None

    if match := YEAR_PATTERN.match(value):
        year = match.group(1)
        return f"{year}-12-31" if is_end_date else f"{year}-01-01"

    if match := YEAR_MONTH_PATTERN.match(value):
        year, month = int(match.group(1)), int(match.group(2))
        if year < 1 or not 1 <= month <= 12:
            return None
        day = calendar.monthrange(year, month)[1] if is_end_date else 1
        return date(year, month, day).isoformat()

    if match := FULL_DATE_PATTERN.match(value):
        year, month, day = (int(g) for g in match.groups())
        if year < 1 or not 1 <= month <= 12:
            return None
        if 1 <= day <= calendar.monthrange(year, month)[1]:
            return f"{match.group(1)}-{match.group(2)}-{match.group(3)}"
        # Feb 30 -> Mar 1/2, Apr 31 -> May 1
        try:
            return (date(year, month, 1) + timedelta(days=day - 1)).isoformat()
        except OverflowError:
            return None

    return None


def strict_parse_date(raw: str | None, is_end_date: bool = False) -> str:
    """Like :func:`parse_date` but raises FormatError instead of returning None."""
    parsed = parse_date(raw, is_end_date)
    if parsed is None:
        raise FormatError(f"Invalid date: {raw!r}", value=raw)
    return parsed


def parse_date_range(raw: str | None) -> tuple[str | None, str | None]:
    """
    Split a DataCite date value into ``(start, end)``.

    ``"a/b"`` yields both boundaries, ``"a/"`` is open-ended and a value
    without a slash is returned as the start with no end.
    """
    if raw is None:
        return None, None
    value = str(raw).strip()
    if "/" not in value:
        return parse_date(value), None

    start_raw, end_raw = value.split("/", 1)
    start = parse_date(start_raw)
    end = parse_date(end_raw, is_end_date=True) if end_raw.strip() else None
    return start, end


def format_date_range(
    date_value: str | None,
    start_date: str | None,
    end_date: str | None,
) -> str | None:
    """Render stored date fields as a single DataCite date string."""
    if start_date and end_date:
        return f"{start_date}/{end_date}"
    if start_date:
        return start_date
    return date_value or None
