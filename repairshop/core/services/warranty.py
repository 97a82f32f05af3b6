"""
Warranty window arithmetic.

Month addition clamps to the last day of the target month, so
2024-01-31 + 1 month is 2024-02-29.
"""

import calendar
from datetime import date, datetime

from repairshop.core.clock import today
from repairshop.core.exceptions import InvalidInputError

DEFAULT_WARRANTY_MONTHS = 3


def _to_date(value: date | datetime | str, field: str = "start_date") -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        try:
            if len(text) == 10:
                return date.fromisoformat(text)
            return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
        except ValueError as e:
            raise InvalidInputError(field, value, "not an ISO-8601 date") from e
    raise InvalidInputError(field, value, f"unsupported type {type(value).__name__}")


def add_months(start: date, months: int) -> date:
    """Calendar month addition with end-of-month clamping."""
    month_index = start.month - 1 + months
    year = start.year + month_index // 12
    month = month_index % 12 + 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(start.day, last_day))


def end_date(start: date | datetime | str, months: int = DEFAULT_WARRANTY_MONTHS) -> date:
    """Warranty end date for a window of `months` starting at `start`."""
    if months < 0:
        raise InvalidInputError("months", months, "must be >= 0")
    start = _to_date(start)
    try:
        return add_months(start, months)
    except (ValueError, OverflowError) as e:
        raise InvalidInputError("months", months, f"end date out of range from {start}") from e


def end_date_iso(start: date | datetime | str, months: int = DEFAULT_WARRANTY_MONTHS) -> str:
    return end_date(start, months).isoformat()


def is_valid(end: date | datetime | str, as_of: date | None = None) -> bool:
    """True while `as_of` (default today) has not passed the end date."""
    as_of = as_of or today()
    return as_of <= _to_date(end, "end_date")


def days_remaining(end: date | datetime | str, as_of: date | None = None) -> int:
    """Whole days until the end date; negative once expired."""
    as_of = as_of or today()
    return (_to_date(end, "end_date") - as_of).days
