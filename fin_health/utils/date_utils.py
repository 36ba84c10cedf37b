"""Date manipulation utilities for month buckets"""

import calendar
from datetime import date
from typing import List

from fin_health.domain.exceptions import InvalidMonthKeyError


def month_key(day: date) -> str:
    """Year-month bucket for a date, e.g. 2025-03"""
    return f"{day.year:04d}-{day.month:02d}"


def parse_month_key(key: str) -> date:
    """Parse a YYYY-MM key into the first day of that month"""
    try:
        year, month = key.split("-")
        if len(year) != 4 or len(month) != 2:
            raise ValueError(key)
        return date(int(year), int(month), 1)
    except ValueError as e:
        raise InvalidMonthKeyError(f"Invalid month key: {key!r}") from e


def shift_month(day: date, months: int) -> date:
    """First day of the month `months` away from `day` (negative goes back)"""
    index = day.year * 12 + (day.month - 1) + months
    return date(index // 12, index % 12 + 1, 1)


def previous_month_key(day: date) -> str:
    return month_key(shift_month(day, -1))


def days_in_month(day: date) -> int:
    return calendar.monthrange(day.year, day.month)[1]


def recent_month_keys(window: int, reference_date: date) -> List[str]:
    """The `window` most recent month keys ending at the reference month, oldest first"""
    return [month_key(shift_month(reference_date, -offset)) for offset in range(window - 1, -1, -1)]
