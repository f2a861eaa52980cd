"""Date manipulation utilities"""

from datetime import date, timedelta
from typing import List


def add_months(start: date, months: int) -> date:
    """
    Advance a date by whole calendar months.

    The day of month carries over; when the target month is shorter, the
    surplus days spill into the following month (Jan 31 + 1 month -> Mar 3).
    """
    month_index = start.month - 1 + months
    year = start.year + month_index // 12
    month = month_index % 12 + 1
    return date(year, month, 1) + timedelta(days=start.day - 1)


def month_range(end: date, count: int) -> List[date]:
    """First day of each of the last `count` months, oldest first, ending with end's month"""
    first = date(end.year, end.month, 1)
    return [add_months(first, -offset) for offset in range(count - 1, -1, -1)]
