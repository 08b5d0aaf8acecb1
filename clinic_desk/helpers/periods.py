import calendar
from datetime import date
from typing import Optional, Tuple


def period_bounds(year: Optional[int] = None, month: Optional[int] = None) -> Tuple[date, date]:
    """First and last day of a calendar month, or of the whole year when month is None."""
    year = year or date.today().year
    if month is None:
        return date(year, 1, 1), date(year, 12, 31)
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last_day)
