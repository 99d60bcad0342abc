"""Calendar helpers shared by the loan and investor engines.

Month arithmetic is calendar-based: adding one month to the 31st of January
lands on the last day of February, never on a fixed count of days.
"""

from datetime import date, datetime, time, timezone
from typing import Iterator

from dateutil.relativedelta import relativedelta


def resolve_now(now: datetime | None) -> datetime:
    """Return ``now``, reading the system clock when it is not given."""
    if now is None:
        return datetime.now()
    return as_datetime(now)


def naive_utc(value: datetime) -> datetime:
    """Convert an offset-aware datetime to naive UTC; naive values pass through."""
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def as_datetime(value: date | datetime) -> datetime:
    """Promote a date to midnight of that day.

    Datetimes pass through, with offset-aware values converted to naive UTC so
    they compare against stored record dates.
    """
    if isinstance(value, datetime):
        return naive_utc(value)
    return datetime.combine(value, time.min)


def as_date(value: date | datetime) -> date:
    """Strip the time of day, taking the UTC day of offset-aware values."""
    if isinstance(value, datetime):
        return naive_utc(value).date()
    return value


def month_start(value: date | datetime) -> date:
    """First day of the month containing ``value``."""
    return as_date(value).replace(day=1)


def add_months(value: date, months: int) -> date:
    """Add calendar months, clamping to the last day of shorter months."""
    return value + relativedelta(months=months)


def month_starts_between(start: date, end: date | datetime) -> Iterator[date]:
    """Yield the first day of every calendar month fully elapsed before ``end``.

    Iteration begins at the month containing ``start`` and stops before the
    month containing ``end``.

    Parameters
    ----------
    start : date
        Any day in the first month.
    end : date | datetime
        Any instant in the (open) current month.

    Yields
    ------
    date
        First day of each elapsed month, ascending.
    """
    current = month_start(start)
    stop = month_start(end)
    while current < stop:
        yield current
        current = add_months(current, 1)


def full_months_between(start: date, end: date | datetime) -> int:
    """Count month-anniversaries of ``start`` reached on or before ``end``.

    Never negative.
    """
    end_day = as_date(end)
    months = (end_day.year - start.year) * 12 + (end_day.month - start.month)
    if end_day.day < start.day:
        months -= 1
    return max(0, months)
