from datetime import datetime, timedelta, timezone
from typing import Final

FIRST_YEAR: Final = 2015
LAST_DAY: Final = 25


class AocHelperError(Exception):
    """Base for every error that ends an invocation with a one-line message."""

    __slots__ = ()


def today() -> int:
    utc = datetime.now(timezone.utc)
    offset = timedelta(hours=-5)
    return min((utc + offset).day, LAST_DAY)


def valid_day(day: int) -> bool:
    return 1 <= day <= LAST_DAY


def valid_year(year: int) -> bool:
    return year >= FIRST_YEAR
