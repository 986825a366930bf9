"""Normalisation of the date-like and numeric values found in vehicle and record data."""

import logging
import math
from datetime import date, datetime, timezone
from typing import Any, Optional, Union

from dateutil.parser import isoparse

logger = logging.getLogger(__name__)

DateLike = Union[date, datetime, str, int, float]


def to_date(value: Optional[DateLike]) -> Optional[date]:
    """
    Convert a date-like value to a date.

    Accepts date, datetime, ISO-8601 strings and epoch milliseconds.
    Returns None for missing or unparsable values.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, (int, float)):
        try:
            return datetime.fromtimestamp(value / 1000, tz=timezone.utc).date()
        except (OverflowError, OSError, ValueError):
            logger.warning("Ignoring out-of-range timestamp %r", value)
            return None
    if isinstance(value, str):
        try:
            return isoparse(value.strip()).date()
        except ValueError:
            logger.warning("Ignoring unparsable date %r", value)
            return None
    return None


def parse_year_month(value: Optional[str]) -> Optional[date]:
    """Parse 'YYYY-MM' into the first day of that month."""
    if not value:
        return None
    try:
        year, month = (int(part) for part in str(value).split("-")[:2])
        return date(year, month, 1)
    except ValueError:
        logger.warning("Ignoring unparsable year-month %r", value)
        return None


def to_number(value: Any, field: str = "value") -> Optional[float]:
    """
    Return a numeric value unchanged, None for anything else.

    Bools, NaN, strings and other non-numbers are logged and dropped.
    """
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)) or math.isnan(value):
        logger.warning("Ignoring non-numeric %s %r", field, value)
        return None
    return value
