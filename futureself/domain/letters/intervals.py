"""
Delivery intervals.

Maps the interval a writer picks ("in one month", "in five years") to a
concrete delivery time. ``custom`` has no computed time; the writer
supplies the date.
"""

from datetime import datetime
from typing import Optional

from dateutil.relativedelta import relativedelta

from futureself.shared.errors import AppError

CUSTOM_INTERVAL = "custom"

_OFFSETS = {
    "1week": relativedelta(weeks=1),
    "1month": relativedelta(months=1),
    "6months": relativedelta(months=6),
    "1year": relativedelta(years=1),
    "5years": relativedelta(years=5),
}

VALID_INTERVALS = tuple(_OFFSETS) + (CUSTOM_INTERVAL,)


def invalid_interval_message(interval: str) -> str:
    return (
        f"{interval} is not a valid delivery interval. "
        f"Choose from: {', '.join(VALID_INTERVALS)}"
    )


def compute_delivery_date(interval: str, reference: datetime) -> Optional[datetime]:
    """Return the delivery time for an interval counted from ``reference``.

    Calendar arithmetic: one month after January 31st is the last day of
    February.

    Raises:
        AppError: VALIDATION if the interval is unknown.
    """
    if interval == CUSTOM_INTERVAL:
        return None
    offset = _OFFSETS.get(interval)
    if offset is None:
        message = invalid_interval_message(interval)
        raise AppError.validation(message, fields={"delivery_interval": message})
    return reference + offset
