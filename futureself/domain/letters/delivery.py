"""
Delivery date policy.

A letter must wait at least one week. The rule is checked when a letter
is created and whenever its delivery date is changed, and never on any
other update, so marking a letter delivered or adding a reflection
later does not trip it.

Dates are compared at UTC midnight so the time of day and the writer's
timezone do not matter.
"""

from datetime import date, datetime, time, timedelta, timezone
from typing import Optional, Union

from futureself.shared.errors import AppError

MINIMUM_LEAD = timedelta(days=7)
DELIVERY_FIELD = "delivered_at"
TOO_SOON_MESSAGE = "Delivery date must be at least one week in the future."

DateLike = Union[date, datetime]


def as_utc(value: datetime) -> datetime:
    """Return an aware UTC datetime. Naive values are taken to be UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def utc_midnight(value: DateLike) -> datetime:
    """Truncate to midnight UTC of the value's UTC calendar day."""
    if isinstance(value, datetime):
        day = as_utc(value).date()
    else:
        day = value
    return datetime.combine(day, time.min, tzinfo=timezone.utc)


def minimum_delivery_date(now: DateLike) -> datetime:
    """Earliest acceptable delivery day: today (UTC) plus seven days."""
    return utc_midnight(now) + MINIMUM_LEAD


def validate_delivery_date(value: DateLike, now: DateLike) -> None:
    """Reject a delivery date less than a week away.

    Inclusive: exactly seven days from today is accepted.

    Raises:
        AppError: VALIDATION with a ``delivered_at`` field message.
    """
    if utc_midnight(value) < minimum_delivery_date(now):
        raise AppError.validation(
            TOO_SOON_MESSAGE, fields={DELIVERY_FIELD: TOO_SOON_MESSAGE}
        )


def check_delivery_date(
    value: DateLike,
    now: DateLike,
    *,
    is_new: bool,
    previous: Optional[DateLike] = None,
) -> None:
    """Gate run on every letter write.

    Validates only for a new letter or when the delivery date changes.
    """
    if not is_new and previous is not None and _same_instant(value, previous):
        return
    validate_delivery_date(value, now)


def _same_instant(left: DateLike, right: DateLike) -> bool:
    if isinstance(left, datetime) and isinstance(right, datetime):
        return as_utc(left) == as_utc(right)
    return left == right
