"""
Booking Price Rules

Totals are computed once, at creation time, from:
- the course rate for the day classification (holiday > weekend > weekday)
- the party size for tee times
- the fixed bucket price table for driving-range sessions
"""

from datetime import date
from decimal import Decimal
from enum import Enum

from shared.domain.exceptions import ValidationFailed
from shared.domain.value_objects import Money


class DayType(Enum):
    WEEKDAY = 'weekday'
    WEEKEND = 'weekend'
    HOLIDAY = 'holiday'


# Цена одной корзины мячей по размеру
BUCKET_PRICES = {
    'small': Decimal('10.00'),
    'medium': Decimal('15.00'),
    'large': Decimal('20.00'),
    'jumbo': Decimal('25.00'),
}


def classify_day(on_date: date, is_holiday: bool = False) -> DayType:
    """Holiday wins over weekend; Saturday and Sunday are weekend"""
    if is_holiday:
        return DayType.HOLIDAY
    if on_date.weekday() >= 5:
        return DayType.WEEKEND
    return DayType.WEEKDAY


def green_fee(course, day_type: DayType, currency: str = 'USD') -> Money:
    """
    Course green fee for a day classification

    A course without a holiday rate charges its weekend rate on holidays.
    """
    if day_type is DayType.HOLIDAY:
        rate = course.green_fee_holiday
        if rate is None:
            rate = course.green_fee_weekend
    elif day_type is DayType.WEEKEND:
        rate = course.green_fee_weekend
    else:
        rate = course.green_fee_weekday
    return Money(Decimal(rate), currency)


def tee_time_total(fee: Money, players: int) -> Money:
    return fee * players


def bucket_unit_price(bucket_size: str, currency: str = 'USD') -> Money:
    try:
        price = BUCKET_PRICES[bucket_size]
    except KeyError:
        raise ValidationFailed(
            f"Неизвестный размер корзины: {bucket_size!r}.",
            details={'bucket_size': bucket_size, 'allowed': sorted(BUCKET_PRICES)},
        )
    return Money(price, currency)


def range_total(bucket_size: str, bucket_count: int, currency: str = 'USD') -> Money:
    if bucket_count < 1:
        raise ValidationFailed(
            "Количество корзин должно быть не меньше одной.",
            details={'bucket_count': bucket_count},
        )
    return bucket_unit_price(bucket_size, currency) * bucket_count
