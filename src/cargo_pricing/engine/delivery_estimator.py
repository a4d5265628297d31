"""
Delivery Estimator - business-day delivery windows and drop-off scheduling.

Estimates when a shipment dropped off on a scheduled date will arrive,
counting Monday-Friday only. Lookup failures and unparseable dates produce
None instead of an error; callers treat None as "not enough data".
"""
from datetime import date, datetime, timedelta
from typing import Optional

import pandas as pd

from ..data import reference_data
from .models import DateRange, DayRange, DeliveryEstimate, ScheduleValidation


EXPRESS_TRANSIT_REDUCTION = 2
CUSTOMS_BUFFER_MIN = 1
CUSTOMS_BUFFER_MAX = 2
SCHEDULING_HORIZON_DAYS = 14

WEEKDAY_ABBR = ('Mon', 'Tue', 'Wed', 'Thu', 'Fri', 'Sat', 'Sun')
MONTH_ABBR = ('Jan', 'Feb', 'Mar', 'Apr', 'May', 'Jun',
              'Jul', 'Aug', 'Sep', 'Oct', 'Nov', 'Dec')


def to_date(value) -> Optional[date]:
    """Parse a date, datetime or date string; None when it is not a calendar date."""
    if value is None or value is pd.NaT:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        parsed = pd.to_datetime(value, errors='coerce')
    except (TypeError, ValueError):
        return None
    if parsed is None or pd.isna(parsed):
        return None
    return parsed.date()


def is_weekend(day: date) -> bool:
    """Saturday or Sunday."""
    return day.weekday() >= 5


def is_business_day(day: date) -> bool:
    return not is_weekend(day)


def get_next_business_day(day: date) -> date:
    """First business day strictly after the given date."""
    next_day = day + timedelta(days=1)
    while not is_business_day(next_day):
        next_day += timedelta(days=1)
    return next_day


def add_business_days(start: date, business_days: int) -> date:
    """Walk forward from start, counting only weekdays, until business_days are added."""
    result = start
    added = 0
    while added < business_days:
        result += timedelta(days=1)
        if is_business_day(result):
            added += 1
    return result


def format_delivery_date(day: date) -> str:
    """US short form, e.g. 'Mon, Oct 26'."""
    return f"{WEEKDAY_ABBR[day.weekday()]}, {MONTH_ABBR[day.month - 1]} {day.day}"


def format_date_range(min_date: date, max_date: date) -> str:
    if min_date == max_date:
        return format_delivery_date(min_date)
    return f"{format_delivery_date(min_date)} – {format_delivery_date(max_date)}"


def adjust_transit_for_service(service_type: str, transit_min: int, transit_max: int) -> tuple[int, int]:
    """Express shortens both bounds (never below 1 day); other services keep the destination range."""
    if service_type == 'express':
        return (
            max(1, transit_min - EXPRESS_TRANSIT_REDUCTION),
            max(1, transit_max - EXPRESS_TRANSIT_REDUCTION),
        )
    return transit_min, transit_max


class DeliveryEstimator:
    """
    Estimates delivery windows from reference transit times.

    Resolution order:
    1. Destination transit range (business days)
    2. Service adjustment (express only)
    3. Customs clearance buffer
    4. Business-day walk from the scheduled date, skipping weekends
    """

    def __init__(self, reference: Optional['reference_data.ReferenceData'] = None):
        self.reference = reference or reference_data.get_reference_data()

    def estimate(
        self,
        service_type: str,
        destination_id: str,
        scheduled_date,
        include_customs: bool = True
    ) -> Optional[DeliveryEstimate]:
        """
        Estimate the delivery window for a drop-off.

        Returns None when the destination or service is unknown or the
        scheduled date does not parse.
        """
        destination = self.reference.get_destination(destination_id)
        if destination is None:
            return None

        service = self.reference.get_service(service_type)
        if service is None:
            return None

        start = to_date(scheduled_date)
        if start is None:
            return None

        transit_min, transit_max = adjust_transit_for_service(
            service.id, destination.transit_min, destination.transit_max
        )

        # Applied after the service adjustment, express included
        if include_customs:
            transit_min += CUSTOMS_BUFFER_MIN
            transit_max += CUSTOMS_BUFFER_MAX

        min_delivery = add_business_days(start, transit_min)
        max_delivery = add_business_days(start, transit_max)

        return DeliveryEstimate(
            estimated_delivery=DateRange(min=min_delivery, max=max_delivery),
            transit_days=DayRange(min=transit_min, max=transit_max),
            business_days=DayRange(min=transit_min, max=transit_max),
            formatted_range=format_date_range(min_delivery, max_delivery),
            service_name=service.name,
            destination_name=destination.name,
            confidence='high' if transit_min == transit_max else 'medium',
        )

    def estimate_nominal(self, service_type: str, scheduled_date) -> Optional[date]:
        """
        Quick estimate from the service's nominal delivery days alone.

        Ignores the destination and customs; used for service-tier previews.
        """
        service = self.reference.get_service(service_type)
        if service is None:
            return None
        start = to_date(scheduled_date)
        if start is None:
            return None
        return add_business_days(start, service.delivery_days)


def calculate_delivery_estimate(
    service_type: str,
    destination_id: str,
    scheduled_date,
    include_customs: bool = True,
    reference: Optional['reference_data.ReferenceData'] = None
) -> Optional[DeliveryEstimate]:
    """Estimate a delivery window; None means insufficient data."""
    return DeliveryEstimator(reference).estimate(
        service_type=service_type,
        destination_id=destination_id,
        scheduled_date=scheduled_date,
        include_customs=include_customs,
    )


def estimate_nominal_delivery(
    service_type: str,
    scheduled_date,
    reference: Optional['reference_data.ReferenceData'] = None
) -> Optional[date]:
    return DeliveryEstimator(reference).estimate_nominal(service_type, scheduled_date)


def validate_scheduled_date(
    scheduled_date,
    destination_id: str,
    today: Optional[date] = None
) -> ScheduleValidation:
    """
    Check a requested drop-off date.

    Rejects past dates, weekends and dates more than 14 days out. The
    destination is accepted for callers but does not change the rules.
    """
    today = to_date(today) or date.today()
    day = to_date(scheduled_date)
    if day is None:
        return ScheduleValidation(is_valid=False, reason="Scheduled date is not a valid date")

    if day < today:
        return ScheduleValidation(is_valid=False, reason="Scheduled date cannot be in the past")

    if not is_business_day(day):
        return ScheduleValidation(
            is_valid=False,
            reason="Drop-off only available on business days (Mon-Fri)"
        )

    if day > today + timedelta(days=SCHEDULING_HORIZON_DAYS):
        return ScheduleValidation(
            is_valid=False,
            reason=f"Scheduled date must be within {SCHEDULING_HORIZON_DAYS} days",
            earliest_date=today
        )

    return ScheduleValidation(is_valid=True)


def get_available_drop_off_days(today: Optional[date] = None) -> list[date]:
    """Business days from today through the next 13 days."""
    today = to_date(today) or date.today()
    days = []
    for offset in range(SCHEDULING_HORIZON_DAYS):
        day = today + timedelta(days=offset)
        if is_business_day(day):
            days.append(day)
    return days
