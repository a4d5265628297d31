"""Engine subpackage - booking pricing and delivery estimation."""
from .pricing_engine import PricingEngine, calculate_booking_pricing, normalize_service_type
from .delivery_estimator import (
    DeliveryEstimator,
    calculate_delivery_estimate,
    estimate_nominal_delivery,
    validate_scheduled_date,
    get_available_drop_off_days,
    get_next_business_day,
    is_business_day,
    is_weekend,
)
from .models import PackageInput, PricingRequest, BookingPricingResult, DeliveryEstimate

__all__ = [
    'PricingEngine', 'calculate_booking_pricing', 'normalize_service_type',
    'DeliveryEstimator', 'calculate_delivery_estimate', 'estimate_nominal_delivery',
    'validate_scheduled_date', 'get_available_drop_off_days', 'get_next_business_day',
    'is_business_day', 'is_weekend',
    'PackageInput', 'PricingRequest', 'BookingPricingResult', 'DeliveryEstimate',
]
