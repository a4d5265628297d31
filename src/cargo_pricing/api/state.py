"""
Shared engine instances for the API routers.

Reference data is loaded once per process and handed to both engines.
"""
from ..data.reference_data import get_reference_data
from ..engine import PricingEngine, DeliveryEstimator

reference = get_reference_data()
pricing_engine = PricingEngine(reference)
delivery_estimator = DeliveryEstimator(reference)
