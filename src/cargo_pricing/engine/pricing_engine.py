"""
Pricing Engine - booking price resolution with traceability.

Turns a destination, a service tier and a list of packages into an
itemized quote:
- Per-package actual, dimensional and billable weight
- Multi-package discount by package count
- Declared-value insurance with a minimum charge
- Express surcharge over the subtotal

Malformed package values are clamped to zero instead of rejected; the only
failure is an unknown destination.
"""
import math
from typing import Optional

from ..data import reference_data
from ..exceptions import InvalidDestination
from .models import BookingPricingResult, PackageInput, PackageQuote, PricingRequest


DIM_WEIGHT_DIVISOR = 166       # Cubic inches per pound (air freight standard)
UNKNOWN_WEIGHT_LBS = 5         # Substituted when the customer cannot weigh a package

# (minimum package count, discount rate), highest first
MULTI_PACKAGE_DISCOUNTS = [(5, 0.10), (2, 0.05)]

INSURANCE_RATE = 0.03
INSURANCE_MINIMUM = 5.0
EXPRESS_SURCHARGE_RATE = 0.25


def round_half_up(value: float, digits: int) -> float:
    """Round half away from zero for the non-negative amounts used here.

    Overflowed amounts (inf) clamp to 0. Finite values too large to scale are
    already whole numbers and come back unchanged.
    """
    if not math.isfinite(value):
        return 0.0
    factor = 10 ** digits
    scaled = value * factor + 0.5
    if not math.isfinite(scaled):
        return value
    return math.floor(scaled) / factor


def round_to_1(value: float) -> float:
    return round_half_up(value, 1)


def round_to_2(value: float) -> float:
    return round_half_up(value, 2)


def normalize_service_type(service_type: str) -> str:
    """Map the caller-facing 'door-to-door' to the internal 'door_to_door' tag."""
    return 'door_to_door' if service_type == 'door-to-door' else service_type


def to_number(value) -> float:
    """Coerce a caller value to float; None, booleans, NaN, infinities and junk become 0."""
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(number):
        return 0.0
    return number


def multi_package_discount_rate(package_count: int) -> float:
    """Discount rate for the number of packages in a booking."""
    for threshold, rate in MULTI_PACKAGE_DISCOUNTS:
        if package_count >= threshold:
            return rate
    return 0.0


def resolve_weight(package: PackageInput) -> float:
    """Actual weight in lbs: fallback when unknown, else clamped at zero."""
    if package.weight_unknown:
        return float(UNKNOWN_WEIGHT_LBS)
    return max(0.0, to_number(package.weight))


def dimensional_weight(package: PackageInput) -> float:
    """Volume / divisor when all three dimensions are positive, else 0."""
    length = to_number(package.length)
    width = to_number(package.width)
    height = to_number(package.height)
    if length > 0 and width > 0 and height > 0:
        return (length * width * height) / DIM_WEIGHT_DIVISOR
    return 0.0


def calculate_insurance(packages: list[PackageInput]) -> float:
    """Insurance on total declared value; no charge when nothing is declared."""
    total_declared = sum(max(0.0, to_number(pkg.declared_value)) for pkg in packages)
    if total_declared > 0:
        return round_to_2(max(total_declared * INSURANCE_RATE, INSURANCE_MINIMUM))
    return 0.0


class PricingEngine:
    """
    Core pricing engine that resolves a booking quote.

    Resolution order:
    1. Resolve destination (base rate, transit range)
    2. For each package: actual weight → dimensional weight → billable weight → cost
    3. Subtotal of rounded package costs
    4. Multi-package discount, insurance, express surcharge
    5. Grand total
    """

    def __init__(self, reference: Optional['reference_data.ReferenceData'] = None):
        self.reference = reference or reference_data.get_reference_data()

    def calculate(self, request: PricingRequest) -> BookingPricingResult:
        """
        Calculate a booking quote with a resolution trace.

        Args:
            request: PricingRequest with destination, service and packages

        Returns:
            BookingPricingResult

        Raises:
            InvalidDestination: destination id is not in the reference data
        """
        destination = self.reference.get_destination(request.destination_id)
        if destination is None:
            raise InvalidDestination(request.destination_id)

        service_type = normalize_service_type(request.service_type)
        packages = list(request.packages)

        quotes = [self._quote_package(pkg, destination.base_rate) for pkg in packages]
        subtotal = round_to_2(sum(q.cost for q in quotes))

        discount_rate = multi_package_discount_rate(len(quotes))
        multi_package_discount = round_to_2(subtotal * discount_rate)

        insurance_cost = calculate_insurance(packages)

        express_surcharge = 0.0
        if service_type == 'express':
            express_surcharge = round_to_2(subtotal * EXPRESS_SURCHARGE_RATE)

        total_cost = round_to_2(subtotal - multi_package_discount + insurance_cost + express_surcharge)

        result = BookingPricingResult(
            packages=quotes,
            subtotal=subtotal,
            multi_package_discount=multi_package_discount,
            insurance_cost=insurance_cost,
            express_surcharge=express_surcharge,
            total_cost=total_cost,
            transit_days=f"{destination.transit_min}-{destination.transit_max} business days",
            total_weight=round_to_2(sum(q.weight for q in quotes)),
        )

        result.add_trace("Destination", f"{destination.name} base rate", f"${destination.base_rate:.2f}/lb")
        result.add_trace("Service", "Normalized service type", service_type)
        for q in quotes:
            result.add_trace(
                "Package",
                f"{q.id}: billable {q.billable_weight} lb (actual {q.weight}, dim {q.dim_weight})",
                f"${q.cost:.2f}"
            )
        result.add_trace("Subtotal", f"{len(quotes)} package(s)", f"${subtotal:.2f}")
        if multi_package_discount:
            result.add_trace("Discount", f"Multi-package {discount_rate:.0%}", f"-${multi_package_discount:.2f}")
        if insurance_cost:
            result.add_trace("Insurance", "Declared value coverage", f"${insurance_cost:.2f}")
        if express_surcharge:
            result.add_trace("Surcharge", f"Express {EXPRESS_SURCHARGE_RATE:.0%}", f"${express_surcharge:.2f}")
        result.add_trace("Total", "Booking total", f"${total_cost:.2f}")

        return result

    def _quote_package(self, package: PackageInput, base_rate: float) -> PackageQuote:
        """Price a single package."""
        weight = resolve_weight(package)
        dim_weight = dimensional_weight(package)
        billable_weight = max(weight, dim_weight)
        cost = billable_weight * base_rate

        return PackageQuote(
            id=package.id,
            weight=round_to_1(weight),
            dim_weight=round_to_1(dim_weight),
            billable_weight=round_to_1(billable_weight),
            cost=round_to_2(cost),
        )


def calculate_booking_pricing(
    destination_id: str,
    service_type: str,
    packages: list,
    reference: Optional['reference_data.ReferenceData'] = None
) -> BookingPricingResult:
    """
    Price a booking.

    Packages may be PackageInput instances or JSON-style dicts.
    Raises InvalidDestination for an unknown destination.
    """
    inputs = [
        pkg if isinstance(pkg, PackageInput) else PackageInput.from_dict(pkg)
        for pkg in packages
    ]
    engine = PricingEngine(reference)
    return engine.calculate(PricingRequest(
        destination_id=destination_id,
        service_type=service_type,
        packages=inputs,
    ))
