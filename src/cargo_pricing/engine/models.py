"""
Data models for the pricing engine and delivery estimator.

Uses dataclasses for structured, type-safe data representation.
Reference records are frozen; results are built once per request and
handed to the caller.
"""
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Optional


@dataclass(frozen=True)
class Destination:
    """A shipping destination from the reference table."""
    id: str
    name: str
    base_rate: float  # currency per billable lb
    transit_min: int  # business days
    transit_max: int
    city: str = ""
    airport_code: str = ""

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "city": self.city,
            "airportCode": self.airport_code,
            "baseRate": self.base_rate,
            "transitDays": {"min": self.transit_min, "max": self.transit_max},
        }


@dataclass(frozen=True)
class Service:
    """A service tier from the reference table."""
    id: str
    name: str
    delivery_days: int
    description: str = ""
    rate_multiplier: float = 1.0
    additional_fee: float = 0.0  # door-to-door pickup fee, never priced by the engine

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "rateMultiplier": self.rate_multiplier,
            "additionalFee": self.additional_fee,
            "deliveryDays": self.delivery_days,
        }


@dataclass
class TraceStep:
    """A single step in the pricing resolution trace."""
    step: str
    description: str
    value: Optional[str] = None


@dataclass
class PackageInput:
    """One physical parcel in a booking, as supplied by the caller."""
    id: str
    weight: Optional[float] = None
    weight_unknown: bool = False
    length: Optional[float] = None
    width: Optional[float] = None
    height: Optional[float] = None
    declared_value: Optional[float] = None

    @classmethod
    def from_dict(cls, data: dict) -> 'PackageInput':
        """Create from a JSON-style dict (camelCase or snake_case keys)."""
        def pick(*keys: str) -> Any:
            for key in keys:
                if key in data:
                    return data[key]
            return None

        return cls(
            id=str(pick('id') or ''),
            weight=pick('weight'),
            weight_unknown=bool(pick('weightUnknown', 'weight_unknown')),
            length=pick('length'),
            width=pick('width'),
            height=pick('height'),
            declared_value=pick('declaredValue', 'declared_value'),
        )


@dataclass
class PackageQuote:
    """Priced result for a single package."""
    id: str
    weight: float
    dim_weight: float
    billable_weight: float
    cost: float

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "weight": self.weight,
            "dimWeight": self.dim_weight,
            "billableWeight": self.billable_weight,
            "cost": self.cost,
        }


@dataclass
class PricingRequest:
    """A booking pricing request."""
    destination_id: str
    service_type: str
    packages: list[PackageInput] = field(default_factory=list)


@dataclass
class BookingPricingResult:
    """Complete result of a booking pricing calculation."""
    packages: list[PackageQuote]
    subtotal: float
    multi_package_discount: float
    insurance_cost: float
    express_surcharge: float
    total_cost: float
    transit_days: str
    total_weight: float
    trace: list[TraceStep] = field(default_factory=list)

    def add_trace(self, step: str, description: str, value: str = None):
        """Add a step to the result-level trace."""
        self.trace.append(TraceStep(step=step, description=description, value=value))

    def get_trace_text(self) -> str:
        """Get human-readable trace as formatted text."""
        lines = []
        for t in self.trace:
            if t.value:
                lines.append(f"• {t.step}: {t.description} = {t.value}")
            else:
                lines.append(f"• {t.step}: {t.description}")
        return "\n".join(lines)

    def to_dict(self, include_trace: bool = False) -> dict:
        """Convert to the JSON shape returned by the API."""
        data = {
            "packages": [pkg.to_dict() for pkg in self.packages],
            "subtotal": self.subtotal,
            "multiPackageDiscount": self.multi_package_discount,
            "insuranceCost": self.insurance_cost,
            "expressSurcharge": self.express_surcharge,
            "totalCost": self.total_cost,
            "transitDays": self.transit_days,
            "totalWeight": self.total_weight,
        }
        if include_trace:
            data["trace"] = [
                {"step": t.step, "description": t.description, "value": t.value}
                for t in self.trace
            ]
        return data


@dataclass(frozen=True)
class DayRange:
    """Inclusive min/max pair of business-day counts."""
    min: int
    max: int


@dataclass(frozen=True)
class DateRange:
    """Earliest and latest calendar delivery dates."""
    min: date
    max: date


@dataclass
class DeliveryEstimate:
    """Estimated delivery window for a scheduled drop-off."""
    estimated_delivery: DateRange
    transit_days: DayRange
    business_days: DayRange
    formatted_range: str
    service_name: str
    destination_name: str
    confidence: str  # "high" | "medium" | "low"

    def to_dict(self) -> dict:
        return {
            "estimatedDelivery": {
                "min": self.estimated_delivery.min.isoformat(),
                "max": self.estimated_delivery.max.isoformat(),
            },
            "transitDays": {"min": self.transit_days.min, "max": self.transit_days.max},
            "businessDays": {"min": self.business_days.min, "max": self.business_days.max},
            "formattedRange": self.formatted_range,
            "serviceName": self.service_name,
            "destinationName": self.destination_name,
            "confidence": self.confidence,
        }


@dataclass
class ScheduleValidation:
    """Outcome of checking a requested drop-off date."""
    is_valid: bool
    reason: Optional[str] = None
    earliest_date: Optional[date] = None

    def to_dict(self) -> dict:
        return {
            "isValid": self.is_valid,
            "reason": self.reason,
            "earliestDate": self.earliest_date.isoformat() if self.earliest_date else None,
        }
