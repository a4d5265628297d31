"""
Quote API - FastAPI router for booking pricing and delivery estimates.
"""
import logging
from typing import Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, ConfigDict, Field

from ..engine import PackageInput, PricingRequest
from ..engine.delivery_estimator import get_available_drop_off_days, validate_scheduled_date
from ..exceptions import InvalidDestination
from .state import reference, pricing_engine, delivery_estimator

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["quotes"])


# Pydantic models for API
class PackageBody(BaseModel):
    """One package in a pricing request."""
    model_config = ConfigDict(populate_by_name=True)

    id: str
    weight: Optional[float] = None
    weight_unknown: bool = Field(False, alias="weightUnknown")
    length: Optional[float] = None
    width: Optional[float] = None
    height: Optional[float] = None
    declared_value: Optional[float] = Field(None, alias="declaredValue")


class BookingPricingBody(BaseModel):
    """Request model for pricing a booking."""
    model_config = ConfigDict(populate_by_name=True)

    destination: str
    service_type: str = Field("standard", alias="serviceType")
    packages: list[PackageBody] = Field(default_factory=list)


class DeliveryEstimateBody(BaseModel):
    """Request model for a delivery estimate."""
    model_config = ConfigDict(populate_by_name=True)

    service_type: str = Field(alias="serviceType")
    destination_id: str = Field(alias="destinationId")
    scheduled_date: str = Field(alias="scheduledDate")
    include_customs: bool = Field(True, alias="includeCustoms")


class ScheduleValidationBody(BaseModel):
    """Request model for checking a drop-off date."""
    model_config = ConfigDict(populate_by_name=True)

    scheduled_date: str = Field(alias="scheduledDate")
    destination_id: Optional[str] = Field(None, alias="destinationId")


# Endpoints

@router.get("/destinations")
async def list_destinations():
    """List shipping destinations."""
    return [d.to_dict() for d in reference.destination_list()]


@router.get("/services")
async def list_services():
    """List service tiers."""
    return [s.to_dict() for s in reference.service_list()]


@router.post("/pricing/booking")
async def price_booking(body: BookingPricingBody):
    """Price a booking's packages for a destination and service."""
    request = PricingRequest(
        destination_id=body.destination,
        service_type=body.service_type,
        packages=[PackageInput(**pkg.model_dump()) for pkg in body.packages],
    )
    try:
        result = pricing_engine.calculate(request)
    except InvalidDestination as e:
        logger.warning("Pricing rejected: %s", e)
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.exception("Pricing failed for destination %s", body.destination)
        raise HTTPException(status_code=500, detail=str(e))
    return result.to_dict()


@router.post("/delivery/estimate")
async def estimate_delivery(body: DeliveryEstimateBody):
    """Estimate the delivery window for a scheduled drop-off."""
    estimate = delivery_estimator.estimate(
        service_type=body.service_type,
        destination_id=body.destination_id,
        scheduled_date=body.scheduled_date,
        include_customs=body.include_customs,
    )
    if estimate is None:
        logger.info(
            "No estimate for service=%s destination=%s date=%s",
            body.service_type, body.destination_id, body.scheduled_date
        )
        raise HTTPException(status_code=422, detail="Insufficient data for delivery estimate")
    return estimate.to_dict()


@router.post("/delivery/validate-date")
async def validate_date(body: ScheduleValidationBody):
    """Check whether a drop-off date can be booked."""
    return validate_scheduled_date(body.scheduled_date, body.destination_id).to_dict()


@router.get("/delivery/drop-off-days")
async def drop_off_days():
    """Business days open for drop-off over the next two weeks."""
    return [day.isoformat() for day in get_available_drop_off_days()]
