# routers/pricing.py
"""
Payment-plan calculator (agents and managers).

- POST /api/pricing: compute for an explicit list price
- POST /api/pricing/{unit_id}: compute for a catalog unit, found by
  canonical or legacy id
"""
from typing import Optional
from fastapi import APIRouter, Body, Depends

from dependencies import get_availability_service, require_staff
from schemas.availability import UnitRecord
from schemas.pricing import PricingInputs, PricingRequest, PricingResponse
from services.availability_service import AvailabilityService
from services.pricing_service import compute_pricing, valid_until

router = APIRouter(prefix="/api/pricing", tags=["pricing"])


class UnitPricingResponse(PricingResponse):
     """Pricing response including the priced unit."""
     unit: UnitRecord


@router.post("", response_model=PricingResponse, summary="Compute a payment plan")
def price_list_amount(
     body: PricingRequest,
     token: dict = Depends(require_staff),
):
     return PricingResponse(
          list_price=body.list_price,
          inputs=body.inputs,
          result=compute_pricing(body.list_price, body.inputs),
          valid_until=valid_until(),
     )


@router.post(
     "/{unit_id}",
     response_model=UnitPricingResponse,
     summary="Compute a payment plan for a unit"
)
def price_unit(
     unit_id: str,
     inputs: Optional[PricingInputs] = Body(None),
     service: AvailabilityService = Depends(get_availability_service),
     token: dict = Depends(require_staff),
):
     """
     The unit is looked up in a freshly aggregated catalog; the body is
     optional and defaults to the standard calculator inputs.
     """
     inputs = inputs or PricingInputs()
     unit = service.find_unit_by_id(unit_id)
     return UnitPricingResponse(
          unit=unit,
          list_price=unit.list_price,
          inputs=inputs,
          result=compute_pricing(unit.list_price, inputs),
          valid_until=valid_until(),
     )
