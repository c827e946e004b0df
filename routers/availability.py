# routers/availability.py
"""
Availability API routes.

- GET /api/availability: enriched unit catalog plus the latest sync log,
  with optional filtering, sorting and pagination
- GET /api/availability/summary: lowest price per property / tower / type
  (agents and managers)
- GET /api/availability/{unit_id}: one unit by its building-unit label
"""
from typing import List, Optional
from fastapi import APIRouter, Depends, Query

from dependencies import get_availability_service, pricing_inputs_from_query, require_staff
from schemas.availability import (
     AvailabilityListResponse,
     SortOption,
     SummaryResponse,
     UnitResponse,
)
from schemas.pricing import PricingInputs
from services.availability_service import AvailabilityService
from services.catalog_service import filter_units, paginate, sort_units, summarize_inventory

router = APIRouter(prefix="/api/availability", tags=["availability"])


@router.get(
     "",
     response_model=AvailabilityListResponse,
     summary="List available units"
)
def list_availability(
     search: Optional[str] = Query(None, description="Search property, unit or tower"),
     status: Optional[List[str]] = Query(None, description="Status values, e.g. 'Avail.'"),
     unit_type: Optional[List[str]] = Query(None, description="Unit types, e.g. '2BR'"),
     amenities: Optional[List[str]] = Query(None, description="Amenities, e.g. 'Front'"),
     facing: Optional[List[str]] = Query(None, description="Facing, e.g. 'North'"),
     property: Optional[List[str]] = Query(None, description="Property codes or names"),
     min_price: Optional[float] = Query(None, ge=0, description="Minimum list price"),
     max_price: Optional[float] = Query(None, ge=0, description="Maximum list price"),
     sort: Optional[SortOption] = Query(None, description="Sort order"),
     page: int = Query(1, ge=1, description="Page number"),
     page_size: Optional[int] = Query(None, ge=1, le=200, description="Items per page (all when omitted)"),
     service: AvailabilityService = Depends(get_availability_service),
):
     """
     Rebuild the catalog from the spreadsheet and reference tables.

     Without query parameters the full catalog is returned in sheet order.
     """
     catalog = service.fetch_availability()

     units = filter_units(
          catalog.units,
          search=search,
          statuses=status,
          unit_types=unit_type,
          amenities=amenities,
          facings=facing,
          properties=property,
          min_price=min_price,
          max_price=max_price,
     )
     if sort is not None:
          units = sort_units(units, sort)

     total = len(units)
     if page_size is not None:
          units = paginate(units, page, page_size)

     return AvailabilityListResponse(
          data=units,
          latest_log=catalog.last_synced,
          total=total,
          page=page if page_size is not None else None,
          page_size=page_size,
     )


@router.get(
     "/summary",
     response_model=SummaryResponse,
     summary="Lowest price per property, tower and type"
)
def availability_summary(
     inputs: PricingInputs = Depends(pricing_inputs_from_query),
     min_floor: int = Query(0, ge=0, description="Lowest floor to consider"),
     include_on_hold: bool = Query(False, description="Include on-hold units"),
     city: Optional[str] = Query(None),
     unit_type: Optional[str] = Query(None),
     amenities: Optional[str] = Query(None),
     search: Optional[str] = Query(None, description="Search property or tower"),
     min_sqm: Optional[float] = Query(None, ge=0),
     max_sqm: Optional[float] = Query(None, ge=0),
     service: AvailabilityService = Depends(get_availability_service),
     token: dict = Depends(require_staff),
):
     """
     Summarize the cheapest unit of each type per tower, with a sample
     payment plan priced using the pricing query parameters.
     """
     catalog = service.fetch_availability()
     groups = summarize_inventory(
          catalog.units,
          inputs=inputs,
          min_floor=min_floor,
          include_on_hold=include_on_hold,
          city=city,
          unit_type=unit_type,
          amenities=amenities,
          search=search,
          min_sqm=min_sqm,
          max_sqm=max_sqm,
     )
     return SummaryResponse(groups=groups, latest_log=catalog.last_synced)


@router.get(
     "/{unit_id}",
     response_model=UnitResponse,
     summary="Get a unit by building-unit label"
)
def get_unit(
     unit_id: str,
     service: AvailabilityService = Depends(get_availability_service),
):
     """Lookup is case-insensitive and ignores surrounding whitespace."""
     return UnitResponse(data=service.find_unit_by_label(unit_id))
