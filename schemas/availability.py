# schemas/availability.py
"""
Pydantic schemas for the availability catalog.
"""
from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, Field, ConfigDict

from schemas.pricing import PricingResult


class UnitRecord(BaseModel):
     """One enriched inventory unit, rebuilt on every aggregation."""
     unit_id: str = Field(..., description="Canonical id derived from property, tower and unit label")
     property_code: str
     tower_code: str = ""
     building_unit: str = Field(..., description="Raw building-unit label, e.g. 'C-Amina 1204'")

     property_name: str = ""
     city: str = ""
     address: str = ""
     tower_name: str = ""
     floor: str = ""
     unit_type: str = ""
     status: str = ""
     gross_area_sqm: float = Field(0, ge=0)
     amenities: str = ""
     facing: str = ""
     rfo_date: str = ""

     list_price: float = Field(0, ge=0, description="List price in PHP")
     price_per_sqm: float = Field(0, ge=0)

     model_config = ConfigDict(
          frozen=True,
          json_schema_extra={
               "example": {
                    "unit_id": "AGP__AGP-00A__C-Amina_1204",
                    "property_code": "AGP",
                    "tower_code": "AGP-00A",
                    "building_unit": "C-Amina 1204",
                    "property_name": "Amina Grand Park",
                    "city": "Taguig",
                    "address": "C5 Road",
                    "tower_name": "Amina Tower",
                    "floor": "12",
                    "unit_type": "2BR",
                    "status": "Avail.",
                    "gross_area_sqm": 57.5,
                    "amenities": "Front",
                    "facing": "North",
                    "rfo_date": "Dec 2026",
                    "list_price": 3000000.0,
                    "price_per_sqm": 52173.91,
               }
          },
     )


class SyncLog(BaseModel):
     """Most recent spreadsheet sync entry."""
     date: str = Field(..., description="Human-readable date, e.g. 'August 26, 2025'")
     time: str = ""
     source_file: str = ""


class AvailabilityCatalog(BaseModel):
     """Result of one aggregation pass."""
     units: List[UnitRecord]
     last_synced: Optional[SyncLog] = None


class SortOption(str, Enum):
     """Catalog sort orders."""
     PRICE_ASC = "priceAsc"
     PRICE_DESC = "priceDesc"
     SQM_ASC = "sqmAsc"
     SQM_DESC = "sqmDesc"
     RFO_ASC = "rfoAsc"
     RFO_DESC = "rfoDesc"


class AvailabilityListResponse(BaseModel):
     """Response for GET /api/availability."""
     success: bool = True
     data: List[UnitRecord]
     latest_log: Optional[SyncLog] = Field(None, alias="latestLog")
     total: int = 0
     page: Optional[int] = None
     page_size: Optional[int] = None

     model_config = ConfigDict(populate_by_name=True)


class UnitResponse(BaseModel):
     """Response for a single unit lookup."""
     success: bool = True
     data: UnitRecord


class SummaryItem(BaseModel):
     """Lowest-priced unit for one property / tower / type combination."""
     property_code: str
     property_name: str
     city: str = ""
     address: str = ""
     tower_code: str
     tower_name: str = ""
     unit_type: str
     floor_band: str
     min_price: float
     unit: UnitRecord
     sample: PricingResult


class SummaryGroup(BaseModel):
     """Summary items of one property."""
     code: str
     name: str
     city: str = ""
     address: str = ""
     items: List[SummaryItem]


class SummaryResponse(BaseModel):
     """Response for GET /api/availability/summary."""
     success: bool = True
     groups: List[SummaryGroup]
     latest_log: Optional[SyncLog] = Field(None, alias="latestLog")

     model_config = ConfigDict(populate_by_name=True)
