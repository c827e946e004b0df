# schemas/rate.py
"""
Pydantic schemas for the financing-rate lookup.
"""
from typing import Optional
from pydantic import BaseModel, Field, ConfigDict


class RateRange(BaseModel):
     """Area bounds of the matched rate record (None = open)."""
     area_min: Optional[float] = None
     area_max: Optional[float] = None


class RateMatchResponse(BaseModel):
     """Response for GET /api/rto-rate. Only `eligible` is set when nothing matches."""
     eligible: bool
     project_code: Optional[str] = None
     unit_type: Optional[str] = None
     area: Optional[float] = None
     monthly_rate: Optional[float] = None
     memo_ref: Optional[str] = None
     match: Optional[RateRange] = None

     model_config = ConfigDict(
          json_schema_extra={
               "example": {
                    "eligible": True,
                    "project_code": "AGP",
                    "unit_type": "2BR",
                    "area": 57,
                    "monthly_rate": 18500.0,
                    "memo_ref": "MEMO-2025-014",
                    "match": {"area_min": 50, "area_max": 60},
               }
          }
     )
