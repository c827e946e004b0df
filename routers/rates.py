# routers/rates.py
"""
Financing-rate lookup.

GET /api/rto-rate?project_code=AGP&unit_type=2BR&area=57
"""
from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from database import get_session
from schemas.rate import RateMatchResponse
from services.rate_service import match_rate

router = APIRouter(prefix="/api/rto-rate", tags=["rates"])


@router.get(
     "",
     response_model=RateMatchResponse,
     response_model_exclude_none=True,
     summary="Find the financing rate for a unit"
)
def get_rto_rate(
     project_code: Optional[str] = Query(None, description="Project code, e.g. AGP"),
     unit_type: Optional[str] = Query(None, description="Unit type, e.g. 2BR"),
     area: Optional[str] = Query(None, description="Gross area in sqm"),
     db: Session = Depends(get_session),
):
     """
     Returns the narrowest active rate range covering `area`, or
     `{"eligible": false}` when none does. Missing or non-numeric
     parameters are rejected with 400 before the database is queried.
     """
     return match_rate(db, project_code, unit_type, area)
