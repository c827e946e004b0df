# dependencies.py
"""
Shared FastAPI dependencies: settings-backed service wiring and the
staff access guard.
"""
from functools import lru_cache

from fastapi import Depends, HTTPException, Query, Request
from jose import JWTError, jwt

from config import Settings, get_settings
from log_config import get_logger
from schemas.pricing import PricingInputs
from services.availability_service import AvailabilityService, SqlReferenceSource
from utils.google_sheets import GoogleSheetsClient

logger = get_logger(__name__)

STAFF_ROLES = ("AGENT", "MANAGER")


# Token Auth Dependency
def verify_token(request: Request, settings: Settings = Depends(get_settings)) -> dict:
     auth = request.headers.get("Authorization")
     if not auth or not auth.startswith("Bearer "):
          raise HTTPException(status_code=401, detail="Missing token")
     token = auth.split(" ")[1]
     if not settings.jwt_secret:
          # Unsigned or empty-key tokens must never verify
          logger.error("JWT_SECRET is not configured; rejecting token")
          raise HTTPException(status_code=403, detail="Invalid token")
     try:
          payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
          return payload
     except JWTError:
          raise HTTPException(status_code=403, detail="Invalid token")


def require_staff(token: dict = Depends(verify_token)) -> dict:
     """Only agents and managers may use the staff tools."""
     role = str(token.get("role") or "").upper()
     if role not in STAFF_ROLES:
          raise HTTPException(status_code=403, detail="Forbidden")
     return token


@lru_cache
def _sheets_client(settings: Settings) -> GoogleSheetsClient:
     # One client per settings object so the access token is reused
     return GoogleSheetsClient(
          spreadsheet_id=settings.sheets.spreadsheet_id,
          service_account_email=settings.sheets.service_account_email,
          private_key=settings.sheets.private_key,
          timeout=settings.upstream_timeout_seconds,
     )


def get_availability_service(settings: Settings = Depends(get_settings)) -> AvailabilityService:
     return AvailabilityService(
          sheets=_sheets_client(settings),
          references=SqlReferenceSource(),
          availability_range=settings.availability_range,
          log_range=settings.log_range,
          timeout=settings.upstream_timeout_seconds,
     )


def pricing_inputs_from_query(
     discount_pct: float = Query(0, description="Special discount %"),
     down_payment_pct: float = Query(20, description="Down payment %"),
     months_to_pay: int = Query(36, ge=1, description="Months to pay the down payment"),
     reservation_fee: float = Query(20000, ge=0, description="Reservation fee"),
     closing_fee_pct: float = Query(10.5, description="Closing fee %"),
     rate_15yr: float = Query(6, description="Annual rate, 15-year term"),
     rate_20yr: float = Query(6, description="Annual rate, 20-year term"),
) -> PricingInputs:
     return PricingInputs(
          discount_pct=discount_pct,
          down_payment_pct=down_payment_pct,
          months_to_pay=months_to_pay,
          reservation_fee=reservation_fee,
          closing_fee_pct=closing_fee_pct,
          rate_15yr=rate_15yr,
          rate_20yr=rate_20yr,
     )
