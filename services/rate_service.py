# services/rate_service.py
"""
Financing-rate lookup.

Active rate records are keyed by (project_code, unit_type) and carry an
optional [area_min, area_max] range. When several ranges contain the
requested area the narrowest one wins; an open-ended range counts as
infinitely wide. Equal spans prefer fewer open bounds, then the lower
area_min, then the order the records were loaded (ascending id).
"""
import math
from typing import Iterable, List, Optional

from sqlalchemy import true
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from exceptions import InvalidInputError, UpstreamReadError
from log_config import get_logger
from models import RtoRate
from schemas.rate import RateMatchResponse, RateRange

logger = get_logger(__name__)

INVALID_QUERY_MESSAGE = "Missing or invalid query: project_code, unit_type, area (sqm) are required"


def _as_float(value) -> Optional[float]:
     return None if value is None else float(value)


def coerce_area(area) -> float:
     """Accept a finite number (or numeric string); anything else is invalid input."""
     if area is None or isinstance(area, bool):
          raise InvalidInputError(INVALID_QUERY_MESSAGE)
     if isinstance(area, str):
          area = area.strip()
          if not area:
               raise InvalidInputError(INVALID_QUERY_MESSAGE)
     try:
          value = float(area)
     except (TypeError, ValueError):
          raise InvalidInputError(INVALID_QUERY_MESSAGE)
     if not math.isfinite(value):
          raise InvalidInputError(INVALID_QUERY_MESSAGE)
     return value


def range_span(rate) -> float:
     """Width of the rate's area range; open-ended ranges are infinite."""
     area_min = _as_float(rate.area_min)
     area_max = _as_float(rate.area_max)
     if area_min is None or area_max is None:
          return math.inf
     return abs(area_max - area_min)


def covers_area(rate, area: float) -> bool:
     area_min = _as_float(rate.area_min)
     area_max = _as_float(rate.area_max)
     min_ok = area_min is None or area >= area_min
     max_ok = area_max is None or area <= area_max
     return min_ok and max_ok


def select_best_rate(rates: Iterable, area: float):
     """Return the narrowest rate record covering `area`, or None."""
     candidates: List = [rate for rate in rates if covers_area(rate, area)]
     if not candidates:
          return None

     def sort_key(rate):
          area_min = _as_float(rate.area_min)
          open_bounds = (rate.area_min is None) + (rate.area_max is None)
          return (range_span(rate), open_bounds, -math.inf if area_min is None else area_min)

     # sorted() is stable, so load order settles any remaining tie
     return sorted(candidates, key=sort_key)[0]


def load_active_rates(db: Session, project_code: str, unit_type: str) -> List[RtoRate]:
     try:
          return (
               db.query(RtoRate)
               .filter(
                    RtoRate.project_code == project_code,
                    RtoRate.unit_type == unit_type,
                    RtoRate.is_active == true(),
               )
               .order_by(RtoRate.id)
               .all()
          )
     except SQLAlchemyError as exc:
          logger.error(
               "Failed to read rto_rates for project_code=%s unit_type=%s",
               project_code, unit_type, exc_info=True,
          )
          raise UpstreamReadError("Failed to read rate table") from exc


def match_rate(db: Session, project_code: Optional[str], unit_type: Optional[str], area) -> RateMatchResponse:
     """
     Find the financing rate for a unit.

     Inputs are validated before the database is touched:
     project_code and unit_type are trimmed and upper-cased, area must be
     a finite number.

     Raises:
          InvalidInputError: missing or non-numeric input
          UpstreamReadError: the rate table could not be read
     """
     project_code = (project_code or "").strip().upper()
     unit_type = (unit_type or "").strip().upper()
     if not project_code or not unit_type:
          raise InvalidInputError(INVALID_QUERY_MESSAGE)
     area_value = coerce_area(area)

     rates = load_active_rates(db, project_code, unit_type)
     best = select_best_rate(rates, area_value)
     if best is None:
          logger.debug("No rate for %s/%s at %.2f sqm", project_code, unit_type, area_value)
          return RateMatchResponse(eligible=False)

     return RateMatchResponse(
          eligible=True,
          project_code=project_code,
          unit_type=unit_type,
          area=area_value,
          monthly_rate=_as_float(best.monthly_rate),
          memo_ref=best.memo_ref,
          match=RateRange(area_min=_as_float(best.area_min), area_max=_as_float(best.area_max)),
     )
