# services/catalog_service.py
"""
Catalog queries over an aggregated unit list: filtering, sorting,
pagination, and the lowest-price summary per property / tower / type.
"""
import math
import re
from datetime import datetime
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from schemas.availability import SortOption, SummaryGroup, SummaryItem, UnitRecord
from schemas.pricing import PricingInputs
from services.pricing_service import compute_pricing

TYPE_ORDER = ["STUDIO", "1BR", "2BR", "3BR", "4BR", "LOFT"]
HIGH_FLOOR_THRESHOLD = 12

_LAST_DIGITS = re.compile(r"(\d+)(?!.*\d)")
_RFO_FORMATS = (
     "%Y-%m-%d",
     "%m/%d/%Y",
     "%d/%m/%Y",
     "%B %d, %Y",
     "%b %d, %Y",
     "%B %Y",
     "%b %Y",
     "%Y",
)


def parse_floor_number(floor: Optional[str]) -> int:
     """
     Best-effort floor number: "12" -> 12, "AGP-00A-12" -> 12, "PH" -> 0.
     """
     text = (floor or "").strip()
     if not text:
          return 0
     try:
          number = float(text)
     except ValueError:
          match = _LAST_DIGITS.search(text)
          return int(match.group(1)) if match else 0
     return int(number) if math.isfinite(number) else 0


def floor_band(floor: Optional[str]) -> str:
     return "HIGH" if parse_floor_number(floor) > HIGH_FLOOR_THRESHOLD else "LOW"


def parse_rfo_date(value: Optional[str]) -> Optional[datetime]:
     """Lenient RFO date parsing; free text such as "RFO" gives None."""
     text = (value or "").strip()
     for fmt in _RFO_FORMATS:
          try:
               return datetime.strptime(text, fmt)
          except ValueError:
               continue
     return None


def _type_rank(unit_type: str) -> int:
     try:
          return TYPE_ORDER.index(unit_type.upper())
     except ValueError:
          return len(TYPE_ORDER)


def _contains(haystack: str, needle: str) -> bool:
     return needle in (haystack or "").lower()


def filter_units(
     units: Iterable[UnitRecord],
     search: Optional[str] = None,
     statuses: Optional[Sequence[str]] = None,
     unit_types: Optional[Sequence[str]] = None,
     amenities: Optional[Sequence[str]] = None,
     facings: Optional[Sequence[str]] = None,
     properties: Optional[Sequence[str]] = None,
     min_price: Optional[float] = None,
     max_price: Optional[float] = None,
) -> List[UnitRecord]:
     """
     Apply the inventory-table filters. Multi-valued filters match any of
     their values exactly; empty filters are ignored.
     """
     needle = (search or "").strip().lower()

     def matches(unit: UnitRecord) -> bool:
          if needle and not any(
               _contains(text, needle)
               for text in (
                    unit.property_name,
                    unit.property_code,
                    unit.building_unit,
                    unit.tower_code,
                    unit.tower_name,
               )
          ):
               return False
          if statuses and unit.status not in statuses:
               return False
          if unit_types and unit.unit_type not in unit_types:
               return False
          if amenities and unit.amenities not in amenities:
               return False
          if facings and unit.facing not in facings:
               return False
          if properties and unit.property_code not in properties and unit.property_name not in properties:
               return False
          if min_price is not None and unit.list_price < min_price:
               return False
          if max_price is not None and unit.list_price > max_price:
               return False
          return True

     return [unit for unit in units if matches(unit)]


def sort_units(units: Iterable[UnitRecord], sort: SortOption = SortOption.PRICE_ASC) -> List[UnitRecord]:
     """Sort a copy of the list; units without a readable RFO date go last."""
     units = list(units)
     if sort == SortOption.PRICE_ASC:
          return sorted(units, key=lambda u: u.list_price)
     if sort == SortOption.PRICE_DESC:
          return sorted(units, key=lambda u: u.list_price, reverse=True)
     if sort == SortOption.SQM_ASC:
          return sorted(units, key=lambda u: u.gross_area_sqm)
     if sort == SortOption.SQM_DESC:
          return sorted(units, key=lambda u: u.gross_area_sqm, reverse=True)

     dated = [(parse_rfo_date(u.rfo_date), u) for u in units]
     known = [pair for pair in dated if pair[0] is not None]
     unknown = [u for d, u in dated if d is None]
     known.sort(key=lambda pair: pair[0], reverse=sort == SortOption.RFO_DESC)
     return [u for _, u in known] + unknown


def paginate(units: Sequence[UnitRecord], page: int, page_size: int) -> List[UnitRecord]:
     offset = (page - 1) * page_size
     return list(units[offset:offset + page_size])


def _status_ok(status: str, include_on_hold: bool) -> bool:
     st = (status or "").lower()
     if st.startswith("avail"):
          return True
     return include_on_hold and "hold" in st


def summarize_inventory(
     units: Iterable[UnitRecord],
     inputs: Optional[PricingInputs] = None,
     min_floor: int = 0,
     include_on_hold: bool = False,
     city: Optional[str] = None,
     unit_type: Optional[str] = None,
     amenities: Optional[str] = None,
     search: Optional[str] = None,
     min_sqm: Optional[float] = None,
     max_sqm: Optional[float] = None,
) -> List[SummaryGroup]:
     """
     Lowest-priced unit per property -> tower -> type, grouped by property.

     Only available units (plus on-hold ones when asked) at or above
     `min_floor` are considered; units without a property code, tower code
     or type are skipped. Each item carries a sample computation for its
     unit priced with `inputs`.
     """
     inputs = inputs or PricingInputs()
     needle = (search or "").strip().lower()

     lowest: Dict[Tuple[str, str, str], UnitRecord] = {}
     for unit in units:
          if not _status_ok(unit.status, include_on_hold):
               continue
          if parse_floor_number(unit.floor) < min_floor:
               continue
          if needle and not any(
               _contains(text, needle) for text in (unit.property_name, unit.tower_name, unit.tower_code)
          ):
               continue
          if city and unit.city != city:
               continue
          if unit_type and unit.unit_type != unit_type:
               continue
          if amenities and unit.amenities != amenities:
               continue
          if min_sqm is not None and unit.gross_area_sqm < min_sqm:
               continue
          if max_sqm is not None and unit.gross_area_sqm > max_sqm:
               continue
          if not unit.property_code or not unit.tower_code or not unit.unit_type:
               continue

          key = (unit.property_code, unit.tower_code, unit.unit_type)
          current = lowest.get(key)
          if current is None or unit.list_price < current.list_price:
               lowest[key] = unit

     items = [
          SummaryItem(
               property_code=unit.property_code,
               property_name=unit.property_name,
               city=unit.city,
               address=unit.address,
               tower_code=unit.tower_code,
               tower_name=unit.tower_name,
               unit_type=unit.unit_type,
               floor_band=floor_band(unit.floor),
               min_price=unit.list_price,
               unit=unit,
               sample=compute_pricing(unit.list_price, inputs),
          )
          for unit in lowest.values()
     ]
     items.sort(key=lambda item: (
          item.property_name,
          item.tower_name or item.tower_code,
          _type_rank(item.unit_type),
     ))

     groups: Dict[str, SummaryGroup] = {}
     for item in items:
          group = groups.get(item.property_code)
          if group is None:
               group = SummaryGroup(
                    code=item.property_code,
                    name=item.property_name,
                    city=item.city,
                    address=item.address,
                    items=[],
               )
               groups[item.property_code] = group
          group.items.append(item)
     return list(groups.values())
