# services/availability_service.py
"""
Availability Service - builds the enriched unit catalog.

Each call:
1. Reads the availability range and the process-log range from the
   spreadsheet, and the property / tower directories from the database.
   The four reads run concurrently and must all succeed.
2. Turns header + rows into column-name -> cell mappings.
3. Resolves each row's property (code or name), tower name, numeric
   fields and canonical unit id.

Nothing is stored; the catalog is rebuilt from both sources every time.
Malformed numbers and dates degrade to 0 / best-effort text instead of
failing the row.
"""
import re
from concurrent.futures import FIRST_EXCEPTION, ThreadPoolExecutor, wait
from datetime import datetime
from typing import Callable, Dict, Iterable, List, Optional, Protocol, Sequence, Tuple

from sqlalchemy import true
from sqlalchemy.exc import SQLAlchemyError

from database import get_session_context
from exceptions import NotFoundError, UpstreamReadError
from log_config import get_logger
from models import PropertyMeta, TowerMeta
from schemas.availability import AvailabilityCatalog, SyncLog, UnitRecord
from services.unit_id import derive_unit_id, loose_legacy_match, matches_canonical_or_legacy_exact
from utils.money import normalize_money

logger = get_logger(__name__)

# Short upper-case codes such as "AGP"; anything else is treated as a name
PROPERTY_CODE_PATTERN = re.compile(r"^[A-Z0-9]{2,5}$")
LOG_TIMESTAMP_FORMAT = "%d/%m/%Y %H:%M:%S"

# Spreadsheet column headers
COL_PROPERTY = "Property"
COL_BUILDING_UNIT = "Building Unit"
COL_TOWER = "Tower"
COL_FLOOR = "Floor"
COL_STATUS = "Status"
COL_TYPE = "Type"
COL_GROSS_AREA = "Gross Area(SQM)"
COL_AMENITIES = "Amenities"
COL_FACING = "Facing"
COL_RFO_DATE = "RFO Date"
COL_LIST_PRICE = "List Price"
COL_PER_SQM = "per SQM"


class SpreadsheetSource(Protocol):
     def get_values(self, range_name: str) -> List[List[str]]: ...


class ReferenceSource(Protocol):
     def load_properties(self) -> List: ...

     def load_towers(self) -> List: ...


class SqlReferenceSource:
     """Reads the property and tower directories, each in its own session."""

     def __init__(self, session_scope: Callable = get_session_context):
          self.session_scope = session_scope

     def load_properties(self) -> List[PropertyMeta]:
          try:
               with self.session_scope() as db:
                    return db.query(PropertyMeta).filter(PropertyMeta.active == true()).all()
          except SQLAlchemyError as exc:
               raise UpstreamReadError("Failed to read property_meta") from exc

     def load_towers(self) -> List[TowerMeta]:
          try:
               with self.session_scope() as db:
                    return db.query(TowerMeta).all()
          except SQLAlchemyError as exc:
               raise UpstreamReadError("Failed to read tower_meta") from exc


# ---------------------------------------------------------------------------
# Row helpers
# ---------------------------------------------------------------------------

def rows_to_records(values: Sequence[Sequence[str]]) -> List[Dict[str, str]]:
     """Key each data row by the header row; missing cells become ""."""
     if not values:
          return []
     header = [str(key).strip() for key in values[0]]
     records = []
     for row in values[1:]:
          records.append({
               key: (row[i] if i < len(row) and row[i] is not None else "")
               for i, key in enumerate(header)
          })
     return records


def _text(record: Dict[str, str], column: str) -> str:
     return str(record.get(column, "") or "").strip()


def parse_latest_log(values: Sequence[Sequence[str]]) -> Optional[SyncLog]:
     """
     Describe the last process-log row, e.g. "26/08/2025 12:52:09" ->
     date "August 26, 2025", time "12:52:09".

     Columns: timestamp, match type, file name. A header-only or empty log
     gives None; an unparseable timestamp keeps its raw date/time text.
     """
     if len(values) <= 1:
          return None

     last_row = values[-1]
     timestamp = str(last_row[0]).strip() if last_row else ""
     if not timestamp:
          return None
     source_file = str(last_row[2]).strip() if len(last_row) > 2 and last_row[2] else ""

     try:
          synced_at = datetime.strptime(timestamp, LOG_TIMESTAMP_FORMAT)
     except ValueError:
          logger.warning("Unparseable process-log timestamp %r", timestamp)
          date_part, _, time_part = timestamp.partition(" ")
          return SyncLog(date=date_part, time=time_part.strip(), source_file=source_file)

     return SyncLog(
          date=f"{synced_at:%B} {synced_at.day}, {synced_at.year}",
          time=synced_at.strftime("%H:%M:%S"),
          source_file=source_file,
     )


def resolve_property(
     raw_property: str,
     by_code: Dict[str, object],
     by_name: Dict[str, object],
) -> Tuple[str, str, str, str]:
     """
     Map the sheet's "Property" cell to (code, name, city, address).

     Code-shaped values are looked up by code, everything else by
     case-insensitive name. Unknown values are kept verbatim as both code
     and name, with blank city and address.
     """
     raw = (raw_property or "").strip()

     meta = None
     if PROPERTY_CODE_PATTERN.match(raw):
          meta = by_code.get(raw)
     if meta is None:
          meta = by_name.get(raw.lower())

     if meta is None:
          return raw, raw, "", ""
     return meta.code, meta.name or raw, meta.city or "", meta.address or ""


def build_unit_record(
     record: Dict[str, str],
     by_code: Dict[str, object],
     by_name: Dict[str, object],
     towers: Dict[Tuple[str, str], object],
     towers_by_code: Dict[str, object],
) -> UnitRecord:
     property_code, property_name, city, address = resolve_property(
          _text(record, COL_PROPERTY), by_code, by_name
     )
     tower_code = _text(record, COL_TOWER)
     tower = towers.get((property_code, tower_code)) or towers_by_code.get(tower_code)
     building_unit = _text(record, COL_BUILDING_UNIT)

     return UnitRecord(
          unit_id=derive_unit_id(property_code, tower_code, building_unit),
          property_code=property_code,
          tower_code=tower_code,
          building_unit=building_unit,
          property_name=property_name,
          city=city,
          address=address,
          tower_name=(tower.tower_name or "") if tower is not None else "",
          floor=_text(record, COL_FLOOR),
          unit_type=_text(record, COL_TYPE),
          status=_text(record, COL_STATUS),
          gross_area_sqm=max(0.0, normalize_money(record.get(COL_GROSS_AREA))),
          amenities=_text(record, COL_AMENITIES),
          facing=_text(record, COL_FACING),
          rfo_date=_text(record, COL_RFO_DATE),
          list_price=max(0.0, normalize_money(record.get(COL_LIST_PRICE))),
          price_per_sqm=max(0.0, normalize_money(record.get(COL_PER_SQM))),
     )


def enrich_units(
     records: Iterable[Dict[str, str]],
     properties: Iterable,
     towers: Iterable,
) -> List[UnitRecord]:
     """Attach reference data and canonical ids to raw sheet records."""
     properties = list(properties)
     by_code = {p.code: p for p in properties}
     by_name = {(p.name or "").strip().lower(): p for p in properties if p.name}

     towers = list(towers)
     tower_index = {(t.property_code, t.tower_code): t for t in towers}
     towers_by_code: Dict[str, object] = {}
     for tower in towers:
          towers_by_code.setdefault(tower.tower_code, tower)

     return [
          build_unit_record(record, by_code, by_name, tower_index, towers_by_code)
          for record in records
     ]


# ---------------------------------------------------------------------------
# Service
# ---------------------------------------------------------------------------

class AvailabilityService:
     """Aggregates the spreadsheet feed with the reference tables."""

     def __init__(
          self,
          sheets: SpreadsheetSource,
          references: ReferenceSource,
          availability_range: str = "Database!A1:L",
          log_range: str = "Process Log!A1:D",
          timeout: float = 10,
     ):
          self.sheets = sheets
          self.references = references
          self.availability_range = availability_range
          self.log_range = log_range
          self.timeout = timeout

     def _read_sources(self) -> Dict[str, object]:
          reads = {
               "availability": lambda: self.sheets.get_values(self.availability_range),
               "process_log": lambda: self.sheets.get_values(self.log_range),
               "property_meta": self.references.load_properties,
               "tower_meta": self.references.load_towers,
          }
          labels = {
               "availability": f"sheet range {self.availability_range!r}",
               "process_log": f"sheet range {self.log_range!r}",
               "property_meta": "table property_meta",
               "tower_meta": "table tower_meta",
          }
          pool = ThreadPoolExecutor(max_workers=len(reads), thread_name_prefix="availability-read")
          try:
               futures = {pool.submit(read): name for name, read in reads.items()}
               done, pending = wait(futures, timeout=self.timeout, return_when=FIRST_EXCEPTION)

               for future in done:
                    exc = future.exception()
                    if exc is not None:
                         label = labels[futures[future]]
                         logger.error("Upstream read failed: %s", label, exc_info=exc)
                         if isinstance(exc, UpstreamReadError):
                              raise exc
                         raise UpstreamReadError(f"Failed to read {label}") from exc

               if pending:
                    names = sorted(labels[futures[future]] for future in pending)
                    logger.error("Upstream read timed out after %ss: %s", self.timeout, ", ".join(names))
                    raise UpstreamReadError(f"Timed out reading {', '.join(names)}")

               return {futures[future]: future.result() for future in done}
          finally:
               pool.shutdown(wait=False, cancel_futures=True)

     def fetch_availability(self) -> AvailabilityCatalog:
          """
          Build the enriched catalog and last-sync info.

          Raises:
               UpstreamReadError: any source failed or timed out; no partial
               catalog is returned
          """
          results = self._read_sources()

          records = rows_to_records(results["availability"])
          units = enrich_units(records, results["property_meta"], results["tower_meta"])
          last_synced = parse_latest_log(results["process_log"])

          logger.info("Aggregated %d units (last sync: %s)", len(units), last_synced.date if last_synced else "n/a")
          return AvailabilityCatalog(units=units, last_synced=last_synced)

     def find_unit_by_label(self, label: str) -> UnitRecord:
          """Case-insensitive, trimmed match on the raw building-unit label."""
          wanted = (label or "").strip().lower()
          for unit in self.fetch_availability().units:
               if wanted and unit.building_unit.strip().lower() == wanted:
                    return unit
          raise NotFoundError("Unit not found")

     def find_unit_by_id(self, unit_id: str) -> UnitRecord:
          """
          Resolve a canonical or legacy id. Exact forms are tried across the
          whole catalog before the loose building-unit containment match.
          """
          units = self.fetch_availability().units
          for unit in units:
               if matches_canonical_or_legacy_exact(unit, unit_id):
                    return unit
          for unit in units:
               if loose_legacy_match(unit.building_unit, unit_id):
                    return unit
          raise NotFoundError("Unit not found")
