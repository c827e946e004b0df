# services/unit_id.py
"""
Canonical unit identifiers.

A unit id is derived from (property_code, tower_code, building_unit), e.g.
"AGP__AGP-00A__C-Amina_1204". It is never assigned independently, so the
same tuple always yields the same id. Older links used
"{property_code}-{building_unit}"; those are still accepted when looking a
unit up.
"""
import re
from typing import Any, Optional

ID_SEPARATOR = "__"

_WHITESPACE = re.compile(r"\s+")


def normalize_building_unit(building_unit: Optional[str]) -> str:
     """Trim and collapse internal whitespace runs to a single underscore."""
     return _WHITESPACE.sub("_", (building_unit or "").strip())


def derive_unit_id(
     property_code: Optional[str],
     tower_code: Optional[str],
     building_unit: Optional[str],
) -> str:
     """Join the non-empty, normalized components with a double underscore."""
     parts = [
          (property_code or "").strip(),
          (tower_code or "").strip(),
          normalize_building_unit(building_unit),
     ]
     return ID_SEPARATOR.join(part for part in parts if part)


def legacy_unit_id(property_code: Optional[str], building_unit: Optional[str]) -> str:
     """Pre-tower id form: "{property_code}-{normalized building unit}"."""
     return f"{(property_code or '').strip()}-{normalize_building_unit(building_unit)}"


def loose_legacy_match(building_unit: Optional[str], candidate: str) -> bool:
     """
     Case-insensitive containment of the normalized unit label in the candidate.

     Loose on purpose: "C-Amina_120" is contained in "AGP-C-Amina_1204".
     Callers should try exact forms across the whole catalog first.
     """
     norm = normalize_building_unit(building_unit)
     if not norm or not candidate:
          return False
     return norm.lower() in candidate.lower()


def _get(record: Any, key: str) -> str:
     if isinstance(record, dict):
          return record.get(key) or ""
     return getattr(record, key, "") or ""


def matches_canonical_or_legacy_exact(record: Any, candidate: str) -> bool:
     """True when candidate is the record's canonical id or its exact legacy id."""
     if not candidate:
          return False
     property_code = _get(record, "property_code")
     building_unit = _get(record, "building_unit")

     canonical = derive_unit_id(property_code, _get(record, "tower_code"), building_unit)
     if canonical and candidate == canonical:
          return True
     return candidate == legacy_unit_id(property_code, building_unit)


def matches_legacy_or_canonical(record: Any, candidate: str) -> bool:
     """
     Accept the canonical id, the legacy "{code}-{unit}" form, or, as a
     last resort, a loose containment match on the building unit.

     `record` is a UnitRecord or a mapping with property_code, tower_code
     and building_unit.
     """
     if matches_canonical_or_legacy_exact(record, candidate):
          return True
     return loose_legacy_match(_get(record, "building_unit"), candidate)
