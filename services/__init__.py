# services/__init__.py
from .unit_id import (
     derive_unit_id,
     legacy_unit_id,
     loose_legacy_match,
     matches_legacy_or_canonical,
)
from .pricing_service import amortize, compute_pricing, valid_until
from .rate_service import match_rate, select_best_rate
from .availability_service import AvailabilityService, SqlReferenceSource
from .catalog_service import filter_units, sort_units, summarize_inventory

__all__ = [
     "derive_unit_id",
     "legacy_unit_id",
     "loose_legacy_match",
     "matches_legacy_or_canonical",
     "amortize",
     "compute_pricing",
     "valid_until",
     "match_rate",
     "select_best_rate",
     "AvailabilityService",
     "SqlReferenceSource",
     "filter_units",
     "sort_units",
     "summarize_inventory",
]
