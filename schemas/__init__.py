# schemas/__init__.py
from .pricing import (
     PricingInputs,
     PricingResult,
     PricingRequest,
     PricingResponse,
)
from .availability import (
     UnitRecord,
     SyncLog,
     AvailabilityCatalog,
     SortOption,
     AvailabilityListResponse,
     UnitResponse,
     SummaryItem,
     SummaryGroup,
     SummaryResponse,
)
from .rate import RateRange, RateMatchResponse

__all__ = [
     "PricingInputs",
     "PricingResult",
     "PricingRequest",
     "PricingResponse",
     "UnitRecord",
     "SyncLog",
     "AvailabilityCatalog",
     "SortOption",
     "AvailabilityListResponse",
     "UnitResponse",
     "SummaryItem",
     "SummaryGroup",
     "SummaryResponse",
     "RateRange",
     "RateMatchResponse",
]
