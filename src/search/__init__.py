"""
Itinerary Search Module

Answers itinerary queries over the timetabled network:

- Direct itineraries on a single train, loop routes included
- One-change itineraries through any served intermediate station
- Fallback "available" results when trains touch both stations out of order
- Linear distance pricing and midnight-wrapping durations
- Ranking by price or duration

Key Components:
- store.py: Read-only schedule queries (ScheduleStore)
- service.py: Finders, ranker and the SearchService glue
- fare_service.py: Per-kilometre fare calculation
- timetable.py: Time-of-day arithmetic
- router.py: FastAPI endpoints
- schemas.py: Pydantic models for legs and itinerary variants
"""

from .router import router
from .service import (
    SearchService, DistanceAggregator, DirectFinder, TransferFinder, FallbackFinder,
    ItineraryRanker
)
from .store import ScheduleStore
from .fare_service import FareCalculator
from .schemas import (
    Leg, LegCandidate, StationRef, Itinerary, DirectItinerary, TransferItinerary,
    AvailableItinerary
)

__all__ = [
    "router",
    "SearchService",
    "DistanceAggregator",
    "DirectFinder",
    "TransferFinder",
    "FallbackFinder",
    "ItineraryRanker",
    "ScheduleStore",
    "FareCalculator",
    "Leg",
    "LegCandidate",
    "StationRef",
    "Itinerary",
    "DirectItinerary",
    "TransferItinerary",
    "AvailableItinerary"
]
