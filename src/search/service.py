import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Dict, List, Optional, Sequence, Tuple
from sqlalchemy.orm import Session
from src.config import settings
from src.exceptions import InvalidArgumentError, StationNotFoundError
from src.search.fare_service import FareCalculator
from src.search.schemas import (
    AvailableItinerary, DirectItinerary, Itinerary, Leg, LegCandidate, StationRef,
    TransferItinerary
)
from src.search.store import ScheduleStore
from src.search.timetable import duration_minutes, format_time, time_to_minutes

logger = logging.getLogger(__name__)

PLACEHOLDER_TIME = "Check Schedule"
AVAILABLE_NOTE = "Trains available on this route - check detailed schedule"

# A priced leg together with the schedule row it came from
TimedLeg = Tuple[LegCandidate, Leg]


class DistanceAggregator:
    """Sums segment distances along one train, memoized for one search"""

    def __init__(self, store: ScheduleStore):
        self.store = store
        self._cache: Dict[Tuple[int, int, int], int] = {}

    def distance(self, train_id: int, from_index: int, to_index: int) -> int:
        if to_index <= from_index:
            return 0
        key = (train_id, from_index, to_index)
        if key not in self._cache:
            self._cache[key] = max(0, self.store.sum_distance(train_id, from_index, to_index))
        return self._cache[key]


class DirectFinder:
    """Single-train itineraries between two stations"""

    def __init__(self, store: ScheduleStore, distances: DistanceAggregator, fares: FareCalculator):
        self.store = store
        self.distances = distances
        self.fares = fares

    def find_legs(self, origin: StationRef, destination: StationRef) -> List[TimedLeg]:
        """Every forward (from_index, to_index) pairing, loop routes included"""
        legs = []
        for candidate in self.store.find_leg_candidates(origin.id, destination.id):
            distance = self.distances.distance(
                candidate.train_id, candidate.from_index, candidate.to_index
            )
            leg = Leg(
                train_id=candidate.train_id,
                train_name=candidate.train_name,
                from_station=origin.name,
                to_station=destination.name,
                depart_time=format_time(candidate.depart_time),
                arrive_time=format_time(candidate.arrive_time),
                distance_km=distance,
                price=self.fares.price_for_distance(distance),
                duration_min=duration_minutes(candidate.depart_time, candidate.arrive_time)
            )
            legs.append((candidate, leg))
        return legs

    def find(self, origin: StationRef, destination: StationRef) -> List[DirectItinerary]:
        return [
            DirectItinerary(
                legs=[leg],
                total_distance_km=leg.distance_km,
                total_price=leg.price,
                total_duration_min=leg.duration_min
            )
            for _, leg in self.find_legs(origin, destination)
        ]


class TransferFinder:
    """One-change itineraries through an intermediate station.

    Legs into and out of each intermediate station are loaded and priced on
    the calling thread. Pairing them may then run on a worker pool; results
    are accumulated under a lock, in no particular order.

    The connection rule compares times of day only: the second leg must
    depart strictly later than the first arrives on the same day. Overnight
    connections are never produced.
    """

    def __init__(
        self,
        store: ScheduleStore,
        legs: DirectFinder,
        fares: FareCalculator,
        max_stations: Optional[int] = None,
        max_workers: Optional[int] = None
    ):
        self.store = store
        self.legs = legs
        self.fares = fares
        self.max_stations = settings.MAX_TRANSFER_STATIONS if max_stations is None else max_stations
        self.max_workers = settings.SEARCH_WORKERS if max_workers is None else max_workers

    def find(self, origin: StationRef, destination: StationRef) -> List[TransferItinerary]:
        intermediates = [
            station for station in self.store.list_served_stations()
            if station.id not in (origin.id, destination.id)
        ]
        if len(intermediates) > self.max_stations:
            logger.warning(
                "Transfer search %s -> %s limited to %d of %d intermediate stations",
                origin.name, destination.name, self.max_stations, len(intermediates)
            )
            intermediates = intermediates[:self.max_stations]

        work = []
        for middle in intermediates:
            first_legs = self.legs.find_legs(origin, middle)
            if not first_legs:
                continue
            second_legs = self.legs.find_legs(middle, destination)
            if not second_legs:
                continue
            work.append((middle, first_legs, second_legs))

        results: List[TransferItinerary] = []
        lock = threading.Lock()

        def evaluate(middle: StationRef, first_legs: List[TimedLeg], second_legs: List[TimedLeg]):
            found = self._pair_legs(middle, first_legs, second_legs)
            with lock:
                results.extend(found)

        if self.max_workers > 1 and len(work) > 1:
            with ThreadPoolExecutor(max_workers=self.max_workers) as pool:
                futures = [pool.submit(evaluate, *item) for item in work]
                for future in futures:
                    future.result()
        else:
            for item in work:
                evaluate(*item)

        return results

    def _pair_legs(
        self,
        middle: StationRef,
        first_legs: List[TimedLeg],
        second_legs: List[TimedLeg]
    ) -> List[TransferItinerary]:
        itineraries = []
        for first_candidate, first_leg in first_legs:
            arrive_minutes = time_to_minutes(first_candidate.arrive_time)
            for second_candidate, second_leg in second_legs:
                if time_to_minutes(second_candidate.depart_time) <= arrive_minutes:
                    continue

                total_distance = first_leg.distance_km + second_leg.distance_km
                itineraries.append(TransferItinerary(
                    legs=[first_leg, second_leg],
                    transfer_station=middle.name,
                    total_distance_km=total_distance,
                    total_price=self.fares.price_for_distance(total_distance),
                    total_duration_min=duration_minutes(
                        first_candidate.depart_time, second_candidate.arrive_time
                    )
                ))
        return itineraries


class FallbackFinder:
    """Trains touching both stations when no ordered itinerary exists"""

    def __init__(self, store: ScheduleStore):
        self.store = store

    def find(self, origin: StationRef, destination: StationRef) -> List[AvailableItinerary]:
        itineraries = []
        for train in self.store.find_trains_serving_both(origin.id, destination.id):
            placeholder = Leg(
                train_id=train.id,
                train_name=train.name,
                from_station=origin.name,
                to_station=destination.name,
                depart_time=PLACEHOLDER_TIME,
                arrive_time=PLACEHOLDER_TIME,
                distance_km=0,
                price=0,
                duration_min=0
            )
            itineraries.append(AvailableItinerary(
                legs=[placeholder],
                total_distance_km=0,
                total_price=0,
                total_duration_min=0,
                note=AVAILABLE_NOTE
            ))
        return itineraries


class ItineraryRanker:
    """Stable ascending sort by duration when asked, by price otherwise"""

    @staticmethod
    def rank(itineraries: Sequence[Itinerary], sort_by: str = "price") -> List[Itinerary]:
        if sort_by == "duration":
            return sorted(itineraries, key=lambda i: i.total_duration_min)
        return sorted(itineraries, key=lambda i: i.total_price)


class SearchService:
    """High-level itinerary search"""

    def __init__(
        self,
        db: Session,
        fares: Optional[FareCalculator] = None,
        max_transfer_stations: Optional[int] = None,
        workers: Optional[int] = None
    ):
        self.store = ScheduleStore(db)
        self.fares = fares or FareCalculator()
        self.max_transfer_stations = max_transfer_stations
        self.workers = workers

    def search(self, from_ref: Optional[str], to_ref: Optional[str], sort_by: str = "price") -> List[Itinerary]:
        """Find direct, one-change and fallback itineraries, ranked by sort_by"""
        if not from_ref or not from_ref.strip() or not to_ref or not to_ref.strip():
            raise InvalidArgumentError("from and to are required")

        origin = self.store.resolve_station(from_ref)
        if not origin:
            raise StationNotFoundError(from_ref)
        destination = self.store.resolve_station(to_ref)
        if not destination:
            raise StationNotFoundError(to_ref)

        # Distances are memoized per search
        distances = DistanceAggregator(self.store)
        direct_finder = DirectFinder(self.store, distances, self.fares)
        transfer_finder = TransferFinder(
            self.store,
            direct_finder,
            self.fares,
            max_stations=self.max_transfer_stations,
            max_workers=self.workers
        )

        results: List[Itinerary] = []
        results.extend(direct_finder.find(origin, destination))
        results.extend(transfer_finder.find(origin, destination))

        if not results:
            results.extend(FallbackFinder(self.store).find(origin, destination))

        logger.info(
            "Search %s -> %s found %d itineraries (sort by %s)",
            origin.name, destination.name, len(results), sort_by
        )
        return ItineraryRanker.rank(results, sort_by)
