from typing import List, Optional
from sqlalchemy import func
from sqlalchemy.orm import Session, aliased
from src.models import Station, Train, TrainStop
from src.search.schemas import LegCandidate, StationRef
from src.stations.service import StationService

# Largest id a 64-bit INTEGER column can hold
MAX_STATION_ID = 2 ** 63 - 1


class ScheduleStore:
    """Read-only queries over stations, trains and their ordered stops"""

    def __init__(self, db: Session):
        self.db = db

    def resolve_station(self, reference: str) -> Optional[StationRef]:
        """Resolve a station by exact name, falling back to numeric id"""
        reference = reference.strip()
        station = self.db.query(Station).filter(Station.name == reference).first()
        if not station and reference.isdecimal() and int(reference) <= MAX_STATION_ID:
            station = self.db.query(Station).filter(Station.id == int(reference)).first()
        if not station:
            return None
        return StationRef(id=station.id, name=station.name)

    def list_served_stations(self) -> List[StationRef]:
        """Stations with at least one recorded stop, ordered by name"""
        return [StationRef(id=s.id, name=s.name) for s in StationService.get_served_stations(self.db)]

    def find_leg_candidates(self, from_station_id: int, to_station_id: int) -> List[LegCandidate]:
        """Every (train, from_index, to_index) visiting from_station before to_station"""
        origin = aliased(TrainStop)
        destination = aliased(TrainStop)

        rows = self.db.query(
            Train.id,
            Train.name,
            origin.departure_time,
            destination.departure_time,
            origin.stop_index,
            destination.stop_index
        ).join(
            origin, (origin.train_id == Train.id) & (origin.station_id == from_station_id)
        ).join(
            destination, (destination.train_id == Train.id) & (destination.station_id == to_station_id)
        ).filter(
            origin.stop_index < destination.stop_index
        ).order_by(Train.id, origin.stop_index, destination.stop_index).all()

        return [
            LegCandidate(
                train_id=train_id,
                train_name=train_name,
                depart_time=depart_time,
                arrive_time=arrive_time,
                from_index=from_index,
                to_index=to_index
            )
            for train_id, train_name, depart_time, arrive_time, from_index, to_index in rows
        ]

    def sum_distance(self, train_id: int, from_index: int, to_index: int) -> int:
        """Sum of distance_from_prev_km over stop indices in (from_index, to_index]"""
        total = self.db.query(
            func.sum(TrainStop.distance_from_prev_km)
        ).filter(
            TrainStop.train_id == train_id,
            TrainStop.stop_index > from_index,
            TrainStop.stop_index <= to_index
        ).scalar()
        return int(total or 0)

    def find_trains_serving_both(self, station_a_id: int, station_b_id: int) -> List[Train]:
        """Trains with a stop at both stations, in any order"""
        stop_a = aliased(TrainStop)
        stop_b = aliased(TrainStop)

        return self.db.query(Train).join(
            stop_a, (stop_a.train_id == Train.id) & (stop_a.station_id == station_a_id)
        ).join(
            stop_b, (stop_b.train_id == Train.id) & (stop_b.station_id == station_b_id)
        ).distinct().order_by(Train.id).all()
