import logging
from sqlalchemy.orm import Session
from typing import List, Optional
from src.models import Station, TrainStop

logger = logging.getLogger(__name__)

class StationService:
    @staticmethod
    def get_station_by_name(db: Session, name: str) -> Optional[Station]:
        return db.query(Station).filter(Station.name == name.strip()).first()

    @staticmethod
    def get_or_create_station(db: Session, name: str) -> Station:
        """Return the station with this (trimmed) name, creating it on first reference.

        Flushes but does not commit; the caller owns the transaction.
        """
        station = StationService.get_station_by_name(db, name)
        if station:
            return station

        station = Station(name=name.strip())
        db.add(station)
        db.flush()
        logger.info("Created station %s (id=%d)", station.name, station.id)
        return station

    @staticmethod
    def get_served_stations(db: Session) -> List[Station]:
        """Stations with at least one train stop, ordered by name"""
        return db.query(Station).join(
            TrainStop, TrainStop.station_id == Station.id
        ).distinct().order_by(Station.name).all()
