import logging
from typing import Sequence
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from src.exceptions import ScheduleInsertError
from src.models import Train, TrainStop
from src.stations.service import StationService
from src.trains.schemas import StopCreate, TrainCreate

logger = logging.getLogger(__name__)

class TrainService:
    """Service for storing train schedules"""

    def __init__(self, db: Session):
        self.db = db

    def add_train(self, name: str, stops: Sequence[StopCreate]) -> Train:
        """Add a train and its ordered stops to the session without committing.

        Stops are numbered from 0 in the order given. Stations are created on
        first reference. The first stop has no predecessor, so its distance
        is stored as 0.
        """
        train = Train(name=name)
        self.db.add(train)
        self.db.flush()

        for index, stop in enumerate(stops):
            station = StationService.get_or_create_station(self.db, stop.station)
            self.db.add(TrainStop(
                train_id=train.id,
                station_id=station.id,
                stop_index=index,
                distance_from_prev_km=stop.distance_from_prev_km if index > 0 else 0,
                departure_time=stop.departure_time
            ))
        return train

    def create_train(self, train_data: TrainCreate) -> Train:
        """Create a train and its ordered stops in one transaction"""
        try:
            train = self.add_train(train_data.name, train_data.stops)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise ScheduleInsertError(f"Could not store train '{train_data.name}': {e}") from e

        self.db.refresh(train)
        logger.info("Created train %s (id=%d) with %d stops", train.name, train.id, len(train_data.stops))
        return train
