from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from typing import List
from src.database import get_db
from src.stations.schemas import Station, StationCreate
from src.stations.service import StationService

router = APIRouter()

@router.get("", response_model=List[Station])
def get_stations(db: Session = Depends(get_db)):
    """Get stations that have trains available"""
    return StationService.get_served_stations(db)

@router.post("", response_model=Station)
def create_station(station_in: StationCreate, db: Session = Depends(get_db)):
    """Create a station, or return the existing one with the same name"""
    try:
        station = StationService.get_or_create_station(db, station_in.name)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )
    return station
