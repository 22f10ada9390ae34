from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.orm import Session
from typing import List, Optional

from src.database import get_db
from src.exceptions import InvalidArgumentError, StationNotFoundError
from src.search.schemas import Itinerary
from src.search.service import SearchService

router = APIRouter()

@router.get("", response_model=List[Itinerary])
def search_itineraries(
    from_station: Optional[str] = Query(None, alias="from", description="Origin station name or ID"),
    to_station: Optional[str] = Query(None, alias="to", description="Destination station name or ID"),
    sort_by: str = Query("price", alias="sortBy", description="Ranking: duration, otherwise price"),
    db: Session = Depends(get_db)
):
    """Search direct and one-change itineraries between two stations"""

    search_service = SearchService(db)
    try:
        return search_service.search(from_station, to_station, sort_by)
    except InvalidArgumentError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )
    except StationNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Station not found"
        )
