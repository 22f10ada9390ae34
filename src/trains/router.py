from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from src.database import get_db
from src.exceptions import ScheduleInsertError
from src.trains.schemas import TrainCreate, TrainCreated
from src.trains.service import TrainService

router = APIRouter()

@router.post("", response_model=TrainCreated)
def create_train(train_in: TrainCreate, db: Session = Depends(get_db)):
    """Add a train with its ordered stops"""
    try:
        train = TrainService(db).create_train(train_in)
    except ScheduleInsertError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )
    return TrainCreated(id=train.id)
