from pydantic import BaseModel, Field, field_validator
from typing import List
from datetime import time

class StopCreate(BaseModel):
    """One scheduled stop, given in travel order"""
    station: str
    distance_from_prev_km: int = Field(0, ge=0, alias="distanceFromPrevKm")
    departure_time: time = Field(..., alias="departureTime")

    @field_validator("station")
    @classmethod
    def station_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("station name required")
        return value

    class Config:
        populate_by_name = True

class TrainCreate(BaseModel):
    name: str
    stops: List[StopCreate] = Field(..., min_length=1)

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("name required")
        return value

class TrainCreated(BaseModel):
    id: int
