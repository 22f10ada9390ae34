from pydantic import BaseModel, Field
from typing import Annotated, List, Literal, Union
from datetime import time

class StationRef(BaseModel):
    """Resolved station"""
    id: int
    name: str

class LegCandidate(BaseModel):
    """One forward traversal of a train between two of its stops"""
    train_id: int
    train_name: str
    depart_time: time
    arrive_time: time
    from_index: int
    to_index: int

class Leg(BaseModel):
    """Single-train segment of an itinerary"""
    train_id: int
    train_name: str
    from_station: str
    to_station: str
    depart_time: str
    arrive_time: str
    distance_km: int
    price: float
    duration_min: int

class ItineraryBase(BaseModel):
    """Fields shared by every itinerary kind"""
    legs: List[Leg]
    total_distance_km: int
    total_price: float
    total_duration_min: int

class DirectItinerary(ItineraryBase):
    kind: Literal["direct"] = "direct"

class TransferItinerary(ItineraryBase):
    kind: Literal["transfer"] = "transfer"
    transfer_station: str

class AvailableItinerary(ItineraryBase):
    """Train touches both stations but no ordered schedule was resolved"""
    kind: Literal["available"] = "available"
    note: str

Itinerary = Annotated[
    Union[DirectItinerary, TransferItinerary, AvailableItinerary],
    Field(discriminator="kind")
]
