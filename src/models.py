from sqlalchemy import Column, Integer, String, Time, ForeignKey, Index
from sqlalchemy.orm import relationship
from src.database import Base

# ================================
# Stations
# ================================
class Station(Base):
    __tablename__ = "stations"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False, unique=True)

    # Relationships
    stops = relationship("TrainStop", back_populates="station", cascade="all, delete-orphan")

# ================================
# Trains & Stops
# ================================
class Train(Base):
    __tablename__ = "trains"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)

    # Relationships
    stops = relationship(
        "TrainStop",
        back_populates="train",
        order_by="TrainStop.stop_index",
        cascade="all, delete-orphan"
    )

class TrainStop(Base):
    __tablename__ = "train_stops"
    __table_args__ = (
        Index("idx_train_stops_train", "train_id", "stop_index"),
        Index("idx_train_stops_station", "station_id"),
    )

    id = Column(Integer, primary_key=True)
    train_id = Column(Integer, ForeignKey("trains.id", ondelete="CASCADE"), nullable=False)
    station_id = Column(Integer, ForeignKey("stations.id", ondelete="CASCADE"), nullable=False)
    stop_index = Column(Integer, nullable=False)  # 0-based position along the train's path
    distance_from_prev_km = Column(Integer, nullable=False, default=0)
    departure_time = Column(Time, nullable=False)  # Time of day, no date component

    # Relationships
    train = relationship("Train", back_populates="stops")
    station = relationship("Station", back_populates="stops")
