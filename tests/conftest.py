"""Test configuration and fixtures."""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from src.database import Base, get_db
from src.main import app
from src.trains.schemas import StopCreate, TrainCreate
from src.trains.service import TrainService
from seed_data import seed_example


@pytest.fixture
def db_session():
    """Fresh in-memory SQLite database per test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSession()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


@pytest.fixture
def add_train(db_session):
    """Store a train from (station, distance_from_prev_km, "HH:MM") rows."""

    def _add_train(name, *rows):
        stops = [
            StopCreate(station=station, distance_from_prev_km=distance, departure_time=departure)
            for station, distance, departure in rows
        ]
        return TrainService(db_session).create_train(TrainCreate(name=name, stops=stops))

    return _add_train


@pytest.fixture
def example_network(db_session):
    """Trains A, B and C between Chennai and Mangalore."""
    seed_example(db_session)
    db_session.commit()
    return db_session


@pytest.fixture
def client(db_session):
    """API client bound to the test database."""

    def _get_test_db():
        yield db_session

    app.dependency_overrides[get_db] = _get_test_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
