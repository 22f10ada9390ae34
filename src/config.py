from pydantic_settings import BaseSettings
from typing import List, Optional

class Settings(BaseSettings):
    # Database
    DATABASE_URL: str = "sqlite:///./trains.db"

    # Search
    PRICE_PER_KM: float = 1.25
    MAX_TRANSFER_STATIONS: int = 1000  # Intermediate stations evaluated per search
    SEARCH_WORKERS: int = 1

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FILE: Optional[str] = None

    # Application
    PROJECT_NAME: str = "Rail Itinerary Search"
    API_V1_STR: str = "/api/v1"
    CORS_ORIGINS: List[str] = ["http://localhost:3000", "http://localhost:5173"]
    ENVIRONMENT: str = "development"

    @property
    def is_sqlite(self) -> bool:
        return self.DATABASE_URL.startswith("sqlite")

    class Config:
        env_file = ".env"
        case_sensitive = True

settings = Settings()
