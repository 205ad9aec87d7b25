from pydantic_settings import BaseSettings
from typing import List


class Settings(BaseSettings):
    # Database
    DATABASE_URL: str = "sqlite:///./train_booking.db"
    DB_ECHO: bool = False
    AUTO_CREATE_TABLES: bool = True

    # Security
    SECRET_KEY: str = "change-me-in-production"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60
    DEFAULT_TOKEN_SCOPES: str = "bookings:read bookings:write"

    # Application
    PROJECT_NAME: str = "Train Booking API"
    API_PREFIX: str = "/api"
    ENVIRONMENT: str = "development"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: List[str] = ["http://localhost:3000"]

    # Bookings & payments
    BOOKING_HOLD_MINUTES: int = 60
    PAYMENT_SUCCESS_RATE: float = 0.9
    PAYMENT_PROCESSING_DELAY_MS: int = 100

    @property
    def is_sqlite(self) -> bool:
        return self.DATABASE_URL.startswith("sqlite")

    class Config:
        env_file = ".env"
        case_sensitive = True


settings = Settings()
