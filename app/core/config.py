from pydantic_settings import BaseSettings
from typing import List, Optional
from uuid import UUID

class Settings(BaseSettings):
    # Application settings
    ENVIRONMENT: str = "development"
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 9000
    CORS_ORIGINS: str = "http://localhost:4200"  # Comma-separated

    # Database settings
    POSTGRES_USER: str = "campus"
    POSTGRES_PASSWORD: str = "Passw0rd"
    POSTGRES_DB: str = "campus_calendar"
    POSTGRES_HOST: str = "localhost"
    POSTGRES_PORT: int = 5432
    SQL_ECHO: bool = False  # Set to True for SQL query debugging

    # Isolation level for holiday/event writes (overlap check + write in one transaction)
    CALENDAR_WRITE_ISOLATION_LEVEL: str = "SERIALIZABLE"

    # System actor used when a request carries no acting user
    SYSTEM_ACTOR_ID: UUID = UUID("00000000-0000-0000-0000-000000000001")
    SYSTEM_ACTOR_USERNAME: str = "system"
    SYSTEM_ACTOR_EMAIL: str = "system@campus.local"
    SYSTEM_ACTOR_FULL_NAME: str = "System"

    # Listing
    DEFAULT_PAGE_SIZE: int = 10
    MAX_PAGE_SIZE: int = 100

    # Reports
    UNKNOWN_CREATOR_NAME: str = "Unknown"
    REPORT_TITLE: Optional[str] = "Academic Calendar Report"

    @property
    def DATABASE_URL(self) -> str:
        return f"postgresql+asyncpg://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}@{self.POSTGRES_HOST}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"

    @property
    def cors_origins(self) -> List[str]:
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT.lower() == "production"

    class Config:
        env_file = ".env"
        case_sensitive = True

settings = Settings()
