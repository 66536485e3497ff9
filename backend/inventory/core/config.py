from pydantic_settings import BaseSettings
from typing import List


class Settings(BaseSettings):
    ENV: str = "development"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    DATABASE_URL: str = "sqlite:///./inventory.db"

    # Пул соединений (для SQLite не применяется)
    DB_POOL_SIZE: int = 10
    DB_POOL_MAX_OVERFLOW: int = 0
    DB_POOL_TIMEOUT: int = 60
    DB_POOL_RECYCLE: int = 1800

    # CORS
    CORS_ORIGINS: str = "http://localhost:5173"

    # Pagination
    DEFAULT_PAGE_SIZE: int = 10
    MAX_PAGE_SIZE: int = 100

    LOW_STOCK_THRESHOLD: int = 10
    SEARCH_RESULT_LIMIT: int = 10

    @property
    def cors_origins_list(self) -> List[str]:
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",")]

    class Config:
        env_file = ".env"


settings = Settings()
