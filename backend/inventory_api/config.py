from pydantic_settings import BaseSettings
from typing import List

class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./inventory.db"
    # "memory" keeps products in a process-local list, "sql" uses DATABASE_URL
    STORE_BACKEND: str = "memory"
    RESET_DB: bool = False
    SEED_SAMPLE_DATA: bool = True
    APP_HOST: str = "127.0.0.1"
    APP_PORT: int = 3000
    FRONTEND_ORIGINS: List[str] = ["http://localhost:3000"]
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"
    DEFAULT_PAGE_SIZE: int = 10
    MAX_PAGE_SIZE: int = 100

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"

settings = Settings()
