# finance_analyzer/core/config.py

from pathlib import Path
from typing import List
from pydantic_settings import BaseSettings, SettingsConfigDict

# Get the project root directory (where .env should be located)
BASE_DIR = Path(__file__).resolve().parent.parent.parent

class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=str(BASE_DIR / ".env"),
        env_file_encoding='utf-8',
        case_sensitive=True,
        extra="ignore"
    )

    # App Configuration
    APP_NAME: str = "Finance Analyzer API"
    DEBUG: bool = False
    VERSION: str = "0.1.0"
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"
    API_PREFIX: str = "/api/v1"

    # Database Configuration
    DATABASE_URL: str

    # JWT / Security Configuration
    # Tokens are signed with this key, so every instance must share it
    SECRET_KEY: str
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 1440
    PASSWORD_HASH_SCHEMES: List[str] = ["bcrypt"]

    # CORS Configuration
    CORS_ORIGINS: List[str] = ["http://localhost:3000"]

    @property
    def is_sqlite(self) -> bool:
        """Check if we're running against SQLite (local development and tests)"""
        return self.DATABASE_URL.startswith("sqlite")

# Create a global settings instance
settings = Settings()
